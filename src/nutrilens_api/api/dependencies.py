"""FastAPI dependency injection factories."""

from typing import Annotated

from fastapi import Depends

from nutrilens_api.core.config import Settings, get_settings
from nutrilens_api.services.nutrition_analysis import AnalysisGateway, get_analysis_gateway


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]
AnalysisGatewayDep = Annotated[AnalysisGateway, Depends(get_analysis_gateway)]
