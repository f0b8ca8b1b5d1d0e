"""
Factory for the analysis gateway.

Configuration is read from application settings; one gateway (and so one
HTTP connection pool) is shared by all requests.
"""

import logging
from functools import lru_cache

from nutrilens_api.core.config import get_settings

from .client import AIGatewayClient
from .gateway import AnalysisGateway

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_analysis_gateway() -> AnalysisGateway:
    """
    Get the configured analysis gateway.

    Returns:
        Cached AnalysisGateway instance
    """
    settings = get_settings()

    logger.info(f"Configuring AI gateway: {settings.ai_gateway_url}, model={settings.ai_model}")
    if not settings.is_ai_configured:
        logger.warning("AI gateway API key is not set; analysis requests will fail")

    client = AIGatewayClient(
        base_url=settings.ai_gateway_url,
        api_key=settings.ai_gateway_api_key,
        model=settings.ai_model,
        timeout=settings.ai_timeout,
    )
    return AnalysisGateway(client)


async def shutdown_analysis_gateway() -> None:
    """Close the cached gateway, if one was created, and drop it from the cache."""
    if get_analysis_gateway.cache_info().currsize:
        await get_analysis_gateway().close()
    get_analysis_gateway.cache_clear()
