"""
Tool schemas for structured nutrition answers.

Every analysis mode forces the model to answer through exactly one
function-style tool whose ``parameters`` JSON schema is defined here.
The same schema is walked to validate the tool arguments that come back
before they are forwarded to the caller: required fields at every level
must be present and objects/arrays must have the declared container type.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

NUTRITION_SCORE_PATTERN = r"^[A-E][+-]?$"

WARNING_TYPES = (
    "high-oil",
    "high-ghee",
    "high-sugar",
    "deep-fried",
    "high-sodium",
    "other",
)


def _freeze(value: Any) -> Any:
    """Read-only deep copy: dicts become mapping proxies, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    """Plain JSON-serializable deep copy of a frozen value."""
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


def _path(parent: str, field: str) -> str:
    return f"{parent}.{field}" if parent else field


def _find_problems(schema: Mapping[str, Any], value: Any, path: str) -> list[str]:
    """Check ``value`` against one (sub)schema; returns human-readable problems."""
    expected = schema.get("type")

    if expected == "object":
        if not isinstance(value, dict):
            return [f"{path or 'arguments'} is not an object"]
        problems = [
            f"{_path(path, field)} is missing"
            for field in schema.get("required", ())
            if value.get(field) is None
        ]
        for field, subschema in schema.get("properties", {}).items():
            if value.get(field) is not None:
                problems.extend(_find_problems(subschema, value[field], _path(path, field)))
        return problems

    if expected == "array":
        if not isinstance(value, list):
            return [f"{path} is not an array"]
        item_schema = schema.get("items")
        if item_schema is None:
            return []
        problems = []
        for index, item in enumerate(value):
            problems.extend(_find_problems(item_schema, item, f"{path}[{index}]"))
        return problems

    return []


@dataclass(frozen=True)
class ToolSchema:
    """Immutable description of one structured-output tool."""

    name: str
    description: str
    properties: Mapping[str, Any]
    required: tuple[str, ...]

    def __post_init__(self) -> None:
        # Shared fragments are copied so no two schemas alias the same dict
        object.__setattr__(self, "properties", _freeze(self.properties))
        object.__setattr__(self, "required", tuple(self.required))

    @property
    def parameters(self) -> dict[str, Any]:
        """JSON schema for the tool arguments (a fresh copy on every call)."""
        return {
            "type": "object",
            "properties": _thaw(self.properties),
            "required": list(self.required),
            "additionalProperties": False,
        }

    def as_tool(self) -> dict[str, Any]:
        """Entry for the ``tools`` array of a chat completion request."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    def tool_choice(self) -> dict[str, Any]:
        """Forced ``tool_choice`` selecting this tool."""
        return {"type": "function", "function": {"name": self.name}}

    def find_problems(self, arguments: Any) -> list[str]:
        """
        Validate tool arguments against this schema.

        Required fields are checked at every nesting level (objects and
        array items); a null counts as missing. Objects and arrays must
        have the declared container type. Scalar values are not checked.

        Returns:
            Problems in schema order, empty when the arguments conform
        """
        root = {"type": "object", "properties": self.properties, "required": self.required}
        return _find_problems(root, arguments, "")


def _number(description: str) -> dict[str, Any]:
    return {"type": "number", "description": description}


def _string(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def _string_list(description: str) -> dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


NUTRITION_SCORE = {
    "type": "string",
    "pattern": NUTRITION_SCORE_PATTERN,
    "description": "Overall health grade from A (best) to E (worst), e.g. 'B+'",
}

VITAMINS = {
    "type": "object",
    "description": "Micronutrients as percentage of daily value",
    "properties": {
        "vitaminA": _number("Vitamin A, % daily value"),
        "vitaminC": _number("Vitamin C, % daily value"),
        "vitaminD": _number("Vitamin D, % daily value"),
        "vitaminB12": _number("Vitamin B12, % daily value"),
        "iron": _number("Iron, % daily value"),
        "calcium": _number("Calcium, % daily value"),
    },
}

RECOMMENDATIONS = _string_list("Healthier swaps or additions, Indian-kitchen friendly")


IMAGE_ANALYSIS_SCHEMA = ToolSchema(
    name="provide_nutrition_data",
    description="Provide detailed nutrition analysis for the meal in the image",
    properties={
        "calories": _number("Total calories in kcal"),
        "protein": _number("Protein in grams"),
        "carbs": _number("Carbohydrates in grams"),
        "fat": _number("Fat in grams"),
        "fiber": _number("Fiber in grams"),
        "sugar": _number("Sugar in grams"),
        "sodium": _number("Sodium in milligrams"),
        "servingSize": _string("Estimated serving size (e.g., '1 plate (300g)', '2 rotis + 1 katori dal')"),
        "foodType": _string("Brief description of the meal (e.g., 'Dal Chawal with Aloo Sabzi')"),
        "detectedItems": {
            "type": "array",
            "description": "Individual dishes visible on the plate",
            "items": {
                "type": "object",
                "properties": {
                    "name": _string("Dish name"),
                    "portion": _string("Portion, e.g. '1 katori', '2 rotis'"),
                    "calories": _number("Calories for this portion in kcal"),
                    "ingredients": _string("Main ingredients"),
                },
                "required": ["name", "portion", "calories"],
            },
        },
        "nutritionScore": NUTRITION_SCORE,
        "warnings": {
            "type": "array",
            "description": "Health warnings about the meal",
            "items": {
                "type": "object",
                "properties": {
                    "type": {"type": "string", "enum": list(WARNING_TYPES)},
                    "message": _string("Short warning text"),
                },
                "required": ["type", "message"],
            },
        },
        "recommendations": RECOMMENDATIONS,
        "tips": _string_list("3-5 nutrition insights or health tips about this meal"),
        "vitamins": VITAMINS,
    },
    required=("calories", "protein", "carbs", "fat", "servingSize", "foodType", "tips"),
)


SEARCH_SCHEMA = ToolSchema(
    name="provide_food_info",
    description="Provide nutrition information for a single food or dish",
    properties={
        "name": _string("Canonical dish name"),
        "description": _string("One or two sentence description of the dish"),
        "calories": _number("Calories for the default portion in kcal"),
        "protein": _number("Protein in grams for the default portion"),
        "carbs": _number("Carbohydrates in grams for the default portion"),
        "fat": _number("Fat in grams for the default portion"),
        "fiber": _number("Fiber in grams for the default portion"),
        "sugar": _number("Sugar in grams for the default portion"),
        "sodium": _number("Sodium in milligrams for the default portion"),
        "defaultPortion": _string("Default portion the values refer to, e.g. '1 katori (150g)'"),
        "portionOptions": {
            "type": "array",
            "description": "Alternative portions relative to the default portion",
            "items": {
                "type": "object",
                "properties": {
                    "label": _string("Portion label, e.g. 'Half katori'"),
                    "multiplier": _number("Multiplier applied to the default values"),
                },
                "required": ["label", "multiplier"],
            },
        },
        "ingredients": _string("Main ingredients"),
        "cookingMethod": _string("How the dish is usually prepared"),
        "region": _string("Region of India the dish is associated with"),
        "category": _string("Category such as 'Breakfast', 'Snack', 'Main course'"),
        "nutritionScore": NUTRITION_SCORE,
        "warnings": _string_list("Health warnings about the dish"),
        "recommendations": RECOMMENDATIONS,
        "vitamins": VITAMINS,
        "relatedFoods": _string_list("Similar dishes the user might search next"),
    },
    required=(
        "name",
        "description",
        "calories",
        "protein",
        "carbs",
        "fat",
        "defaultPortion",
        "nutritionScore",
    ),
)


BUILD_MEAL_SCHEMA = ToolSchema(
    name="provide_meal_analysis",
    description="Provide nutrition totals and a review for a meal built from several items",
    properties={
        "items": {
            "type": "array",
            "description": "One entry per meal item, in the order given",
            "items": {
                "type": "object",
                "properties": {
                    "name": _string("Item name"),
                    "portion": _string("Portion, e.g. '2 rotis', '1 katori'"),
                    "calories": _number("Calories in kcal"),
                    "protein": _number("Protein in grams"),
                    "carbs": _number("Carbohydrates in grams"),
                    "fat": _number("Fat in grams"),
                },
                "required": ["name", "portion", "calories", "protein", "carbs", "fat"],
            },
        },
        "totalCalories": _number("Total calories of the meal in kcal"),
        "totalProtein": _number("Total protein in grams"),
        "totalCarbs": _number("Total carbohydrates in grams"),
        "totalFat": _number("Total fat in grams"),
        "totalFiber": _number("Total fiber in grams"),
        "nutritionScore": NUTRITION_SCORE,
        "warnings": _string_list("Health warnings about the meal"),
        "recommendations": RECOMMENDATIONS,
        "mealReview": _string("Two or three sentence review of the meal balance"),
        "vitamins": VITAMINS,
    },
    required=(
        "items",
        "totalCalories",
        "totalProtein",
        "totalCarbs",
        "totalFat",
        "nutritionScore",
        "mealReview",
    ),
)


_COMPARED_FOOD = {
    "type": "object",
    "properties": {
        "name": _string("Food name"),
        "portion": _string("Portion the values refer to"),
        "calories": _number("Calories in kcal"),
        "protein": _number("Protein in grams"),
        "carbs": _number("Carbohydrates in grams"),
        "fat": _number("Fat in grams"),
        "fiber": _number("Fiber in grams"),
        "nutritionScore": NUTRITION_SCORE,
        "pros": _string_list("Nutritional advantages"),
        "cons": _string_list("Nutritional drawbacks"),
    },
    "required": ["name", "portion", "calories", "protein", "carbs", "fat", "nutritionScore"],
}

COMPARE_SCHEMA = ToolSchema(
    name="provide_food_comparison",
    description="Compare the nutrition of two foods side by side",
    properties={
        "food1": {**_COMPARED_FOOD, "description": "The first food in the comparison"},
        "food2": {**_COMPARED_FOOD, "description": "The second food in the comparison"},
        "winner": _string("Name of the healthier choice"),
        "verdict": _string("Short explanation of the verdict"),
        "recommendations": RECOMMENDATIONS,
    },
    required=("food1", "food2", "winner", "verdict"),
)
