"""Prompt templates for the four analysis modes."""

SYSTEM_PROMPT = """You are an expert nutritionist specialising in Indian home cooking and restaurant food.

Portion conventions you must use:
- 1 katori = a small bowl of about 150 ml (dal, sabzi, rice, curd, raita)
- 1 roti / chapati = about 40 g of whole wheat flatbread; a paratha is larger and cooked with ghee or oil
- 1 plate = a full thali or restaurant serving
- 1 cup chai = about 150 ml with milk and sugar

Account for ghee, oil and tadka when estimating fat, and for sugar in sweets and chai.
Grade every answer with a nutritionScore from A (very healthy) to E (unhealthy).
Answer ONLY by calling the provided function; do not reply with free text."""


IMAGE_ANALYSIS_PROMPT = """Analyze this meal image and provide detailed nutritional information.
Be as accurate as possible based on visible portions and ingredients.

- Identify every dish on the plate (e.g. roti, dal, sabzi, rice, raita, papad) and list them as detectedItems with Indian portion sizes such as "1 katori" or "2 rotis".
- Add warnings for visible oil, ghee, deep frying, sugar or salt.
- Give 3-5 practical tips and healthier recommendations."""


SEARCH_PROMPT = """Provide complete nutrition information for the food: "{query}".

- If the name is a regional or colloquial Indian dish, use its common name and mention the region.
- Report values for one typical serving as defaultPortion (e.g. "1 katori (150g)", "1 piece", "1 plate").
- Offer portionOptions such as half, double or restaurant serving as multipliers of the default portion.
- Mention the usual cooking method and key ingredients, and suggest related foods."""


BUILD_MEAL_PROMPT = """Calculate the nutrition of a meal made of these items: {items}.

- Return one entry in items for every listed item, in the same order, keeping the quantity the user gave (e.g. "2 Rotis", "1 Katori Dal").
- Sum the entries into totalCalories, totalProtein, totalCarbs and totalFat.
- Review the balance of the whole meal in mealReview and suggest improvements."""


COMPARE_PROMPT = """Compare these two foods nutritionally: "{query}".

- food1 is "{first}" and food2 is "{second}"; use a typical Indian serving for each and state it as portion.
- List pros and cons for each food.
- Name the healthier option as winner and explain the verdict in one or two sentences."""


MEAL_ITEM_DELIMITER = ", "


def build_image_analysis_prompt() -> str:
    return IMAGE_ANALYSIS_PROMPT


def build_search_prompt(query: str) -> str:
    return SEARCH_PROMPT.format(query=query)


def build_meal_prompt(meal_items: list[str] | tuple[str, ...]) -> str:
    """Join meal items into a single instruction."""
    return BUILD_MEAL_PROMPT.format(items=MEAL_ITEM_DELIMITER.join(meal_items))


def build_compare_prompt(query: str, first: str, second: str) -> str:
    return COMPARE_PROMPT.format(query=query, first=first, second=second)
