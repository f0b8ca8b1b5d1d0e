"""Unit tests for the structured-output tool schemas."""

import re

import pytest

from nutrilens_api.services.nutrition_analysis import (
    BUILD_MEAL_SCHEMA,
    COMPARE_SCHEMA,
    IMAGE_ANALYSIS_SCHEMA,
    SEARCH_SCHEMA,
)
from nutrilens_api.services.nutrition_analysis.schemas import NUTRITION_SCORE, NUTRITION_SCORE_PATTERN

ALL_SCHEMAS = [IMAGE_ANALYSIS_SCHEMA, SEARCH_SCHEMA, BUILD_MEAL_SCHEMA, COMPARE_SCHEMA]


class TestToolSchemas:
    """Tests for ToolSchema constants."""

    def test_tool_names_are_unique(self):
        names = [schema.name for schema in ALL_SCHEMAS]
        assert len(set(names)) == len(names)

    @pytest.mark.parametrize("schema", ALL_SCHEMAS, ids=lambda s: s.name)
    def test_required_fields_are_declared(self, schema):
        assert set(schema.required) <= set(schema.properties)

    @pytest.mark.parametrize("schema", ALL_SCHEMAS, ids=lambda s: s.name)
    def test_as_tool_shape(self, schema):
        tool = schema.as_tool()

        assert tool["type"] == "function"
        assert tool["function"]["name"] == schema.name
        parameters = tool["function"]["parameters"]
        assert parameters["type"] == "object"
        assert parameters["required"] == list(schema.required)
        assert parameters["additionalProperties"] is False

    @pytest.mark.parametrize("schema", ALL_SCHEMAS, ids=lambda s: s.name)
    def test_tool_choice_forces_the_tool(self, schema):
        assert schema.tool_choice() == {"type": "function", "function": {"name": schema.name}}

    def test_mutating_a_tool_copy_leaves_the_constant_untouched(self):
        tool = IMAGE_ANALYSIS_SCHEMA.as_tool()
        tool["function"]["parameters"]["properties"]["calories"]["type"] = "string"
        tool["function"]["parameters"]["required"].append("bogus")

        fresh = IMAGE_ANALYSIS_SCHEMA.as_tool()["function"]["parameters"]
        assert fresh["properties"]["calories"]["type"] == "number"
        assert "bogus" not in fresh["required"]

    def test_schema_is_frozen(self):
        with pytest.raises(AttributeError):
            SEARCH_SCHEMA.name = "other"

    def test_properties_are_read_only(self):
        with pytest.raises(TypeError):
            SEARCH_SCHEMA.properties["bogus"] = {"type": "string"}
        with pytest.raises(TypeError):
            SEARCH_SCHEMA.properties["nutritionScore"]["pattern"] = ".*"
        assert isinstance(BUILD_MEAL_SCHEMA.properties["items"]["items"]["required"], tuple)

    def test_schemas_do_not_share_fragments(self):
        search_score = SEARCH_SCHEMA.properties["nutritionScore"]
        build_score = BUILD_MEAL_SCHEMA.properties["nutritionScore"]
        food1, food2 = COMPARE_SCHEMA.properties["food1"], COMPARE_SCHEMA.properties["food2"]

        assert search_score is not build_score
        assert food1["properties"] is not food2["properties"]

    def test_editing_a_shared_fragment_leaves_the_constants_untouched(self):
        original = dict(NUTRITION_SCORE)
        try:
            NUTRITION_SCORE["pattern"] = ".*"
            NUTRITION_SCORE["type"] = "number"

            for schema in (SEARCH_SCHEMA, BUILD_MEAL_SCHEMA, IMAGE_ANALYSIS_SCHEMA):
                score = schema.as_tool()["function"]["parameters"]["properties"]["nutritionScore"]
                assert score["type"] == "string"
                assert score["pattern"] == NUTRITION_SCORE_PATTERN
        finally:
            NUTRITION_SCORE.clear()
            NUTRITION_SCORE.update(original)

    def test_image_schema_required_fields(self):
        assert IMAGE_ANALYSIS_SCHEMA.required == (
            "calories",
            "protein",
            "carbs",
            "fat",
            "servingSize",
            "foodType",
            "tips",
        )

    def test_find_problems_reports_absent_and_null(self):
        arguments = {"food1": {}, "food2": None, "winner": "Roti"}

        problems = COMPARE_SCHEMA.find_problems(arguments)

        assert problems[:2] == ["food2 is missing", "verdict is missing"]
        assert "food1.name is missing" in problems
        assert "food1.nutritionScore is missing" in problems

    def test_find_problems_empty_for_complete_payload(self, build_result, compare_result):
        assert BUILD_MEAL_SCHEMA.find_problems(build_result) == []
        assert COMPARE_SCHEMA.find_problems(compare_result) == []

    def test_find_problems_reports_missing_field_in_array_item(self, build_result):
        build_result["items"].append({"name": "Roti"})

        problems = BUILD_MEAL_SCHEMA.find_problems(build_result)

        assert problems == [
            "items[2].portion is missing",
            "items[2].calories is missing",
            "items[2].protein is missing",
            "items[2].carbs is missing",
            "items[2].fat is missing",
        ]

    def test_find_problems_reports_missing_field_in_nested_object(self, compare_result):
        del compare_result["food2"]["portion"]

        assert COMPARE_SCHEMA.find_problems(compare_result) == ["food2.portion is missing"]

    @pytest.mark.parametrize(
        "schema, field, value, problem",
        [
            (COMPARE_SCHEMA, "food2", "Rice", "food2 is not an object"),
            (BUILD_MEAL_SCHEMA, "items", "2 Rotis", "items is not an array"),
            (BUILD_MEAL_SCHEMA, "items", {"name": "Roti"}, "items is not an array"),
        ],
    )
    def test_find_problems_reports_wrong_container_type(
        self, build_result, compare_result, schema, field, value, problem
    ):
        arguments = build_result if schema is BUILD_MEAL_SCHEMA else compare_result
        arguments[field] = value

        assert schema.find_problems(arguments) == [problem]

    def test_find_problems_checks_array_items_are_objects(self, image_result):
        image_result["detectedItems"] = ["Dal", "Rice"]

        assert IMAGE_ANALYSIS_SCHEMA.find_problems(image_result) == [
            "detectedItems[0] is not an object",
            "detectedItems[1] is not an object",
        ]

    def test_find_problems_rejects_non_object_arguments(self):
        assert SEARCH_SCHEMA.find_problems(["Idli"]) == ["arguments is not an object"]

    @pytest.mark.parametrize("score", ["A", "B+", "C-", "E"])
    def test_nutrition_score_pattern_accepts_grades(self, score):
        assert re.match(NUTRITION_SCORE_PATTERN, score)

    @pytest.mark.parametrize("score", ["F", "a", "A++", "Good"])
    def test_nutrition_score_pattern_rejects_other_values(self, score):
        assert not re.match(NUTRITION_SCORE_PATTERN, score)
