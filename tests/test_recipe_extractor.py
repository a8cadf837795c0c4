"""Tests for recipe image extraction."""

import base64
import json

import pytest

from mealprep.services.recipe_extractor import (
    EXTRACTION_PROMPT,
    ExtractionError,
    ExtractionProvider,
    RecipeExtractor,
    clean_base64,
    parse_extraction,
)


IMAGE = base64.b64encode(b"\xff\xd8\xff fake jpeg").decode()

MODEL_OUTPUT = {
    "name": "Lemon Pasta",
    "prepTime": 25,
    "batchServings": 3,
    "storageType": "fridge",
    "mealType": "lunch",
    "ingredients": [
        {"name": "Spaghetti", "amount": 200, "unit": "g", "category": "others"},
        {"name": "Lemon", "amount": 1, "unit": "pcs", "category": "fruit"},
    ],
    "steps": ["Boil pasta", "Add lemon"],
    "confidence": {"name": "high", "ingredients": "medium", "steps": "sure"},
}


class FakeProvider(ExtractionProvider):
    """Returns canned model output and records what it was sent."""

    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error
        self.calls = []

    async def extract(self, image_base64, prompt):
        self.calls.append((image_base64, prompt))
        if self.error:
            raise self.error
        return self.output


class TestCleanBase64:

    def test_strips_data_url_prefix(self):
        assert clean_base64(f"data:image/jpeg;base64,{IMAGE}") == IMAGE

    def test_plain_payload_unchanged(self):
        assert clean_base64(IMAGE) == IMAGE

    def test_empty_rejected(self):
        with pytest.raises(ExtractionError):
            clean_base64("data:image/png;base64,")

    def test_invalid_base64_rejected(self):
        with pytest.raises(ExtractionError):
            clean_base64("not base64 at all!")


class TestParseExtraction:

    def test_parses_fenced_json(self):
        raw = "```json\n" + json.dumps(MODEL_OUTPUT) + "\n```"
        result = parse_extraction(raw)

        assert result.draft.name == "Lemon Pasta"
        assert result.draft.prep_time == 25
        assert result.draft.batch_servings == 3
        assert result.draft.meal_type == "lunch"
        assert [i.name for i in result.draft.ingredients] == ["Spaghetti", "Lemon"]

    def test_unknown_values_are_softened(self):
        result = parse_extraction(json.dumps(MODEL_OUTPUT))
        assert result.draft.ingredients[1].category == "others"
        assert result.confidence == {"name": "high", "ingredients": "medium", "steps": "low"}

    def test_bad_enums_and_numbers_default(self):
        raw = json.dumps({"name": "Mystery", "prepTime": "soon", "storageType": "pantry", "mealType": "brunch"})
        draft = parse_extraction(raw).draft
        assert draft.prep_time is None
        assert draft.storage_type == "fridge"
        assert draft.meal_type == "dinner"

    def test_invalid_json(self):
        with pytest.raises(ExtractionError):
            parse_extraction("Sorry, I cannot read this image.")

    def test_non_object_json(self):
        with pytest.raises(ExtractionError):
            parse_extraction("[1, 2, 3]")


class TestRecipeExtractor:

    @pytest.mark.asyncio
    async def test_extract_sends_clean_image_and_prompt(self):
        provider = FakeProvider(output=json.dumps(MODEL_OUTPUT))
        extractor = RecipeExtractor(provider=provider)

        result = await extractor.extract(f"data:image/jpeg;base64,{IMAGE}")

        assert result.draft.name == "Lemon Pasta"
        assert provider.calls == [(IMAGE, EXTRACTION_PROMPT)]

    @pytest.mark.asyncio
    async def test_provider_failure_becomes_extraction_error(self):
        extractor = RecipeExtractor(provider=FakeProvider(error=RuntimeError("quota exceeded")))
        with pytest.raises(ExtractionError, match="quota exceeded"):
            await extractor.extract(IMAGE)

    @pytest.mark.asyncio
    async def test_missing_image_does_not_call_provider(self):
        provider = FakeProvider(output="{}")
        with pytest.raises(ExtractionError):
            await RecipeExtractor(provider=provider).extract("")
        assert provider.calls == []
