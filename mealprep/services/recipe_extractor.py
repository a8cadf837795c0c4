"""Recipe extraction from photos with multiple provider support."""

import base64
import binascii
import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from mealprep.config import get_settings
from mealprep.models.recipe import Ingredient, MealType, StorageType

logger = logging.getLogger(__name__)


ConfidenceLevel = Literal["high", "medium", "low"]

EXTRACTION_PROMPT = """Read the recipe in this image.
Return ONLY valid JSON:
{
  "name": "",
  "prepTime": 30,
  "batchServings": 4,
  "storageType": "fridge",
  "mealType": "dinner",
  "ingredients": [{"name":"","amount":0,"unit":"g","category":"others"}],
  "steps": ["Step 1"],
  "confidence":{"name":"high","ingredients":"medium","steps":"high"}
}
storageType: fridge|freezer
mealType: breakfast|lunch|dinner|snacks
category: vegetables_fruits|protein|seasonings|others
confidence values: high|medium|low"""

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


class ExtractionError(Exception):
    """The image could not be turned into a recipe draft."""


class RecipeDraft(BaseModel):
    """Best-effort recipe pre-fill. Must be reviewed before saving."""

    name: str = ""
    prep_time: Optional[int] = Field(None, alias="prepTime")
    batch_servings: Optional[int] = Field(None, alias="batchServings")
    storage_type: StorageType = Field("fridge", alias="storageType")
    meal_type: MealType = Field("dinner", alias="mealType")
    ingredients: List[Ingredient] = []
    steps: List[str] = []

    class Config:
        populate_by_name = True

    @field_validator("storage_type", mode="before")
    @classmethod
    def _storage(cls, value):
        return value if value in ("fridge", "freezer") else "fridge"

    @field_validator("meal_type", mode="before")
    @classmethod
    def _meal(cls, value):
        return value if value in ("breakfast", "lunch", "dinner", "snacks") else "dinner"

    @field_validator("prep_time", "batch_servings", mode="before")
    @classmethod
    def _positive_int(cls, value):
        try:
            number = int(value)
        except (TypeError, ValueError):
            return None
        return number if number > 0 else None


class ExtractionResult(BaseModel):
    """Draft plus how sure the model was about each field."""

    draft: RecipeDraft
    confidence: Dict[str, ConfidenceLevel] = {}

    @field_validator("confidence", mode="before")
    @classmethod
    def _levels(cls, value):
        if not isinstance(value, dict):
            return {}
        return {
            str(field): (level if level in ("high", "medium", "low") else "low")
            for field, level in value.items()
        }


def clean_base64(image_base64: str) -> str:
    """Strip a data-URL prefix and check the payload decodes."""
    data = (image_base64 or "").strip()
    if "base64," in data:
        data = data.split("base64,", 1)[1]
    if not data:
        raise ExtractionError("Missing image data")
    try:
        base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ExtractionError(f"Image is not valid base64: {e}") from e
    return data


def parse_extraction(raw: str) -> ExtractionResult:
    """Parse model output, tolerating Markdown code fences."""
    text = _FENCE.sub("", raw or "").strip()
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Model returned invalid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ExtractionError("Model returned JSON that is not an object")

    confidence = payload.pop("confidence", {})
    try:
        return ExtractionResult(draft=RecipeDraft.model_validate(payload), confidence=confidence)
    except ValidationError as e:
        raise ExtractionError(f"Model returned an unusable recipe: {e}") from e


class ExtractionProvider(ABC):
    """Abstract base class for image extraction providers."""

    @abstractmethod
    async def extract(self, image_base64: str, prompt: str) -> str:
        """Send the image and prompt, return the raw model text."""
        pass


class GeminiProvider(ExtractionProvider):
    """Google Gemini provider."""

    def __init__(self):
        import google.generativeai as genai
        settings = get_settings()
        genai.configure(api_key=settings.gemini_api_key)
        self.model = genai.GenerativeModel(settings.gemini_model)
        self.timeout = settings.extraction_timeout

    async def extract(self, image_base64: str, prompt: str) -> str:
        response = await self.model.generate_content_async(
            [prompt, {"mime_type": "image/jpeg", "data": base64.b64decode(image_base64)}],
            generation_config={"response_mime_type": "application/json"},
            request_options={"timeout": self.timeout},
        )
        return response.text


class OllamaProvider(ExtractionProvider):
    """Ollama (local vision model) provider."""

    def __init__(self):
        settings = get_settings()
        self.host = settings.ollama_host
        self.model = settings.ollama_vision_model
        self.timeout = settings.extraction_timeout

    async def extract(self, image_base64: str, prompt: str) -> str:
        import httpx

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.host}/api/generate",
                json={
                    "model": self.model,
                    "prompt": prompt,
                    "images": [image_base64],
                    "stream": False,
                    "format": "json",
                },
            )
            response.raise_for_status()
            return response.json()["response"]


class RecipeExtractor:
    """Turns a recipe photo into a reviewable draft using the configured provider."""

    def __init__(self, provider: Optional[ExtractionProvider] = None):
        if provider is None:
            if get_settings().ai_provider == "ollama":
                provider = OllamaProvider()
            else:
                provider = GeminiProvider()
        self.provider = provider

    async def extract(self, image_base64: str) -> ExtractionResult:
        """Extract a recipe draft, raising ExtractionError on any failure."""
        data = clean_base64(image_base64)
        try:
            raw = await self.provider.extract(data, EXTRACTION_PROMPT)
        except Exception as e:
            logger.warning(f"Recipe extraction provider failed: {e}")
            raise ExtractionError(f"Extraction service failed: {e}") from e
        return parse_extraction(raw)
