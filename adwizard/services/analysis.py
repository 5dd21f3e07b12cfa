"""Image analysis - description and tags for an uploaded image."""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from ..clients.gemini import GeminiClient
from ..utils import read_source_bytes

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"

STATIC_DESCRIPTION = (
    "A beautifully composed image showcasing modern lifestyle elements with clean, "
    "elegant aesthetics perfect for premium brand campaigns."
)
STATIC_TAGS = ["lifestyle", "premium", "modern", "elegant", "youthful", "vibrant"]


@dataclass(frozen=True)
class ImageAnalysis:
    description: str
    tags: list[str] = field(default_factory=list)


class ImageAnalyzer(Protocol):
    """Anything that can describe an uploaded image."""

    async def analyze(self, image: str) -> ImageAnalysis:
        ...


class StaticImageAnalyzer:
    """Fixed description and tags. Used when no vision model is configured."""

    async def analyze(self, image: str) -> ImageAnalysis:
        return ImageAnalysis(description=STATIC_DESCRIPTION, tags=list(STATIC_TAGS))


class GeminiImageAnalyzer:
    """Describe the image with Gemini; fall back to the static result on failure."""

    def __init__(self, gemini: GeminiClient):
        self.gemini = gemini
        self.fallback = StaticImageAnalyzer()

    async def analyze(self, image: str) -> ImageAnalysis:
        try:
            image_bytes = await asyncio.to_thread(read_source_bytes, image)
            prompt = (PROMPTS_DIR / "image_description.txt").read_text(encoding="utf-8").strip()
            response = await asyncio.to_thread(self.gemini.describe_image, image_bytes, prompt)
            return self._parse_response(response)
        except Exception as e:
            logger.warning(f"Image analysis failed, using static description: {e}")
            return await self.fallback.analyze(image)

    def _parse_response(self, response: str) -> ImageAnalysis:
        """Parse {"description", "tags"} JSON from the model."""
        data = json.loads(response)
        if not isinstance(data, dict):
            raise ValueError(f"Expected JSON object, got {type(data).__name__}")

        description = (data.get("description") or "").strip()
        if not description:
            raise ValueError("Response has no description")

        tags = [str(tag).strip().lower() for tag in data.get("tags") or [] if str(tag).strip()]
        return ImageAnalysis(description=description, tags=tags)
