"""Shared fixtures: in-memory images, fake analyzer, mocked gateway."""

from io import BytesIO
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image

from adwizard.models.ai import TemplateRecommendation, ThemeExtraction
from adwizard.services.analysis import ImageAnalysis
from adwizard.utils import to_data_uri


def make_png(size=(400, 200), color=(255, 0, 0, 255)) -> bytes:
    buffer = BytesIO()
    Image.new("RGBA", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


class FixedAnalyzer:
    """Deterministic analyzer for tests."""

    def __init__(self):
        self.calls = 0

    async def analyze(self, image: str) -> ImageAnalysis:
        self.calls += 1
        return ImageAnalysis(description="A red rectangle on a plain background", tags=["red", "bold"])


@pytest.fixture
def image_uri():
    return to_data_uri(make_png())


@pytest.fixture
def analyzer():
    return FixedAnalyzer()


@pytest.fixture
def extraction():
    return ThemeExtraction(
        themes=["Bold Minimalism", "Urban Energy"],
        primary_theme="Bold Minimalism",
        mood="confident",
        color_palette=["#FF0000", "#FFFFFF"],
        target_audience="Young professionals 25-35",
        keywords=["bold", "clean"],
    )


@pytest.fixture
def recommendations():
    return [
        TemplateRecommendation("neon-glow", "Neon Glow", "Pops on dark feeds", 9, "High contrast", "neon"),
        TemplateRecommendation("modern-minimal", "Modern Minimal", "Clean and bold", 8, "Matches theme", "minimal"),
        TemplateRecommendation("hero-overlay", "Hero Overlay", "Image first", 7, "Strong hero", "overlay"),
    ]


@pytest.fixture
def gateway(extraction, recommendations):
    """Gateway double with AsyncMock methods."""
    gw = MagicMock()
    gw.verify = AsyncMock(return_value=True)
    gw.extract_themes = AsyncMock(return_value=extraction)
    gw.recommend_templates = AsyncMock(return_value=recommendations)
    return gw
