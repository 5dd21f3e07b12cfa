"""AI gateway request/response records."""

import math
from dataclasses import dataclass, field
from typing import Any


def _str(data: dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key, default)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"Expected string for '{key}', got {type(value).__name__}")
    return value.strip()


def _str_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ValueError(f"Expected list for '{key}', got {type(value).__name__}")
    return [str(item).strip() for item in value if str(item).strip()]


@dataclass(frozen=True)
class ThemeExtractionRequest:
    image_url: str
    description: str
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ThemeExtraction:
    """Themes the AI read out of the image."""

    themes: list[str]
    primary_theme: str
    mood: str = ""
    color_palette: list[str] = field(default_factory=list)
    target_audience: str = ""
    keywords: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ThemeExtraction":
        """Build from the camelCase JSON the model returns."""
        if not isinstance(data, dict):
            raise ValueError(f"Expected JSON object, got {type(data).__name__}")

        themes = _str_list(data, "themes")
        primary = _str(data, "primaryTheme")
        if not primary:
            if not themes:
                raise ValueError("Response has neither 'primaryTheme' nor 'themes'")
            primary = themes[0]

        return cls(
            themes=themes or [primary],
            primary_theme=primary,
            mood=_str(data, "mood"),
            color_palette=_str_list(data, "colorPalette"),
            target_audience=_str(data, "targetAudience"),
            keywords=_str_list(data, "keywords"),
        )


@dataclass(frozen=True)
class TemplateRecommendationRequest:
    platform: str
    extracted_themes: ThemeExtraction
    available_templates: list[dict[str, str]]   # [{id, name, style}]


@dataclass(frozen=True)
class TemplateRecommendation:
    """One ranked template suggestion."""

    template_id: str
    template_name: str
    description: str
    suitability_score: int               # 1-10
    reasoning: str
    design_style: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TemplateRecommendation":
        if not isinstance(data, dict):
            raise ValueError(f"Expected JSON object, got {type(data).__name__}")

        template_id = _str(data, "templateId")
        if not template_id:
            raise ValueError("Recommendation is missing 'templateId'")

        try:
            raw_score = float(data.get("suitabilityScore", 1))
        except (TypeError, ValueError):
            raise ValueError(f"Bad suitabilityScore: {data.get('suitabilityScore')!r}")
        if not math.isfinite(raw_score):
            raise ValueError(f"Bad suitabilityScore: {raw_score!r}")
        score = int(round(raw_score))

        return cls(
            template_id=template_id,
            template_name=_str(data, "templateName", template_id),
            description=_str(data, "description"),
            suitability_score=min(10, max(1, score)),
            reasoning=_str(data, "reasoning"),
            design_style=_str(data, "designStyle"),
        )
