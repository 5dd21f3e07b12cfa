"""AI recommendation gateway - theme extraction and template ranking over the LLM client."""

import json
from pathlib import Path

from openai import OpenAIError

from ..clients.llm import LLMClient
from ..errors import GatewayError
from ..models.ai import (
    TemplateRecommendation,
    TemplateRecommendationRequest,
    ThemeExtraction,
    ThemeExtractionRequest,
)


PROMPTS_DIR = Path(__file__).parent.parent / "prompts"

MAX_RECOMMENDATIONS = 6


class RecommendationGateway:
    """Request/response contracts for the two AI calls.

    Every client or parse failure comes out as GatewayError.
    """

    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def verify(self) -> bool:
        """True if the configured API key works."""
        return await self.llm.check_api_key()

    async def extract_themes(self, request: ThemeExtractionRequest) -> ThemeExtraction:
        """Read marketing themes out of an image plus its description/tags."""
        user_message = "\n".join([
            "Analyze this image and extracted data to suggest marketing campaign themes:",
            "",
            f"Image Description: {request.description}",
            f"Image Tags: {', '.join(request.tags)}",
        ])

        try:
            response = await self.llm.call(
                self._load_prompt("theme_extraction"),
                user_message,
                image_url=request.image_url,
                label="THEMES",
                max_output_tokens=800,
                temperature=0.7,
            )
            data = json.loads(_extract_json(response, "{", "}"))
            return ThemeExtraction.from_dict(data)
        except (OpenAIError, RuntimeError, ValueError) as e:
            raise GatewayError(f"Theme extraction failed: {e}") from e

    async def recommend_templates(
        self,
        request: TemplateRecommendationRequest,
    ) -> list[TemplateRecommendation]:
        """
        Rank templates for a platform and a theme extraction.

        Returns:
            Up to 6 recommendations, best first, restricted to the
            templates in request.available_templates.
        """
        if not request.available_templates:
            raise GatewayError("No templates to rank")

        try:
            response = await self.llm.call(
                self._load_prompt("template_recommendation"),
                self._build_recommendation_message(request),
                label="TEMPLATES",
                max_output_tokens=1000,
                temperature=0.3,
            )
            data = json.loads(_extract_json(response, "[", "]"))
            # Some models wrap the array in an object
            if isinstance(data, dict):
                data = data.get("recommendations", [])
            if not isinstance(data, list):
                raise ValueError(f"Expected JSON array, got {type(data).__name__}")
            items = [TemplateRecommendation.from_dict(item) for item in data]
        except (OpenAIError, RuntimeError, ValueError) as e:
            raise GatewayError(f"Template recommendation failed: {e}") from e

        known = {t["id"] for t in request.available_templates}
        recommendations = []
        seen = set()
        for item in items:
            if item.template_id not in known:
                print(f"  Ignoring unknown template from AI: {item.template_id}", flush=True)
                continue
            if item.template_id in seen:
                continue
            seen.add(item.template_id)
            recommendations.append(item)

        if not recommendations:
            raise GatewayError("Template recommendation returned no usable templates")

        return recommendations[:MAX_RECOMMENDATIONS]

    def _build_recommendation_message(self, request: TemplateRecommendationRequest) -> str:
        """Build the user message with campaign themes and the template list."""
        themes = request.extracted_themes
        lines = [
            f"Platform: {request.platform}",
            f"Primary Theme: {themes.primary_theme}",
            f"All Themes: {', '.join(themes.themes)}",
            f"Mood: {themes.mood}",
            f"Target Audience: {themes.target_audience}",
            f"Keywords: {', '.join(themes.keywords)}",
            "",
            "Available Templates:",
        ]
        lines.extend(
            f"- {t['id']}: {t['name']} ({t['style']})"
            for t in request.available_templates
        )
        return "\n".join(lines)

    def _load_prompt(self, name: str) -> str:
        """Load a developer prompt from the prompts directory."""
        path = PROMPTS_DIR / f"{name}.txt"
        if not path.exists():
            raise FileNotFoundError(f"Prompt file not found: {path}")
        return path.read_text(encoding="utf-8").strip()


def _extract_json(text: str, opener: str, closer: str) -> str:
    """Pull the JSON payload out of a reply that may carry fences or prose.

    Falls back to the other bracket type so an object-wrapped array still parses.
    """
    text = text.strip()
    if text.startswith("```"):
        text = text.strip("`")
        if text.startswith("json"):
            text = text[4:]
        text = text.strip()

    for start_char, end_char in ((opener, closer), ("{", "}"), ("[", "]")):
        start = text.find(start_char)
        end = text.rfind(end_char) + 1
        if start != -1 and end > start:
            return text[start:end]

    raise ValueError("No JSON found in response")
