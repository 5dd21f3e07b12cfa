"""Serializers for wizard results, template pages and platform options."""

from ..catalog import get_platform_options
from ..catalog.platforms import PlatformOption
from ..models.ai import TemplateRecommendation
from ..models.campaign import CampaignData
from ..models.platform import default_dimensions
from ..models.state import Notice, StepResult
from ..models.template import Template
from ..services.wizard import TemplatePage


def serialize_step(result: StepResult) -> dict:
    """Serialize a wizard transition for API response."""
    return {
        "state": result.state.value,
        "campaign": serialize_campaign(result.campaign),
        "notices": [serialize_notice(n) for n in result.notices],
    }


def serialize_campaign(campaign: CampaignData, include_composite: bool = False) -> dict:
    """Campaign as camelCase JSON. The composite data URI is large, so it's opt-in."""
    data = campaign.to_dict()
    dims = campaign.dimensions if campaign.platform is not None or campaign.custom_dimensions else None
    return {
        "image": data["image"],
        "description": data["description"],
        "tags": data["tags"],
        "theme": data["theme"],
        "platform": data["platform"],
        "dimensions": {"width": dims.width, "height": dims.height} if dims else None,
        "customDimensions": data["custom_dimensions"],
        "audience": data["audience"],
        "budget": data["budget"],
        "launchDate": data["launch_date"],
        "template": data["template"],
        "headline": data["headline"],
        "bodyText": data["body_text"],
        "cta": data["cta"],
        "targetAudience": data["target_audience"],
        "postTime": data["post_time"],
        "composite": data["composite"] if include_composite else bool(data["composite"]),
    }


def serialize_notice(notice: Notice) -> dict:
    return {"title": notice.title, "description": notice.description, "level": notice.level}


def serialize_template_page(page: TemplatePage) -> dict:
    """Serialize one page of the template picker."""
    return {
        "source": page.source,
        "page": page.page,
        "hasMore": page.has_more,
        "total": page.total,
        "items": [serialize_template_item(item) for item in page.items],
    }


def serialize_template_item(item: Template | TemplateRecommendation) -> dict:
    if isinstance(item, TemplateRecommendation):
        return {
            "id": item.template_id,
            "name": item.template_name,
            "description": item.description,
            "score": item.suitability_score,
            "reasoning": item.reasoning,
            "style": item.design_style,
        }
    return {
        "id": item.id,
        "name": item.name,
        "style": item.style,
        "category": item.category,
        "imageUrl": item.image_url,
    }


def serialize_platform_options() -> list[dict]:
    """All platforms for the selector, grouped order preserved."""
    return [serialize_platform_option(option) for option in get_platform_options()]


def serialize_platform_option(option: PlatformOption) -> dict:
    dims = default_dimensions(option.platform)
    return {
        "id": option.platform.value,
        "name": option.name,
        "category": option.category,
        "width": dims.width,
        "height": dims.height,
    }
