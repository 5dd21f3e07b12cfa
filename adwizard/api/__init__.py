"""JSON serializers for the wizard."""

from .serializers import (
    serialize_campaign,
    serialize_platform_options,
    serialize_step,
    serialize_template_page,
)

__all__ = [
    "serialize_campaign",
    "serialize_platform_options",
    "serialize_step",
    "serialize_template_page",
]
