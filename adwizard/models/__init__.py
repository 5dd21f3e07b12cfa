"""Data models."""

from .ai import (
    TemplateRecommendation,
    TemplateRecommendationRequest,
    ThemeExtraction,
    ThemeExtractionRequest,
)
from .campaign import CampaignData
from .layer import ImageLayer, Layer, Position, TextLayer, ZOrder
from .platform import Dimensions, Platform, default_dimensions
from .state import Notice, StepResult, WizardState
from .template import CopyPreset, Template, Theme

__all__ = [
    "CampaignData",
    "CopyPreset",
    "Dimensions",
    "ImageLayer",
    "Layer",
    "Notice",
    "Platform",
    "Position",
    "StepResult",
    "Template",
    "TemplateRecommendation",
    "TemplateRecommendationRequest",
    "TextLayer",
    "Theme",
    "ThemeExtraction",
    "ThemeExtractionRequest",
    "WizardState",
    "ZOrder",
    "default_dimensions",
]
