"""Business logic services."""

from .analysis import GeminiImageAnalyzer, ImageAnalysis, ImageAnalyzer, StaticImageAnalyzer
from .gateway import RecommendationGateway
from .wizard import TemplatePage, WizardOrchestrator

__all__ = [
    "GeminiImageAnalyzer",
    "ImageAnalysis",
    "ImageAnalyzer",
    "RecommendationGateway",
    "StaticImageAnalyzer",
    "TemplatePage",
    "WizardOrchestrator",
]
