"""Wizard states and step results."""

from dataclasses import dataclass, field
from enum import Enum

from .campaign import CampaignData


class WizardState(Enum):
    SETUP = "setup"
    UPLOAD = "upload"
    ANALYZING = "analyzing"
    THEME_SELECTION = "theme_selection"
    PLATFORM_SELECTION = "platform_selection"
    DETAILS_ENTRY = "details_entry"
    TEMPLATE_SELECTION = "template_selection"
    COMPOSITION = "composition"


@dataclass(frozen=True)
class Notice:
    """Non-blocking message for the user (toast)."""
    title: str
    description: str = ""
    level: str = "info"                  # "info" or "error"


@dataclass
class StepResult:
    """What every wizard transition returns."""
    state: WizardState
    campaign: CampaignData               # snapshot, not the live record
    notices: list[Notice] = field(default_factory=list)
