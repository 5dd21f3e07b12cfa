"""Campaign data - filled in step by step by the wizard."""

from dataclasses import dataclass, field, fields, replace

from .platform import Dimensions, Platform, resolve_dimensions


@dataclass
class CampaignData:
    """One campaign in progress. Owned by the wizard orchestrator."""

    image: str | None = None              # data URI, URL or file path
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    theme: str | None = None
    platform: Platform | None = None
    custom_dimensions: Dimensions | None = None
    audience: str | None = None
    budget: str | None = None
    launch_date: str | None = None
    template: str | None = None           # template id, valid for `platform`
    # Derived copy
    headline: str | None = None
    body_text: str | None = None
    cta: str | None = None
    target_audience: str | None = None
    post_time: str | None = None
    # Last saved composition (PNG data URI)
    composite: str | None = None

    @property
    def dimensions(self) -> Dimensions:
        """Pixel size for the canvas."""
        return resolve_dimensions(self.platform, self.custom_dimensions)

    def snapshot(self) -> "CampaignData":
        """Detached copy handed to readers outside the orchestrator."""
        return replace(self, tags=list(self.tags))

    def to_dict(self) -> dict:
        """Plain dict view (enums and dimensions flattened)."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Platform):
                value = value.value
            elif isinstance(value, Dimensions):
                value = {"width": value.width, "height": value.height}
            elif isinstance(value, list):
                value = list(value)
            result[f.name] = value
        return result


# Fields the details step may set
DETAIL_FIELDS = ("description", "audience", "budget", "launch_date")
