"""Catalog records: templates, themes, copy presets."""

from dataclasses import dataclass

# Platform value for layout templates that fit every platform
ANY_PLATFORM = "ANY"


@dataclass(frozen=True)
class Template:
    """A template in the catalog."""

    id: str
    name: str
    style: str
    platform: str                        # Platform value or ANY_PLATFORM
    category: str
    source: str = "internal"
    image_url: str | None = None
    # Gradient stops for generated artwork when image_url is absent or missing
    palette: tuple[str, ...] = ("#F1F5F9", "#CBD5E1")

    def summary(self) -> dict[str, str]:
        """The {id, name, style} shape the recommendation request expects."""
        return {"id": self.id, "name": self.name, "style": self.style}


@dataclass(frozen=True)
class Theme:
    """A campaign theme offered on the manual path."""

    id: str
    title: str
    description: str


@dataclass(frozen=True)
class CopyPreset:
    """Campaign copy generated when a template is chosen."""

    headline: str
    body_text: str
    cta: str
    target_audience: str
    post_time: str
