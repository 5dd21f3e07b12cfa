"""Static catalog: templates, themes, platforms, copy presets."""

from ..models.platform import Platform
from ..models.template import ANY_PLATFORM, CopyPreset, Template, Theme
from .copy import COPY_PRESETS, DEFAULT_PRESET, PRESET_ALIASES
from .platforms import PLATFORM_OPTIONS, PlatformOption
from .templates import LAYOUT_TEMPLATES, PLATFORM_TEMPLATES
from .themes import THEMES


def get_all_templates() -> list[Template]:
    """Every catalog entry, layouts first."""
    return LAYOUT_TEMPLATES + PLATFORM_TEMPLATES


def get_templates_for_platform(platform: Platform | str) -> list[Template]:
    """Layouts followed by the platform's own templates, first id wins."""
    key = Platform(platform).value
    seen = set()
    result = []
    for template in get_all_templates():
        if template.platform not in (ANY_PLATFORM, key):
            continue
        if template.id in seen:
            continue
        seen.add(template.id)
        result.append(template)
    return result


def get_template(template_id: str, platform: Platform | str) -> Template | None:
    """Look up a template id within a platform's listing."""
    for template in get_templates_for_platform(platform):
        if template.id == template_id:
            return template
    return None


def get_templates_by_category(category: str) -> list[Template]:
    return [t for t in get_all_templates() if t.category == category]


def search_templates(query: str) -> list[Template]:
    """Case-insensitive substring match over name, style and category."""
    term = query.lower()
    return [
        t for t in get_all_templates()
        if term in t.name.lower() or term in t.style.lower() or term in t.category.lower()
    ]


def get_themes() -> list[Theme]:
    return THEMES


def get_theme(theme_id: str) -> Theme | None:
    for theme in THEMES:
        if theme.id == theme_id:
            return theme
    return None


def get_platform_options() -> list[PlatformOption]:
    return PLATFORM_OPTIONS


def get_copy_preset(template_id: str) -> CopyPreset:
    """Copy preset for a template (glow-up when nothing specific exists)."""
    name = PRESET_ALIASES.get(template_id, template_id)
    return COPY_PRESETS.get(name, COPY_PRESETS[DEFAULT_PRESET])


__all__ = [
    "get_all_templates",
    "get_copy_preset",
    "get_platform_options",
    "get_template",
    "get_templates_by_category",
    "get_templates_for_platform",
    "get_theme",
    "get_themes",
    "search_templates",
]
