"""Ad platforms and their pixel dimensions."""

from dataclasses import dataclass
from enum import Enum

from ..errors import ValidationError


class Platform(str, Enum):
    """Closed set of platform + placement identifiers."""

    FACEBOOK_FEED = "FACEBOOK_FEED"
    FACEBOOK_STORY = "FACEBOOK_STORY"
    INSTAGRAM_FEED = "INSTAGRAM_FEED"
    INSTAGRAM_STORY = "INSTAGRAM_STORY"
    TIKTOK_FEED = "TIKTOK_FEED"
    PINTEREST_PIN = "PINTEREST_PIN"
    CUSTOM = "CUSTOM"
    GOOGLE_MREC = "GOOGLE_MREC"
    GOOGLE_LARGEREC = "GOOGLE_LARGEREC"
    GOOGLE_LEADERBOARD = "GOOGLE_LEADERBOARD"
    GOOGLE_HALFPAGE = "GOOGLE_HALFPAGE"
    GOOGLE_LARGEMOBILE = "GOOGLE_LARGEMOBILE"
    GOOGLE_SQUARE = "GOOGLE_SQUARE"
    GOOGLE_LANDSCAPE = "GOOGLE_LANDSCAPE"
    MAILCHIMP_BANNER = "MAILCHIMP_BANNER"
    MAILCHIMP_LARGE_BANNER = "MAILCHIMP_LARGE_BANNER"
    MAILCHIMP_MOBILE_BANNER = "MAILCHIMP_MOBILE_BANNER"
    KLAVIYO_BANNER = "KLAVIYO_BANNER"
    KLAVIYO_LARGE_BANNER = "KLAVIYO_LARGE_BANNER"
    KLAVIYO_MOBILE_BANNER = "KLAVIYO_MOBILE_BANNER"
    SHOPIFY_PRODUCT = "SHOPIFY_PRODUCT"
    SHOPIFY_COLLECTION = "SHOPIFY_COLLECTION"
    SHOPIFY_HERO = "SHOPIFY_HERO"


@dataclass(frozen=True)
class Dimensions:
    """Canvas size in pixels."""

    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


DEFAULT_DIMENSIONS: dict[Platform, Dimensions] = {
    Platform.FACEBOOK_FEED: Dimensions(1200, 630),
    Platform.FACEBOOK_STORY: Dimensions(1080, 1920),
    Platform.INSTAGRAM_FEED: Dimensions(1080, 1080),
    Platform.INSTAGRAM_STORY: Dimensions(1080, 1920),
    Platform.TIKTOK_FEED: Dimensions(1080, 1920),
    Platform.PINTEREST_PIN: Dimensions(1000, 1500),
    Platform.GOOGLE_MREC: Dimensions(300, 250),
    Platform.GOOGLE_LEADERBOARD: Dimensions(728, 90),
    Platform.GOOGLE_SQUARE: Dimensions(250, 250),
    Platform.MAILCHIMP_BANNER: Dimensions(600, 300),
    Platform.SHOPIFY_HERO: Dimensions(1920, 600),
}

FALLBACK_DIMENSIONS = Dimensions(800, 600)


def parse_platform(value: "Platform | str") -> Platform:
    """Coerce a platform id to the enum. Raises ValidationError if unknown."""
    if isinstance(value, Platform):
        return value
    try:
        return Platform(value)
    except ValueError:
        raise ValidationError("platform", f"unknown platform id {value!r}")


def parse_dimensions(value) -> Dimensions:
    """Accept Dimensions, a {width, height} mapping or a (w, h) pair."""
    if isinstance(value, Dimensions):
        width, height = value.width, value.height
    elif isinstance(value, dict):
        width, height = value.get("width"), value.get("height")
    elif isinstance(value, (tuple, list)) and len(value) == 2:
        width, height = value
    else:
        raise ValidationError("custom_dimensions", f"expected width and height, got {value!r}")

    # bool is an int subclass; reject it explicitly
    for name, v in (("width", width), ("height", height)):
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValidationError("custom_dimensions", f"{name} must be an integer, got {v!r}")
        if v <= 0:
            raise ValidationError("custom_dimensions", f"{name} must be positive, got {v}")

    return Dimensions(width, height)


def default_dimensions(platform: "Platform | str | None") -> Dimensions:
    """Default pixel size for a platform (800x600 when not listed)."""
    try:
        key = Platform(platform)
    except ValueError:
        return FALLBACK_DIMENSIONS
    return DEFAULT_DIMENSIONS.get(key, FALLBACK_DIMENSIONS)


def resolve_dimensions(
    platform: "Platform | str | None",
    custom_dimensions: Dimensions | None = None,
) -> Dimensions:
    """Custom dimensions win over the platform default."""
    if custom_dimensions is not None:
        return custom_dimensions
    return default_dimensions(platform)
