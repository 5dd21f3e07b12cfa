"""Platform options shown in the platform selector."""

from dataclasses import dataclass

from ..models.platform import Platform


@dataclass(frozen=True)
class PlatformOption:
    platform: Platform
    name: str
    category: str


PLATFORM_OPTIONS: list[PlatformOption] = [
    # Social Media
    PlatformOption(Platform.FACEBOOK_FEED, "Facebook Feed", "Social Media"),
    PlatformOption(Platform.FACEBOOK_STORY, "Facebook Story", "Social Media"),
    PlatformOption(Platform.INSTAGRAM_FEED, "Instagram Feed", "Social Media"),
    PlatformOption(Platform.INSTAGRAM_STORY, "Instagram Story", "Social Media"),
    PlatformOption(Platform.TIKTOK_FEED, "TikTok Feed", "Social Media"),
    PlatformOption(Platform.PINTEREST_PIN, "Pinterest Pin", "Social Media"),
    # Google Ads
    PlatformOption(Platform.GOOGLE_MREC, "Google MREC (300x250)", "Google Ads"),
    PlatformOption(Platform.GOOGLE_LARGEREC, "Google Large Rectangle", "Google Ads"),
    PlatformOption(Platform.GOOGLE_LEADERBOARD, "Google Leaderboard (728x90)", "Google Ads"),
    PlatformOption(Platform.GOOGLE_HALFPAGE, "Google Half Page", "Google Ads"),
    PlatformOption(Platform.GOOGLE_LARGEMOBILE, "Google Large Mobile", "Google Ads"),
    PlatformOption(Platform.GOOGLE_SQUARE, "Google Square (250x250)", "Google Ads"),
    PlatformOption(Platform.GOOGLE_LANDSCAPE, "Google Landscape", "Google Ads"),
    # Email Marketing
    PlatformOption(Platform.MAILCHIMP_BANNER, "Mailchimp Banner", "Email Marketing"),
    PlatformOption(Platform.MAILCHIMP_LARGE_BANNER, "Mailchimp Large Banner", "Email Marketing"),
    PlatformOption(Platform.MAILCHIMP_MOBILE_BANNER, "Mailchimp Mobile Banner", "Email Marketing"),
    PlatformOption(Platform.KLAVIYO_BANNER, "Klaviyo Banner", "Email Marketing"),
    PlatformOption(Platform.KLAVIYO_LARGE_BANNER, "Klaviyo Large Banner", "Email Marketing"),
    PlatformOption(Platform.KLAVIYO_MOBILE_BANNER, "Klaviyo Mobile Banner", "Email Marketing"),
    # E-commerce
    PlatformOption(Platform.SHOPIFY_PRODUCT, "Shopify Product", "E-commerce"),
    PlatformOption(Platform.SHOPIFY_COLLECTION, "Shopify Collection", "E-commerce"),
    PlatformOption(Platform.SHOPIFY_HERO, "Shopify Hero", "E-commerce"),
    # Custom
    PlatformOption(Platform.CUSTOM, "Custom Dimensions", "Custom"),
]
