"""Campaign themes for the manual selection path."""

from ..models.template import Theme

THEMES: list[Theme] = [
    Theme("luxury-launch", "Luxury Launch", "Premium, exclusive positioning for high-end products"),
    Theme("brand-awareness", "Brand Awareness", "Build recognition and trust with your audience"),
    Theme("high-conversion", "High Conversion", "Drive immediate sales and action"),
    Theme("lifestyle-inspiration", "Lifestyle Inspiration", "Aspirational content that inspires and motivates"),
    Theme("product-showcase", "Product Showcase", "Highlight features and benefits beautifully"),
    Theme("viral-moment", "Viral Moment", "Trend-worthy content designed to go viral"),
]
