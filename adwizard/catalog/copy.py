"""Campaign copy presets, filled in when a template is chosen."""

from ..models.template import CopyPreset

COPY_PRESETS: dict[str, CopyPreset] = {
    "glow-up": CopyPreset(
        headline="✨ Transform Your Look Today",
        body_text="Discover the secret to radiant confidence. Join thousands who've already made the change.",
        cta="Start Your Glow-Up",
        target_audience="Women 18-35 interested in beauty and wellness",
        post_time="Tuesday-Thursday 7-9 PM",
    ),
    "minimalist": CopyPreset(
        headline="Simply Beautiful",
        body_text="Less is more. Experience the power of simplicity in every detail.",
        cta="Discover More",
        target_audience="Design-conscious individuals 25-45",
        post_time="Monday-Wednesday 10 AM-12 PM",
    ),
    "testimonial": CopyPreset(
        headline="Real Results, Real People",
        body_text="See why our community can't stop talking about their amazing transformations.",
        cta="Join the Community",
        target_audience="Previous customers and lookalikes",
        post_time="Friday-Sunday 6-8 PM",
    ),
}

DEFAULT_PRESET = "glow-up"

# template id -> preset name
PRESET_ALIASES: dict[str, str] = {
    "minimal-frame": "minimalist",
    "modern-minimal": "minimalist",
    "magazine-spread": "minimalist",
    "google-brand": "minimalist",
    "testimonial-style": "testimonial",
    "user-testimonial": "testimonial",
    "facebook-community": "testimonial",
}
