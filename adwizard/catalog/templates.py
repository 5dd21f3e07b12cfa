"""Template library."""

from ..models.template import ANY_PLATFORM, Template

# Layout templates - offered on every platform, in this order
LAYOUT_TEMPLATES: list[Template] = [
    Template("hero-overlay", "Hero Overlay", "Bold text overlay on your image", ANY_PLATFORM, "layout",
             palette=("#0F172A", "#334155", "#E0E7FF")),
    Template("split-layout", "Split Layout", "Image on one side, content on the other", ANY_PLATFORM, "layout",
             palette=("#FCE7F3", "#FFEDD5", "#F8FAFC")),
    Template("minimal-frame", "Minimal Frame", "Clean border with centered image", ANY_PLATFORM, "layout",
             palette=("#FFFFFF", "#DCFCE7", "#DBEAFE")),
    Template("testimonial-style", "Testimonial Style", "Quote bubble with your image", ANY_PLATFORM, "layout",
             palette=("#FAF5FF", "#FDF2F8")),
    Template("product-showcase", "Product Showcase", "Feature highlights around your image", ANY_PLATFORM, "layout",
             palette=("#FFFBEB", "#FFF7ED", "#FED7AA")),
    Template("dynamic-burst", "Dynamic Burst", "Energetic design with motion elements", ANY_PLATFORM, "layout",
             palette=("#CFFAFE", "#DBEAFE")),
    # Second set
    Template("magazine-spread", "Magazine Spread", "Editorial layout with a side column", ANY_PLATFORM, "layout",
             palette=("#F1F5F9", "#CBD5E1")),
    Template("neon-glow", "Neon Glow", "Dark background with neon accents", ANY_PLATFORM, "layout",
             palette=("#000000", "#581C87", "#164E63")),
]

# Platform-specific templates
PLATFORM_TEMPLATES: list[Template] = [
    # Instagram Feed
    Template("modern-minimal", "Modern Minimal", "Clean, minimal design with bold typography", "INSTAGRAM_FEED", "minimal",
             image_url="/templates/modern-minimal.png", palette=("#FFFFFF", "#E5E7EB")),
    Template("vibrant-gradient", "Vibrant Gradient", "Colorful gradient backgrounds with dynamic elements", "INSTAGRAM_FEED", "colorful",
             image_url="/templates/vibrant-gradient.png", palette=("#EC4899", "#8B5CF6", "#3B82F6")),
    Template("product-showcase", "Product Showcase", "Professional product display with pricing", "INSTAGRAM_FEED", "ecommerce",
             image_url="/templates/product-showcase.png", palette=("#FFFBEB", "#FED7AA")),
    Template("lifestyle-story", "Lifestyle Story", "Authentic lifestyle photography layout", "INSTAGRAM_FEED", "lifestyle",
             palette=("#FEF3C7", "#FDE68A")),
    Template("brand-announcement", "Brand Announcement", "Bold announcement design with call-to-action", "INSTAGRAM_FEED", "promotional",
             palette=("#1D4ED8", "#1E3A8A")),
    Template("user-testimonial", "User Testimonial", "Social proof template with customer quotes", "INSTAGRAM_FEED", "testimonial",
             palette=("#F5F3FF", "#EDE9FE")),
    # Instagram Story
    Template("story-poll", "Interactive Poll", "Engaging poll template with custom graphics", "INSTAGRAM_STORY", "interactive",
             image_url="/templates/story-poll.png", palette=("#F472B6", "#A855F7")),
    Template("story-tutorial", "Tutorial Steps", "Step-by-step tutorial layout", "INSTAGRAM_STORY", "educational",
             image_url="/templates/story-tutorial.png", palette=("#ECFDF5", "#A7F3D0")),
    Template("story-behind-scenes", "Behind the Scenes", "Casual behind-the-scenes template", "INSTAGRAM_STORY", "lifestyle",
             palette=("#F5F5F4", "#D6D3D1")),
    Template("story-promotion", "Flash Sale", "Urgent promotional design with countdown", "INSTAGRAM_STORY", "promotional",
             palette=("#DC2626", "#F97316")),
    # Facebook
    Template("facebook-event", "Event Announcement", "Professional event promotion layout", "FACEBOOK_FEED", "event",
             palette=("#EFF6FF", "#BFDBFE")),
    Template("facebook-community", "Community Post", "Engaging community discussion starter", "FACEBOOK_FEED", "community",
             palette=("#F0F9FF", "#BAE6FD")),
    Template("facebook-video-cover", "Video Thumbnail", "Eye-catching video cover design", "FACEBOOK_FEED", "video",
             palette=("#111827", "#374151")),
    # TikTok
    Template("tiktok-challenge", "Challenge Template", "Trendy challenge participation design", "TIKTOK_FEED", "trending",
             palette=("#000000", "#FE2C55", "#25F4EE")),
    Template("tiktok-tutorial", "Quick Tutorial", "Fast-paced tutorial template", "TIKTOK_FEED", "educational",
             palette=("#18181B", "#3F3F46")),
    Template("tiktok-comedy", "Comedy Skit", "Humorous content template", "TIKTOK_FEED", "entertainment",
             palette=("#FDE047", "#FB923C")),
    # Pinterest
    Template("pinterest-diy", "DIY Guide", "Step-by-step DIY project layout", "PINTEREST_PIN", "diy",
             palette=("#FFF7ED", "#FDBA74")),
    Template("pinterest-recipe", "Recipe Card", "Beautiful recipe presentation", "PINTEREST_PIN", "food",
             palette=("#FEFCE8", "#FEF08A")),
    Template("pinterest-quote", "Inspirational Quote", "Motivational quote with beautiful typography", "PINTEREST_PIN", "inspirational",
             palette=("#FDF2F8", "#FBCFE8")),
    Template("pinterest-infographic", "Info Graphics", "Data visualization template", "PINTEREST_PIN", "educational",
             palette=("#F0FDFA", "#99F6E4")),
    # Google Ads
    Template("google-cta", "Call to Action", "High-converting CTA design", "GOOGLE_MREC", "promotional",
             palette=("#16A34A", "#15803D")),
    Template("google-brand", "Brand Awareness", "Professional brand showcase", "GOOGLE_LEADERBOARD", "branding",
             palette=("#F8FAFC", "#E2E8F0")),
    # Email
    Template("email-newsletter", "Newsletter Header", "Professional newsletter design", "MAILCHIMP_BANNER", "newsletter",
             palette=("#FFFBEB", "#FCD34D")),
    Template("email-promotion", "Promotional Banner", "Sales and promotion template", "MAILCHIMP_BANNER", "promotional",
             palette=("#F59E0B", "#EA580C")),
    # Shopify
    Template("shopify-hero", "Hero Banner", "High-impact hero section design", "SHOPIFY_HERO", "ecommerce",
             palette=("#064E3B", "#0D9488")),
    Template("shopify-collection", "Collection Showcase", "Product collection display", "SHOPIFY_HERO", "ecommerce",
             palette=("#ECFDF5", "#CCFBF1")),
]
