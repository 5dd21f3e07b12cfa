"""Command-line runner: image in, platform-sized ad PNG out."""

import asyncio
import json
import mimetypes
import sys
from pathlib import Path

from ..api import serialize_step, serialize_template_page
from ..clients import GeminiClient, LLMClient
from ..config import (
    AI_TIMEOUT_SECONDS,
    GEMINI_API_KEY,
    OPENAI_API_KEY,
    OPENAI_MODEL,
    OUTPUT_DIR,
    TEMPLATE_ASSETS_DIR,
)
from ..errors import WizardError
from ..models import WizardState
from ..services import (
    GeminiImageAnalyzer,
    RecommendationGateway,
    StaticImageAnalyzer,
    WizardOrchestrator,
)
from ..utils import to_data_uri


def build_orchestrator() -> WizardOrchestrator:
    """Wire clients from config. AI pieces are optional."""
    gateway = None
    if OPENAI_API_KEY:
        llm = LLMClient(api_key=OPENAI_API_KEY, model=OPENAI_MODEL, timeout=AI_TIMEOUT_SECONDS)
        gateway = RecommendationGateway(llm)
    else:
        print("OPENAI_API_KEY not set - AI recommendations disabled", flush=True)

    if GEMINI_API_KEY:
        analyzer = GeminiImageAnalyzer(GeminiClient(api_key=GEMINI_API_KEY))
    else:
        analyzer = StaticImageAnalyzer()

    return WizardOrchestrator(gateway=gateway, analyzer=analyzer, assets_dir=TEMPLATE_ASSETS_DIR)


def parse_platform_arg(value: str) -> tuple[str, tuple[int, int] | None]:
    """Split "PLATFORM" or "PLATFORM:WIDTHxHEIGHT"."""
    platform, sep, size = value.partition(":")
    if not sep:
        return platform, None
    width, _, height = size.lower().partition("x")
    return platform, (int(width), int(height))


def image_to_data_uri(path: str) -> str:
    mime_type = mimetypes.guess_type(path)[0] or "image/png"
    return to_data_uri(Path(path).read_bytes(), mime_type)


async def run(
    image_path: str,
    platform_arg: str,
    template_id: str | None = None,
    text: str | None = None,
    out_path: str | None = None,
) -> dict:
    """Run the whole wizard non-interactively and write the exported PNG."""
    wizard = build_orchestrator()
    platform, custom_dimensions = parse_platform_arg(platform_arg)

    await wizard.begin(verify_key=wizard.gateway is not None)

    print(f"Uploading {image_path}...", flush=True)
    result = await wizard.submit_image(image_to_data_uri(image_path))
    for notice in result.notices:
        print(f"  [{notice.level}] {notice.title}: {notice.description}", flush=True)

    if result.state is WizardState.THEME_SELECTION:
        wizard.select_theme("brand-awareness")

    wizard.select_platform(platform, custom_dimensions)
    result = await wizard.skip_details()
    for notice in result.notices:
        print(f"  [{notice.level}] {notice.title}: {notice.description}", flush=True)

    page = wizard.template_page()
    if template_id is None:
        first = page.items[0]
        template_id = getattr(first, "template_id", None) or first.id
    print(f"Template: {template_id} ({page.source})", flush=True)

    wizard.select_template(template_id)
    canvas = wizard.open_canvas()
    if text:
        canvas.add_text(text)
    png = wizard.save_composition()

    campaign = wizard.campaign
    if out_path is None:
        out_path = str(Path(OUTPUT_DIR) / f"{template_id}-{campaign.platform.value.lower()}.png")
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    Path(out_path).write_bytes(png)
    print(f"Saved {campaign.dimensions} creative to {out_path}", flush=True)

    return {
        "output": out_path,
        "templates": serialize_template_page(page),
        "step": serialize_step(wizard.current()),
    }


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    if len(args) < 2:
        print("Usage: python -m adwizard.handlers.cli <image_path> <platform[:WxH]> [template_id] [text] [out_path]")
        print()
        print("Arguments:")
        print("  image_path  - Local image file to build the ad from")
        print("  platform    - e.g. INSTAGRAM_FEED, FACEBOOK_STORY, CUSTOM:1200x628")
        print("  template_id - Template to use (default: top of the list)")
        print("  text        - Optional text layer to add")
        print("  out_path    - Where to write the PNG (default: output/<template>-<platform>.png)")
        print()
        print("Example:")
        print('  python -m adwizard.handlers.cli photo.jpg INSTAGRAM_FEED hero-overlay "Summer Sale"')
        return 1

    image_path, platform_arg, *rest = args
    rest += [None] * (3 - len(rest))
    template_id, text, out_path = rest[:3]

    try:
        result = asyncio.run(run(image_path, platform_arg, template_id, text, out_path))
    except (WizardError, OSError, ValueError) as e:
        print(f"ERROR: {e}", flush=True)
        return 1

    print("\nResult:")
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
