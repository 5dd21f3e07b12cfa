"""Wizard orchestrator - the campaign step state machine."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from ..catalog import (
    get_all_templates,
    get_copy_preset,
    get_template,
    get_templates_for_platform,
    get_theme,
)
from ..engine.canvas import CanvasEngine
from ..engine.render import image_mime_type, render_template_background
from ..errors import GatewayError, NotFoundError, ValidationError
from ..models.ai import (
    TemplateRecommendation,
    TemplateRecommendationRequest,
    ThemeExtraction,
    ThemeExtractionRequest,
)
from ..models.campaign import DETAIL_FIELDS, CampaignData
from ..models.platform import Dimensions, Platform, parse_dimensions, parse_platform
from ..models.state import Notice, StepResult, WizardState
from ..models.template import Template
from ..utils import read_source_bytes, to_data_uri
from .analysis import ImageAnalyzer, StaticImageAnalyzer
from .gateway import RecommendationGateway

logger = logging.getLogger(__name__)

PAGE_SIZE = 6

_BROWSING = (WizardState.TEMPLATE_SELECTION, WizardState.COMPOSITION)


@dataclass(frozen=True)
class TemplatePage:
    """One page of the template picker."""
    items: list                          # TemplateRecommendation (ai) or Template (catalog)
    page: int                            # 0-based
    has_more: bool
    total: int
    source: str                          # "ai" or "catalog"


class WizardOrchestrator:
    """Drives one campaign from upload to composition.

    Every transition returns a StepResult. Calls that await the AI take a new
    request generation; if anything else happened while they waited, their
    response is dropped.
    """

    def __init__(
        self,
        gateway: RecommendationGateway | None = None,
        analyzer: ImageAnalyzer | None = None,
        assets_dir: str | Path | None = None,
    ):
        self.gateway = gateway
        self.analyzer = analyzer or StaticImageAnalyzer()
        self.assets_dir = Path(assets_dir) if assets_dir else None
        self.canvas: CanvasEngine | None = None
        self._generation = 0
        self._reset()

    def _reset(self):
        self._close_canvas()
        self._state = WizardState.SETUP
        self._campaign = CampaignData()
        self._extraction: ThemeExtraction | None = None
        self._recommendations: list[TemplateRecommendation] | None = None
        self._page = 0
        self._editing = False

    # --- Read-only views ---

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def campaign(self) -> CampaignData:
        """Snapshot of the campaign. Mutate through transitions only."""
        return self._campaign.snapshot()

    @property
    def extraction(self) -> ThemeExtraction | None:
        return self._extraction

    @property
    def recommendations(self) -> list[TemplateRecommendation] | None:
        return list(self._recommendations) if self._recommendations is not None else None

    def current(self) -> StepResult:
        """The current state as a StepResult, without changing anything."""
        return self._result()

    # --- Transitions ---

    async def begin(self, verify_key: bool = False) -> StepResult:
        """SETUP -> UPLOAD, optionally checking the API key first."""
        self._require_state("begin", WizardState.SETUP)

        if verify_key and self.gateway is not None:
            generation = self._next_generation()
            valid = await self.gateway.verify()
            if not self._is_current(generation):
                return self._discard("api key check")
            if not valid:
                raise ValidationError("api_key", "the OpenAI API key was rejected")

        self._next_generation()
        self._state = WizardState.UPLOAD
        return self._result(Notice("Ready", "Upload an image to start your campaign"))

    async def submit_image(self, image: str) -> StepResult:
        """
        Store the image, analyze it and extract themes.

        AI failure (or no gateway) lands on THEME_SELECTION with an
        "Analysis Error" notice; success lands on PLATFORM_SELECTION.
        An image that can't be read or decoded is a ValidationError("image").
        """
        if self._state is WizardState.SETUP:
            raise ValidationError("state", "call begin() before uploading an image")
        if not image or not image.strip():
            raise ValidationError("image", "image is required")

        image = await asyncio.to_thread(_resolve_image, image)

        generation = self._next_generation()
        self._close_canvas()
        campaign = self._campaign
        campaign.image = image
        campaign.description = None
        campaign.tags = []
        campaign.theme = None
        campaign.template = None
        campaign.composite = None
        self._extraction = None
        self._recommendations = None
        self._page = 0
        self._state = WizardState.ANALYZING

        print("Analyzing image...", flush=True)
        analysis = await self.analyzer.analyze(image)
        if not self._is_current(generation):
            return self._discard("image analysis")

        campaign.description = analysis.description
        campaign.tags = list(analysis.tags)

        if self.gateway is None:
            self._state = WizardState.THEME_SELECTION
            return self._result(Notice(
                "Analysis Error",
                "AI theme extraction is not configured. Please choose a theme.",
                "error",
            ))

        request = ThemeExtractionRequest(
            image_url=image,
            description=analysis.description,
            tags=list(analysis.tags),
        )
        try:
            extraction = await self.gateway.extract_themes(request)
        except GatewayError as e:
            if not self._is_current(generation):
                return self._discard("theme extraction")
            logger.warning(f"Theme extraction failed: {e}")
            self._state = WizardState.THEME_SELECTION
            return self._result(Notice(
                "Analysis Error",
                "Failed to analyze the image with AI. Please choose a theme.",
                "error",
            ))

        if not self._is_current(generation):
            return self._discard("theme extraction")

        self._extraction = extraction
        campaign.theme = extraction.primary_theme
        if extraction.target_audience:
            campaign.target_audience = extraction.target_audience
        self._state = WizardState.PLATFORM_SELECTION
        print(f"  Primary theme: {extraction.primary_theme}", flush=True)
        return self._result(Notice("Analysis Complete", f"Primary theme: {extraction.primary_theme}"))

    def select_theme(self, theme_id: str) -> StepResult:
        """Pick a catalog theme or one of the extracted themes."""
        self._require_state("select_theme", WizardState.THEME_SELECTION, WizardState.PLATFORM_SELECTION)

        theme = get_theme(theme_id)
        if theme is not None:
            label = theme.title
        elif self._extraction is not None and theme_id in self._extraction.themes:
            label = theme_id
        else:
            raise NotFoundError("theme", theme_id)

        self._next_generation()
        self._campaign.theme = label
        self._state = WizardState.PLATFORM_SELECTION
        return self._result()

    def select_platform(
        self,
        platform_id: "Platform | str",
        custom_dimensions: "Dimensions | dict | tuple | None" = None,
    ) -> StepResult:
        """
        Choose the platform (and optionally explicit pixel dimensions).

        Clears the template, cached recommendations and any open canvas.
        """
        self._require_state(
            "select_platform",
            WizardState.PLATFORM_SELECTION,
            WizardState.DETAILS_ENTRY,
            WizardState.TEMPLATE_SELECTION,
            WizardState.COMPOSITION,
        )
        platform = parse_platform(platform_id)
        dimensions = parse_dimensions(custom_dimensions) if custom_dimensions is not None else None
        if platform is Platform.CUSTOM and dimensions is None:
            raise ValidationError("custom_dimensions", "required for the CUSTOM platform")

        self._next_generation()
        self._close_canvas()
        campaign = self._campaign
        campaign.platform = platform
        campaign.custom_dimensions = dimensions
        campaign.template = None
        campaign.composite = None
        self._recommendations = None
        self._page = 0
        self._state = WizardState.DETAILS_ENTRY
        return self._result()

    async def submit_details(self, details: dict) -> StepResult:
        """Merge optional description/audience/budget/launch_date and move on."""
        self._require_state("submit_details", WizardState.DETAILS_ENTRY)

        unknown = sorted(set(details) - set(DETAIL_FIELDS))
        if unknown:
            raise ValidationError(unknown[0], "unknown detail field")
        if self._campaign.platform is None:
            raise ValidationError("platform", "select a platform first")

        for key in DETAIL_FIELDS:
            if details.get(key) is not None:
                setattr(self._campaign, key, details[key])

        return await self._after_details()

    async def skip_details(self) -> StepResult:
        self._require_state("skip_details", WizardState.DETAILS_ENTRY)
        if self._campaign.platform is None:
            raise ValidationError("platform", "select a platform first")
        return await self._after_details()

    def edit_details(self) -> StepResult:
        """Back to DETAILS_ENTRY, keeping platform and template."""
        if self._state is WizardState.SETUP:
            raise ValidationError("state", "nothing to edit yet")

        self._next_generation()
        self._editing = True
        self._state = WizardState.DETAILS_ENTRY
        return self._result()

    def select_template(self, template_id: str) -> StepResult:
        """Choose a template, fill the campaign copy and enter composition."""
        self._require_state("select_template", *_BROWSING)
        platform = self._campaign.platform
        if platform is None:
            raise ValidationError("platform", "select a platform first")

        recommended = {r.template_id for r in self._recommendations or []}
        if get_template(template_id, platform) is None and template_id not in recommended:
            raise NotFoundError("template", template_id)

        self._next_generation()
        self._close_canvas()
        campaign = self._campaign
        campaign.template = template_id
        campaign.composite = None

        preset = get_copy_preset(template_id)
        campaign.headline = preset.headline
        campaign.body_text = preset.body_text
        campaign.cta = preset.cta
        campaign.post_time = preset.post_time
        if not campaign.target_audience:
            campaign.target_audience = preset.target_audience

        self._state = WizardState.COMPOSITION
        return self._result(Notice("Template Selected", f"Using {template_id} for {platform.value}"))

    async def regenerate(self) -> StepResult:
        """Ask for fresh recommendations with the cached themes. Keeps campaign fields."""
        self._require_state("regenerate", *_BROWSING)

        generation = self._next_generation()
        self._close_canvas()
        self._page = 0
        self._state = WizardState.TEMPLATE_SELECTION

        if self._extraction is None or self.gateway is None:
            return self._result(Notice(
                "No AI Recommendations",
                "Image analysis is unavailable. Showing all templates for this platform.",
            ))

        try:
            recommendations = await self._fetch_recommendations()
        except GatewayError as e:
            if not self._is_current(generation):
                return self._discard("template recommendation")
            logger.warning(f"Template recommendation failed: {e}")
            return self._result(Notice(
                "Recommendation Error",
                "Could not refresh recommendations. Keeping the previous list.",
                "error",
            ))

        if not self._is_current(generation):
            return self._discard("template recommendation")

        self._recommendations = recommendations
        return self._result(Notice("Templates Refreshed", f"{len(recommendations)} templates recommended"))

    def start_over(self) -> StepResult:
        """Empty campaign, back to SETUP. In-flight AI calls are ignored."""
        self._next_generation()
        self._reset()
        return self._result()

    # --- Template paging ---

    def template_page(self) -> TemplatePage:
        """Current page: AI recommendations if cached, else the catalog."""
        self._require_state("template_page", *_BROWSING)
        platform = self._campaign.platform
        if platform is None:
            raise ValidationError("platform", "select a platform first")

        if self._recommendations:
            items, source = self._recommendations, "ai"
        else:
            items, source = get_templates_for_platform(platform), "catalog"

        total = len(items)
        last_page = max(0, (total - 1) // PAGE_SIZE)
        page = min(self._page, last_page)
        start = page * PAGE_SIZE
        return TemplatePage(
            items=list(items[start:start + PAGE_SIZE]),
            page=page,
            has_more=start + PAGE_SIZE < total,
            total=total,
            source=source,
        )

    def show_more(self) -> TemplatePage:
        """Advance one page. Stays put on the last page."""
        current = self.template_page()
        if current.has_more:
            self._page = current.page + 1
        return self.template_page()

    # --- Composition ---

    def open_canvas(self) -> CanvasEngine:
        """Open a canvas session from the current campaign and template."""
        self._require_state("open_canvas", WizardState.COMPOSITION)
        self._close_canvas()

        snapshot = self._campaign.snapshot()
        dimensions = snapshot.dimensions
        template = self._find_template(snapshot.template)

        canvas = CanvasEngine()
        canvas.open(
            template_image=self._template_artwork(template, dimensions),
            user_image=snapshot.image,
            dimensions=dimensions,
        )
        self.canvas = canvas
        return canvas

    def save_composition(self) -> bytes:
        """Export the open canvas and store it on the campaign as a data URI."""
        self._require_state("save_composition", WizardState.COMPOSITION)
        if self.canvas is None:
            raise ValidationError("canvas", "open the canvas before saving")

        png = self.canvas.export()
        self._campaign.composite = to_data_uri(png, "image/png")
        return png

    # --- Internals ---

    async def _after_details(self) -> StepResult:
        generation = self._next_generation()
        campaign = self._campaign

        if self._editing and campaign.platform is not None and campaign.template is not None:
            self._editing = False
            self._state = WizardState.COMPOSITION
            return self._result()

        self._editing = False
        self._recommendations = None
        self._page = 0
        self._state = WizardState.TEMPLATE_SELECTION

        if self._extraction is None or self.gateway is None:
            return self._result()

        try:
            recommendations = await self._fetch_recommendations()
        except GatewayError as e:
            if not self._is_current(generation):
                return self._discard("template recommendation")
            logger.warning(f"Template recommendation failed: {e}")
            return self._result(Notice(
                "Recommendation Error",
                "Showing all templates for this platform instead.",
                "error",
            ))

        if not self._is_current(generation):
            return self._discard("template recommendation")

        self._recommendations = recommendations
        return self._result(Notice("Templates Ready", f"{len(recommendations)} templates recommended"))

    async def _fetch_recommendations(self) -> list[TemplateRecommendation]:
        platform = self._campaign.platform
        request = TemplateRecommendationRequest(
            platform=platform.value,
            extracted_themes=self._extraction,
            available_templates=[t.summary() for t in get_templates_for_platform(platform)],
        )
        print(f"Requesting template recommendations for {platform.value}...", flush=True)
        return await self.gateway.recommend_templates(request)

    def _find_template(self, template_id: str | None) -> Template | None:
        if template_id is None:
            return None
        template = get_template(template_id, self._campaign.platform)
        if template is not None:
            return template
        # Recommended id outside this platform's listing
        for candidate in get_all_templates():
            if candidate.id == template_id:
                return candidate
        return None

    def _template_artwork(self, template: Template | None, dimensions: Dimensions):
        """Template image file if present under assets_dir, else generated artwork."""
        if template is None:
            return None
        url = template.image_url
        if url and url.startswith(("http://", "https://", "data:")):
            return url
        if url and self.assets_dir is not None:
            path = self.assets_dir / url.lstrip("/")
            if path.exists():
                return path
        return render_template_background(template, dimensions)

    def _close_canvas(self):
        if self.canvas is not None:
            self.canvas.close()
            self.canvas = None

    def _require_state(self, operation: str, *allowed: WizardState):
        if self._state not in allowed:
            raise ValidationError("state", f"{operation} is not allowed in {self._state.value}")

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _discard(self, what: str) -> StepResult:
        print(f"  Discarding stale {what} response", flush=True)
        return self._result()

    def _result(self, *notices: Notice) -> StepResult:
        return StepResult(state=self._state, campaign=self._campaign.snapshot(), notices=list(notices))


def _resolve_image(image: str) -> str:
    """Check the image decodes; file paths become data URIs."""
    try:
        data = read_source_bytes(image)
        mime_type = image_mime_type(data)
    except (OSError, RuntimeError, SyntaxError, ValueError) as e:
        raise ValidationError("image", f"could not read image: {e}")

    if image.startswith(("data:", "http://", "https://")):
        return image
    return to_data_uri(data, mime_type)
