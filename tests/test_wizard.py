"""Tests for the wizard orchestrator state machine.

Covers:
- AI failure never blocks the flow (theme/recommendation fallbacks)
- Platform changes invalidate the template
- Paging over recommendations or the catalog without calling the AI
- Regenerate / edit details backtracking
- Stale AI responses are discarded
- End-to-end composition export
"""

import asyncio
from io import BytesIO
from unittest.mock import AsyncMock

import pytest
from PIL import Image

from adwizard.catalog import get_templates_for_platform
from adwizard.engine import CanvasState
from adwizard.errors import GatewayError, NotFoundError, ValidationError
from adwizard.models import Dimensions, Platform, WizardState
from adwizard.services.wizard import PAGE_SIZE, WizardOrchestrator
from adwizard.utils import from_data_uri, to_data_uri

from .conftest import make_png


@pytest.fixture
def wizard(gateway, analyzer):
    return WizardOrchestrator(gateway=gateway, analyzer=analyzer)


async def at_platform_selection(wizard, image_uri):
    await wizard.begin()
    result = await wizard.submit_image(image_uri)
    assert result.state is WizardState.PLATFORM_SELECTION
    return result


async def at_composition(wizard, image_uri, template_id="hero-overlay", platform=Platform.INSTAGRAM_FEED):
    await at_platform_selection(wizard, image_uri)
    wizard.select_platform(platform)
    await wizard.skip_details()
    return wizard.select_template(template_id)


# ---------------------------------------------------------------------------
# Setup and analysis
# ---------------------------------------------------------------------------

class TestBeginAndAnalysis:
    @pytest.mark.asyncio
    async def test_begin(self, wizard):
        result = await wizard.begin()
        assert result.state is WizardState.UPLOAD

    @pytest.mark.asyncio
    async def test_begin_rejects_bad_key(self, wizard, gateway):
        gateway.verify = AsyncMock(return_value=False)
        with pytest.raises(ValidationError) as exc:
            await wizard.begin(verify_key=True)
        assert exc.value.field == "api_key"
        assert wizard.state is WizardState.SETUP

    @pytest.mark.asyncio
    async def test_upload_before_begin(self, wizard, image_uri):
        with pytest.raises(ValidationError):
            await wizard.submit_image(image_uri)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name, content", [("missing.png", None), ("not-an-image.png", b"hello")])
    async def test_undecodable_image_rejected(self, wizard, gateway, tmp_path, name, content):
        path = tmp_path / name
        if content is not None:
            path.write_bytes(content)
        await wizard.begin()

        with pytest.raises(ValidationError) as exc:
            await wizard.submit_image(str(path))

        assert exc.value.field == "image"
        assert wizard.state is WizardState.UPLOAD
        assert wizard.campaign.image is None
        gateway.extract_themes.assert_not_called()

    @pytest.mark.asyncio
    async def test_file_path_becomes_data_uri(self, wizard, gateway, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(make_png())
        await wizard.begin()

        result = await wizard.submit_image(str(path))

        assert result.state is WizardState.PLATFORM_SELECTION
        assert result.campaign.image.startswith("data:image/png;base64,")
        assert from_data_uri(result.campaign.image) == path.read_bytes()
        request = gateway.extract_themes.call_args.args[0]
        assert request.image_url == result.campaign.image

    @pytest.mark.asyncio
    async def test_successful_analysis(self, wizard, image_uri, gateway):
        result = await at_platform_selection(wizard, image_uri)
        assert result.campaign.description == "A red rectangle on a plain background"
        assert result.campaign.tags == ["red", "bold"]
        assert result.campaign.theme == "Bold Minimalism"
        assert result.campaign.target_audience == "Young professionals 25-35"
        request = gateway.extract_themes.call_args.args[0]
        assert request.image_url == image_uri
        assert request.tags == ["red", "bold"]

    @pytest.mark.asyncio
    async def test_gateway_failure_falls_back_to_manual_themes(self, wizard, image_uri, gateway):
        gateway.extract_themes = AsyncMock(side_effect=GatewayError("boom"))
        await wizard.begin()
        result = await wizard.submit_image(image_uri)

        assert result.state is WizardState.THEME_SELECTION
        assert [n.title for n in result.notices] == ["Analysis Error"]
        assert result.campaign.description is not None

        result = wizard.select_theme("luxury-launch")
        assert result.state is WizardState.PLATFORM_SELECTION
        assert result.campaign.theme == "Luxury Launch"

    @pytest.mark.asyncio
    async def test_no_gateway_falls_back(self, analyzer, image_uri):
        wizard = WizardOrchestrator(analyzer=analyzer)
        await wizard.begin(verify_key=True)
        result = await wizard.submit_image(image_uri)
        assert result.state is WizardState.THEME_SELECTION
        assert result.notices[0].level == "error"

    @pytest.mark.asyncio
    async def test_select_extracted_theme(self, wizard, image_uri):
        await at_platform_selection(wizard, image_uri)
        result = wizard.select_theme("Urban Energy")
        assert result.campaign.theme == "Urban Energy"

    @pytest.mark.asyncio
    async def test_unknown_theme(self, wizard, image_uri):
        await at_platform_selection(wizard, image_uri)
        with pytest.raises(NotFoundError):
            wizard.select_theme("made-up")


# ---------------------------------------------------------------------------
# Platform selection
# ---------------------------------------------------------------------------

class TestPlatform:
    @pytest.mark.asyncio
    async def test_custom_requires_dimensions(self, wizard, image_uri):
        await at_platform_selection(wizard, image_uri)
        with pytest.raises(ValidationError) as exc:
            wizard.select_platform("CUSTOM")
        assert exc.value.field == "custom_dimensions"
        assert wizard.state is WizardState.PLATFORM_SELECTION
        assert wizard.campaign.platform is None

    @pytest.mark.asyncio
    async def test_unknown_platform(self, wizard, image_uri):
        await at_platform_selection(wizard, image_uri)
        with pytest.raises(ValidationError) as exc:
            wizard.select_platform("MYSPACE")
        assert exc.value.field == "platform"

    @pytest.mark.asyncio
    async def test_custom_then_instagram_feed(self, wizard, image_uri):
        await at_platform_selection(wizard, image_uri)
        result = wizard.select_platform("CUSTOM", {"width": 500, "height": 500})
        assert result.state is WizardState.DETAILS_ENTRY
        assert result.campaign.dimensions == Dimensions(500, 500)

        await wizard.skip_details()
        result = wizard.select_template("split-layout")
        assert result.campaign.template == "split-layout"

        result = wizard.select_platform("INSTAGRAM_FEED")
        assert result.campaign.platform is Platform.INSTAGRAM_FEED
        assert result.campaign.template is None
        assert result.campaign.custom_dimensions is None
        assert result.campaign.dimensions == Dimensions(1080, 1080)

    @pytest.mark.asyncio
    async def test_new_platform_clears_template(self, wizard, image_uri):
        await at_composition(wizard, image_uri)
        canvas = wizard.open_canvas()
        assert wizard.campaign.template == "hero-overlay"

        result = wizard.select_platform(Platform.FACEBOOK_FEED)
        assert result.campaign.template is None
        assert result.state is WizardState.DETAILS_ENTRY
        assert canvas.state is CanvasState.CLOSED
        assert wizard.canvas is None
        assert wizard.recommendations is None


# ---------------------------------------------------------------------------
# Details and recommendations
# ---------------------------------------------------------------------------

class TestDetails:
    @pytest.mark.asyncio
    async def test_submit_details_merges_and_recommends(self, wizard, image_uri, gateway):
        await at_platform_selection(wizard, image_uri)
        wizard.select_platform(Platform.INSTAGRAM_FEED)
        result = await wizard.submit_details({"budget": "$500", "audience": "runners"})

        assert result.state is WizardState.TEMPLATE_SELECTION
        assert result.campaign.budget == "$500"
        assert result.campaign.audience == "runners"
        request = gateway.recommend_templates.call_args.args[0]
        assert request.platform == "INSTAGRAM_FEED"
        assert {"id": "hero-overlay", "name": "Hero Overlay", "style": "Bold text overlay on your image"} in request.available_templates
        assert [r.template_id for r in wizard.recommendations] == ["neon-glow", "modern-minimal", "hero-overlay"]

    @pytest.mark.asyncio
    async def test_unknown_detail_key(self, wizard, image_uri):
        await at_platform_selection(wizard, image_uri)
        wizard.select_platform(Platform.INSTAGRAM_FEED)
        with pytest.raises(ValidationError) as exc:
            await wizard.submit_details({"budget": "$5", "colour": "red"})
        assert exc.value.field == "colour"
        assert wizard.campaign.budget is None
        assert wizard.state is WizardState.DETAILS_ENTRY

    @pytest.mark.asyncio
    async def test_recommendation_failure_uses_catalog(self, wizard, image_uri, gateway):
        gateway.recommend_templates = AsyncMock(side_effect=GatewayError("rate limited"))
        await at_platform_selection(wizard, image_uri)
        wizard.select_platform(Platform.INSTAGRAM_FEED)
        result = await wizard.skip_details()

        assert result.state is WizardState.TEMPLATE_SELECTION
        assert result.notices[0].title == "Recommendation Error"
        page = wizard.template_page()
        assert page.source == "catalog"
        assert page.items[0].id == "hero-overlay"

    @pytest.mark.asyncio
    async def test_manual_theme_path_skips_recommendation(self, wizard, image_uri, gateway):
        gateway.extract_themes = AsyncMock(side_effect=GatewayError("boom"))
        await wizard.begin()
        await wizard.submit_image(image_uri)
        wizard.select_theme("viral-moment")
        wizard.select_platform(Platform.TIKTOK_FEED)
        result = await wizard.skip_details()

        assert result.state is WizardState.TEMPLATE_SELECTION
        gateway.recommend_templates.assert_not_called()
        assert wizard.template_page().source == "catalog"

        template_id = wizard.template_page().items[0].id
        result = wizard.select_template(template_id)
        assert result.state is WizardState.COMPOSITION

        canvas = wizard.open_canvas()
        assert canvas.dimensions == Dimensions(1080, 1920)
        png = wizard.save_composition()
        with Image.open(BytesIO(png)) as img:
            assert img.size == (1080, 1920)
        assert wizard.campaign.composite.startswith("data:image/png")


# ---------------------------------------------------------------------------
# Paging
# ---------------------------------------------------------------------------

class TestPaging:
    @pytest.mark.asyncio
    async def test_catalog_paging(self, analyzer, image_uri):
        wizard = WizardOrchestrator(analyzer=analyzer)
        await wizard.begin()
        await wizard.submit_image(image_uri)
        wizard.select_theme("brand-awareness")
        wizard.select_platform(Platform.INSTAGRAM_FEED)
        await wizard.skip_details()

        catalog = get_templates_for_platform(Platform.INSTAGRAM_FEED)
        page = wizard.template_page()
        assert page.source == "catalog"
        assert page.total == len(catalog)
        assert page.items == catalog[:PAGE_SIZE]
        assert page.has_more

        seen = list(page.items)
        while page.has_more:
            page = wizard.show_more()
            seen.extend(page.items)
        assert seen == catalog

        last = wizard.show_more()
        assert last.page == page.page
        assert last.items == page.items

    @pytest.mark.asyncio
    async def test_recommendation_paging_does_not_call_ai(self, wizard, image_uri, gateway):
        await at_platform_selection(wizard, image_uri)
        wizard.select_platform(Platform.INSTAGRAM_FEED)
        await wizard.skip_details()

        page = wizard.show_more()
        assert page.source == "ai"
        assert page.total == 3
        assert not page.has_more
        assert gateway.recommend_templates.await_count == 1


# ---------------------------------------------------------------------------
# Template selection and backtracking
# ---------------------------------------------------------------------------

class TestTemplateSelection:
    @pytest.mark.asyncio
    async def test_select_fills_copy(self, wizard, image_uri):
        result = await at_composition(wizard, image_uri, template_id="minimal-frame")
        campaign = result.campaign
        assert result.state is WizardState.COMPOSITION
        assert campaign.template == "minimal-frame"
        assert campaign.headline == "Simply Beautiful"
        assert campaign.cta == "Discover More"
        # Analysis already set the audience
        assert campaign.target_audience == "Young professionals 25-35"

    @pytest.mark.asyncio
    async def test_unknown_template(self, wizard, image_uri):
        await at_platform_selection(wizard, image_uri)
        wizard.select_platform(Platform.INSTAGRAM_FEED)
        await wizard.skip_details()
        with pytest.raises(NotFoundError):
            wizard.select_template("story-poll")
        assert wizard.state is WizardState.TEMPLATE_SELECTION

    @pytest.mark.asyncio
    async def test_regenerate_keeps_campaign(self, wizard, image_uri, gateway):
        await at_composition(wizard, image_uri)
        canvas = wizard.open_canvas()

        result = await wizard.regenerate()
        assert result.state is WizardState.TEMPLATE_SELECTION
        assert result.campaign.template == "hero-overlay"
        assert result.campaign.platform is Platform.INSTAGRAM_FEED
        assert canvas.state is CanvasState.CLOSED
        assert gateway.extract_themes.await_count == 1
        assert gateway.recommend_templates.await_count == 2

    @pytest.mark.asyncio
    async def test_regenerate_failure_keeps_previous_list(self, wizard, image_uri, gateway, recommendations):
        await at_composition(wizard, image_uri)
        gateway.recommend_templates = AsyncMock(side_effect=GatewayError("down"))

        result = await wizard.regenerate()
        assert result.state is WizardState.TEMPLATE_SELECTION
        assert result.notices[0].level == "error"
        assert wizard.recommendations == recommendations

    @pytest.mark.asyncio
    async def test_regenerate_not_allowed_early(self, wizard, image_uri):
        await at_platform_selection(wizard, image_uri)
        with pytest.raises(ValidationError):
            await wizard.regenerate()

    @pytest.mark.asyncio
    async def test_edit_details_returns_to_composition(self, wizard, image_uri, gateway):
        await at_composition(wizard, image_uri)

        result = wizard.edit_details()
        assert result.state is WizardState.DETAILS_ENTRY
        assert result.campaign.template == "hero-overlay"

        result = await wizard.submit_details({"launch_date": "2026-11-01"})
        assert result.state is WizardState.COMPOSITION
        assert result.campaign.launch_date == "2026-11-01"
        assert result.campaign.template == "hero-overlay"
        assert gateway.recommend_templates.await_count == 1

    @pytest.mark.asyncio
    async def test_start_over(self, wizard, image_uri):
        await at_composition(wizard, image_uri)
        canvas = wizard.open_canvas()

        result = wizard.start_over()
        assert result.state is WizardState.SETUP
        assert result.campaign.image is None
        assert result.campaign.platform is None
        assert wizard.extraction is None
        assert canvas.state is CanvasState.CLOSED


# ---------------------------------------------------------------------------
# Stale responses
# ---------------------------------------------------------------------------

class TestStaleResponses:
    @pytest.mark.asyncio
    async def test_start_over_discards_pending_extraction(self, wizard, image_uri, gateway, extraction):
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_extract(request):
            started.set()
            await release.wait()
            return extraction

        gateway.extract_themes = AsyncMock(side_effect=slow_extract)
        await wizard.begin()
        task = asyncio.create_task(wizard.submit_image(image_uri))
        await started.wait()
        assert wizard.state is WizardState.ANALYZING

        wizard.start_over()
        release.set()
        result = await task

        assert result.state is WizardState.SETUP
        assert wizard.campaign.theme is None
        assert wizard.extraction is None

    @pytest.mark.asyncio
    async def test_newer_upload_wins(self, wizard, gateway, extraction):
        first_uri = to_data_uri(make_png((20, 20), (255, 0, 0, 255)))
        second_uri = to_data_uri(make_png((20, 20), (0, 0, 255, 255)))
        started = asyncio.Event()
        release = asyncio.Event()

        async def extract(request):
            if request.image_url == first_uri:
                started.set()
                await release.wait()
            return extraction

        gateway.extract_themes = AsyncMock(side_effect=extract)
        await wizard.begin()
        first = asyncio.create_task(wizard.submit_image(first_uri))
        await started.wait()

        second = await wizard.submit_image(second_uri)
        release.set()
        stale = await first

        assert second.state is WizardState.PLATFORM_SELECTION
        assert stale.campaign.image == second_uri
        assert wizard.campaign.image == second_uri


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------

class TestEndToEnd:
    @pytest.mark.asyncio
    async def test_instagram_feed_hero_overlay(self, wizard, image_uri):
        result = await at_composition(wizard, image_uri)
        assert result.campaign.headline == "✨ Transform Your Look Today"

        canvas = wizard.open_canvas()
        assert canvas.dimensions == Dimensions(1080, 1080)
        assert len(canvas.layers) == 2
        canvas.add_text("SALE")
        assert [layer.kind for layer in canvas.layers] == ["image", "image", "text"]
        assert canvas.layers[0].rendered_size == (1080, 1080)

        png = wizard.save_composition()
        with Image.open(BytesIO(png)) as image:
            assert image.size == (1080, 1080)
            assert image.format == "PNG"

        composite = wizard.campaign.composite
        assert composite.startswith("data:image/png;base64,")
        assert from_data_uri(composite) == png

    @pytest.mark.asyncio
    async def test_custom_dimensions_canvas(self, wizard, image_uri):
        await at_platform_selection(wizard, image_uri)
        wizard.select_platform(Platform.CUSTOM, (640, 360))
        await wizard.skip_details()
        wizard.select_template("neon-glow")
        canvas = wizard.open_canvas()
        with Image.open(BytesIO(canvas.export())) as image:
            assert image.size == (640, 360)

    @pytest.mark.asyncio
    async def test_template_asset_file(self, gateway, analyzer, image_uri, tmp_path):
        (tmp_path / "templates").mkdir()
        (tmp_path / "templates" / "modern-minimal.png").write_bytes(make_png((10, 10), (0, 255, 0, 255)))
        wizard = WizardOrchestrator(gateway=gateway, analyzer=analyzer, assets_dir=tmp_path)
        await at_composition(wizard, image_uri, template_id="modern-minimal")

        canvas = wizard.open_canvas()
        with Image.open(BytesIO(canvas.export())) as image:
            assert image.convert("RGB").getpixel((2, 2)) == (0, 255, 0)

    @pytest.mark.asyncio
    async def test_save_requires_open_canvas(self, wizard, image_uri):
        await at_composition(wizard, image_uri)
        with pytest.raises(ValidationError):
            wizard.save_composition()
