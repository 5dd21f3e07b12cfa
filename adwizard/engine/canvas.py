"""Canvas compositing engine - one scene graph per composition session."""

from dataclasses import replace
from enum import Enum

from PIL import Image

from ..errors import NotFoundError, ValidationError, WizardError
from ..models.layer import ImageLayer, Layer, Position, TextLayer, ZOrder
from ..models.platform import Dimensions, parse_dimensions
from .render import encode_png, load_image, parse_color, render_layers

# Quick-pick colors offered for text
TEXT_PALETTE = ["#000000", "#ffffff", "#ff0000", "#00ff00", "#0000ff"]

DEFAULT_FONT_SIZE = 24
DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_TEXT_POSITION = Position(50, 50)
FONT_SIZE_STEP = 2
MIN_FONT_SIZE = 8

# Auto-placed images fit in 40% of the canvas, top-left at 30%
IMAGE_FIT_FRACTION = 0.4
IMAGE_OFFSET_FRACTION = 0.3


class CanvasState(Enum):
    EMPTY = "empty"
    OPEN = "open"
    CLOSED = "closed"


class CanvasStateError(WizardError):
    """Operation on a canvas session that is not open."""
    pass


class CanvasEngine:
    """Ordered image/text layers with selection-scoped editing and PNG export.

    Layers live in an arena keyed by id; `_order` holds z-order, back-most first.
    """

    def __init__(self):
        self._state = CanvasState.EMPTY
        self._dimensions: Dimensions | None = None
        self._layers: dict[str, Layer] = {}
        self._order: list[str] = []
        self._selected: str | None = None
        self._next_id = 1
        # Bumped on every mutation; export is cached per revision
        self._revision = 0
        self._export_cache: tuple[int, bytes] | None = None

    # --- State ---

    @property
    def state(self) -> CanvasState:
        return self._state

    @property
    def dimensions(self) -> Dimensions | None:
        return self._dimensions

    @property
    def layers(self) -> list[Layer]:
        """Layers in z-order, back-most first."""
        return [self._layers[layer_id] for layer_id in self._order]

    @property
    def selected(self) -> Layer | None:
        if self._selected is None:
            return None
        return self._layers[self._selected]

    def get_layer(self, layer_id: str) -> Layer:
        self._require_open()
        return self._lookup(layer_id)

    # --- Session lifecycle ---

    def open(self, template_image=None, user_image=None, dimensions=None) -> None:
        """
        Start the session.

        Args:
            template_image: Background artwork, stretched to fill the canvas.
            user_image: Uploaded image, auto-placed at 30%/30% within a 40% box.
            dimensions: Canvas size (Dimensions, {width, height} or (w, h)).

        Images may be PIL images, bytes, data URIs, URLs or file paths.
        """
        if self._state is not CanvasState.EMPTY:
            raise CanvasStateError(f"Cannot open canvas in state {self._state.value}")

        dims = parse_dimensions(dimensions)
        template = load_image(template_image) if template_image is not None else None
        try:
            user = load_image(user_image) if user_image is not None else None
        except Exception:
            if template is not None:
                template.close()
            raise

        self._dimensions = dims
        self._state = CanvasState.OPEN

        if template is not None:
            tw, th = template.size
            self._append(ImageLayer(
                id=self._new_id(),
                source=template,
                position=Position(0, 0),
                scale_x=dims.width / tw,
                scale_y=dims.height / th,
            ))

        if user is not None:
            self._append(self._fit_image(user))

        print(f"  Canvas opened: {dims}, {len(self._order)} layers", flush=True)

    def close(self) -> None:
        """Release image resources. Safe to call more than once."""
        for layer in self._layers.values():
            if isinstance(layer, ImageLayer):
                layer.source.close()
        self._layers.clear()
        self._order.clear()
        self._selected = None
        self._export_cache = None
        self._state = CanvasState.CLOSED

    # --- Layers ---

    def add_text(self, content: str) -> str | None:
        """Append a text layer and select it. Blank content adds nothing."""
        self._require_open()
        if not content or not content.strip():
            return None

        layer = TextLayer(
            id=self._new_id(),
            content=content,
            position=DEFAULT_TEXT_POSITION,
            font_size=DEFAULT_FONT_SIZE,
            color=DEFAULT_TEXT_COLOR,
        )
        self._append(layer)
        self._selected = layer.id
        return layer.id

    def add_image(self, source) -> str:
        """Append an image on top, auto-placed like the uploaded image, and select it."""
        self._require_open()
        layer = self._fit_image(load_image(source))
        self._append(layer)
        self._selected = layer.id
        return layer.id

    def remove(self, layer_id: str) -> None:
        self._require_open()
        layer = self._lookup(layer_id)
        self._order.remove(layer_id)
        del self._layers[layer_id]
        if self._selected == layer_id:
            self._selected = None
        if isinstance(layer, ImageLayer):
            layer.source.close()
        self._touch()

    def reorder(self, layer_id: str, z: ZOrder) -> None:
        """Bring a layer to the front or send it to the back."""
        self._require_open()
        self._lookup(layer_id)
        self._order.remove(layer_id)
        if z is ZOrder.FRONT:
            self._order.append(layer_id)
        else:
            self._order.insert(0, layer_id)
        self._touch()

    # --- Selection ---

    def select(self, layer_id: str) -> None:
        self._require_open()
        self._lookup(layer_id)
        self._selected = layer_id

    def clear_selection(self) -> None:
        self._require_open()
        self._selected = None

    # --- Editing ---

    def set_font_size(self, delta: int) -> None:
        """Grow or shrink the selected text by one step (sign of delta), never below 8."""
        self._require_open()
        layer = self.selected
        if not isinstance(layer, TextLayer) or delta == 0:
            return

        step = FONT_SIZE_STEP if delta > 0 else -FONT_SIZE_STEP
        size = max(MIN_FONT_SIZE, layer.font_size + step)
        if size != layer.font_size:
            self._update(replace(layer, font_size=size))

    def set_text_color(self, color: str) -> None:
        """Recolor the selected text. Palette values or any color Pillow parses."""
        self._require_open()
        if color not in TEXT_PALETTE:
            try:
                parse_color(color)
            except ValueError:
                raise ValidationError("color", f"unrecognized color {color!r}")

        layer = self.selected
        if isinstance(layer, TextLayer):
            self._update(replace(layer, color=color))

    def set_text(self, layer_id: str, content: str) -> None:
        self._require_open()
        layer = self._lookup(layer_id)
        if not isinstance(layer, TextLayer):
            raise ValidationError("layer", f"{layer_id} is not a text layer")
        if not content or not content.strip():
            raise ValidationError("content", "text cannot be blank")
        self._update(replace(layer, content=content))

    def move(self, layer_id: str, x: float, y: float) -> None:
        self._require_open()
        layer = self._lookup(layer_id)
        self._update(replace(layer, position=Position(x, y)))

    def set_scale(self, layer_id: str, scale_x: float, scale_y: float | None = None) -> None:
        """Scale an image layer; uniform when scale_y is omitted."""
        self._require_open()
        layer = self._lookup(layer_id)
        if not isinstance(layer, ImageLayer):
            raise ValidationError("layer", f"{layer_id} is not an image layer")
        if scale_y is None:
            scale_y = scale_x
        if scale_x <= 0 or scale_y <= 0:
            raise ValidationError("scale", "scale must be positive")
        self._update(replace(layer, scale_x=scale_x, scale_y=scale_y))

    def set_rotation(self, layer_id: str, degrees: float) -> None:
        self._require_open()
        layer = self._lookup(layer_id)
        if not isinstance(layer, ImageLayer):
            raise ValidationError("layer", f"{layer_id} is not an image layer")
        self._update(replace(layer, rotation=degrees % 360))

    # --- Export ---

    def export(self) -> bytes:
        """Flatten to PNG at exactly the session dimensions.

        Same bytes on repeated calls until the scene changes.
        """
        self._require_open()
        if self._export_cache is not None and self._export_cache[0] == self._revision:
            return self._export_cache[1]

        image = render_layers(self.layers, self._dimensions)
        data = encode_png(image)
        self._export_cache = (self._revision, data)
        print(f"  Canvas exported: {self._dimensions}, {len(data)} bytes", flush=True)
        return data

    # --- Internals ---

    def _require_open(self):
        if self._state is not CanvasState.OPEN:
            raise CanvasStateError(f"Canvas is {self._state.value}")

    def _lookup(self, layer_id: str) -> Layer:
        layer = self._layers.get(layer_id)
        if layer is None:
            raise NotFoundError("layer", layer_id)
        return layer

    def _new_id(self) -> str:
        layer_id = f"L{self._next_id}"
        self._next_id += 1
        return layer_id

    def _fit_image(self, image: Image.Image) -> ImageLayer:
        dims = self._dimensions
        w, h = image.size
        scale = min(IMAGE_FIT_FRACTION * dims.width / w, IMAGE_FIT_FRACTION * dims.height / h)
        return ImageLayer(
            id=self._new_id(),
            source=image,
            position=Position(IMAGE_OFFSET_FRACTION * dims.width, IMAGE_OFFSET_FRACTION * dims.height),
            scale_x=scale,
            scale_y=scale,
        )

    def _append(self, layer: Layer):
        self._layers[layer.id] = layer
        self._order.append(layer.id)
        self._touch()

    def _update(self, layer: Layer):
        self._layers[layer.id] = layer
        self._touch()

    def _touch(self):
        self._revision += 1
