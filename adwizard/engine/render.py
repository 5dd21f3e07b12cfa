"""Pillow rendering for the canvas: decoding, template artwork, flattening."""

from io import BytesIO
from pathlib import Path

from PIL import Image, ImageColor, ImageDraw, ImageFont

from ..models.layer import ImageLayer, Layer, TextLayer
from ..models.platform import Dimensions
from ..models.template import Template
from ..utils import read_source_bytes

BACKGROUND = (255, 255, 255, 255)


def load_image(source: "Image.Image | bytes | str | Path") -> Image.Image:
    """Decode an image source into a standalone RGBA image."""
    if isinstance(source, Image.Image):
        return source.convert("RGBA")

    data = read_source_bytes(source)
    with Image.open(BytesIO(data)) as img:
        img.load()
        return img.convert("RGBA")


def image_mime_type(data: bytes) -> str:
    """MIME type of encoded image bytes. Raises if Pillow can't decode them."""
    with Image.open(BytesIO(data)) as img:
        img.verify()
        return Image.MIME.get(img.format, "image/png")


def parse_color(color: str) -> tuple[int, int, int, int]:
    """Color string to RGBA. Raises ValueError for anything Pillow can't parse."""
    rgb = ImageColor.getrgb(color)
    if len(rgb) == 3:
        return (*rgb, 255)
    return rgb


def render_template_background(template: Template, dimensions: Dimensions) -> Image.Image:
    """Vertical gradient through the template's palette stops."""
    stops = [parse_color(c) for c in template.palette] or [BACKGROUND]
    height = dimensions.height

    if len(stops) == 1:
        return Image.new("RGBA", (dimensions.width, height), stops[0])

    # One column of interpolated colors, stretched to full width
    column = []
    segments = len(stops) - 1
    for y in range(height):
        t = y / max(1, height - 1) * segments
        index = min(int(t), segments - 1)
        frac = t - index
        start, end = stops[index], stops[index + 1]
        column.append(tuple(round(a + (b - a) * frac) for a, b in zip(start, end)))

    strip = Image.new("RGBA", (1, height))
    strip.putdata(column)
    return strip.resize((dimensions.width, height), Image.Resampling.NEAREST)


def _render_image_layer(layer: ImageLayer, size: tuple[int, int]) -> Image.Image:
    overlay = Image.new("RGBA", size, (0, 0, 0, 0))
    width, height = layer.rendered_size
    img = layer.source.resize((width, height), Image.Resampling.LANCZOS)

    x, y = layer.position.x, layer.position.y
    if layer.rotation:
        img = img.rotate(layer.rotation, resample=Image.Resampling.BICUBIC, expand=True)
        # Rotate around the center of the unrotated box
        x -= (img.width - width) / 2
        y -= (img.height - height) / 2

    overlay.paste(img, (round(x), round(y)))
    return overlay


def _render_text_layer(layer: TextLayer, size: tuple[int, int]) -> Image.Image:
    overlay = Image.new("RGBA", size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    font = ImageFont.load_default(size=layer.font_size)
    draw.text(
        (round(layer.position.x), round(layer.position.y)),
        layer.content,
        fill=parse_color(layer.color),
        font=font,
    )
    return overlay


def render_layers(layers: list[Layer], dimensions: Dimensions) -> Image.Image:
    """Flatten layers back-to-front onto a white canvas of exactly `dimensions`."""
    size = (dimensions.width, dimensions.height)
    canvas = Image.new("RGBA", size, BACKGROUND)

    for layer in layers:
        if isinstance(layer, ImageLayer):
            overlay = _render_image_layer(layer, size)
        else:
            overlay = _render_text_layer(layer, size)
        canvas = Image.alpha_composite(canvas, overlay)

    return canvas


def encode_png(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
