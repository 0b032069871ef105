"""Guest card rendering on top of the fixed template image.

The layout is intentionally fixed: the name is drawn at a constant offset from
the template center and is never measured or wrapped, so very long names can
run past the card edge.
"""

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

import arabic_reshaper
from bidi.algorithm import get_display
from PIL import Image, ImageDraw, ImageFont

from guest_cards.services.script import is_latin_script

TEXT_COLOR = "#7d5438"
TEXT_ANCHOR = "mm"
JPEG_QUALITY = 90

X_OFFSET = -50
SINGLE_NAME_Y_OFFSET = 35
TWO_NAMES_Y_OFFSET = -180


class AssetLoadError(RuntimeError):
    """Raised when the template or a font cannot be loaded."""


def text_position(width: int, height: int, two_names: bool) -> tuple[float, float]:
    """Return the anchor point for the guest name.

    Two-line names start higher so they stay on the card; single names sit
    slightly below center.
    """
    y_offset = TWO_NAMES_Y_OFFSET if two_names else SINGLE_NAME_Y_OFFSET
    return width / 2 + X_OFFSET, height / 2 + y_offset


def shape_text(text: str) -> str:
    """Return text ready for left-to-right drawing.

    Latin text is returned unchanged; anything else is reshaped into joined
    Arabic presentation forms and reordered for display.
    """
    if is_latin_script(text):
        return text
    return get_display(arabic_reshaper.reshape(text))


@dataclass
class CardCompositor:
    """Renders guest names onto the card template."""

    template: Image.Image
    latin_font: ImageFont.FreeTypeFont
    arabic_font: ImageFont.FreeTypeFont

    @classmethod
    def load(
        cls,
        template_path: str | Path,
        latin_font_path: str | Path,
        arabic_font_path: str | Path,
        font_size: int = 26,
    ) -> "CardCompositor":
        """Load the template and both fonts from disk."""
        try:
            with Image.open(template_path) as image:
                template = image.convert("RGB")
        except OSError as exc:
            raise AssetLoadError(
                f"Cannot load card template {template_path}: {exc}"
            ) from exc
        return cls(
            template=template,
            latin_font=_load_font(latin_font_path, font_size),
            arabic_font=_load_font(arabic_font_path, font_size),
        )

    @property
    def size(self) -> tuple[int, int]:
        return self.template.size

    def select_font(self, name: str) -> ImageFont.FreeTypeFont:
        """Pick the Latin font for Latin names and the Arabic font otherwise."""
        return self.latin_font if is_latin_script(name) else self.arabic_font

    def compose(self, name: str, two_names: bool = False) -> bytes:
        """Draw the name on a copy of the template and return JPEG bytes."""
        surface = Image.new("RGB", self.template.size)
        surface.paste(self.template, (0, 0))
        draw = ImageDraw.Draw(surface)
        draw.text(
            text_position(surface.width, surface.height, two_names),
            shape_text(name),
            font=self.select_font(name),
            fill=TEXT_COLOR,
            anchor=TEXT_ANCHOR,
        )
        buffer = BytesIO()
        surface.save(buffer, format="JPEG", quality=JPEG_QUALITY)
        return buffer.getvalue()


def _load_font(path: str | Path, size: int) -> ImageFont.FreeTypeFont:
    # Basic layout: shaping and bidi are already applied by shape_text.
    try:
        return ImageFont.truetype(
            str(path), size, layout_engine=ImageFont.Layout.BASIC
        )
    except OSError as exc:
        raise AssetLoadError(f"Cannot load font {path}: {exc}") from exc
