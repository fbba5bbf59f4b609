"""
Pillow rasterizer for declarative card trees.

Layout is computed once in native coordinates (a small flexbox subset:
flexDirection, alignItems, justifyContent, padding, margins, borders). Painting
then maps every rectangle and font size through a Transform, so a card
composed for 600x250 can be emitted at any pixel size without re-layout.
"""
import io
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from PIL import Image, ImageChops, ImageDraw, ImageFont, UnidentifiedImageError

from chesscard.card.layout import Box, Node, Picture, Text

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 16
LINE_HEIGHT = 1.2
ELLIPSIS = "..."
PLACEHOLDER_COLOR = "#555555"


@lru_cache(maxsize=32)
def load_font(size: int, bold: bool = False):
    name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
    try:
        return ImageFont.truetype(name, size)
    except OSError:
        return ImageFont.load_default(size=size)


def truncate_text(text: str, font, max_width: Optional[float]) -> str:
    if max_width is None or font.getlength(text) <= max_width:
        return text

    while text and font.getlength(text + ELLIPSIS) > max_width:
        text = text[:-1]
    return text + ELLIPSIS


@dataclass
class Transform:
    sx: float
    sy: float

    def rect(self, x: float, y: float, width: float, height: float) -> list[int]:
        left, top = round(x * self.sx), round(y * self.sy)
        right = max(left, round((x + width) * self.sx) - 1)
        bottom = max(top, round((y + height) * self.sy) - 1)
        return [left, top, right, bottom]

    def length(self, value: float) -> int:
        return max(1, round(value * min(self.sx, self.sy)))


@dataclass
class Placed:
    node: Node
    x: float
    y: float
    width: float
    height: float
    color: str
    text: Optional[str] = None


def _margins(style: dict) -> tuple[float, float, float, float]:
    return (
        style.get("marginTop", 0),
        style.get("marginRight", 0),
        style.get("marginBottom", 0),
        style.get("marginLeft", 0),
    )


def _inset(style: dict) -> float:
    return style.get("padding", 0) + style.get("borderWidth", 0)


def _text_font(style: dict, size: Optional[int] = None):
    return load_font(
        size or style.get("fontSize", DEFAULT_FONT_SIZE),
        style.get("fontWeight") == "bold",
    )


def _align_offset(mode: str, space: float, size: float) -> float:
    if mode == "center":
        return (space - size) / 2
    if mode == "flex-end":
        return space - size
    return 0


class CardRenderer:
    def render(
        self,
        tree: Box,
        width: int,
        height: int,
        images: Optional[dict[str, bytes]] = None,
    ) -> bytes:
        if not isinstance(tree, Box):
            raise TypeError("card tree root must be a Box")
        native_width = tree.style.get("width")
        native_height = tree.style.get("height")
        if not native_width or not native_height:
            raise ValueError("card tree root needs an explicit width and height")

        transform = Transform(width / native_width, height / native_height)
        image = Image.new("RGB", (width, height), tree.style.get("backgroundColor", "black"))

        for item in self.layout(tree):
            self._paint(image, item, transform, images or {})

        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    def layout(self, tree: Box) -> list[Placed]:
        placed: list[Placed] = []
        self._place(tree, 0, 0, tree.style.get("color", "white"), placed)
        return placed

    def _measure_text(self, node: Text) -> tuple[str, float, float]:
        font = _text_font(node.style)
        text = truncate_text(node.text, font, node.style.get("maxWidth"))
        line_height = node.style.get("fontSize", DEFAULT_FONT_SIZE) * LINE_HEIGHT
        return text, font.getlength(text), line_height

    def _measure(self, node: Node) -> tuple[float, float]:
        if isinstance(node, Text):
            _, width, height = self._measure_text(node)
            return width, height
        if isinstance(node, Picture):
            return node.width, node.height
        if not isinstance(node, Box):
            raise TypeError(f"unsupported card node: {type(node).__name__}")

        style = node.style
        inset = _inset(style)
        outer = [self._outer_size(child) for child in node.children]
        if style.get("flexDirection", "row") == "row":
            content_width = sum(w for w, _ in outer)
            content_height = max((h for _, h in outer), default=0)
        else:
            content_width = max((w for w, _ in outer), default=0)
            content_height = sum(h for _, h in outer)

        return (
            style.get("width", content_width + 2 * inset),
            style.get("height", content_height + 2 * inset),
        )

    def _outer_size(self, node: Node) -> tuple[float, float]:
        width, height = self._measure(node)
        top, right, bottom, left = _margins(node.style)
        return width + left + right, height + top + bottom

    def _place(self, node: Node, x: float, y: float, color: str, out: list[Placed]) -> None:
        color = node.style.get("color", color)

        if isinstance(node, Text):
            text, width, height = self._measure_text(node)
            out.append(Placed(node, x, y, width, height, color, text=text))
            return

        width, height = self._measure(node)
        out.append(Placed(node, x, y, width, height, color))
        if not isinstance(node, Box):
            return

        style = node.style
        inset = _inset(style)
        inner_x, inner_y = x + inset, y + inset
        inner_width, inner_height = width - 2 * inset, height - 2 * inset
        row = style.get("flexDirection", "row") == "row"

        outer = [self._outer_size(child) for child in node.children]
        main_space = inner_width if row else inner_height
        main_total = sum(w if row else h for w, h in outer)
        cursor = _align_offset(style.get("justifyContent", "flex-start"), main_space, main_total)
        align = style.get("alignItems", "flex-start")

        for child, (outer_width, outer_height) in zip(node.children, outer):
            top, _right, _bottom, left = _margins(child.style)
            if row:
                cross = _align_offset(align, inner_height, outer_height)
                self._place(child, inner_x + cursor + left, inner_y + cross + top, color, out)
                cursor += outer_width
            else:
                cross = _align_offset(align, inner_width, outer_width)
                self._place(child, inner_x + cross + left, inner_y + cursor + top, color, out)
                cursor += outer_height

    def _paint(self, image: Image.Image, item: Placed, transform: Transform, images: dict[str, bytes]) -> None:
        node = item.node
        draw = ImageDraw.Draw(image)

        if isinstance(node, Box):
            background = node.style.get("backgroundColor")
            border = node.style.get("borderColor")
            border_width = node.style.get("borderWidth", 0)
            if background or (border and border_width):
                draw.rectangle(
                    transform.rect(item.x, item.y, item.width, item.height),
                    fill=background,
                    outline=border if border_width else None,
                    width=transform.length(border_width) if border_width else 0,
                )

        elif isinstance(node, Text):
            font_size = node.style.get("fontSize", DEFAULT_FONT_SIZE)
            font = _text_font(node.style, max(1, round(font_size * transform.sy)))
            leading = (item.height - font_size) / 2
            draw.text(
                (round(item.x * transform.sx), round((item.y + leading) * transform.sy)),
                item.text,
                fill=item.color,
                font=font,
            )

        elif isinstance(node, Picture):
            self._paint_picture(image, item, transform, images.get(node.src))

    def _paint_picture(
        self,
        image: Image.Image,
        item: Placed,
        transform: Transform,
        data: Optional[bytes],
    ) -> None:
        node = item.node
        left, top, right, bottom = transform.rect(item.x, item.y, item.width, item.height)
        size = (right - left + 1, bottom - top + 1)
        circular = node.style.get("borderRadius") == "50%"

        picture = None
        if data is not None:
            try:
                picture = Image.open(io.BytesIO(data)).convert("RGBA").resize(size)
            except (UnidentifiedImageError, OSError) as exc:
                logger.warning("Could not decode image %s: %s", node.src, exc)
        else:
            logger.warning("No image data for %s", node.src)

        if picture is None:
            draw = ImageDraw.Draw(image)
            if circular:
                draw.ellipse([left, top, right, bottom], fill=PLACEHOLDER_COLOR)
            else:
                draw.rectangle([left, top, right, bottom], fill=PLACEHOLDER_COLOR)
            return

        mask = picture.getchannel("A")
        if circular:
            circle = Image.new("L", size, 0)
            ImageDraw.Draw(circle).ellipse([0, 0, size[0] - 1, size[1] - 1], fill=255)
            mask = ImageChops.multiply(mask, circle)
        image.paste(picture, (left, top), mask)
