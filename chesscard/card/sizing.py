"""
Render size resolution for profile cards.

The card template is laid out once at NATIVE_WIDTH x NATIVE_HEIGHT (12:5).
Requested sizes are clamped to the MAX_WIDTH x MAX_HEIGHT envelope and then
bent back onto the native aspect ratio, so the card is never stretched.
"""
from typing import Optional

from chesscard.card.constants import MAX_HEIGHT, MAX_WIDTH, NATIVE_HEIGHT, NATIVE_WIDTH
from chesscard.card.schemas import RenderSize


def parse_dimension(raw: Optional[str]) -> Optional[int]:
    """Return a positive integer from a query value, or None if unusable."""
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    if value < 1:
        return None
    return value


def _width_for(height: int) -> int:
    return max(1, round(height * NATIVE_WIDTH / NATIVE_HEIGHT))


def _height_for(width: int) -> int:
    return max(1, round(width * NATIVE_HEIGHT / NATIVE_WIDTH))


def _fit_envelope(width: int, height: int) -> RenderSize:
    if width > MAX_WIDTH:
        width = MAX_WIDTH
        height = _height_for(width)
    if height > MAX_HEIGHT:
        height = MAX_HEIGHT
        width = _width_for(height)
    return RenderSize(width=width, height=height)


def resolve_size(width: Optional[int], height: Optional[int]) -> RenderSize:
    if width is None and height is None:
        return RenderSize(width=min(NATIVE_WIDTH, MAX_WIDTH), height=min(NATIVE_HEIGHT, MAX_HEIGHT))

    if width is not None:
        width = min(width, MAX_WIDTH)
    if height is not None:
        height = min(height, MAX_HEIGHT)

    if width is not None and height is not None:
        # width / height > NATIVE_WIDTH / NATIVE_HEIGHT, without float error
        if width * NATIVE_HEIGHT > height * NATIVE_WIDTH:
            width = _width_for(height)
        else:
            height = _height_for(width)
        return RenderSize(width=width, height=height)

    if width is not None:
        return _fit_envelope(width, _height_for(width))
    return _fit_envelope(_width_for(height), height)
