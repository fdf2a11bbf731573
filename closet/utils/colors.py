from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple

RGB = Tuple[int, int, int]

DEFAULT_OUTFIT_COLOR = "#808080"
LUMINANCE_THRESHOLD = 0.5
DARKEN_STEP = 50

_HEX_RE = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)
_STRICT_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def is_valid_hex_color(value: object) -> bool:
    """True for the canonical ``#RRGGBB`` form accepted from clients."""
    return isinstance(value, str) and bool(_STRICT_HEX_RE.match(value))


def hex_to_rgb(value: object) -> RGB:
    """Parse ``#RRGGBB`` or ``RRGGBB``. Anything else reads as black."""
    if not isinstance(value, str):
        return (0, 0, 0)
    match = _HEX_RE.match(value)
    if not match:
        return (0, 0, 0)
    return (int(match.group(1), 16), int(match.group(2), 16), int(match.group(3), 16))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02X}{g:02X}{b:02X}"


def relative_luminance(rgb: RGB) -> float:
    r, g, b = rgb
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def is_light(luminance: float) -> bool:
    # Exactly 0.5 stays as is
    return luminance > LUMINANCE_THRESHOLD


def _mean_half_up(total: int, count: int) -> int:
    # Integer form of floor(total / count + 0.5) for non-negative totals
    return (2 * total + count) // (2 * count)


def average_rgb(colors: Iterable[object]) -> Optional[RGB]:
    """Channel-wise mean of the parsed colors, or None when there are none."""
    totals = [0, 0, 0]
    count = 0
    for color in colors:
        r, g, b = hex_to_rgb(color)
        totals[0] += r
        totals[1] += g
        totals[2] += b
        count += 1
    if count == 0:
        return None
    return (
        _mean_half_up(totals[0], count),
        _mean_half_up(totals[1], count),
        _mean_half_up(totals[2], count),
    )


def darken(rgb: RGB, amount: int = DARKEN_STEP) -> RGB:
    return tuple(max(0, channel - amount) for channel in rgb)  # type: ignore[return-value]


def derive_outfit_color(item_colors: Iterable[object], override: Optional[str] = None) -> str:
    """Representative card color for an outfit built from ``item_colors``.

    A non-empty ``override`` (a persisted or user-picked color) is returned
    untouched. Otherwise the item colors are averaged per channel and, when
    the average reads as light, darkened once so white text stays legible on
    top of it. Malformed entries count as black; an empty selection yields
    ``DEFAULT_OUTFIT_COLOR``.
    """
    if override:
        return override

    averaged = average_rgb(item_colors)
    if averaged is None:
        return DEFAULT_OUTFIT_COLOR

    if is_light(relative_luminance(averaged)):
        averaged = darken(averaged)

    return rgb_to_hex(*averaged)
