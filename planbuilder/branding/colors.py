"""
Colour helpers for the company-profile branding editor.
"""

from __future__ import annotations

import re
from typing import Dict, Optional, Tuple

_HEX = re.compile(r"^#([0-9A-F]{3}){1,2}$", re.IGNORECASE)

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def is_valid_hex_color(color: str) -> bool:
    return bool(_HEX.match(color or ""))


def hex_to_rgb(hex_color: str) -> Optional[Tuple[int, int, int]]:
    """#RRGGBB (or RRGGBB) -> (r, g, b); None when it cannot be decoded."""
    h = (hex_color or "").replace("#", "")
    if len(h) < 6:
        return None
    try:
        return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    except ValueError:
        return None


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def perceived_luminance(r: int, g: int, b: int) -> float:
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def contrast_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Readable text colour on the given background: black if luminance > 0.5."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return BLACK
    return BLACK if perceived_luminance(*rgb) > 0.5 else WHITE


def contrast_text_color(hex_color: str, opacity: float = 1) -> str:
    r, g, b = contrast_rgb(hex_color)
    return f"rgba({r}, {g}, {b}, {opacity})"


def complementary_color(hex_color: str) -> str:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return hex_color
    r, g, b = rgb
    return rgb_to_hex(255 - r, 255 - g, 255 - b)


def _darken(v: int, amount: float) -> int:
    return max(0, min(255, int(v * (1 - amount))))


def _lighten(v: int, amount: float) -> int:
    return max(0, min(255, int(v + (255 - v) * amount)))


def color_palette(primary: str) -> Dict[str, str]:
    rgb = hex_to_rgb(primary)
    if rgb is None:
        return {
            "primary": primary,
            "complementary": "#000000",
            "darker": "#000000",
            "lighter": "#FFFFFF",
            "lightest": "#FFFFFF",
            "darkest": "#000000",
        }
    r, g, b = rgb
    return {
        "primary": primary,
        "complementary": complementary_color(primary),
        "darker": rgb_to_hex(_darken(r, 0.3), _darken(g, 0.3), _darken(b, 0.3)),
        "lighter": rgb_to_hex(_lighten(r, 0.3), _lighten(g, 0.3), _lighten(b, 0.3)),
        "lightest": rgb_to_hex(_lighten(r, 0.6), _lighten(g, 0.6), _lighten(b, 0.6)),
        "darkest": rgb_to_hex(_darken(r, 0.6), _darken(g, 0.6), _darken(b, 0.6)),
    }


def _relative_luminance(r: int, g: int, b: int) -> float:
    def channel(v: int) -> float:
        c = v / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return channel(r) * 0.2126 + channel(g) * 0.7152 + channel(b) * 0.0722


def contrast_ratio(foreground: str, background: str) -> Optional[float]:
    fg = hex_to_rgb(foreground)
    bg = hex_to_rgb(background)
    if fg is None or bg is None:
        return None
    a = _relative_luminance(*fg)
    b = _relative_luminance(*bg)
    return (max(a, b) + 0.05) / (min(a, b) + 0.05)


def accessibility_score(foreground: str, background: str) -> int:
    """
    WCAG contrast ratio bucketed 1..5:
    5 AAA (>=7), 4 AA (>=4.5), 3 AA large text (>=3), 2 UI minimum (>=2), 1 otherwise.
    """
    ratio = contrast_ratio(foreground, background)
    if ratio is None:
        return 1
    if ratio >= 7:
        return 5
    if ratio >= 4.5:
        return 4
    if ratio >= 3:
        return 3
    if ratio >= 2:
        return 2
    return 1
