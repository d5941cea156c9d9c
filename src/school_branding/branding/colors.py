"""Color arithmetic and the per-school stylesheet."""

from __future__ import annotations

import math
import re

import structlog

from school_branding.models.school import ColorScheme

DYNAMIC_STYLE_ID = "dynamic-school-style"
HOVER_DARKEN_PERCENT = 20

logger = structlog.get_logger()

_HEX_COLOR_RE = re.compile(r"#?[0-9a-fA-F]{6}")


def darken_color(color: str, percent: float) -> str:
    """Darken a ``#rrggbb`` color by ``percent`` of full scale.

    Each channel loses ``round(2.55 * percent)`` (halves round up) and is
    clamped to ``[0, 255]``. Channel values below 1 become 0.

    Raises:
        ValueError: ``color`` is not six hex digits.

    >>> darken_color("#3b82f6", 20)
    '#084fc3'
    """
    if not _HEX_COLOR_RE.fullmatch(color):
        msg = f"Not a hex color: {color!r}"
        raise ValueError(msg)
    value = int(color.lstrip("#"), 16)
    amount = math.floor(2.55 * percent + 0.5)

    channels = (
        (value >> 16) - amount,
        ((value >> 8) & 0xFF) - amount,
        (value & 0xFF) - amount,
    )
    clamped = [0 if c < 1 else min(c, 255) for c in channels]
    return "#{:02x}{:02x}{:02x}".format(*clamped)


def build_color_stylesheet(colors: ColorScheme) -> str:
    """CSS forcing the utility classes onto the school's colors.

    A primary color that is not hex (e.g. ``navy``) is used unchanged for
    the hover state.
    """
    primary = colors.primary
    secondary = colors.secondary
    try:
        hover = darken_color(primary, HOVER_DARKEN_PERCENT)
    except ValueError:
        logger.warning("color_not_hex", color=primary)
        hover = primary
    return f"""
/* Dynamic School Colors */
.bg-primary, .btn-primary {{ background-color: {primary} !important; }}
.text-primary {{ color: {primary} !important; }}
.border-primary {{ border-color: {primary} !important; }}
.bg-secondary {{ background-color: {secondary} !important; }}
.text-secondary {{ color: {secondary} !important; }}

/* Button hover effects */
.btn-primary:hover {{ background-color: {hover} !important; }}

/* Header styling */
.header, .navbar {{
    background: linear-gradient(135deg, {primary}, {secondary}) !important;
}}
"""
