"""Page branding: titles, logos, names, colors, contact, welcome toast.

Quick start::

    from bs4 import BeautifulSoup
    from school_branding.branding import apply_branding

    document = BeautifulSoup(html, "html.parser")
    apply_branding(
        document, config, product_name="Brangkas Data Guru",
        product_tagline="Brangkas Data Guru Digital",
    )
"""

from school_branding.branding.colors import (
    DYNAMIC_STYLE_ID,
    build_color_stylesheet,
    darken_color,
)
from school_branding.branding.document import apply_branding, apply_color_scheme
from school_branding.branding.notification import render_notification

__all__ = [
    "DYNAMIC_STYLE_ID",
    "apply_branding",
    "apply_color_scheme",
    "build_color_stylesheet",
    "darken_color",
    "render_notification",
]
