"""Apply a school's branding to an HTML page.

The selectors below are the contract with the page templates: any element
matching them is rewritten, anything else is left alone.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from school_branding.branding.colors import DYNAMIC_STYLE_ID, build_color_stylesheet
from school_branding.models.school import ColorScheme, TenantConfig

LOGO_SELECTORS = ".school-logo, #schoolLogo, .logo"
NAME_SELECTORS = ".school-name, #schoolName, .nama-sekolah"
PHONE_SELECTOR = ".school-phone"
EMAIL_SELECTOR = ".school-email"

PRIMARY_COLOR_VAR = "--primary-color"
SECONDARY_COLOR_VAR = "--secondary-color"


def apply_branding(
    document: BeautifulSoup,
    config: TenantConfig,
    *,
    product_name: str,
    product_tagline: str,
) -> None:
    """Rewrite ``document`` in place for ``config``. Safe to call repeatedly."""
    _set_title(document, f"{config.name} - {product_name}")
    update_logos(document, config)
    update_school_names(document, config, product_name, product_tagline)
    apply_color_scheme(document, config.colors)
    update_contact_info(document, config)


def _ensure_head(document: BeautifulSoup) -> Tag:
    if document.head is not None:
        return document.head
    head = document.new_tag("head")
    html = document.html
    if html is not None:
        html.insert(0, head)
    else:
        document.insert(0, head)
    return head


def _set_title(document: BeautifulSoup, title: str) -> None:
    element = document.title
    if element is None:
        element = document.new_tag("title")
        _ensure_head(document).append(element)
    element.string = title


def update_logos(document: BeautifulSoup, config: TenantConfig) -> None:
    """Point every logo ``<img>`` at the school's logo."""
    for element in document.select(LOGO_SELECTORS):
        if element.name == "img":
            element["src"] = config.logo
            element["alt"] = config.name


def update_school_names(
    document: BeautifulSoup,
    config: TenantConfig,
    product_name: str,
    product_tagline: str,
) -> None:
    """Fill name placeholders; put the school name above the product in ``<h1>``."""
    for element in document.select(NAME_SELECTORS):
        element.string = config.name

    heading = document.find("h1")
    if heading is not None and product_name in heading.get_text():
        heading.clear()
        heading.append(config.name)
        heading.append(document.new_tag("br"))
        small = document.new_tag("small")
        small.string = product_tagline
        heading.append(small)


def _set_style_properties(element: Tag, properties: dict[str, str]) -> None:
    """Set CSS custom properties in an inline ``style``, keeping the others."""
    existing = str(element.get("style", ""))
    declarations = [
        decl.strip()
        for decl in existing.split(";")
        if decl.strip() and decl.split(":", 1)[0].strip() not in properties
    ]
    declarations.extend(f"{name}: {value}" for name, value in properties.items())
    element["style"] = "; ".join(declarations) + ";"


def apply_color_scheme(document: BeautifulSoup, colors: ColorScheme) -> None:
    """Expose the colors as root variables and (re)inject the dynamic stylesheet."""
    root = document.html
    if root is not None:
        _set_style_properties(
            root,
            {
                PRIMARY_COLOR_VAR: colors.primary,
                SECONDARY_COLOR_VAR: colors.secondary,
            },
        )

    for existing in document.find_all(id=DYNAMIC_STYLE_ID):
        existing.decompose()

    style = document.new_tag("style", id=DYNAMIC_STYLE_ID)
    style.string = build_color_stylesheet(colors)
    _ensure_head(document).append(style)


def update_contact_info(document: BeautifulSoup, config: TenantConfig) -> None:
    """Fill phone/email placeholders when the school has contact details."""
    contact = config.contact
    if contact is None:
        return

    if contact.phone:
        for element in document.select(PHONE_SELECTOR):
            element.string = contact.phone
    if contact.email:
        for element in document.select(EMAIL_SELECTOR):
            element.string = contact.email
