"""Tests for applying branding to an HTML document."""

import pytest
from bs4 import BeautifulSoup
from tests.sample_data import PAGE_HTML, SDN1_RECORD, SMP2_RECORD

from school_branding.branding.colors import DYNAMIC_STYLE_ID
from school_branding.branding.document import apply_branding, apply_color_scheme
from school_branding.models.school import ColorScheme, TenantConfig

PRODUCT = "Brangkas Data Guru"
TAGLINE = "Brangkas Data Guru Digital"


@pytest.fixture()
def document() -> BeautifulSoup:
    return BeautifulSoup(PAGE_HTML, "html.parser")


@pytest.fixture()
def sdn1() -> TenantConfig:
    return TenantConfig.model_validate(SDN1_RECORD)


def _brand(document: BeautifulSoup, config: TenantConfig) -> None:
    apply_branding(document, config, product_name=PRODUCT, product_tagline=TAGLINE)


class TestTitleAndNames:
    def test_title(self, document: BeautifulSoup, sdn1: TenantConfig) -> None:
        _brand(document, sdn1)
        assert document.title is not None
        assert document.title.string == "SD Negeri 1 - Brangkas Data Guru"

    def test_title_created_when_missing(self, sdn1: TenantConfig) -> None:
        document = BeautifulSoup("<html><body></body></html>", "html.parser")
        _brand(document, sdn1)
        assert document.head is not None
        assert document.title is not None
        assert document.title.string == "SD Negeri 1 - Brangkas Data Guru"

    def test_name_placeholders(
        self, document: BeautifulSoup, sdn1: TenantConfig
    ) -> None:
        _brand(document, sdn1)
        assert document.select_one(".school-name").get_text() == "SD Negeri 1"
        assert document.select_one("#schoolName").get_text() == "SD Negeri 1"

    def test_heading_with_product_gets_two_lines(
        self, document: BeautifulSoup, sdn1: TenantConfig
    ) -> None:
        _brand(document, sdn1)
        heading = document.find("h1")
        assert heading is not None
        assert heading.decode_contents() == (
            "SD Negeri 1<br/><small>Brangkas Data Guru Digital</small>"
        )

    def test_heading_without_product_untouched(self, sdn1: TenantConfig) -> None:
        html = "<html><body><h1>Laporan</h1></body></html>"
        document = BeautifulSoup(html, "html.parser")
        _brand(document, sdn1)
        heading = document.find("h1")
        assert heading is not None
        assert heading.get_text() == "Laporan"


class TestLogos:
    def test_img_logo_updated(
        self, document: BeautifulSoup, sdn1: TenantConfig
    ) -> None:
        _brand(document, sdn1)
        logo = document.select_one("img.school-logo")
        assert logo is not None
        assert logo["src"] == "assets/images/sdn1.png"
        assert logo["alt"] == "SD Negeri 1"

    def test_non_img_logo_untouched(
        self, document: BeautifulSoup, sdn1: TenantConfig
    ) -> None:
        _brand(document, sdn1)
        text_logo = document.select_one("div.logo")
        assert text_logo is not None
        assert text_logo.get("src") is None
        assert text_logo.get_text() == "text logo"


class TestColorScheme:
    def test_root_variables_set_and_other_styles_kept(
        self, document: BeautifulSoup, sdn1: TenantConfig
    ) -> None:
        _brand(document, sdn1)
        style = document.html["style"]
        assert "font-size: 16px" in style
        assert "--primary-color: #1d4ed8" in style
        assert "--secondary-color: #f59e0b" in style

    def test_root_variables_replaced_not_duplicated(
        self, document: BeautifulSoup, sdn1: TenantConfig
    ) -> None:
        _brand(document, sdn1)
        black = ColorScheme(primary="#000000", secondary="#111111")
        apply_color_scheme(document, black)
        style = document.html["style"]
        assert style.count("--primary-color") == 1
        assert "--primary-color: #000000" in style

    def test_style_block_injected_in_head(
        self, document: BeautifulSoup, sdn1: TenantConfig
    ) -> None:
        _brand(document, sdn1)
        style = document.head.find("style", id=DYNAMIC_STYLE_ID)
        assert style is not None
        assert "#1d4ed8" in style.get_text()

    def test_branding_twice_leaves_one_style_block(
        self, document: BeautifulSoup, sdn1: TenantConfig
    ) -> None:
        _brand(document, sdn1)
        _brand(document, TenantConfig.model_validate(SMP2_RECORD))

        blocks = document.find_all(id=DYNAMIC_STYLE_ID)
        assert len(blocks) == 1
        assert "#7c3aed" in blocks[0].get_text()
        assert "#1d4ed8" not in blocks[0].get_text()

    def test_branding_is_idempotent(
        self, document: BeautifulSoup, sdn1: TenantConfig
    ) -> None:
        _brand(document, sdn1)
        once = str(document)
        _brand(document, sdn1)
        assert str(document) == once


class TestContactInfo:
    def test_contact_filled(
        self, document: BeautifulSoup, sdn1: TenantConfig
    ) -> None:
        _brand(document, sdn1)
        assert document.select_one(".school-phone").get_text() == "021-555-0101"
        assert document.select_one(".school-email").get_text() == "tu@sdn1.sch.id"

    def test_no_contact_leaves_placeholders(self, document: BeautifulSoup) -> None:
        _brand(document, TenantConfig.model_validate(SMP2_RECORD))
        assert document.select_one(".school-phone").get_text() == "-"
        assert document.select_one(".school-email").get_text() == "-"

    def test_partial_contact(self, document: BeautifulSoup) -> None:
        record = {**SMP2_RECORD, "contact": {"email": "info@smp2.sch.id"}}
        _brand(document, TenantConfig.model_validate(record))
        assert document.select_one(".school-phone").get_text() == "-"
        assert document.select_one(".school-email").get_text() == "info@smp2.sch.id"
