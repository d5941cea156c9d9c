"""Tests for branded page delivery."""

from typing import Any

import pytest
from bs4 import BeautifulSoup
from httpx import AsyncClient
from tests.sample_data import SDN1_RECORD

from school_branding.branding.colors import DYNAMIC_STYLE_ID
from school_branding.config import Settings


class TestBrandedPages:
    async def test_index_is_branded_for_school(self, client: AsyncClient) -> None:
        response = await client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        document = BeautifulSoup(response.text, "html.parser")
        assert document.title is not None
        assert document.title.string == "SD Negeri 1 - Brangkas Data Guru"
        assert document.select_one(".school-name").get_text() == "SD Negeri 1"
        assert len(document.find_all(id=DYNAMIC_STYLE_ID)) == 1
        assert document.select_one(".school-notification") is not None

    async def test_named_page(self, client: AsyncClient) -> None:
        response = await client.get("/guru.html")
        assert response.status_code == 200
        assert "SD Negeri 1" in response.text

    async def test_config_fetched_once_per_page(
        self, client: AsyncClient, upstream_calls: list[str]
    ) -> None:
        await client.get("/")
        assert upstream_calls == ["http://upstream.test/config/schools.json"]

    async def test_localhost_gets_default_branding(self, client: AsyncClient) -> None:
        response = await client.get("/", headers={"host": "localhost:8000"})

        assert response.status_code == 200
        document = BeautifulSoup(response.text, "html.parser")
        assert document.title is not None
        assert document.title.string == "Demo School - Brangkas Data Guru"
        assert document.select_one(".school-notification") is None

    @pytest.mark.parametrize(
        "upstream_routes",
        [
            {
                "config/schools.json": {
                    "sdn1": {
                        **SDN1_RECORD,
                        "colors": {"primary": "navy", "secondary": "red"},
                    }
                }
            }
        ],
    )
    async def test_named_colors_still_branded(
        self, client: AsyncClient, upstream_routes: dict[str, Any]
    ) -> None:
        response = await client.get("/")

        assert response.status_code == 200
        document = BeautifulSoup(response.text, "html.parser")
        style = document.find(id=DYNAMIC_STYLE_ID)
        assert style is not None
        css = style.get_text()
        assert ".btn-primary:hover { background-color: navy !important; }" in css
        assert "linear-gradient(135deg, navy, red)" in css

    async def test_unknown_page_is_404(self, client: AsyncClient) -> None:
        response = await client.get("/missing.html")
        assert response.status_code == 404

    async def test_non_html_page_is_404(self, client: AsyncClient) -> None:
        response = await client.get("/secrets.txt")
        assert response.status_code == 404


class TestSetupFlow:
    async def test_unconfigured_school_gets_confirmation(
        self, client: AsyncClient
    ) -> None:
        response = await client.get("/", headers={"host": "sma3.yourdomain.com"})

        assert response.status_code == 200
        document = BeautifulSoup(response.text, "html.parser")
        prompt = document.select_one(".setup-prompt")
        assert prompt is not None
        assert '"sma3"' in prompt.get_text()
        link = document.select_one("a.setup-link")
        assert link is not None
        assert link["href"] == "/setup.html?school=sma3"

    async def test_unconfigured_school_redirects_without_confirmation(
        self, client: AsyncClient, api_settings: Settings
    ) -> None:
        api_settings.confirm_before_redirect = False
        response = await client.get("/", headers={"host": "sma3.yourdomain.com"})

        assert response.status_code == 307
        assert response.headers["location"] == "/setup.html?school=sma3"

    async def test_setup_page_served_unbranded(
        self, client: AsyncClient, upstream_calls: list[str]
    ) -> None:
        response = await client.get(
            "/setup.html?school=sma3", headers={"host": "sma3.yourdomain.com"}
        )
        assert response.status_code == 200
        assert "setup" in response.text
        assert DYNAMIC_STYLE_ID not in response.text
        assert upstream_calls == []

    async def test_cancel_link_serves_default_branding(
        self, client: AsyncClient
    ) -> None:
        host = {"host": "sma3.yourdomain.com"}
        confirmation = await client.get("/guru.html", headers=host)
        document = BeautifulSoup(confirmation.text, "html.parser")
        cancel = document.select_one("a.setup-cancel")
        assert cancel is not None
        assert cancel["href"] == "/guru.html?setup=skip"

        response = await client.get(str(cancel["href"]), headers=host)

        assert response.status_code == 200
        page = BeautifulSoup(response.text, "html.parser")
        assert page.title is not None
        assert page.title.string == "Demo School - Brangkas Data Guru"
        assert page.select_one(".school-notification") is None
        assert page.select_one(".setup-prompt") is None

    async def test_skip_setup_without_confirmation_does_not_redirect(
        self, client: AsyncClient, api_settings: Settings
    ) -> None:
        api_settings.confirm_before_redirect = False
        response = await client.get(
            "/?setup=skip", headers={"host": "sma3.yourdomain.com"}
        )

        assert response.status_code == 200
        assert "Demo School - Brangkas Data Guru" in response.text
