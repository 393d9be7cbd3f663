"""
Inventory Service — Search Page Tests
=======================================

What:  GET /search HTML rendering and its plain-text error answers.
"""

import pytest

from inventory_service.models.item import InventoryItem
from inventory_service.routes.search import render_item_page


class TestSearchRoute:

    @pytest.mark.asyncio
    async def test_search_after_update(self, register_item, test_client):
        """Scenario: register Drill, set description Cordless, search id=1."""
        await register_item("Drill")
        await test_client.put("/inventory/1", json={"description": "Cordless"})

        response = await test_client.get("/search", params={"id": "1"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Drill" in response.text
        assert "Cordless" in response.text
        assert "<img" not in response.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["id=abc", "id=", "", "id=1.5"])
    async def test_search_invalid_id(self, test_client, query):
        response = await test_client.get(f"/search?{query}")
        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Invalid id"

    @pytest.mark.asyncio
    async def test_search_unknown_item(self, test_client):
        response = await test_client.get("/search", params={"id": "999"})
        assert response.status_code == 404
        assert response.text == "Item not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["includePhoto=on", "includePhoto=", "includePhoto"])
    async def test_search_include_photo(self, register_item, test_client, sample_image_bytes, query):
        """includePhoto counts as present whatever its value."""
        await register_item("Drill", description="Cordless", photo=sample_image_bytes)

        response = await test_client.get(f"/search?id=1&{query}")

        assert response.status_code == 200
        assert 'Cordless<br>Photo link: <a href="/inventory/1/photo">/inventory/1/photo</a>' in response.text
        assert '<img src="/inventory/1/photo"' in response.text

    @pytest.mark.asyncio
    async def test_search_photo_not_requested(self, register_item, test_client, sample_image_bytes):
        await register_item("Drill", photo=sample_image_bytes)
        response = await test_client.get("/search", params={"id": "1"})
        assert "Photo link" not in response.text
        assert "<img" not in response.text

    @pytest.mark.asyncio
    async def test_search_include_photo_without_photo(self, register_item, test_client):
        await register_item("Drill")
        response = await test_client.get("/search", params={"id": "1", "includePhoto": "on"})
        assert response.status_code == 200
        assert "Photo link" not in response.text


class TestRenderItemPage:

    def test_photo_link_without_description_has_no_break(self):
        item = InventoryItem(id=2, name="Saw", photo_reference="abc")
        page = render_item_page(item, include_photo=True)
        assert '<br>Photo link: <a href="/inventory/2/photo">' in page
        assert '<br><br>Photo link' not in page

    def test_text_is_escaped(self):
        item = InventoryItem(id=1, name="<b>Drill</b>", description='5" & <script>')
        page = render_item_page(item, include_photo=False)
        assert "&lt;b&gt;Drill&lt;/b&gt;" in page
        assert "5&quot; &amp; &lt;script&gt;" in page
        assert "<script>" not in page

    def test_back_link(self):
        page = render_item_page(InventoryItem(id=1, name="Drill"), include_photo=False)
        assert 'href="/SearchForm.html"' in page
