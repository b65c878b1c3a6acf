"""Tests for the page operations: request shapes, validation and slug lookup."""

import json

import httpx
import pytest

from core import pages
from core.client import ClientProvider
from core.errors import NotFoundError, NotInitializedError, RemoteApiError, ValidationError

ELEMENTOR = '[{"id":"a1","elType":"section","elements":[]}]'


class TestValidateElementorData:
    @pytest.mark.parametrize("value", ['{"x":1}', "[]", '"text"', "3"])
    def test_valid_json_text_is_returned_unchanged(self, value) -> None:
        assert pages.validate_elementor_data(value) is value

    @pytest.mark.parametrize("value", ["{x:1}", "[", "", "undefined", "NaN", '{"a": Infinity}', "[-Infinity]"])
    def test_invalid_json_text(self, value) -> None:
        with pytest.raises(ValidationError, match="not valid JSON"):
            pages.validate_elementor_data(value)

    @pytest.mark.parametrize("value", [None, {"x": 1}, [1, 2]])
    def test_non_string(self, value) -> None:
        with pytest.raises(ValidationError, match="JSON string"):
            pages.validate_elementor_data(value)


class TestCreatePage:
    @pytest.mark.asyncio
    async def test_defaults_and_payload(self, client, wordpress) -> None:
        wordpress.reply(201, json={"id": 17, "status": "draft"})
        page = await pages.create_page(client, {"title": "T", "elementor_data": '{"x":1}'})

        assert page["id"] == 17
        assert wordpress.last.method == "POST"
        assert wordpress.last.url.path == "/wp-json/wp/v2/pages"
        assert wordpress.last_json() == {
            "title": "T",
            "status": "draft",
            "content": "",
            "meta": {"_elementor_data": '{"x":1}'},
        }

    @pytest.mark.asyncio
    async def test_explicit_fields(self, client, wordpress) -> None:
        await pages.create_page(
            client, {"title": "T", "status": "publish", "content": "<p>hi</p>", "elementor_data": ELEMENTOR}
        )
        body = wordpress.last_json()
        assert body["status"] == "publish"
        assert body["content"] == "<p>hi</p>"
        assert body["meta"]["_elementor_data"] == ELEMENTOR

    @pytest.mark.asyncio
    @pytest.mark.parametrize("elementor_data", [None, "not json", {"x": 1}, '{"x": NaN}'])
    async def test_invalid_elementor_data_sends_nothing(self, client, wordpress, elementor_data) -> None:
        with pytest.raises(ValidationError):
            await pages.create_page(client, {"title": "T", "elementor_data": elementor_data})
        assert wordpress.requests == []

    @pytest.mark.asyncio
    async def test_elementor_data_round_trip(self, client, wordpress) -> None:
        stored = {}

        def respond(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                body = json.loads(request.content)
                stored.update(id=99, title={"raw": body["title"]}, meta=body["meta"])
                return httpx.Response(201, json=stored)
            return httpx.Response(200, json=stored)

        wordpress.responder = respond
        document = '{"widgets": [ {"type": "heading", "text": "Caf\\u00e9"} ]}'
        created = await pages.create_page(client, {"title": "T", "elementor_data": document})
        fetched = await pages.get_page(client, created["id"])

        assert fetched["meta"]["_elementor_data"] == document


class TestGetPage:
    @pytest.mark.asyncio
    async def test_requests_edit_context(self, client, wordpress) -> None:
        record = {"id": 5, "meta": {"_elementor_data": "[]"}, "link": "https://example.com/five/"}
        wordpress.reply(200, json=record)

        assert await pages.get_page(client, 5) == record
        assert wordpress.last.method == "GET"
        assert wordpress.last.url.path == "/wp-json/wp/v2/pages/5"
        assert wordpress.last.url.params["context"] == "edit"

    @pytest.mark.asyncio
    async def test_missing_page_surfaces_api_message(self, client, wordpress) -> None:
        wordpress.reply(404, json={"code": "rest_post_invalid_id", "message": "Invalid post ID."})
        with pytest.raises(RemoteApiError, match="Invalid post ID."):
            await pages.get_page(client, 404)

    @pytest.mark.asyncio
    async def test_uninitialized_provider(self) -> None:
        with pytest.raises(NotInitializedError):
            await pages.get_page(ClientProvider().get_client(), 1)


class TestUpdatePage:
    @pytest.mark.asyncio
    async def test_sparse_payload(self, client, wordpress) -> None:
        await pages.update_page(client, 8, {"title": "New", "status": None, "content": None, "elementor_data": None})
        assert wordpress.last.method == "POST"
        assert wordpress.last.url.path == "/wp-json/wp/v2/pages/8"
        assert wordpress.last_json() == {"title": "New"}

    @pytest.mark.asyncio
    async def test_elementor_data_nested_under_meta(self, client, wordpress) -> None:
        await pages.update_page(client, 8, {"elementor_data": ELEMENTOR, "status": "private"})
        assert wordpress.last_json() == {"status": "private", "meta": {"_elementor_data": ELEMENTOR}}

    @pytest.mark.asyncio
    async def test_empty_content_counts_as_not_provided(self, client, wordpress) -> None:
        await pages.update_page(client, 8, {"title": "T", "content": ""})
        assert "content" not in wordpress.last_json()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fields", [{}, {"title": None, "status": None}, {"content": "", "elementor_data": ""}])
    async def test_nothing_to_update(self, client, wordpress, fields) -> None:
        with pytest.raises(ValidationError, match="No update data"):
            await pages.update_page(client, 8, fields)
        assert wordpress.requests == []

    @pytest.mark.asyncio
    async def test_invalid_elementor_data_sends_nothing(self, client, wordpress) -> None:
        with pytest.raises(ValidationError):
            await pages.update_page(client, 8, {"title": "T", "elementor_data": "{broken"})
        assert wordpress.requests == []


class TestDeletePage:
    @pytest.mark.asyncio
    async def test_force_defaults_to_true(self, client, wordpress) -> None:
        wordpress.reply(200, json={"deleted": True, "previous": {"id": 3}})
        result = await pages.delete_page(client, 3)

        assert result == {"deleted": True, "previous": {"id": 3}}
        assert wordpress.last.method == "DELETE"
        assert wordpress.last.url.path == "/wp-json/wp/v2/pages/3"
        assert wordpress.last.url.params["force"] == "true"

    @pytest.mark.asyncio
    async def test_trash(self, client, wordpress) -> None:
        await pages.delete_page(client, 3, force=False)
        assert wordpress.last.url.params["force"] == "false"


class TestGetPageIdBySlug:
    @pytest.mark.asyncio
    async def test_first_match_wins(self, client, wordpress) -> None:
        wordpress.reply(200, json=[{"id": 12}, {"id": 30}])

        assert await pages.get_page_id_by_slug(client, "about-us") == 12
        assert wordpress.last.url.path == "/wp-json/wp/v2/pages"
        assert wordpress.last.url.params["slug"] == "about-us"
        assert wordpress.last.url.params["_fields"] == "id"

    @pytest.mark.asyncio
    async def test_no_match(self, client, wordpress) -> None:
        wordpress.reply(200, json=[])
        with pytest.raises(NotFoundError, match="Page with slug 'ghost' not found."):
            await pages.get_page_id_by_slug(client, "ghost")
