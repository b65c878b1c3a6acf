"""Page operations against the WordPress REST API.

Each function takes the shared `WordPressClient` explicitly and issues exactly
one request. Payload validation happens before anything is sent.
"""
import json
import logging
from typing import Any, Optional

from core.client import WordPressClient
from core.errors import NotFoundError, ValidationError
from utils import get_endpoint  # type: ignore

logger = logging.getLogger(__name__)

PAGE_STATUSES = ("publish", "future", "draft", "pending", "private")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def load_json_text(text: str) -> Any:
    """json.loads that also refuses NaN, Infinity and -Infinity."""
    return json.loads(text, parse_constant=_reject_constant)


def dump_json_text(value: Any) -> str:
    """Compact JSON text; out-of-range floats raise ValueError."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


def validate_elementor_data(elementor_data: Any) -> str:
    """Check that Elementor data is a JSON string and return it untouched."""
    if not isinstance(elementor_data, str):
        raise ValidationError("elementor_data must be provided as a JSON string.")
    try:
        load_json_text(elementor_data)
    except ValueError as e:
        raise ValidationError("elementor_data is not valid JSON string.") from e
    return elementor_data


async def create_page(client: WordPressClient, page_data: dict[str, Any]) -> dict[str, Any]:
    """Create a page and return the created record, including its new id.

    `status` defaults to draft and `content` to an empty string.
    """
    payload = {
        "title": page_data.get("title"),
        "status": page_data.get("status") or "draft",
        "content": page_data.get("content") or "",
        "meta": {"_elementor_data": validate_elementor_data(page_data.get("elementor_data"))},
    }
    page = await client.post(get_endpoint("pages"), payload)
    logger.info("Created page %s", page.get("id") if isinstance(page, dict) else page)
    return page


async def get_page(client: WordPressClient, page_id: int) -> dict[str, Any]:
    # context=edit exposes protected meta such as _elementor_data
    return await client.get(get_endpoint("page", page_id=page_id), params={"context": "edit"})


async def update_page(client: WordPressClient, page_id: int, page_data: dict[str, Any]) -> dict[str, Any]:
    """Send only the fields that carry a value.

    Falsy values count as "not provided", so an empty `content` cannot be used to clear it.
    WordPress takes partial updates as a POST on the page route.
    """
    payload: dict[str, Any] = {}
    for field in ("title", "status", "content"):
        if page_data.get(field):
            payload[field] = page_data[field]

    elementor_data = page_data.get("elementor_data")
    if elementor_data:
        payload["meta"] = {"_elementor_data": validate_elementor_data(elementor_data)}

    if not payload:
        raise ValidationError("No update data provided (title, status, content, or elementor_data).")

    page = await client.post(get_endpoint("page", page_id=page_id), payload)
    logger.info("Updated page %s fields=%s", page_id, sorted(payload))
    return page


async def delete_page(client: WordPressClient, page_id: int, force: bool = True) -> Any:
    """Delete (force=True) or trash a page. Returns WordPress' reply as is."""
    result = await client.delete(
        get_endpoint("page", page_id=page_id),
        params={"force": "true" if force else "false"},
    )
    logger.info("Deleted page %s (force=%s)", page_id, force)
    return result


async def get_page_id_by_slug(client: WordPressClient, slug: str) -> int:
    pages: Optional[list] = await client.get(get_endpoint("pages"), params={"slug": slug, "_fields": "id"})
    if pages:
        return pages[0]["id"]
    raise NotFoundError(f"Page with slug '{slug}' not found.", payload=pages)
