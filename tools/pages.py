import json
from typing import Annotated, Any, Optional

from pydantic import Field

from core import pages
from core.client import ClientProvider
from tools._types import PageId, PageStatus


def get_tools(provider: ClientProvider) -> dict[str, Any]:
    async def create_page(
        title: Annotated[str, Field(description="The title for the new page (required).")],
        elementor_data: Annotated[str, Field(description="The Elementor page data as a JSON string (required for create).")],
        status: Annotated[
            Optional[PageStatus],
            Field(description="The status for the page (e.g., 'publish', 'draft'). Defaults to 'draft' on create."),
        ] = None,
        content: Annotated[Optional[str], Field(description="The standard WordPress content for the page (optional).")] = None,
    ) -> str:
        new_page = await pages.create_page(
            provider.get_client(),
            {"title": title, "status": status, "content": content, "elementor_data": elementor_data},
        )
        return str(new_page["id"])

    async def get_page(pageId: PageId) -> str:
        page = await pages.get_page(provider.get_client(), pageId)
        return json.dumps(page, ensure_ascii=False, separators=(",", ":"))

    async def update_page(
        pageId: PageId,
        title: Annotated[Optional[str], Field(description="The title for the page.")] = None,
        status: Annotated[Optional[PageStatus], Field(description="The status for the page (e.g., 'publish', 'draft').")] = None,
        content: Annotated[Optional[str], Field(description="The standard WordPress content for the page (optional).")] = None,
        elementor_data: Annotated[
            Optional[str], Field(description="The Elementor page data as a JSON string. Optional for update.")
        ] = None,
    ) -> str:
        await pages.update_page(
            provider.get_client(),
            pageId,
            {"title": title, "status": status, "content": content, "elementor_data": elementor_data},
        )
        return "true"

    async def delete_page(
        pageId: PageId,
        force: Annotated[bool, Field(description="Whether to bypass the trash and force deletion. Defaults to false.")] = False,
    ) -> str:
        await pages.delete_page(provider.get_client(), pageId, force)
        return "true"

    async def get_page_id_by_slug(
        slug: Annotated[str, Field(description="The slug (URL-friendly name) of the page to find.")],
    ) -> str:
        page_id = await pages.get_page_id_by_slug(provider.get_client(), slug)
        return str(page_id)

    return {
        "create_page": {
            "func": create_page,
            "title": "Create page",
            "description": "Creates a new page in WordPress with Elementor data, it will return the created page ID.",
        },
        "get_page": {
            "func": get_page,
            "title": "Get page",
            "description": "Retrieves a specific page from WordPress by its ID, including meta fields like _elementor_data.",
        },
        "update_page": {
            "func": update_page,
            "title": "Update page",
            "description": "Updates an existing page in WordPress with Elementor data, it will return a boolean value to indicate if the update was successful.",
        },
        "delete_page": {
            "func": delete_page,
            "title": "Delete page",
            "description": "Deletes a specific page from WordPress, it will return a boolean value to indicate if the deletion was successful.",
        },
        "get_page_id_by_slug": {
            "func": get_page_id_by_slug,
            "title": "Get page ID by slug",
            "description": "Retrieves the ID of a specific WordPress page by its slug.",
        },
    }
