import json
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

from pydantic import Field

from core import pages
from core.client import ClientProvider
from core.errors import ValidationError
from tools._types import PageId, PageStatus

logger = logging.getLogger(__name__)


def _absolute(file_path: str, argument: str) -> Path:
    path = Path(file_path)
    if not path.is_absolute():
        raise ValidationError(f"{argument} must be an absolute path, got '{file_path}'.")
    return path


def get_tools(provider: ClientProvider) -> dict[str, Any]:
    async def download_page_to_file(
        pageId: PageId,
        filePath: Annotated[str, Field(description="The path to save the file to, have to be the absolute path.")],
        onlyElementorData: Annotated[
            bool, Field(description="Whether to only save the _elementor_data field to the file, defaults to false.")
        ] = False,
    ) -> str:
        path = _absolute(filePath, "filePath")
        page = await pages.get_page(provider.get_client(), pageId)
        if onlyElementorData:
            elementor_data = (page.get("meta") or {}).get("_elementor_data")
            if not isinstance(elementor_data, str) or not elementor_data:
                raise ValidationError(f"Page {pageId} has no _elementor_data to save.")
            # already JSON text; written verbatim so update_page_from_file can read it back
            text = elementor_data
        else:
            text = json.dumps(page, ensure_ascii=False, separators=(",", ":"))
        path.write_text(text, encoding="utf-8")
        logger.info("Saved page %s to %s (only_elementor_data=%s)", pageId, path, onlyElementorData)
        return "true"

    async def update_page_from_file(
        pageId: PageId,
        elementorFilePath: Annotated[
            str, Field(description="The absolute path to the file to update the Elementor data from.")
        ],
        title: Annotated[Optional[str], Field(description="The title for the page.")] = None,
        status: Annotated[Optional[PageStatus], Field(description="The status for the page (e.g., 'publish', 'draft').")] = None,
        contentFilePath: Annotated[
            Optional[str],
            Field(description="The absolute path to the file to update the WordPress content from, optional."),
        ] = None,
    ) -> str:
        elementor_path = _absolute(elementorFilePath, "elementorFilePath")
        try:
            elementor_data = pages.dump_json_text(pages.load_json_text(elementor_path.read_text(encoding="utf-8")))
        except ValueError as e:
            raise ValidationError(f"{elementor_path} does not contain valid JSON.") from e

        content = None
        if contentFilePath:
            content = _absolute(contentFilePath, "contentFilePath").read_text(encoding="utf-8")

        await pages.update_page(
            provider.get_client(),
            pageId,
            {
                "title": title,
                "status": status,
                "content": content,
                "elementor_data": elementor_data,
            },
        )
        return "true"

    return {
        "download_page_to_file": {
            "func": download_page_to_file,
            "title": "Download page to file",
            "description": "Downloads a specific page from WordPress by its ID, including meta fields like _elementor_data, and saves it to a file.",
        },
        "update_page_from_file": {
            "func": update_page_from_file,
            "title": "Update page from file",
            "description": "Updates an existing page in WordPress with Elementor data from a file, it will return a boolean value to indicate if the update was successful.",
        },
    }
