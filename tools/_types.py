from typing import Annotated, Literal

from pydantic import Field

PageId = Annotated[int, Field(gt=0, description="The ID of the page.")]
PageStatus = Literal["publish", "future", "draft", "pending", "private"]
