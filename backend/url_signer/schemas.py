from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class SignUrlsRequest(BaseModel):
    file_list: bool = Field(default=False, alias="fileList")
    file_url: Optional[str] = None
    file_urls: Optional[List[str]] = None
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "fileList": True,
                "file_urls": [
                    "//cdn.bubble.io/f1700000000000x1/report.pdf",
                    "https://files.acme.com/download/42",
                ],
            }
        },
    )


class SignedUrlsResponse(BaseModel):
    signed_urls: List[str]


class ActionErrorResponse(BaseModel):
    returned_error: Literal[True] = True
    error_message: str
