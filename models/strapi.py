"""
Strapi REST envelope models.

List endpoints answer with:
    {"data": [{"id": 1, ...}, ...], "meta": {"pagination": {...}}}
Errors answer with:
    {"data": null, "error": {"status": 400, "name": "...", "message": "..."}}
"""

from typing import Any, Optional, Union

from pydantic import Field, ValidationError

from models.base import BaseSchema

EntryId = Union[int, str]


class StrapiEntry(BaseSchema):
    """One entry as returned by the REST API; content fields are kept as extras."""
    id: EntryId
    document_id: Optional[str] = Field(None, alias="documentId")


class StrapiPagination(BaseSchema):
    page: int = 1
    page_size: int = Field(25, alias="pageSize")
    page_count: int = Field(0, alias="pageCount")
    total: int = 0


class StrapiMeta(BaseSchema):
    pagination: Optional[StrapiPagination] = None


class StrapiListResponse(BaseSchema):
    """Envelope of GET /api/{content-type}."""
    data: list[StrapiEntry] = Field(default_factory=list)
    meta: StrapiMeta = Field(default_factory=StrapiMeta)


class StrapiErrorDetail(BaseSchema):
    status: Optional[int] = None
    name: Optional[str] = None
    message: Optional[str] = None
    details: Any = None


class StrapiErrorResponse(BaseSchema):
    """Envelope returned with a non-2xx status."""
    error: StrapiErrorDetail

    @classmethod
    def from_body(cls, body: Any) -> Optional["StrapiErrorResponse"]:
        """Parse a rejection body; None when it is not an error envelope."""
        try:
            return cls.model_validate(body)
        except ValidationError:
            return None
