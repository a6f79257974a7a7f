"""
Data models for mapping, backend envelopes, and import results.
"""

from models.base import BaseSchema
from models.mapping import (
    NO_VALUE,
    DirectiveKind,
    FieldDirective,
    ContentTypeMapping,
    MappingResult,
    Payload,
    Row,
)
from models.strapi import (
    StrapiEntry,
    StrapiListResponse,
    StrapiErrorResponse,
)
from models.import_summary import (
    FileStatus,
    RowFailure,
    ImportSummary,
    RunReport,
)

__all__ = [
    "BaseSchema",
    "NO_VALUE",
    "DirectiveKind",
    "FieldDirective",
    "ContentTypeMapping",
    "MappingResult",
    "Payload",
    "Row",
    "StrapiEntry",
    "StrapiListResponse",
    "StrapiErrorResponse",
    "FileStatus",
    "RowFailure",
    "ImportSummary",
    "RunReport",
]
