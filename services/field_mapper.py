"""
Field mapper.

Builds the create payload for one CSV row from a ContentTypeMapping.
This is the only place that decides what goes into a payload; the mapper
never calls the backend itself, only through transforms it is handed.
"""

import inspect
from typing import Optional
import structlog

from models.mapping import (
    NO_VALUE,
    ContentTypeMapping,
    DirectiveKind,
    FieldDirective,
    MappingResult,
    Row,
)

logger = structlog.get_logger(__name__)


class FieldMapper:
    """
    Row → payload mapper.

    The relation resolver is injected and passed to every transform, so
    tests can hand in a fake without touching HTTP.
    """

    def __init__(self, resolver=None):
        self.resolver = resolver

    async def map(self, row: Row, mapping: ContentTypeMapping) -> MappingResult:
        """
        Map one row.

        Walks the mapping in declaration order:
        - SKIP columns never produce a key
        - RENAME copies non-empty cells verbatim; empty or absent cells
          are left out
        - TRANSFORM always runs (even on empty cells) and its result is
          kept unless it is NO_VALUE

        A transform that raises costs only its own field: the error is
        logged, recorded in result.warnings, and mapping continues.

        Args:
            row: Parsed CSV row (column → string)
            mapping: Mapping table for the row's file

        Returns:
            MappingResult with the payload and field warnings
        """
        result = MappingResult()

        for column, directive in mapping.fields.items():
            value = row.get(column)

            if directive.kind is DirectiveKind.SKIP:
                continue

            elif directive.kind is DirectiveKind.RENAME:
                if value is None or value == "":
                    continue
                result.payload[directive.target] = value

            elif directive.kind is DirectiveKind.TRANSFORM:
                mapped = await self._apply_transform(
                    column, directive, value, mapping, result
                )
                if mapped is not NO_VALUE:
                    result.payload[directive.target] = mapped

            else:
                raise ValueError(f"Unknown directive kind: {directive.kind!r}")

        return result

    async def _apply_transform(
        self,
        column: str,
        directive: FieldDirective,
        value: Optional[str],
        mapping: ContentTypeMapping,
        result: MappingResult,
    ):
        try:
            mapped = directive.transform_fn(value, self.resolver)
            if inspect.isawaitable(mapped):
                mapped = await mapped
            return mapped
        except Exception as e:
            logger.warning(
                "field_transform_failed",
                content_type=mapping.content_type,
                column=column,
                field=directive.target,
                error=str(e),
                error_type=type(e).__name__
            )
            result.warnings.append({
                "column": column,
                "field": directive.target,
                "error": str(e),
            })
            return NO_VALUE
