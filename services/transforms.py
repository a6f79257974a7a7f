"""
Field transforms used by mapping tables.

Each transform takes (value, resolver) and returns the destination value
or NO_VALUE. The value is the raw cell: it may be None or "" and a
transform must handle that without raising.
"""

from typing import Any, Optional

from models.mapping import NO_VALUE, TransformFn


def strict_boolean(value: Optional[str], resolver: Any = None):
    """
    Exact "true" → True, anything else → False.

    Deliberately strict and not localized: "TRUE", "1", "yes" are all False.
    An empty or missing cell produces no value at all.
    """
    if value is None or value == "":
        return NO_VALUE

    return value == "true"


def relation_by_slug(related_content_type: str, connect: bool = True) -> TransformFn:
    """
    Build a transform that links a row to an existing entry by slug.

    Args:
        related_content_type: Content type holding the related entries
        connect: Wrap the id as {"connect": [id]} (Strapi relation syntax);
                 when False the bare id is returned

    Returns:
        Async transform for FieldDirective.transform()
    """

    async def _resolve_relation(value: Optional[str], resolver):
        if not value:
            return NO_VALUE

        entry_id = await resolver.resolve(value, related_content_type)
        if entry_id is NO_VALUE:
            return NO_VALUE

        return {"connect": [entry_id]} if connect else entry_id

    _resolve_relation.__name__ = f"relation_by_slug[{related_content_type}]"
    return _resolve_relation
