"""
Field-mapping models.

A ContentTypeMapping says, for one CSV file, which destination field each
source column feeds. Every column carries a FieldDirective:

    RENAME     copy the cell verbatim into a destination field
    SKIP       never contributes to the payload (media, manual fields)
    TRANSFORM  run a function over the raw cell; it may return NO_VALUE
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional, Union


class _NoValue:
    """Sentinel type for 'this field contributes nothing'."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_VALUE"

    def __reduce__(self):
        return (_NoValue, ())


NO_VALUE = _NoValue()
NoValueType = _NoValue


# A transform receives the raw cell (possibly None or "") and the relation
# resolver, and returns a value, NO_VALUE, or an awaitable of either.
TransformFn = Callable[[Optional[str], Any], Union[Any, Awaitable[Any]]]

Row = Mapping[str, str]
Payload = dict[str, Any]


class DirectiveKind(str, Enum):
    """What a mapping entry does with its column."""
    RENAME = "rename"
    SKIP = "skip"
    TRANSFORM = "transform"


@dataclass(frozen=True)
class FieldDirective:
    """
    One entry of a mapping table.

    Build with the rename()/skip()/transform() constructors rather than
    directly, so the kind and its payload always agree.
    """
    kind: DirectiveKind
    target: Optional[str] = None
    transform_fn: Optional[TransformFn] = None

    def __post_init__(self):
        if self.kind is DirectiveKind.SKIP:
            if self.target is not None or self.transform_fn is not None:
                raise ValueError("skip directive takes no target or transform")
        elif not self.target:
            raise ValueError(f"{self.kind.value} directive requires a target field")
        if self.kind is DirectiveKind.TRANSFORM and self.transform_fn is None:
            raise ValueError("transform directive requires a function")
        if self.kind is DirectiveKind.RENAME and self.transform_fn is not None:
            raise ValueError("rename directive takes no function")

    @classmethod
    def rename(cls, target: str) -> "FieldDirective":
        return cls(DirectiveKind.RENAME, target=target)

    @classmethod
    def skip(cls) -> "FieldDirective":
        return cls(DirectiveKind.SKIP)

    @classmethod
    def transform(cls, target: str, fn: TransformFn) -> "FieldDirective":
        return cls(DirectiveKind.TRANSFORM, target=target, transform_fn=fn)


# Short aliases so mapping tables read like tables.
rename = FieldDirective.rename
skip = FieldDirective.skip
transform = FieldDirective.transform


@dataclass(frozen=True)
class ContentTypeMapping:
    """
    Mapping table for one source file.

    Column keys are matched exactly against the CSV header, typos included.
    Declaration order is preserved and is the order the mapper walks.
    """
    file_name: str
    content_type: str
    fields: Mapping[str, FieldDirective]

    def __post_init__(self):
        targets = [
            d.target for d in self.fields.values()
            if d.kind is not DirectiveKind.SKIP
        ]
        duplicates = sorted({t for t in targets if targets.count(t) > 1})
        if duplicates:
            raise ValueError(
                f"{self.file_name}: destination fields mapped more than once: "
                f"{', '.join(duplicates)}"
            )
        # Read-only view; the plan is configuration, not runtime state
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def skipped_columns(self) -> list[str]:
        return [c for c, d in self.fields.items() if d.kind is DirectiveKind.SKIP]


@dataclass
class MappingResult:
    """Payload for one row plus any field-level warnings raised building it."""
    payload: Payload = field(default_factory=dict)
    warnings: list[dict] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0
