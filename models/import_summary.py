"""
Import result models.

One ImportSummary per source file, collected into a RunReport. Only the
import driver touches these; the field mapper never does.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class FileStatus(str, Enum):
    """Outcome of one file in the run."""
    PENDING = "pending"
    IMPORTED = "imported"
    MISSING = "missing"
    EMPTY = "empty"
    UNREADABLE = "unreadable"


@dataclass
class RowFailure:
    """Single row whose create request did not succeed."""
    row: int
    reason: str
    status_code: Optional[int] = None
    response_body: Any = None


@dataclass
class ImportSummary:
    """Attempted/succeeded tally for one file."""
    file_name: str
    content_type: str
    status: FileStatus = FileStatus.PENDING
    attempted: int = 0
    succeeded: int = 0
    field_warnings: int = 0
    failures: list[RowFailure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded

    def record_success(self):
        self.attempted += 1
        self.succeeded += 1

    def record_failure(
        self,
        row: int,
        reason: str,
        status_code: Optional[int] = None,
        response_body: Any = None,
    ):
        self.attempted += 1
        self.failures.append(RowFailure(
            row=row,
            reason=reason,
            status_code=status_code,
            response_body=response_body,
        ))

    def to_dict(self) -> dict:
        return {
            "file_name": self.file_name,
            "content_type": self.content_type,
            "status": self.status.value,
            "attempted": self.attempted,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "field_warnings": self.field_warnings,
            "failures": [
                {
                    "row": f.row,
                    "reason": f.reason,
                    "status_code": f.status_code,
                }
                for f in self.failures
            ],
        }


@dataclass
class RunReport:
    """Summaries for every planned file, in plan order."""
    summaries: list[ImportSummary] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return sum(s.attempted for s in self.summaries)

    @property
    def succeeded(self) -> int:
        return sum(s.succeeded for s in self.summaries)

    @property
    def files_imported(self) -> int:
        return sum(1 for s in self.summaries if s.status is FileStatus.IMPORTED)

    def get(self, file_name: str) -> Optional[ImportSummary]:
        for summary in self.summaries:
            if summary.file_name == file_name:
                return summary
        return None

    def to_dict(self) -> dict:
        return {
            "attempted": self.attempted,
            "succeeded": self.succeeded,
            "files": [s.to_dict() for s in self.summaries],
        }
