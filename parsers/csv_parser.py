"""
CSV row parser.

Reads one exported CSV file eagerly and returns its rows as plain dicts
of column name to string. No type inference: every cell stays a string
and empty cells stay "" (never NaN), so the field mapper can tell an
empty cell from a missing column.
"""

import warnings
from io import BytesIO
from pathlib import Path
from typing import Union

import pandas as pd
import structlog

from exceptions import CSVParseError
from utils.text_utils import clean_cell, clean_header

logger = structlog.get_logger(__name__)

CSVSource = Union[str, Path, bytes, BytesIO]


def read_rows(source: CSVSource) -> list[dict[str, str]]:
    """
    Parse a CSV file with a header row.

    - UTF-8, with or without BOM
    - Headers and cells whitespace-trimmed
    - Blank lines skipped
    - Quoted multi-line cells kept intact
    - The first column is never used as a row index; a trailing
      delimiter on data lines is dropped, any other extra field fails
      the file

    Args:
        source: File path or raw file content

    Returns:
        Rows in file order; [] if the file is empty or header-only

    Raises:
        CSVParseError: If the file cannot be read or is not valid CSV
    """
    source_name = str(source) if isinstance(source, (str, Path)) else type(source).__name__
    logger.debug("parsing_csv", source=source_name)

    if isinstance(source, bytes):
        source = BytesIO(source)

    try:
        # Extra non-empty fields would be dropped silently, so reject them
        with warnings.catch_warnings():
            warnings.simplefilter("error", pd.errors.ParserWarning)
            df = pd.read_csv(
                source,
                dtype=str,
                na_filter=False,
                skip_blank_lines=True,
                encoding="utf-8-sig",
                index_col=False,
            )
    except pd.errors.EmptyDataError:
        logger.debug("csv_empty", source=source_name)
        return []
    except (
        pd.errors.ParserError,
        pd.errors.ParserWarning,
        UnicodeDecodeError,
        OSError,
    ) as e:
        logger.error("csv_read_failed", source=source_name, error=str(e))
        raise CSVParseError(
            message=f"Failed to read CSV file {source_name}",
            details={"original_error": str(e)}
        )

    df.columns = [clean_header(col) for col in df.columns]
    for col in df.columns:
        df[col] = df[col].map(clean_cell)

    rows = df.to_dict(orient="records")

    logger.debug(
        "csv_parsed",
        source=source_name,
        rows=len(rows),
        columns=list(df.columns)
    )

    return rows
