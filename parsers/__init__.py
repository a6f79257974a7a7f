"""
Source file parsers.
"""

from parsers.csv_parser import read_rows

__all__ = [
    "read_rows",
]
