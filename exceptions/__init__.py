"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,
    ExternalServiceError,

    # Run level
    ImportDirectoryNotFoundError,

    # File level
    CSVParseError,

    # Strapi
    StrapiRequestError,
    StrapiTransportError,
    StrapiResponseError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",
    "ExternalServiceError",

    # Run level
    "ImportDirectoryNotFoundError",

    # File level
    "CSVParseError",

    # Strapi
    "StrapiRequestError",
    "StrapiTransportError",
    "StrapiResponseError",
]
