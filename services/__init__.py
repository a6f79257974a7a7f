"""
Import services.

Each service handles one step of the CSV → Strapi pipeline.
"""

from services.strapi_client import StrapiClient
from services.relation_resolver import RelationResolver
from services.field_mapper import FieldMapper
from services.transforms import strict_boolean, relation_by_slug
from services.import_service import ImportService

__all__ = [
    "StrapiClient",
    "RelationResolver",
    "FieldMapper",
    "strict_boolean",
    "relation_by_slug",
    "ImportService",
]
