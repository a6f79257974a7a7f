"""
Relation resolver.

Turns a natural key (slug) into the identifier of an existing entry so a
relation field can point at it. Lookup failures are diagnostics, not
errors: the caller gets NO_VALUE and the row carries on without the link.
"""

from typing import Union
import structlog

from exceptions import ExternalServiceError
from models.mapping import NO_VALUE, NoValueType
from models.strapi import EntryId
from services.strapi_client import StrapiClient

logger = structlog.get_logger(__name__)


class RelationResolver:
    """
    Look up related entries by natural key.

    One filtered GET per call, no caching and no retries: an entry imported
    earlier in the same run is visible to every later lookup.
    """

    def __init__(self, client: StrapiClient, natural_key: str = "slug"):
        self.client = client
        self.natural_key = natural_key

    async def resolve(
        self,
        slug: str,
        related_content_type: str,
    ) -> Union[EntryId, NoValueType]:
        """
        Find the identifier of the entry whose natural key equals slug.

        Args:
            slug: Natural-key value from the source row
            related_content_type: Content type to search, e.g. "authors"

        Returns:
            id of the first entry the backend returns, or NO_VALUE when
            nothing matches or the lookup fails
        """
        if not slug:
            return NO_VALUE

        try:
            entries = await self.client.find(
                related_content_type,
                {self.natural_key: slug}
            )
        except ExternalServiceError as e:
            logger.error(
                "relation_lookup_failed",
                content_type=related_content_type,
                key=self.natural_key,
                value=slug,
                error=e.message,
                error_code=e.code
            )
            return NO_VALUE

        if not entries:
            logger.warning(
                "relation_not_found",
                content_type=related_content_type,
                key=self.natural_key,
                value=slug
            )
            return NO_VALUE

        if len(entries) > 1:
            logger.debug(
                "relation_multiple_matches",
                content_type=related_content_type,
                value=slug,
                matches=len(entries)
            )

        return entries[0].id
