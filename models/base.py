"""
Base schema for backend response models.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all response schemas.

    Features:
        - Keep unknown keys (Strapi entries carry arbitrary content fields)
        - Allow construction from attribute objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        extra="allow",
    )
