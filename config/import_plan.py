"""
Import plan: which CSV feeds which content type, and how.

ORDER MATTERS. Files are imported top to bottom, and a file may only look
up relations in content types imported above it (Blog → Authors).

Column keys are the CSV headers exactly as exported, including the
"Categry" typo in Blog.csv.

Media columns (Image, Headshot, Logo, Thumbnail) are skipped: Strapi media
fields only accept uploaded file ids. Columns that hold plain URL strings
(Logo URL, Cover Image URL, ...) are copied as text.
"""

from typing import Iterable, Optional

from models.mapping import ContentTypeMapping, rename, skip, transform
from services.transforms import relation_by_slug, strict_boolean


AUTHORS = ContentTypeMapping(
    file_name="Authors.csv",
    content_type="authors",
    fields={
        "Slug": rename("slug"),
        "Title": rename("title"),
        "Image": skip(),
        "Content": rename("content"),
    },
)

EVCA_TEAM = ContentTypeMapping(
    file_name="EVCA Team.csv",
    content_type="evca-teams",
    fields={
        "Slug": rename("slug"),
        "Name": rename("name"),
        "Headshot": skip(),
        "Chapter": rename("chapter"),
        "X": rename("x"),
        "LinkedIn": rename("linkedin"),
        "Firm URL": rename("firm_url"),
        "Logo URL": rename("logo_url"),
        "Logo": skip(),
        "Type": rename("type"),
        "Firm": rename("firm"),
        "Bio": rename("bio"),
    },
)

CHAPTER_IMAGES = ContentTypeMapping(
    file_name="Chapter Images.csv",
    content_type="chapter-images",
    fields={
        "Slug": rename("slug"),
        "Title": rename("title"),
        "Image": skip(),
        "Type": rename("type"),
        "Content": rename("content"),
    },
)

THESIS_BRIEFS = ContentTypeMapping(
    file_name="Thesis Briefs.csv",
    content_type="thesis-briefs",
    fields={
        "Slug": rename("slug"),
        "Title": rename("title"),
        "Cover Image URL": rename("cover_image_url"),
        "Investor headshot URL": rename("investor_headshot_url"),
        "Publish Date": rename("publish_date"),
        "Type": rename("type"),
        "Investor Name": rename("investor_name"),
        "Firm": rename("firm"),
        "Host URL": rename("host_url"),
        "Featured #": rename("featured"),
        "Content": rename("content"),
    },
)

BLOG = ContentTypeMapping(
    file_name="Blog.csv",
    content_type="blogs",
    fields={
        "Slug": rename("slug"),
        "Title": rename("title"),
        "Date": rename("date"),
        "Categry": rename("category"),  # sic, matches the export header
        "Tag": rename("tag"),
        "Thumbnail": skip(),
        "Featured": transform("featured", strict_boolean),
        "Author": transform("author", relation_by_slug("authors")),
        "Blurb": rename("blurb"),
        "Content": rename("content"),
    },
)

# Dependency order: authors before blogs
IMPORT_PLAN: tuple[ContentTypeMapping, ...] = (
    AUTHORS,
    EVCA_TEAM,
    CHAPTER_IMAGES,
    THESIS_BRIEFS,
    BLOG,
)


def get_mapping(file_name: str) -> Optional[ContentTypeMapping]:
    """Find the mapping configured for a file name, or None."""
    for mapping in IMPORT_PLAN:
        if mapping.file_name == file_name:
            return mapping
    return None


def select_plan(
    file_names: Iterable[str],
    plan: tuple[ContentTypeMapping, ...] = IMPORT_PLAN,
) -> tuple[ContentTypeMapping, ...]:
    """
    Subset of the plan for the given file names, in plan order.

    Raises:
        ValueError: If a name has no mapping
    """
    wanted = set(file_names)
    known = {m.file_name for m in plan}
    unknown = sorted(wanted - known)
    if unknown:
        raise ValueError(f"No import configuration for: {', '.join(unknown)}")

    return tuple(m for m in plan if m.file_name in wanted)
