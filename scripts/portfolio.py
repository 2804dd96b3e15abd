"""
Portfolio content schema.

Entries are Markdown files with a YAML front matter block:

    ---
    title: Fox in the wind
    category: Wildlife
    imageSlug: fox-in-wind
    ---
    Optional body text.
"""

import datetime
from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from utils import ContentError

Category = Literal["Wildlife", "Ski Mountaineering", "Climbing", "Landscapes", "Adventure"]

FRONT_MATTER_DELIMITER = "---"


class PortfolioEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    category: Category
    location: Optional[str] = None
    date: Optional[str] = None

    imageSlug: str  # folder name on the CDN, e.g. "fox-in-wind"
    coverAlt: str = "Photograph"
    featured: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def _date_as_text(cls, value):
        # YAML turns unquoted 2024-05-01 into a date object
        if isinstance(value, (datetime.date, datetime.datetime)):
            return value.isoformat()
        return value


class PortfolioDocument(BaseModel):
    """A validated entry plus the Markdown body that followed its front matter."""

    entry: PortfolioEntry
    body: str = ""
    source: Optional[Path] = None


def split_front_matter(text: str):
    """Return (front matter text, body); raises ValueError if the block is missing."""
    lines = text.splitlines()
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        raise ValueError("missing front matter")
    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            return "\n".join(lines[1:index]), "\n".join(lines[index + 1:]).strip()
    raise ValueError("unterminated front matter")


def parse_entry_file(path: Path) -> PortfolioDocument:
    """Read and validate a single content file."""
    try:
        front_matter, body = split_front_matter(path.read_text(encoding="utf-8"))
        data = yaml.safe_load(front_matter) or {}
        if not isinstance(data, dict):
            raise ValueError("front matter must be a mapping")
        entry = PortfolioEntry.model_validate(data)
    except (ValueError, yaml.YAMLError) as exc:
        # pydantic's ValidationError is a ValueError
        raise ContentError(f"Invalid portfolio entry {path.name}: {exc}") from exc
    return PortfolioDocument(entry=entry, body=body, source=path)


def load_entries(content_dir: Path) -> List[PortfolioDocument]:
    """Load every entry under content_dir, featured first, then by title."""
    if not content_dir.exists():
        return []
    documents = [parse_entry_file(path) for path in sorted(content_dir.glob("*.md"))]
    return sorted(documents, key=lambda doc: (not doc.entry.featured, doc.entry.title))

