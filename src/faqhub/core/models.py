"""Intermediate data models for the discovery, parse and validation phases"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, NamedTuple, Optional


class Status(str, Enum):
    """Normalized publication status of a content item"""
    draft = "draft"
    pending_guidance = "pending-guidance"
    approved = "approved"


@dataclass(frozen=True)
class ContentFile:
    """A discovered source file; consumed immediately by the reader."""
    full_path:    Path
    filename:     str
    category:     str          # immediate parent directory, or ROOT_CATEGORY
    content_type: str


@dataclass(frozen=True)
class RawDocument:
    """Front-matter mapping plus trimmed body text."""
    frontmatter: dict[str, Any]
    body:        str


@dataclass
class InvalidItem:
    item:   dict[str, Any]
    errors: list[dict[str, Any]]
    index:  int


@dataclass
class ValidationOutcome:
    valid_items:   list[dict[str, Any]] = field(default_factory=list)
    invalid_items: list[InvalidItem] = field(default_factory=list)


class PostProcessResult(NamedTuple):
    """Own items of a post-processed type plus field patches for sibling types.

    patches maps target type -> item key -> fields to merge into that item;
    None means no patches.
    """
    items:   list[dict[str, Any]]
    patches: Optional[dict[str, dict[str, dict[str, Any]]]] = None
