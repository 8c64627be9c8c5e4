"""File reading, frontmatter extraction, and base item construction"""

import logging
import re
from pathlib import Path
from typing import Any, Optional

import yaml

from faqhub.core.models import RawDocument
from faqhub.core.status import normalize_status


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)', re.DOTALL)
_CRA_RE = re.compile(r'\bcra\b', re.IGNORECASE)
_WORD_START_RE = re.compile(r'\b\w')

GUIDANCE_TYPES = {'guidance'}
LIST_TYPES = {'list', 'lists'}


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def split_document(text: str) -> RawDocument:
    """Split raw text into frontmatter and trimmed body. Raises ValueError on bad YAML."""
    frontmatter, body = _strip_frontmatter(text)
    return RawDocument(frontmatter=frontmatter, body=body.strip())


def read_document(path: Path) -> Optional[RawDocument]:
    """Read and split a file; unreadable or malformed files are logged and yield None."""
    try:
        return split_document(path.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.warning("Error reading file %s: %s", path, e)
        return None


def slug_of(filename: str) -> str:
    """Strip the .md suffix from a filename."""
    return filename[:-3] if filename.endswith('.md') else filename


def normalize_terms(text: str) -> str:
    """Uppercase the standalone word 'cra' in any casing."""
    return _CRA_RE.sub('CRA', text)


def humanize(text: str) -> str:
    """'cra-reporting-duties' -> 'CRA Reporting Duties'."""
    return normalize_terms(_WORD_START_RE.sub(lambda m: m.group(0).upper(), text.replace('-', ' ')))


def compute_url(content_type: str, category: str, filename: str) -> str:
    """Route an item by content type; FAQ-style is the default."""
    slug = slug_of(filename)
    if content_type in GUIDANCE_TYPES:
        return f"/pending-guidance/{slug}/"
    if content_type in LIST_TYPES:
        return f"/lists/{slug}/"
    return f"/faq/{category}/{slug}/"


def parse_base(
    doc: Optional[RawDocument],
    filename: str,
    category: str,
    content_type: str,
    ) -> Optional[dict[str, Any]]:
    """Build the generic item: frontmatter flattened, core fields on top, status normalized.

    The body is stored with terminology normalized (see normalize_terms).

    Returns None for a missing document or empty frontmatter.
    """
    if doc is None or not doc.frontmatter:
        return None

    item = {
        **doc.frontmatter,
        'filename': filename,
        'category': category,
        'contentType': content_type,
        'rawMarkdown': normalize_terms(doc.body),
        'url': compute_url(content_type, category, filename),
    }
    return normalize_status(item)
