"""Heading-based text extraction and markdown-to-plain-text rendering"""

import html
import re
from functools import lru_cache
from typing import Optional

from markdown_it import MarkdownIt


TITLE_RE = re.compile(r'^#[ \t]+(.+)$', re.MULTILINE)
ANY_HEADING_RE = re.compile(r'^#+\s')
GUIDANCE_NEEDED_RE = re.compile(r'^#+\s*guidance needed', re.IGNORECASE)
TAG_RE = re.compile(r'<[^>]*>')
WHITESPACE_RE = re.compile(r'\s+')


@lru_cache(maxsize=None)
def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False, "html": False})


def split_title(body: str) -> tuple[Optional[str], str]:
    """Return (first level-1 heading text, trimmed text after it).

    Without a heading the title is None and the whole body is returned.
    """
    m = TITLE_RE.search(body)
    if m is None:
        return None, body.strip()
    return m.group(1).strip(), body[m.end():].strip()


def render_plain_text(text: str, preset: str = "commonmark") -> str:
    """Render markdown to HTML, then drop tags and unescape entities."""
    rendered = _make_parser(preset).render(text)
    return html.unescape(TAG_RE.sub("", rendered)).strip()


def section_lines(body: str, heading_re: re.Pattern = GUIDANCE_NEEDED_RE) -> list[str]:
    """Non-blank trimmed lines between the matching heading and the next heading of any level."""
    lines: list[str] = []
    inside = False
    for raw in body.splitlines():
        line = raw.strip()
        if not inside:
            inside = bool(heading_re.match(line))
            continue
        if ANY_HEADING_RE.match(line):
            break
        if line:
            lines.append(line)
    return lines


def extract_guidance_summary(body: str, preset: str = "commonmark") -> str:
    """Plain-text summary of the "Guidance Needed" section; '' when absent."""
    if not body:
        return ""
    raw = WHITESPACE_RE.sub(" ", " ".join(section_lines(body))).strip()
    if not raw:
        return ""
    return render_plain_text(raw, preset)
