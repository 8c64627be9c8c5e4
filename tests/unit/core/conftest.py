"""Shared fixtures for core unit tests"""

import pytest

from faqhub.core.models import RawDocument
from faqhub.core.parse import parse_base


SAMPLE_GUIDANCE_BODY = """\
# Legal person definition

## Background
Some background info.

## Guidance Needed
Clarify **SME** definition.

## Why this matters
This explains why.
"""


def _make_item(content_type: str, filename: str, body: str, category: str = "scope", **frontmatter) -> dict:
    """Base-parse an in-memory document; frontmatter defaults to a status field."""
    fm = frontmatter or {"status": "approved"}
    return parse_base(RawDocument(frontmatter=fm, body=body), filename, category, content_type)


@pytest.fixture(name="make_item")
def make_item_fixture():
    return _make_item


@pytest.fixture(name="faq_item")
def faq_item_fixture():
    return _make_item("faq", "is-x-covered.md", "# Is X covered?\n\nYes, under Article 10.", Status="⚠️ Draft")


@pytest.fixture(name="guidance_item")
def guidance_item_fixture():
    return _make_item("guidance", "legal-person.md", SAMPLE_GUIDANCE_BODY, category="pending-guidance", type="guidance-request")
