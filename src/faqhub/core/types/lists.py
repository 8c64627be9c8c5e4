"""Curated list enhancer and list -> FAQ reference resolution"""

from typing import Any

from faqhub.core.extract.markdown import split_title
from faqhub.core.models import PostProcessResult
from faqhub.core.parse import humanize, slug_of
from faqhub.core.types.faq import faq_key


DEFAULT_ORDER = 999


def _order(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_ORDER


def enhance_list(item: dict[str, Any]) -> dict[str, Any]:
    """Add title, description, order, and the `category/slug` faqs reference array."""
    heading, description = split_title(item["rawMarkdown"])
    faqs = item.get("faqs") or []
    return {
        **item,
        "title": heading or item.get("title") or humanize(slug_of(item["filename"])),
        "description": description,
        "order": _order(item.get("order")),
        "faqs": [str(ref) for ref in faqs] if isinstance(faqs, list) else faqs,
        "items": [],
    }


def resolve_items(refs: list[str], faq_index: dict[str, dict[str, Any]]) -> list[dict[str, Any]]:
    """Map refs to {question, url} in declared order; unknown refs are skipped."""
    items = []
    for ref in refs:
        faq = faq_index.get(ref)
        if faq is not None:
            items.append({"question": faq.get("question"), "url": faq["url"]})
    return items


def post_process_list(
    lists: list[dict[str, Any]],
    snapshot: dict[str, list[dict[str, Any]]],
    faq_type: str = "faq",
    ) -> PostProcessResult:
    faq_index = {faq_key(faq): faq for faq in snapshot.get(faq_type, [])}
    resolved = []
    for item in lists:
        refs = item.get("faqs") if isinstance(item.get("faqs"), list) else []
        items = resolve_items(refs, faq_index)
        resolved.append({**item, "items": items, "count": len(items)})
    return PostProcessResult(items=resolved, patches={})
