"""FAQ enhancer and FAQ <-> guidance cross-referencing"""

import unicodedata
from typing import Any, Iterable, Optional

from faqhub.core.extract.markdown import split_title
from faqhub.core.models import PostProcessResult, Status
from faqhub.core.parse import humanize, slug_of
from faqhub.core.status import guidance_reference


GUIDANCE_REQUEST_TYPE = "guidance-request"
RELATED_GUIDANCE_FIELDS = ("filename", "title", "url", "summary")

STATUS_DISPLAY: dict[str, dict[str, str]] = {
    Status.draft.value:            {"emoji": "⚠️", "label": "Draft",            "cssClass": "status-draft"},
    Status.pending_guidance.value: {"emoji": "🛑", "label": "Pending Guidance", "cssClass": "status-pending-guidance"},
    Status.approved.value:         {"emoji": "✅", "label": "Approved",         "cssClass": "status-approved"},
}


def faq_key(item: dict[str, Any]) -> str:
    """'category/slug' lookup key shared by the FAQ index and list references."""
    return f"{item['category']}/{slug_of(item['filename'])}"


def guidance_key(item: dict[str, Any]) -> Optional[str]:
    """Slug of the guidance item an FAQ depends on, if it names one."""
    return guidance_reference(item)


def is_faq_document(item: dict[str, Any]) -> bool:
    """Guidance requests share the FAQ tree upstream but are not FAQs."""
    return item.get("type") != GUIDANCE_REQUEST_TYPE


def enhance_faq(item: dict[str, Any]) -> dict[str, Any]:
    """Add `question` and, only when non-empty, `answer`."""
    question, answer = split_title(item["rawMarkdown"])
    enhanced = {**item, "question": question}
    if answer:
        enhanced["answer"] = answer
    else:
        enhanced.pop("answer", None)
    return enhanced


def _collation_key(text: Optional[str]) -> tuple[str, str]:
    """Case- and accent-insensitive ordering, ties broken by the raw text."""
    text = text or ""
    decomposed = unicodedata.normalize("NFKD", text)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return folded, text


def related_faqs(key: str, faqs: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """{question, url} refs of every FAQ pointing at guidance `key`, sorted by question."""
    refs = [
        {"question": faq.get("question"), "url": faq["url"]}
        for faq in faqs
        if guidance_key(faq) == key
    ]
    return sorted(refs, key=lambda ref: _collation_key(ref["question"]))


def status_data(faq: dict[str, Any]) -> dict[str, Any]:
    status = faq.get("status")
    if not status:
        return {"hasStatus": False}
    display = STATUS_DISPLAY.get(status, {"emoji": "", "label": status, "cssClass": "status-unknown"})
    return {"hasStatus": True, "status": status, **display}


def guidance_data(faq: dict[str, Any], guidance: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    """Callout data for FAQs blocked on guidance; None for everything else."""
    key = guidance_key(faq)
    if key is None and faq.get("status") != Status.pending_guidance.value:
        return None
    if key is None or guidance is None:
        return {"hasPendingGuidance": True}
    return {
        "hasPendingGuidance": True,
        "guidanceKey": key,
        "summary": guidance.get("summary", ""),
        "hasSpecificGuidance": bool(guidance.get("summary")),
        "guidanceUrl": guidance["url"],
    }


def admin_data(faq: dict[str, Any], edit_url_base: str) -> dict[str, Any]:
    key = guidance_key(faq)
    return {
        "hasGuidance": key is not None,
        "guidanceKey": key,
        "guidanceTitle": humanize(key) if key else None,
        "guidanceUrl": f"/pending-guidance/{key}/" if key else None,
        "hasRelatedIssue": bool(faq.get("Related issue")),
        "relatedIssue": faq.get("Related issue"),
        "editUrl": f"{edit_url_base}/{faq['category']}/{faq['filename']}",
    }


def guidance_summary(guidance: dict[str, Any]) -> dict[str, Any]:
    """Fields of a guidance item an FAQ page renders; relatedFaqs is left out."""
    return {k: guidance.get(k) for k in RELATED_GUIDANCE_FIELDS}


def list_item_data(faq: dict[str, Any]) -> dict[str, Any]:
    """Row data for FAQ index pages; questionText falls back to the humanized filename."""
    question = faq.get("question")
    return {
        "hasQuestion": bool(question),
        "questionText": question or humanize(slug_of(faq["filename"])),
        "url": faq["url"],
        "hasMissingContent": not question or not faq.get("answer"),
    }


def post_process_faq(
    faqs: list[dict[str, Any]],
    snapshot: dict[str, list[dict[str, Any]]],
    edit_url_base: str = "",
    guidance_type: str = "guidance",
    ) -> PostProcessResult:
    """Link FAQs to their guidance item and compute the reverse relatedFaqs patch.

    The guidance collection is never modified here; its relatedFaqs arrive
    as patches merged by the assembler.
    """
    guidance_by_key = {slug_of(g["filename"]): g for g in snapshot.get(guidance_type, [])}

    enriched = []
    for faq in faqs:
        key = guidance_key(faq)
        guidance = guidance_by_key.get(key) if key else None
        out = {**faq, "hasPendingGuidanceCallout": key is not None}
        if guidance is not None:
            out["relatedGuidance"] = guidance_summary(guidance)
        out["guidanceData"] = guidance_data(faq, guidance)
        out["adminData"] = admin_data(faq, edit_url_base)
        out["statusData"] = status_data(faq)
        out["listItemData"] = list_item_data(faq)
        enriched.append(out)

    patches = {
        guidance_type: {key: {"relatedFaqs": related_faqs(key, faqs)} for key in guidance_by_key}
    }
    return PostProcessResult(items=enriched, patches=patches)
