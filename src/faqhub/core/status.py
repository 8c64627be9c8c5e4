"""Status derivation from declared status text and guidance references"""

import re
from typing import Any, Optional

from faqhub.core.models import Status


GUIDANCE_REF_KEYS = ("pending-guidance", "guidance-id")
# Leading emoji / symbols / whitespace, e.g. "⚠️ Draft", "🛑 Pending guidance"
_LEADING_NOISE_RE = re.compile(r"^[^\w]+")
_PENDING_RE = re.compile(r"pending[\s_-]+guidance")


def guidance_reference(item: dict[str, Any]) -> Optional[str]:
    """First non-blank guidance reference as a string; YAML scalars like 2024 count."""
    for key in GUIDANCE_REF_KEYS:
        value = item.get(key)
        if value is None or value is False:
            continue
        if str(value).strip():
            return str(value).strip()
    return None


def has_guidance_reference(item: dict[str, Any]) -> bool:
    return guidance_reference(item) is not None


def declared_status(item: dict[str, Any]) -> Optional[str]:
    """Return the declared status text, preferring lowercase `status` over `Status`."""
    for key in ("status", "Status"):
        value = item.get(key)
        if value is not None and str(value).strip():
            return str(value)
    return None


def derive_status(item: dict[str, Any]) -> Optional[Status]:
    """Apply the status rules in priority order; None when nothing was declared."""
    if has_guidance_reference(item):
        return Status.pending_guidance

    text = declared_status(item)
    if text is None:
        return None

    text = _LEADING_NOISE_RE.sub("", text.strip()).lower()
    if "draft" in text:
        return Status.draft
    if _PENDING_RE.search(text):
        return Status.pending_guidance
    return Status.approved


def normalize_status(item: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of item with `status` set to the derived value (or None)."""
    status = derive_status(item)
    return {**item, "status": status.value if status else None}
