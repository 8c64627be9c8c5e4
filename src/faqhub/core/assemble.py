"""Final structure assembly: patch merge, keyed stores, indexes, and run statistics"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from faqhub.core.models import ContentFile, ValidationOutcome
from faqhub.core.parse import humanize
from faqhub.core.types.faq import guidance_key


logger = logging.getLogger(__name__)

Item = dict[str, Any]


def apply_patches(
    items_by_type: dict[str, list[Item]],
    patches: list[Optional[dict[str, dict[str, dict[str, Any]]]]],
    keys: dict[str, Callable[[Item], str]],
    ) -> dict[str, list[Item]]:
    """Merge post-processor patches into new item dicts; patches for unknown keys are dropped."""
    merged: dict[str, dict[str, dict[str, Any]]] = {}
    for patch in patches:
        if not patch:
            continue
        for type_name, by_key in patch.items():
            for key, fields in by_key.items():
                merged.setdefault(type_name, {}).setdefault(key, {}).update(fields)

    result = {}
    for type_name, items in items_by_type.items():
        type_patches = merged.get(type_name)
        if not type_patches:
            result[type_name] = list(items)
            continue
        key_of = keys[type_name]
        result[type_name] = [{**item, **type_patches.get(key_of(item), {})} for item in items]
    return result


def build_store(items: list[Item], key_of: Callable[[Item], str]) -> dict[str, Item]:
    """Keyed lookup; later duplicates win, matching a flat reduce."""
    return {key_of(item): item for item in items}


def group_keys_by_category(store: dict[str, Item]) -> dict[str, list[str]]:
    """category -> sorted item keys, categories sorted."""
    grouped: dict[str, list[str]] = {}
    for key, item in store.items():
        grouped.setdefault(item["category"], []).append(key)
    return {category: sorted(grouped[category]) for category in sorted(grouped)}


def build_cross_references(faq_store: dict[str, Item], guidance_store: dict[str, Item]) -> dict[str, dict[str, list[str]]]:
    """guidance key -> {'faqs': [faq keys]} over valid items only."""
    refs: dict[str, dict[str, list[str]]] = {key: {"faqs": []} for key in guidance_store}
    for faq_k, faq in faq_store.items():
        g_key = guidance_key(faq)
        if g_key in refs:
            refs[g_key]["faqs"].append(faq_k)
    return refs


def faq_list_data(faq_store: dict[str, Item], categories: dict[str, list[str]]) -> list[dict[str, Any]]:
    return [
        {
            "category": category,
            "categoryTitle": humanize(category),
            "questions": [faq_store[k] for k in keys],
        }
        for category, keys in categories.items()
        if keys
    ]


def sort_by_order(items: list[Item]) -> list[Item]:
    """Stable sort on `order`; ties keep discovery order."""
    return sorted(items, key=lambda item: item.get("order", 999))


def build_stats(
    files_by_type: dict[str, list[ContentFile]],
    parsed_by_type: dict[str, list[Item]],
    outcomes: dict[str, ValidationOutcome],
    version: str,
    ) -> dict[str, Any]:
    stats: dict[str, Any] = {
        "types": list(files_by_type),
        "processedAt": datetime.now(timezone.utc).isoformat(),
        "version": version,
    }
    for type_name, files in files_by_type.items():
        outcome = outcomes.get(type_name, ValidationOutcome())
        stats[type_name] = {
            "files": len(files),
            "parsed": len(parsed_by_type.get(type_name, [])),
            "valid": len(outcome.valid_items),
            "invalid": len(outcome.invalid_items),
        }
    return stats


def assemble(
    outcomes: dict[str, ValidationOutcome],
    keys: dict[str, Callable[[Item], str]],
    stats: dict[str, Any],
    ordered: frozenset[str] = frozenset(),
    faq_type: str = "faq",
    guidance_type: str = "guidance",
    ) -> dict[str, Any]:
    """Build the keyed result consumed by the renderer.

    Every type gets a keyed store; types named in `ordered` are inserted in
    display order.
    """
    result: dict[str, Any] = {"stats": stats}
    for type_name, outcome in outcomes.items():
        items = outcome.valid_items
        if type_name in ordered:
            items = sort_by_order(items)
        result[type_name] = build_store(items, keys[type_name])

    faq_store = result.get(faq_type, {})
    result["categories"] = group_keys_by_category(faq_store)
    result["crossReferences"] = build_cross_references(faq_store, result.get(guidance_type, {}))
    result["faqListData"] = faq_list_data(faq_store, result["categories"])
    return result


def write_debug_snapshot(faq_store: dict[str, Item], debug_dir: Path) -> Path | None:
    """Write FAQ items grouped by category to debug_dir/faq.json; failures are logged."""
    grouped: dict[str, list[Item]] = {}
    for item in faq_store.values():
        grouped.setdefault(item["category"], []).append(item)
    out = debug_dir / "faq.json"
    try:
        debug_dir.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(grouped, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        logger.warning("Could not write %s: %s", out, e)
        return None
    logger.info("Wrote debug snapshot to %s", out)
    return out
