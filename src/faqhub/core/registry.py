"""Content-type registry: source directory, enhancer, post-processor and schema per type"""

from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, Callable, Optional

from faqhub.config import ConfigError, Settings
from faqhub.core.models import PostProcessResult
from faqhub.core.parse import slug_of
from faqhub.core.types.faq import enhance_faq, faq_key, is_faq_document, post_process_faq
from faqhub.core.types.guidance import enhance_guidance
from faqhub.core.types.lists import enhance_list, post_process_list


Item = dict[str, Any]
Enhancer = Callable[[Item], Item]
PostProcessor = Callable[[list[Item], dict[str, list[Item]]], PostProcessResult]


def item_slug(item: Item) -> str:
    return slug_of(item["filename"])


@dataclass(frozen=True)
class ContentType:
    """Everything the pipeline needs to know about one content type."""
    name:         str
    source_dir:   Path
    schema:       Optional[str] = None
    enhance:      Optional[Enhancer] = None
    post_process: Optional[PostProcessor] = None
    accepts:      Optional[Callable[[Item], bool]] = None
    key:          Callable[[Item], str] = item_slug
    ordered:      bool = False


def _faq(settings: Settings) -> dict[str, Any]:
    return {
        "enhance": enhance_faq,
        "post_process": partial(post_process_faq, edit_url_base=settings.edit_url_base),
        "accepts": is_faq_document,
        "key": faq_key,
    }


def _guidance(settings: Settings) -> dict[str, Any]:
    return {
        "enhance": partial(
            enhance_guidance,
            preset=settings.markdown_preset,
            edit_url_base=settings.edit_url_base,
        ),
    }


def _list(settings: Settings) -> dict[str, Any]:
    return {"enhance": enhance_list, "post_process": post_process_list, "ordered": True}


PARSERS: dict[str, Callable[[Settings], dict[str, Any]]] = {
    "faq":      _faq,
    "guidance": _guidance,
    "list":     _list,
    "lists":    _list,
}


def build_registry(settings: Settings) -> dict[str, ContentType]:
    """Resolve configured content types. Raises ConfigError on an unknown parser name."""
    registry: dict[str, ContentType] = {}
    for name, type_settings in settings.type_settings().items():
        factory = PARSERS.get(type_settings.parser)
        if factory is None:
            raise ConfigError(
                f"Unknown parser '{type_settings.parser}' for content type '{name}' "
                f"(expected one of: {', '.join(sorted(PARSERS))})"
            )
        registry[name] = ContentType(
            name=name,
            source_dir=settings.resolve(type_settings.source_dir),
            schema=type_settings.schema_name,
            **factory(settings),
        )
    if not registry:
        raise ConfigError("No content types configured")
    return registry
