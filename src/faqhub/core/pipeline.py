"""Pipeline phases: discover, parse, enhance, post-process, validate, assemble"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

from faqhub.config import Settings
from faqhub.core.assemble import apply_patches, assemble, build_stats, write_debug_snapshot
from faqhub.core.discover import walk_all
from faqhub.core.models import ContentFile, ValidationOutcome
from faqhub.core.parse import parse_base, read_document
from faqhub.core.registry import ContentType
from faqhub.core.validate import SCHEMAS_DIR, SchemaValidator, ValidationLog, load_validators


logger = logging.getLogger(__name__)

Item = dict[str, Any]


def parse_files(files: list[ContentFile], content_type: ContentType) -> list[Item]:
    """Read and base-parse files; unreadable, frontmatter-less and rejected docs drop out."""
    items = []
    for f in files:
        item = parse_base(read_document(f.full_path), f.filename, f.category, content_type.name)
        if item is None:
            continue
        if content_type.accepts is not None and not content_type.accepts(item):
            continue
        items.append(item)
    return items


def enhance_items(items: list[Item], content_type: ContentType) -> list[Item]:
    if content_type.enhance is None:
        return list(items)
    return [content_type.enhance(item) for item in items]


def post_process_all(
    enhanced: dict[str, list[Item]],
    registry: dict[str, ContentType],
    ) -> dict[str, list[Item]]:
    """Run every post-processor against the same enhanced snapshot, then merge patches."""
    snapshot = MappingProxyType(enhanced)
    own: dict[str, list[Item]] = {}
    patches = []
    for name, items in enhanced.items():
        post_process = registry[name].post_process
        if post_process is None:
            own[name] = list(items)
            continue
        result = post_process(items, snapshot)
        own[name] = result.items
        patches.append(result.patches)
    return apply_patches(own, patches, {name: ct.key for name, ct in registry.items()})


class ContentPipeline:
    """One synchronous build over the configured content types."""

    def __init__(
        self,
        registry: dict[str, ContentType],
        settings: Settings,
        validator: Optional[SchemaValidator] = None,
        ):
        self.registry = registry
        self.settings = settings
        self.validation_log = ValidationLog(settings.resolve(settings.validation_log))
        if validator is None:
            schema_dir = settings.resolve(settings.schema_dir) if settings.schema_dir else SCHEMAS_DIR
            validator = SchemaValidator(load_validators(schema_dir), self.validation_log)
        self.validator = validator

    def discover(self) -> dict[str, list[ContentFile]]:
        files_by_type = walk_all({name: ct.source_dir for name, ct in self.registry.items()})
        total = sum(len(files) for files in files_by_type.values())
        logger.info("Found %d markdown files in %d types: %s", total, len(files_by_type), ", ".join(files_by_type))
        return files_by_type

    def parse(self, files_by_type: dict[str, list[ContentFile]]) -> dict[str, list[Item]]:
        parsed = {name: parse_files(files, self.registry[name]) for name, files in files_by_type.items()}
        for name, items in parsed.items():
            logger.info("Parsed %d %s items", len(items), name)
        return parsed

    def enhance(self, parsed: dict[str, list[Item]]) -> dict[str, list[Item]]:
        return {name: enhance_items(items, self.registry[name]) for name, items in parsed.items()}

    def post_process(self, enhanced: dict[str, list[Item]]) -> dict[str, list[Item]]:
        return post_process_all(enhanced, self.registry)

    def validate(self, processed: dict[str, list[Item]]) -> dict[str, ValidationOutcome]:
        return {
            name: self.validator.validate(items, self.registry[name].schema, f"{name} items")
            for name, items in processed.items()
        }

    def assemble(
        self,
        files_by_type: dict[str, list[ContentFile]],
        parsed: dict[str, list[Item]],
        outcomes: dict[str, ValidationOutcome],
        ) -> dict[str, Any]:
        stats = build_stats(files_by_type, parsed, outcomes, self.settings.schema_version)
        return assemble(
            outcomes,
            keys={name: ct.key for name, ct in self.registry.items()},
            stats=stats,
            ordered=frozenset(name for name, ct in self.registry.items() if ct.ordered),
        )

    def run(self) -> dict[str, Any]:
        """Execute all six phases; each completes for every type before the next starts."""
        self.validation_log.clear()
        logger.info("Processing content types: %s", ", ".join(self.registry))

        files_by_type = self.discover()
        parsed = self.parse(files_by_type)
        enhanced = self.enhance(parsed)
        processed = self.post_process(enhanced)
        outcomes = self.validate(processed)
        result = self.assemble(files_by_type, parsed, outcomes)

        if self.settings.debug_dir:
            write_debug_snapshot(result.get("faq", {}), self.settings.resolve(self.settings.debug_dir))
        logger.info("Content processing complete")
        return result


def invalid_count(result: dict[str, Any]) -> int:
    """Total invalid items recorded in a result's stats."""
    stats = result["stats"]
    return sum(stats[name]["invalid"] for name in stats["types"])


def write_result(result: dict[str, Any], output_dir: Path) -> Path:
    """Write the assembled structure to output_dir/content.json."""
    output_dir.mkdir(parents=True, exist_ok=True)
    out = output_dir / "content.json"
    out.write_text(json.dumps(result, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
    return out
