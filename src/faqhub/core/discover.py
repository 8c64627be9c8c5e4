"""Directory walker: recursive discovery of markdown sources per content type"""

import logging
from pathlib import Path

from faqhub.core.models import ContentFile


logger = logging.getLogger(__name__)

MD_EXTENSION = ".md"
ROOT_CATEGORY = "root"


def walk_content_type(root: Path, content_type: str) -> list[ContentFile]:
    """Return ContentFiles for every .md file under root.

    category is the name of the file's immediate parent directory, or
    ROOT_CATEGORY for files sitting directly in root. A missing root yields
    an empty list and a warning.
    """
    if not root.is_dir():
        logger.warning("Content type directory does not exist: %s", root)
        return []

    files = []
    for p in sorted(root.rglob(f"*{MD_EXTENSION}")):
        if not p.is_file():
            continue
        category = p.parent.name if p.parent != root else ROOT_CATEGORY
        files.append(ContentFile(
            full_path=p,
            filename=p.name,
            category=category,
            content_type=content_type,
        ))
    return files


def walk_all(roots: dict[str, Path]) -> dict[str, list[ContentFile]]:
    """Walk each content type's root; keys follow the roots mapping order."""
    return {name: walk_content_type(root, name) for name, root in roots.items()}
