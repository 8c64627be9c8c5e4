"""Guidance request enhancer"""

from typing import Any

from faqhub.core.extract.markdown import extract_guidance_summary, split_title
from faqhub.core.parse import humanize, slug_of


def guidance_slug(item: dict[str, Any]) -> str:
    return slug_of(item["filename"])


def enhance_guidance(
    item: dict[str, Any],
    preset: str = "commonmark",
    edit_url_base: str = "",
    ) -> dict[str, Any]:
    """Add title (heading, frontmatter title, or humanized filename) and summary.

    relatedFaqs starts empty; FAQ post-processing supplies it as a patch.
    """
    heading, _ = split_title(item["rawMarkdown"])
    title = heading or item.get("title") or humanize(guidance_slug(item))
    return {
        **item,
        "title": title,
        "summary": extract_guidance_summary(item["rawMarkdown"], preset),
        "relatedFaqs": [],
        "relatedIssue": item.get("Related issue"),
        "editUrl": f"{edit_url_base}/pending-guidance/{item['filename']}",
    }
