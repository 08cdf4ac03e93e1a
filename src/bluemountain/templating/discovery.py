"""Custom page template discovery for the views/pages directory.

A file under ``views/pages`` becomes a selectable page template when its
very first line declares a label::

    {# Name: Landing Page #}

The template is keyed by its file name up to the first dot, so
``landing.html`` is stored in post metadata as ``landing``.
"""

import hashlib
import logging
import re
from pathlib import Path

logger = logging.getLogger("bluemountain.templating")

# Regex to extract {# Name: label #} from the first line of a page template
_NAME_RE = re.compile(r"^\{# Name:(.*)#\}$", re.IGNORECASE | re.MULTILINE)


def parse_template_label(line: str) -> str | None:
    """Extract the template label from a template's first line.

    Returns None if the line does not declare one.
    """
    match = _NAME_RE.search(line.strip())
    if match is None:
        return None
    return match.group(1).strip()


def discover_page_templates(pages_path: str | Path) -> dict[str, str]:
    """Scan a pages directory for templates that declare a label.

    Args:
        pages_path: Path to ``views/pages``.

    Returns:
        Mapping of template key to its human-readable label, in file
        name order. Empty when the directory does not exist.
    """
    root = Path(pages_path)
    if not root.is_dir():
        logger.debug("No page templates directory at %s", root)
        return {}

    templates: dict[str, str] = {}
    for item in sorted(root.iterdir()):
        if not item.is_file():
            continue

        with item.open(encoding="utf-8", errors="replace") as fh:
            first_line = fh.readline()

        label = parse_template_label(first_line)
        if label is None:
            # No label on the first line; not offered as a page template
            continue

        templates[item.name.split(".")[0]] = label
    return templates


def cache_key(pages_path: str | Path) -> str:
    """Object-cache key for the templates found under *pages_path*."""
    digest = hashlib.md5(str(pages_path).encode("utf-8"), usedforsecurity=False).hexdigest()
    return f"page-templates-{digest}"
