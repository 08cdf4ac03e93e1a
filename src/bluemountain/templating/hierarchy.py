"""Template hierarchy resolution.

Picks the view template for a request by walking an ordered list of
page-type names. For each name the host is asked "is this page of type
X?"; the first type that answers yes *and* has a template on disk wins.
When nothing matches, the fallback template is used.

Templates are looked up under two directories, page-level overrides
first::

    views/
      pages/        # page-level overrides and custom page templates
        about.html
      templates/    # generic templates
        single.html
        page.html
        fallback.html
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

# Checked in this order; the first type the host confirms and that has a
# template file is selected.
TEMPLATE_HIERARCHY: tuple[str, ...] = (
    "embed",
    "404",
    "search",
    "front_page",
    "home",
    "post_type_archive",
    "tax",
    "attachment",
    "single",
    "page",
    "singular",
    "category",
    "tag",
    "author",
    "date",
    "archive",
)


def is_valid_template_name(name: str) -> bool:
    """Return True if *name* is a bare template name (no directories)."""
    if not name or name == "." or ".." in name:
        return False
    return "/" not in name and "\\" not in name and "\x00" not in name


@dataclass(frozen=True, slots=True)
class TemplateLocator:
    """Maps template names to files under the views directory.

    Attributes:
        views_path: Root of the views tree (the kida loader root).
        pages_dir: Subdirectory holding page-level overrides.
        templates_dir: Subdirectory holding generic templates.
        suffix: Template file extension, including the dot.
    """

    views_path: Path
    pages_dir: str = "pages"
    templates_dir: str = "templates"
    suffix: str = ".html"

    def template_name(self, name: str) -> str:
        """Return the loader-relative name for *name* (e.g. ``"pages/about.html"``).

        The page-level override wins when it exists; otherwise the
        generic template name is returned whether or not it exists.
        """
        filename = f"{name}{self.suffix}"
        if is_valid_template_name(name) and (self.views_path / self.pages_dir / filename).is_file():
            return f"{self.pages_dir}/{filename}"
        return f"{self.templates_dir}/{filename}"

    def path(self, name: str) -> Path:
        """Return the full filesystem path for *name*."""
        return self.views_path / self.template_name(name)

    def exists(self, name: str) -> bool:
        """Check whether *name* resolves to a template file."""
        if not is_valid_template_name(name):
            return False
        return self.path(name).is_file()


def resolve_template_name(
    hierarchy: Iterable[str],
    is_type: Callable[[str], bool],
    exists: Callable[[str], bool],
    fallback: str,
) -> str:
    """Walk *hierarchy* and return the first confirmed, existing template.

    Args:
        hierarchy: Page-type names in priority order.
        is_type: Host predicate, ``is_type("single")`` → is this a single post?
        exists: Whether a template file exists for a name.
        fallback: Returned when no candidate matches.

    Returns:
        The selected template name.
    """
    for page_type in hierarchy:
        if is_type(page_type) and exists(page_type):
            return page_type
    return fallback
