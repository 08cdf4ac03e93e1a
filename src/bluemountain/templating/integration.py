"""Kida environment setup for theme views.

Creates a kida Environment rooted at the theme's views directory. The
environment is created once, on the first render, and reused for the
lifetime of the loader.
"""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from kida import Environment, FileSystemLoader

from bluemountain.config import ThemeConfig


def create_environment(
    views_path: str | Path,
    config: ThemeConfig,
    filters: dict[str, Callable[..., Any]] | None = None,
    globals_: dict[str, Any] | None = None,
) -> Environment:
    """Create a kida Environment for the theme's views.

    Template names are relative to *views_path*, so both
    ``pages/about.html`` and ``templates/single.html`` resolve, and
    templates can extend or include each other across the two trees.
    """
    env = Environment(
        loader=FileSystemLoader(str(views_path)),
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )

    if filters:
        env.update_filters(filters)

    for name, value in (globals_ or {}).items():
        env.add_global(name, value)

    return env


def render_template(env: Environment, name: str, context: Mapping[str, Any]) -> str:
    """Render a full template to string."""
    template = env.get_template(name)
    return template.render(dict(context))
