"""Theme resolution — loads a theme directory into a standalone host.

Shared utility used by every ``bluemountain`` subcommand. Simulates the
start of a page request: boots the loader, then fires the host hooks a
real request would fire before the main template file runs.
"""

import sys
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from bluemountain.errors import BlueMountainError
from bluemountain.loader import PAGE_TEMPLATE_META_KEY, Loader
from bluemountain.standalone import StandaloneHost, StandalonePost

# Post id used for the simulated request when a page template is given
SIMULATED_POST_ID = 1


def load_theme(
    theme: str | Path,
    *,
    query_types: Iterable[str] = (),
    page_template: str | None = None,
    theme_mods: Mapping[str, Any] | None = None,
) -> tuple[StandaloneHost, Loader]:
    """Boot *theme* against a standalone host and start a request.

    Args:
        theme: Theme directory (holds ``config.py`` and ``views/``).
        query_types: Page types the simulated request matches.
        page_template: Custom page template stored on the simulated post.
        theme_mods: Saved customizer values.

    Returns:
        The host and the booted loader, with ``init``,
        ``after_setup_theme`` and ``template_include`` already fired.

    Raises:
        FileNotFoundError: If *theme* is not a directory.
        BlueMountainError: If the theme config is invalid.
    """
    theme_path = Path(theme).resolve()
    if not theme_path.is_dir():
        msg = f"Theme directory not found: {theme_path}"
        raise FileNotFoundError(msg)

    post = None
    post_meta: dict[int, dict[str, str]] = {}
    if page_template is not None:
        post = StandalonePost(id=SIMULATED_POST_ID)
        post_meta[SIMULATED_POST_ID] = {PAGE_TEMPLATE_META_KEY: page_template}

    host = StandaloneHost(
        theme_path,
        uri=theme_path.as_uri(),
        query_types=query_types,
        post=post,
        post_meta=post_meta,
        theme_mods=theme_mods,
    )
    loader = Loader(host)
    loader.boot()

    host.do_action("init")
    host.do_action("after_setup_theme")
    host.apply_filters("template_include", str(theme_path / "index.py"))
    return host, loader


def load_theme_or_exit(theme: str | Path, **kwargs: Any) -> tuple[StandaloneHost, Loader]:
    """``load_theme`` for CLI commands: print the error and exit 1 on failure."""
    try:
        return load_theme(theme, **kwargs)
    except (FileNotFoundError, BlueMountainError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
