"""Shared fixtures for bluemountain tests.

``make_theme`` writes a theme directory under ``tmp_path`` from a
mapping of relative paths to file contents, so each test declares
exactly the layout it needs.
"""

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from bluemountain.loader import Loader
from bluemountain.standalone import StandaloneHost

DEFAULT_CONFIG = '''
CONFIG = {
    "styles": ["/assets/css/style.css"],
    "scripts": ["/assets/js/custom.js"],
    "menus": {"primary": "Main Navigation", "footer": "Footer"},
}
'''

type ThemeFactory = Callable[..., Path]


@pytest.fixture
def make_theme(tmp_path: Path) -> ThemeFactory:
    """Return a factory that writes a theme and returns its directory."""

    def factory(files: Mapping[str, str] | None = None, *, config: str | None = DEFAULT_CONFIG) -> Path:
        theme = tmp_path / "theme"
        theme.mkdir(exist_ok=True)
        if config is not None:
            (theme / "config.py").write_text(config, encoding="utf-8")
        for rel, content in (files or {}).items():
            path = theme / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return theme

    return factory


@pytest.fixture
def boot(make_theme: ThemeFactory) -> Callable[..., tuple[StandaloneHost, Loader]]:
    """Return a factory that writes a theme, boots a loader and fires ``init``."""

    def factory(files: Mapping[str, str] | None = None, **host_kwargs) -> tuple[StandaloneHost, Loader]:
        theme = make_theme(files)
        host = StandaloneHost(theme, **host_kwargs)
        loader = Loader(host)
        loader.boot()
        host.do_action("init")
        host.do_action("after_setup_theme")
        return host, loader

    return factory
