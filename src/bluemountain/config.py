"""Theme configuration.

ThemeConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups once the theme's ``config.py`` has been read.
"""

from __future__ import annotations

import dataclasses
import importlib.util
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bluemountain.errors import ConfigurationError
from bluemountain.templating.hierarchy import TEMPLATE_HIERARCHY

logger = logging.getLogger("bluemountain.config")

CONFIG_FILE = "config.py"


@dataclass(frozen=True, slots=True)
class ThemeConfig:
    """Theme configuration. Immutable after creation.

    Only ``styles``, ``scripts`` and ``menus`` are usually set by a theme;
    everything else has a sensible default::

        config = ThemeConfig(
            styles=("/assets/css/style.css",),
            menus={"primary": "Main Navigation"},
        )
    """

    # Assets and navigation
    styles: tuple[str, ...] = ()
    scripts: tuple[str, ...] = ()
    menus: Mapping[str, str] = field(default_factory=dict)  # location -> label

    # Views layout
    views_dir: str = "views"
    pages_dir: str = "pages"  # Page-level overrides and custom page templates
    templates_dir: str = "templates"  # Generic templates
    context_dir: str = "context"
    template_suffix: str = ".html"
    fallback_template: str = "fallback"
    template_hierarchy: tuple[str, ...] = TEMPLATE_HIERARCHY

    # Customizer
    customizer_stylesheet: str = "customize.css"
    customizer_section: str = "theme_section_css_settings"
    customizer_title: str = "Theme Settings"
    customizer_priority: int = 30

    # Page template cache
    page_template_cache_group: str = "themes"
    page_template_cache_ttl: int = 100

    # Routes
    routes_file: str = "routes.py"

    # Rendering
    autoescape: bool = True
    debug: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ThemeConfig:
        """Build a config from a plain mapping, as returned by a theme's ``config.py``.

        Lists are frozen to tuples. Unknown keys raise ``ConfigurationError``
        so a typo never silently falls back to a default.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown theme config keys: {', '.join(unknown)}"
            raise ConfigurationError(msg)

        kwargs: dict[str, Any] = {}
        for name, value in data.items():
            if name in ("styles", "scripts", "template_hierarchy"):
                if isinstance(value, str) or not isinstance(value, (list, tuple)):
                    msg = f"Theme config {name!r} must be a list of strings"
                    raise ConfigurationError(msg)
                value = tuple(value)
            elif name == "menus":
                if not isinstance(value, Mapping):
                    msg = "Theme config 'menus' must map menu locations to labels"
                    raise ConfigurationError(msg)
                value = dict(value)
            kwargs[name] = value
        return cls(**kwargs)


def load_theme_config(theme_path: str | Path, host: Any = None) -> ThemeConfig:
    """Load ``config.py`` from the theme directory.

    The module exports either a ``config(host)`` function returning a
    mapping (useful when URLs depend on the host, e.g. the theme URI) or a
    plain ``CONFIG`` mapping::

        def config(host):
            uri = host.template_directory_uri()
            return {
                "styles": [f"{uri}/assets/css/style.css"],
                "scripts": [f"{uri}/assets/js/custom.js"],
                "menus": {"primary": "Main Navigation", "footer": "Footer"},
            }

    Raises:
        ConfigurationError: If the file is missing, exports neither
            ``config`` nor ``CONFIG``, or contains invalid values.
    """
    config_file = Path(theme_path) / CONFIG_FILE
    if not config_file.is_file():
        msg = f"Theme config not found: {config_file}"
        raise ConfigurationError(msg)

    spec = importlib.util.spec_from_file_location("_bluemountain_theme_config", config_file)
    if spec is None or spec.loader is None:
        msg = f"Cannot import theme config: {config_file}"
        raise ConfigurationError(msg)

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    factory = getattr(module, "config", None)
    if factory is not None and callable(factory):
        data = factory(host)
    else:
        data = getattr(module, "CONFIG", None)

    if not isinstance(data, Mapping):
        msg = f"{config_file} must define config(host) or CONFIG returning a mapping"
        raise ConfigurationError(msg)

    logger.debug("Loaded theme config from %s", config_file)
    return ThemeConfig.from_mapping(data)
