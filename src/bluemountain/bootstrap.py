"""Theme entry point.

Called once by the host when the theme is loaded::

    from bluemountain.bootstrap import bootstrap

    loader = bootstrap(host)

When a required package is missing the theme does not fail hard:
administrators get a notice telling them what to install, and pages
render nothing from this theme until it is fixed.
"""

from __future__ import annotations

import html
import importlib.util
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bluemountain.host import Host
    from bluemountain.loader import Loader

logger = logging.getLogger("bluemountain.bootstrap")

# Import name -> distribution name to install
REQUIRED_MODULES: dict[str, str] = {
    "kida": "kida-templates",
}


def missing_dependencies() -> list[str]:
    """Return the distribution names of required packages that cannot be imported."""
    return [
        distribution
        for module, distribution in REQUIRED_MODULES.items()
        if importlib.util.find_spec(module) is None
    ]


def dependency_notice(host: Host, missing: list[str]) -> str:
    """Build the administrative notice shown while dependencies are missing."""
    packages = " ".join(missing)
    message = host.translate(
        f'Could not find {", ".join(missing)}. '
        f'Run command "pip install {packages}" first before using this theme!'
    )
    return f'<div class="error notice"><p>{html.escape(message)}</p></div>'


def bootstrap(host: Host) -> Loader | None:
    """Boot the theme loader, or register an admin notice if it cannot run.

    Returns:
        The booted ``Loader``, or None when dependencies are missing.
    """
    missing = missing_dependencies()
    if missing:
        logger.warning("Theme dependencies missing: %s", ", ".join(missing))

        def notice(*_args: Any) -> None:
            host.output(dependency_notice(host, missing))

        host.add_action("admin_notices", notice)
        loader = None
    else:
        from bluemountain.loader import Loader

        loader = Loader(host)
        loader.boot()

    host.add_action("after_switch_theme", _theme_activated)
    return loader


def _theme_activated(*_args: Any) -> None:
    logger.info("Theme activated")
