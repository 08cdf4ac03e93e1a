"""Bluemountain — theme bootstrap and template resolution for a CMS host.

Selects the view template for each page request, builds the shared
rendering context, and wires stylesheet-driven customizer settings into
the host platform. Templates are rendered with kida.

Basic usage (inside the host's theme entry point)::

    from bluemountain.bootstrap import bootstrap

    loader = bootstrap(host)

    # later, in the main template file
    html = loader.render()
"""

__version__ = "0.1.0"
__all__ = [
    "BlueMountainError",
    "ConfigurationError",
    "ContextProviderError",
    "Loader",
    "StandaloneHost",
    "TEMPLATE_HIERARCHY",
    "ThemeConfig",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import bluemountain`` working before kida is installed, so
    ``bluemountain.bootstrap`` can report the missing dependency.
    """
    if name == "Loader":
        from bluemountain.loader import Loader

        return Loader

    if name == "ThemeConfig":
        from bluemountain.config import ThemeConfig

        return ThemeConfig

    if name == "StandaloneHost":
        from bluemountain.standalone import StandaloneHost

        return StandaloneHost

    if name == "TEMPLATE_HIERARCHY":
        from bluemountain.templating.hierarchy import TEMPLATE_HIERARCHY

        return TEMPLATE_HIERARCHY

    if name in ("BlueMountainError", "ConfigurationError", "ContextProviderError"):
        from bluemountain import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
