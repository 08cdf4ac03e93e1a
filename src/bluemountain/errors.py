"""Bluemountain exception hierarchy.

Shared across the loader, the context cascade, and the CLI so every
module raises and catches the same types.
"""


class BlueMountainError(Exception):
    """Base for all bluemountain-specific errors."""


class ConfigurationError(BlueMountainError):
    """Raised when the theme configuration is missing or invalid.

    Typically raised while the ``Loader`` is constructed, before any
    hooks are registered with the host.
    """


class ContextProviderError(BlueMountainError):
    """Raised when a per-template context provider is unusable.

    Either the ``context/<template>.py`` module does not export a
    ``context`` callable, or the callable returned something other than
    a mapping.
    """

    def __init__(self, template: str, detail: str) -> None:
        self.template = template
        self.detail = detail
        super().__init__(f"Context provider for {template!r}: {detail}")
