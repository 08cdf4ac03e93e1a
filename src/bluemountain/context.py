"""Rendering context for theme templates.

Provides:
- ``build_base_context``: the shared context every template receives:
  the host's default context plus the configured styles, scripts and
  navigation menus.
- Per-template context providers loaded from ``context/<template>.py``.
- ``RequestState``: the resolved template name and cached context for
  the current request, held in a ``ContextVar``.

A provider module exports ``context``, either a function::

    # context/front_page.py
    def context(ctx):
        return {**ctx, "featured": load_featured()}

or a class whose instances are called with the context::

    class context:
        def __call__(self, ctx):
            ctx["featured"] = load_featured()
            return ctx

The provider receives a copy of the shared context, so changes never
leak into other templates rendered during the same request.
"""

import importlib.util
import inspect
import logging
from collections.abc import Callable, Mapping
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bluemountain.config import ThemeConfig
from bluemountain.errors import ContextProviderError
from bluemountain.host import Host

logger = logging.getLogger("bluemountain.context")


def build_base_context(host: Host, config: ThemeConfig) -> dict[str, Any]:
    """Create the context shared by every template in a request."""
    ctx: dict[str, Any] = dict(host.base_context())
    ctx["styles"] = list(config.styles)
    ctx["scripts"] = list(config.scripts)

    menus = dict(ctx.get("menus") or {})
    for location in config.menus:
        menus[location] = host.menu(location)
    ctx["menus"] = menus
    return ctx


def copy_context(ctx: Mapping[str, Any]) -> dict[str, Any]:
    """Copy *ctx* and its list, dict and set values.

    The items inside those containers (menus, posts and other host
    objects) are shared with *ctx*.
    """
    copied: dict[str, Any] = {}
    for key, value in ctx.items():
        if isinstance(value, list):
            value = list(value)
        elif isinstance(value, dict):
            value = dict(value)
        elif isinstance(value, set):
            value = set(value)
        copied[key] = value
    return copied


@dataclass(frozen=True, slots=True)
class ContextProvider:
    """A ``context/<template>.py`` file's context callable.

    Attributes:
        template: Template name the provider belongs to.
        module_path: Filesystem path to the provider module.
        func: The ``context`` callable (an instance for class providers).
    """

    template: str
    module_path: str
    func: Callable[[dict[str, Any]], Mapping[str, Any]]

    def __call__(self, base: Mapping[str, Any]) -> dict[str, Any]:
        result = self.func(copy_context(base))
        if not isinstance(result, Mapping):
            detail = f"returned {type(result).__name__}, expected a mapping"
            raise ContextProviderError(self.template, detail)
        return dict(result)


def load_context_provider(context_dir: str | Path, template: str) -> ContextProvider | None:
    """Load the provider for *template* from *context_dir*.

    Returns None when the template has no provider file.

    Raises:
        ContextProviderError: If the module has no ``context`` callable.
    """
    context_file = Path(context_dir) / f"{template}.py"
    if not context_file.is_file():
        return None

    spec = importlib.util.spec_from_file_location(
        f"_bluemountain_context_{template}",
        context_file,
    )
    if spec is None or spec.loader is None:
        raise ContextProviderError(template, f"cannot import {context_file}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    func = getattr(module, "context", None)
    if func is None or not callable(func):
        raise ContextProviderError(template, f"{context_file} does not define context()")

    # Class providers are instantiated once and called per render
    if inspect.isclass(func):
        func = func()
        if not callable(func):
            raise ContextProviderError(template, f"{context_file}: context instances are not callable")

    logger.debug("Loaded context provider %s", context_file)
    return ContextProvider(template=template, module_path=str(context_file), func=func)


@dataclass(slots=True)
class RequestState:
    """Per-request loader state.

    Attributes:
        template: Template chosen for this request, once resolved or
            forced by a custom page template.
        context: The shared context, once built.
    """

    template: str | None = None
    context: dict[str, Any] | None = None


class RequestScope:
    """Holds one ``RequestState`` per request in a ``ContextVar``.

    State is created lazily on first access, so code running outside an
    explicit scope still gets one state per context. ``reset()`` starts a
    fresh state in the current context; ``begin()``/``end()`` bracket an
    explicit scope.
    """

    __slots__ = ("_var",)

    def __init__(self, name: str = "bluemountain_request") -> None:
        self._var: ContextVar[RequestState | None] = ContextVar(name, default=None)

    @property
    def state(self) -> RequestState:
        state = self._var.get()
        if state is None:
            state = RequestState()
            self._var.set(state)
        return state

    def reset(self) -> RequestState:
        state = RequestState()
        self._var.set(state)
        return state

    def begin(self) -> Any:
        return self._var.set(RequestState())

    def end(self, token: Any) -> None:
        self._var.reset(token)
