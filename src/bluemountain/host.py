"""Host platform protocols.

The theme runs inside a content-management host it does not control:
the host owns hook dispatch, the object cache, the customizer UI, menu
storage and post metadata. These protocols describe the slice of the
host the loader talks to.

No base class required. The loader checks the shape, not the lineage::

    class MyHost:
        def add_action(self, hook, callback, priority=10): ...
        def query_is(self, page_type): ...
        ...
"""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Protocol

# An action or filter callback registered with the host
type HookCallback = Callable[..., Any]


class Post(Protocol):
    """The post being displayed. Only its identifier is used."""

    @property
    def id(self) -> int: ...


class Host(Protocol):
    """Protocol for the host platform."""

    # -- Theme location --

    def template_directory(self) -> str | Path: ...

    def template_directory_uri(self) -> str: ...

    # -- Hooks --

    def add_action(self, hook: str, callback: HookCallback, priority: int = 10) -> None: ...

    def add_filter(self, hook: str, callback: HookCallback, priority: int = 10) -> None: ...

    # -- Request --

    def query_is(self, page_type: str) -> bool:
        """Is the current request a page of *page_type* (``"single"``, ``"404"``, ...)?"""
        ...

    def current_post(self) -> Post | None: ...

    def get_post_meta(self, post_id: int, key: str) -> str: ...

    # -- Menus --

    def register_nav_menus(self, menus: Mapping[str, str]) -> None: ...

    def menu(self, location: str) -> Any: ...

    # -- Object cache --

    def cache_get(self, key: str, group: str) -> Any: ...

    def cache_add(self, key: str, value: Any, group: str, expire: int) -> bool: ...

    def cache_delete(self, key: str, group: str) -> bool: ...

    # -- Customizer settings --

    def get_theme_mod(self, name: str, default: Any = None) -> Any: ...

    # -- Rendering --

    def base_context(self) -> Mapping[str, Any]:
        """The host's default template context (site, user, request, ...)."""
        ...

    def translate(self, text: str) -> str: ...

    def output(self, markup: str) -> None:
        """Write markup into the response (head tags, admin notices)."""
        ...


class CustomizeManager(Protocol):
    """Protocol for the host's live-preview settings editor."""

    def add_section(self, section_id: str, **args: Any) -> None: ...

    def add_setting(self, setting_id: str, **args: Any) -> None: ...

    def get_control(self, control_id: str) -> Any: ...

    def add_control(self, control: Any) -> None: ...
