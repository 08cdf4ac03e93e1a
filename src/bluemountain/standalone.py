"""In-process host platform.

A complete, in-memory implementation of the ``Host`` protocol for
running a theme outside its content-management system. The CLI uses
it to resolve and render templates, and the tests use it to drive the
loader through the same hooks the real host fires.

Usage::

    host = StandaloneHost("path/to/theme", query_types={"single", "singular"})
    loader = bootstrap(host)
    host.do_action("init")
    host.do_action("after_setup_theme")
    host.apply_filters("template_include", "index.py")
    html = loader.render()
"""

import itertools
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bluemountain.host import HookCallback


@dataclass(frozen=True, slots=True)
class StandalonePost:
    """A post known to the standalone host."""

    id: int
    title: str = ""
    post_type: str = "page"


@dataclass(frozen=True, slots=True)
class StandaloneMenu:
    """A navigation menu, as handed to templates."""

    location: str
    label: str = ""
    items: tuple[Any, ...] = ()

    def __iter__(self):
        return iter(self.items)


@dataclass(slots=True)
class _Hook:
    priority: int
    order: int
    callback: HookCallback


@dataclass(slots=True)
class _CacheEntry:
    value: Any
    expires_at: float | None


class StandaloneHost:
    """In-memory host: hooks, object cache, theme mods, menus, output buffer.

    Attributes:
        query_types: Page types the current request answers yes to.
        post: The post being displayed, if any.
        post_meta: Metadata per post id.
        theme_mods: Saved customizer values.
        nav_menus: Menu locations registered by the theme.
        menu_items: Items per menu location, exposed through ``menu()``.
        buffer: Everything written through ``output()``.
    """

    def __init__(
        self,
        theme_path: str | Path,
        *,
        uri: str = "",
        query_types: Iterable[str] = (),
        post: StandalonePost | None = None,
        post_meta: Mapping[int, Mapping[str, str]] | None = None,
        theme_mods: Mapping[str, Any] | None = None,
        context: Mapping[str, Any] | None = None,
        menu_items: Mapping[str, Iterable[Any]] | None = None,
        translations: Mapping[str, str] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.theme_path = Path(theme_path)
        self.uri = uri
        self.query_types: set[str] = set(query_types)
        self.post = post
        self.post_meta: dict[int, dict[str, str]] = {
            post_id: dict(meta) for post_id, meta in (post_meta or {}).items()
        }
        self.theme_mods: dict[str, Any] = dict(theme_mods or {})
        self.context: dict[str, Any] = dict(context or {})
        self.menu_items: dict[str, tuple[Any, ...]] = {
            location: tuple(items) for location, items in (menu_items or {}).items()
        }
        self.translations: dict[str, str] = dict(translations or {})
        self.nav_menus: dict[str, str] = {}
        self.buffer: list[str] = []
        self._hooks: dict[str, list[_Hook]] = {}
        self._cache: dict[tuple[str, str], _CacheEntry] = {}
        self._counter = itertools.count()
        self._clock = clock

    # -- Theme location --

    def template_directory(self) -> Path:
        return self.theme_path

    def template_directory_uri(self) -> str:
        return self.uri

    # -- Hooks --

    def add_action(self, hook: str, callback: HookCallback, priority: int = 10) -> None:
        self._hooks.setdefault(hook, []).append(_Hook(priority, next(self._counter), callback))

    def add_filter(self, hook: str, callback: HookCallback, priority: int = 10) -> None:
        self.add_action(hook, callback, priority)

    def has_hook(self, hook: str) -> bool:
        return bool(self._hooks.get(hook))

    def _callbacks(self, hook: str) -> list[HookCallback]:
        # Snapshot: callbacks may register further hooks while running
        hooks = sorted(self._hooks.get(hook, ()), key=lambda h: (h.priority, h.order))
        return [h.callback for h in hooks]

    def do_action(self, hook: str, *args: Any) -> None:
        """Run every callback registered for *hook*, lowest priority first."""
        for callback in self._callbacks(hook):
            callback(*args)

    def apply_filters(self, hook: str, value: Any, *args: Any) -> Any:
        """Pass *value* through every filter registered for *hook*."""
        for callback in self._callbacks(hook):
            value = callback(value, *args)
        return value

    # -- Request --

    def query_is(self, page_type: str) -> bool:
        return page_type in self.query_types

    def current_post(self) -> StandalonePost | None:
        return self.post

    def get_post_meta(self, post_id: int, key: str) -> str:
        return self.post_meta.get(post_id, {}).get(key, "")

    # -- Menus --

    def register_nav_menus(self, menus: Mapping[str, str]) -> None:
        self.nav_menus.update(menus)

    def menu(self, location: str) -> StandaloneMenu:
        return StandaloneMenu(
            location=location,
            label=self.nav_menus.get(location, ""),
            items=self.menu_items.get(location, ()),
        )

    # -- Object cache --

    def cache_get(self, key: str, group: str) -> Any:
        entry = self._cache.get((group, key))
        if entry is None:
            return None
        if entry.expires_at is not None and entry.expires_at <= self._clock():
            del self._cache[(group, key)]
            return None
        return entry.value

    def cache_add(self, key: str, value: Any, group: str, expire: int) -> bool:
        """Store *value* unless the key is already cached. ``expire=0`` never expires."""
        if self.cache_get(key, group) is not None:
            return False
        expires_at = self._clock() + expire if expire > 0 else None
        self._cache[(group, key)] = _CacheEntry(value, expires_at)
        return True

    def cache_delete(self, key: str, group: str) -> bool:
        return self._cache.pop((group, key), None) is not None

    # -- Customizer settings --

    def get_theme_mod(self, name: str, default: Any = None) -> Any:
        return self.theme_mods.get(name, default)

    def set_theme_mod(self, name: str, value: Any) -> None:
        self.theme_mods[name] = value

    # -- Rendering --

    def base_context(self) -> dict[str, Any]:
        return dict(self.context)

    def translate(self, text: str) -> str:
        return self.translations.get(text, text)

    def output(self, markup: str) -> None:
        self.buffer.append(markup)

    def flush(self) -> str:
        """Return and clear everything written so far."""
        out = "".join(self.buffer)
        self.buffer.clear()
        return out


@dataclass(slots=True)
class StandaloneCustomizer:
    """In-memory customizer manager."""

    sections: dict[str, dict[str, Any]] = field(default_factory=dict)
    settings: dict[str, dict[str, Any]] = field(default_factory=dict)
    controls: dict[str, Any] = field(default_factory=dict)

    def add_section(self, section_id: str, **args: Any) -> None:
        self.sections[section_id] = args

    def add_setting(self, setting_id: str, **args: Any) -> None:
        self.settings[setting_id] = args

    def get_control(self, control_id: str) -> Any:
        return self.controls.get(control_id)

    def add_control(self, control: Any) -> None:
        self.controls[control.id] = control
