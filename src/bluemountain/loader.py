"""Theme loader.

Wires the theme into the host platform and renders the view template
for the current request.

Lifecycle::

    loader = Loader(host)     # paths + config
    loader.boot()             # hooks, customizer, routes
    ...                       # host fires init, after_setup_theme,
                              # template_include, wp_head, ...
    html = loader.render()    # resolve template, build context, render

Hooks registered with the host:

- ``init`` — start a fresh request state, register navigation menus
- ``after_setup_theme`` — add the ``theme_page_templates``,
  ``template_include`` and ``wp_insert_post_data`` filters
- ``customize_register`` / ``wp_head`` — stylesheet-driven settings
"""

from __future__ import annotations

import contextlib
import importlib.util
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from bluemountain import customizer
from bluemountain.config import ThemeConfig, load_theme_config
from bluemountain.context import (
    ContextProvider,
    RequestScope,
    RequestState,
    build_base_context,
    load_context_provider,
)
from bluemountain.templating.discovery import cache_key, discover_page_templates
from bluemountain.templating.hierarchy import (
    TemplateLocator,
    is_valid_template_name,
    resolve_template_name,
)

if TYPE_CHECKING:
    from kida import Environment

    from bluemountain.host import CustomizeManager, Host

logger = logging.getLogger("bluemountain.loader")

# Post meta key holding the custom page template chosen by the editor
PAGE_TEMPLATE_META_KEY = "_wp_page_template"


class Loader:
    """The theme loader.

    One loader serves every request of a theme. Per-request values (the
    selected template and the shared context) live in a ``ContextVar``
    and are reset on the host's ``init`` action or by ``request_scope()``.
    """

    __slots__ = (
        "_env",
        "_providers",
        "_scope",
        "config",
        "host",
        "locator",
        "theme_path",
        "views_path",
    )

    def __init__(self, host: Host, config: ThemeConfig | None = None) -> None:
        self.host = host
        self._register_paths()
        self.config: ThemeConfig = config or load_theme_config(self.theme_path, host)
        self.views_path: Path = self.theme_path / self.config.views_dir
        self.locator = TemplateLocator(
            self.views_path,
            pages_dir=self.config.pages_dir,
            templates_dir=self.config.templates_dir,
            suffix=self.config.template_suffix,
        )
        self._scope = RequestScope()
        self._providers: dict[str, ContextProvider | None] = {}
        self._env: Environment | None = None

    def _register_paths(self) -> None:
        self.theme_path = Path(self.host.template_directory())

    # -- Boot --

    def boot(self) -> None:
        """Register hooks with the host, then load the theme's routes."""
        self._setup_pre_render_hooks()
        self._register_routes()

    def _setup_pre_render_hooks(self) -> None:
        self.host.add_action("init", self._on_init)
        self.host.add_action("after_setup_theme", self._after_setup_theme)
        self._init_customizer()

    def _on_init(self, *_args: Any) -> None:
        self._scope.reset()
        self.register_menus()

    def _after_setup_theme(self, *_args: Any) -> None:
        # Offer the custom page templates in the editor's template box
        self.host.add_filter("theme_page_templates", self._page_templates_filter)
        # Record a custom page template before the host picks its template file
        self.host.add_filter("template_include", self.init_custom_page_template)
        # Saving a post re-populates the page template cache when it is empty
        self.host.add_filter("wp_insert_post_data", self._refresh_page_templates)

    def _page_templates_filter(self, _templates: Any = None, *_args: Any) -> dict[str, str]:
        return self.get_custom_page_templates()

    def _refresh_page_templates(self, data: Any, *_args: Any) -> Any:
        self.get_custom_page_templates()
        return data

    def _register_routes(self) -> None:
        """Import the theme's ``routes.py`` and call its ``register(loader)``."""
        routes_file = self.theme_path / self.config.routes_file
        if not routes_file.is_file():
            logger.debug("No routes file at %s", routes_file)
            return

        spec = importlib.util.spec_from_file_location("_bluemountain_theme_routes", routes_file)
        if spec is None or spec.loader is None:
            return
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        register = getattr(module, "register", None)
        if register is not None and callable(register):
            register(self)

    # -- Customizer --

    def _init_customizer(self) -> None:
        stylesheet = self.theme_path / self.config.customizer_stylesheet
        if not stylesheet.is_file():
            logger.warning("Customizer stylesheet not found: %s", stylesheet)
            return

        css = stylesheet.read_text(encoding="utf-8")

        def register(manager: CustomizeManager) -> None:
            customizer.register_settings(
                manager,
                css,
                section=self.config.customizer_section,
                title=self.config.customizer_title,
                priority=self.config.customizer_priority,
                translate=self.host.translate,
            )

        def head(*_args: Any) -> None:
            overridden = customizer.apply_overrides(css, self.host.get_theme_mod)
            self.host.output(customizer.style_tag(overridden))

        self.host.add_action("customize_register", register)
        self.host.add_action("wp_head", head)

    # -- Menus --

    def register_menus(self) -> None:
        """Register every configured menu location with the host."""
        self.host.register_nav_menus(
            {location: self.host.translate(label) for location, label in self.config.menus.items()}
        )

    # -- Page templates --

    def init_custom_page_template(self, path: Any, *_args: Any) -> Any:
        """Honour a custom page template stored in the current post's metadata.

        When set, the hierarchy search is skipped for this request. A
        template that does not exist selects the fallback template.
        Called through the ``template_include`` filter; *path* is always
        returned unchanged.
        """
        post = self.host.current_post()
        if not post:
            return path

        template = self.host.get_post_meta(post.id, PAGE_TEMPLATE_META_KEY)
        if template and template != "default":
            if self.template_exists(template):
                self.state.template = template
            else:
                logger.debug("Custom page template %r not found, using fallback", template)
                self.state.template = self.config.fallback_template

        return path

    def get_custom_page_templates(self) -> dict[str, str]:
        """Return the custom page templates under ``views/pages``.

        Results are kept in the host's object cache. A template is only
        listed when its first line reads ``{# Name: The template name #}``.
        """
        pages_path = self.views_path / self.config.pages_dir
        key = cache_key(pages_path)
        group = self.config.page_template_cache_group

        cached = self.host.cache_get(key, group)
        if cached:
            return dict(cached)

        templates = discover_page_templates(pages_path)

        self.host.cache_delete(key, group)
        self.host.cache_add(key, templates, group, self.config.page_template_cache_ttl)
        return dict(templates)

    # -- Template resolution --

    @property
    def state(self) -> RequestState:
        return self._scope.state

    @contextlib.contextmanager
    def request_scope(self) -> Iterator[RequestState]:
        """Run a block with its own request state.

        Usage::

            with loader.request_scope():
                html = loader.render()
        """
        token = self._scope.begin()
        try:
            yield self._scope.state
        finally:
            self._scope.end(token)

    def current_template_name(self) -> str:
        """Return the template for this request.

        A template already chosen (custom page template or a previous
        render) wins; otherwise the hierarchy is searched.
        """
        if self.state.template is not None:
            return self.state.template

        return resolve_template_name(
            self.config.template_hierarchy,
            self.host.query_is,
            self.template_exists,
            self.config.fallback_template,
        )

    def template_path(self, template: str) -> Path:
        return self.locator.path(template)

    def current_template_path(self) -> Path:
        return self.template_path(self.current_template_name())

    def template_exists(self, template: str) -> bool:
        return self.locator.exists(template)

    # -- Context --

    def get_context(self) -> dict[str, Any]:
        """Return the shared context, built once per request."""
        state = self.state
        if state.context is None:
            state.context = build_base_context(self.host, self.config)
        return state.context

    def context_for_template(self, template: str) -> dict[str, Any]:
        """Return the context for *template*.

        Runs ``context/<template>.py`` when the theme has one; otherwise
        the shared context is returned as-is.
        """
        ctx = self.get_context()
        provider = self.context_provider(template)
        if provider is None:
            return ctx
        return provider(ctx)

    def context_provider(self, template: str) -> ContextProvider | None:
        if template not in self._providers:
            provider = None
            if is_valid_template_name(template):
                provider = load_context_provider(self.theme_path / self.config.context_dir, template)
            self._providers[template] = provider
        return self._providers[template]

    # -- Rendering --

    @property
    def environment(self) -> Environment:
        """The kida environment, created on first use."""
        if self._env is None:
            from bluemountain.templating.integration import create_environment

            self._env = create_environment(self.views_path, self.config)
        return self._env

    def render(self, extra: Mapping[str, Any] | None = None) -> str:
        """Render the current template and return the markup."""
        from bluemountain.templating.integration import render_template

        template = self.current_template_name()
        self.state.template = template
        ctx = self.context_for_template(template)
        if extra:
            ctx = {**ctx, **extra}

        name = self.locator.template_name(template)
        logger.debug("Rendering %s as %s", template, name)
        return render_template(self.environment, name, ctx)
