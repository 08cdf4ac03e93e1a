"""Shared pytest configuration for bluemountain example themes.

Provides the ``theme_request`` fixture: a factory that boots the theme
in the same directory as the test against a fresh ``StandaloneHost``
and fires the hooks a page request fires before rendering. Every call
starts from clean host state.
"""

from pathlib import Path

import pytest

from bluemountain.bootstrap import bootstrap
from bluemountain.loader import PAGE_TEMPLATE_META_KEY
from bluemountain.standalone import StandaloneHost, StandalonePost


@pytest.fixture
def theme_request(request: pytest.FixtureRequest):
    """Boot the sibling theme and simulate the start of a page request."""
    theme_path = Path(request.path).parent

    def start(*query_types: str, post_title: str = "Hello", page_template: str | None = None, **host_kwargs):
        post = StandalonePost(id=1, title=post_title)
        meta = {1: {PAGE_TEMPLATE_META_KEY: page_template}} if page_template else {}
        context = {"site_name": "Starter", "post": post, **host_kwargs.pop("context", {})}
        host = StandaloneHost(
            theme_path,
            uri="https://example.test/theme",
            query_types=query_types,
            post=post,
            post_meta=meta,
            context=context,
            **host_kwargs,
        )
        loader = bootstrap(host)
        assert loader is not None
        host.do_action("init")
        host.do_action("after_setup_theme")
        host.apply_filters("template_include", "index.py")
        return host, loader

    return start
