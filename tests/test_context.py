"""Tests for bluemountain.context — shared context and providers."""

from pathlib import Path

import pytest

from bluemountain.config import ThemeConfig
from bluemountain.context import RequestScope, build_base_context, load_context_provider
from bluemountain.errors import ContextProviderError
from bluemountain.standalone import StandaloneHost


def _write(directory: Path, name: str, source: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(source, encoding="utf-8")
    return path


class TestBuildBaseContext:
    def test_adds_assets_and_menus(self, tmp_path: Path) -> None:
        host = StandaloneHost(tmp_path, context={"site": "Demo"}, menu_items={"primary": ["Home"]})
        config = ThemeConfig(styles=("a.css",), scripts=("b.js",), menus={"primary": "Main"})

        ctx = build_base_context(host, config)

        assert ctx["site"] == "Demo"
        assert ctx["styles"] == ["a.css"]
        assert ctx["scripts"] == ["b.js"]
        assert list(ctx["menus"]["primary"]) == ["Home"]

    def test_merges_host_menus(self, tmp_path: Path) -> None:
        host = StandaloneHost(tmp_path, context={"menus": {"legacy": "x"}})
        ctx = build_base_context(host, ThemeConfig(menus={"primary": "Main"}))
        assert set(ctx["menus"]) == {"legacy", "primary"}


class TestLoadContextProvider:
    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_context_provider(tmp_path, "single") is None

    def test_function_provider(self, tmp_path: Path) -> None:
        _write(tmp_path, "single.py", "def context(ctx):\n    ctx['extra'] = 1\n    return ctx\n")
        provider = load_context_provider(tmp_path, "single")

        base = {"a": 1}
        assert provider(base) == {"a": 1, "extra": 1}
        assert base == {"a": 1}

    def test_nested_changes_stay_in_provider(self, tmp_path: Path) -> None:
        _write(
            tmp_path,
            "single.py",
            "def context(ctx):\n"
            "    ctx['styles'].append('/single.css')\n"
            "    ctx['menus']['extra'] = 'sidebar'\n"
            "    return ctx\n",
        )
        provider = load_context_provider(tmp_path, "single")

        menu = object()
        base = {"styles": ["/a.css"], "menus": {"primary": menu}}
        ctx = provider(base)

        assert ctx["styles"] == ["/a.css", "/single.css"]
        assert set(ctx["menus"]) == {"primary", "extra"}
        assert ctx["menus"]["primary"] is menu
        assert base == {"styles": ["/a.css"], "menus": {"primary": menu}}

    def test_class_provider(self, tmp_path: Path) -> None:
        _write(
            tmp_path,
            "404.py",
            "class context:\n"
            "    def __call__(self, ctx):\n"
            "        return {**ctx, 'status': 404}\n",
        )
        provider = load_context_provider(tmp_path, "404")
        assert provider({})["status"] == 404

    def test_module_without_context(self, tmp_path: Path) -> None:
        _write(tmp_path, "page.py", "VALUE = 1\n")
        with pytest.raises(ContextProviderError, match="does not define"):
            load_context_provider(tmp_path, "page")

    def test_non_mapping_result(self, tmp_path: Path) -> None:
        _write(tmp_path, "page.py", "def context(ctx):\n    return None\n")
        provider = load_context_provider(tmp_path, "page")
        with pytest.raises(ContextProviderError, match="expected a mapping"):
            provider({})


class TestRequestScope:
    def test_state_created_lazily(self) -> None:
        scope = RequestScope()
        assert scope.state.template is None
        scope.state.template = "page"
        assert scope.state.template == "page"

    def test_reset(self) -> None:
        scope = RequestScope()
        scope.state.template = "page"
        scope.reset()
        assert scope.state.template is None

    def test_begin_end_restore_outer_state(self) -> None:
        scope = RequestScope()
        scope.state.template = "outer"
        token = scope.begin()
        assert scope.state.template is None
        scope.end(token)
        assert scope.state.template == "outer"
