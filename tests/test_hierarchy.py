"""Tests for bluemountain.templating.hierarchy — template resolution."""

from pathlib import Path

import pytest

from bluemountain.templating.hierarchy import (
    TEMPLATE_HIERARCHY,
    TemplateLocator,
    is_valid_template_name,
    resolve_template_name,
)


def _views(tmp_path: Path, *files: str) -> Path:
    views = tmp_path / "views"
    for rel in files:
        path = views / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")
    return views


class TestResolveTemplateName:
    def test_first_confirmed_existing_type_wins(self) -> None:
        name = resolve_template_name(
            TEMPLATE_HIERARCHY,
            lambda t: t in {"single", "singular"},
            lambda t: t in {"single", "singular", "fallback"},
            "fallback",
        )
        assert name == "single"

    def test_skips_type_without_template(self) -> None:
        name = resolve_template_name(
            TEMPLATE_HIERARCHY,
            lambda t: t in {"single", "singular"},
            lambda t: t == "singular",
            "fallback",
        )
        assert name == "singular"

    def test_skips_template_not_confirmed_by_host(self) -> None:
        name = resolve_template_name(
            TEMPLATE_HIERARCHY,
            lambda t: t == "page",
            lambda t: t in {"single", "page"},
            "fallback",
        )
        assert name == "page"

    def test_fallback_when_nothing_matches(self) -> None:
        name = resolve_template_name(TEMPLATE_HIERARCHY, lambda t: False, lambda t: True, "fallback")
        assert name == "fallback"

    def test_hierarchy_order_beats_predicate_order(self) -> None:
        # A front page that is also a page resolves to front_page
        name = resolve_template_name(
            TEMPLATE_HIERARCHY,
            lambda t: t in {"page", "front_page"},
            lambda t: True,
            "fallback",
        )
        assert name == "front_page"

    def test_predicate_short_circuits(self) -> None:
        asked: list[str] = []

        def is_type(page_type: str) -> bool:
            asked.append(page_type)
            return page_type == "search"

        resolve_template_name(TEMPLATE_HIERARCHY, is_type, lambda t: True, "fallback")
        assert asked == ["embed", "404", "search"]

    def test_exists_only_checked_for_confirmed_types(self) -> None:
        checked: list[str] = []

        def exists(name: str) -> bool:
            checked.append(name)
            return False

        resolve_template_name(TEMPLATE_HIERARCHY, lambda t: t in {"tag", "archive"}, exists, "fallback")
        assert checked == ["tag", "archive"]

    def test_default_hierarchy_order(self) -> None:
        assert TEMPLATE_HIERARCHY[:4] == ("embed", "404", "search", "front_page")
        assert TEMPLATE_HIERARCHY[-1] == "archive"
        assert len(TEMPLATE_HIERARCHY) == 16


class TestTemplateLocator:
    def test_generic_template(self, tmp_path: Path) -> None:
        views = _views(tmp_path, "templates/single.html")
        locator = TemplateLocator(views)
        assert locator.template_name("single") == "templates/single.html"
        assert locator.path("single") == views / "templates" / "single.html"
        assert locator.exists("single")

    def test_page_override_wins(self, tmp_path: Path) -> None:
        views = _views(tmp_path, "templates/single.html", "pages/single.html")
        locator = TemplateLocator(views)
        assert locator.template_name("single") == "pages/single.html"

    def test_missing_template_points_at_generic_dir(self, tmp_path: Path) -> None:
        views = _views(tmp_path)
        locator = TemplateLocator(views)
        assert locator.path("tag") == views / "templates" / "tag.html"
        assert not locator.exists("tag")

    def test_custom_suffix_and_dirs(self, tmp_path: Path) -> None:
        views = _views(tmp_path, "overrides/page.twig")
        locator = TemplateLocator(views, pages_dir="overrides", templates_dir="generic", suffix=".twig")
        assert locator.template_name("page") == "overrides/page.twig"
        assert locator.exists("page")

    def test_directory_is_not_a_template(self, tmp_path: Path) -> None:
        views = _views(tmp_path)
        (views / "templates" / "page.html").mkdir(parents=True)
        assert not TemplateLocator(views).exists("page")

    @pytest.mark.parametrize("name", ["../config", "pages/x", "", ".."])
    def test_path_like_names_never_exist(self, tmp_path: Path, name: str) -> None:
        views = _views(tmp_path, "templates/page.html")
        (tmp_path / "config.html").write_text("", encoding="utf-8")
        assert not TemplateLocator(views).exists(name)


class TestIsValidTemplateName:
    @pytest.mark.parametrize("name", ["single", "404", "front_page", "landing-page"])
    def test_valid(self, name: str) -> None:
        assert is_valid_template_name(name)

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "a\\b", "a..b", "..hidden"])
    def test_invalid(self, name: str) -> None:
        assert not is_valid_template_name(name)
