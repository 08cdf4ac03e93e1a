"""Stylesheet-driven customizer settings.

Every declaration in the theme's ``customize.css`` that is preceded by a
comment on the line above becomes an editable setting in the host's
customizer::

    body {
        /* Background Color */
        background-color: #ffffff;
    }

registers a ``background-color`` setting labelled "Background Color"
with ``#ffffff`` as its default. When the page head is written, each
such declaration is replaced by the user's saved value.
"""

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Literal

from bluemountain.host import CustomizeManager

logger = logging.getLogger("bluemountain.customizer")

# /* Title */ on one line, followed by "property: value;" on the next
_SETTING_RE = re.compile(r"/\*(.+)\*/\n\s*([a-z\-]+):(.+);")

# Properties edited with a color picker instead of a text field
COLOR_PROPERTIES = frozenset({"color", "background-color"})

type ControlKind = Literal["color", "text"]


@dataclass(frozen=True, slots=True)
class CssSetting:
    """A commented declaration found in the customizer stylesheet.

    Attributes:
        title: The comment text, used as the control label.
        setting_id: Title lower-cased with spaces replaced by dashes.
        property: CSS property name (e.g. ``background-color``).
        value: Declared value, used as the setting default.
    """

    title: str
    setting_id: str
    property: str
    value: str

    @property
    def control_kind(self) -> ControlKind:
        return "color" if self.property in COLOR_PROPERTIES else "text"


@dataclass(frozen=True, slots=True)
class CustomizerControl:
    """A control handed to the host's customizer.

    The host maps ``kind`` onto its own widget (color picker or text
    input).
    """

    id: str
    kind: ControlKind
    label: str
    section: str
    settings: str


def setting_id_for(title: str) -> str:
    return title.replace(" ", "-").lower()


def _setting_from_match(match: re.Match[str]) -> CssSetting:
    title = match.group(1).strip()
    return CssSetting(
        title=title,
        setting_id=setting_id_for(title),
        property=match.group(2).strip(),
        value=match.group(3).strip(),
    )


def iter_settings(css: str) -> Iterator[CssSetting]:
    """Yield every commented declaration in *css*, in source order."""
    for match in _SETTING_RE.finditer(css):
        yield _setting_from_match(match)


def parse_settings(css: str) -> list[CssSetting]:
    return list(iter_settings(css))


def register_settings(
    manager: CustomizeManager,
    css: str,
    *,
    section: str = "theme_section_css_settings",
    title: str = "Theme Settings",
    priority: int = 30,
    translate: Callable[[str], str] = str,
) -> list[CssSetting]:
    """Add a customizer section with one setting and control per declaration.

    A control is only added when the manager does not already have one
    with the same id, so two declarations sharing a title share a control.

    Returns:
        The settings that were registered.
    """
    manager.add_section(section, title=translate(title), priority=priority)

    settings = parse_settings(css)
    for setting in settings:
        manager.add_setting(setting.setting_id, default=setting.value)

        if manager.get_control(setting.setting_id):
            continue

        manager.add_control(
            CustomizerControl(
                id=setting.setting_id,
                kind=setting.control_kind,
                label=setting.title,
                section=section,
                settings=setting.setting_id,
            )
        )

    logger.debug("Registered %d customizer settings in %s", len(settings), section)
    return settings


def apply_overrides(css: str, get_theme_mod: Callable[[str, Any], Any]) -> str:
    """Replace every commented declaration with the user's saved value.

    The comment is dropped along with the original declaration; values
    the user never changed fall back to the declared default.
    """

    def replace(match: re.Match[str]) -> str:
        setting = _setting_from_match(match)
        value = get_theme_mod(setting.setting_id, setting.value)
        return f"{setting.property}:{value};"

    return _SETTING_RE.sub(replace, css)


def style_tag(css: str) -> str:
    return f'<style type="text/css">{css}</style>'
