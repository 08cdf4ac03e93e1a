"""``bluemountain customizer`` — inspect stylesheet-driven settings."""

import argparse
import sys

from bluemountain.cli._resolve import load_theme_or_exit
from bluemountain.customizer import apply_overrides, parse_settings


def _parse_mods(pairs: list[str]) -> dict[str, str]:
    mods: dict[str, str] = {}
    for pair in pairs:
        setting_id, sep, value = pair.partition("=")
        if not sep or not setting_id:
            print(f"Error: invalid --mod {pair!r}, expected ID=VALUE", file=sys.stderr)
            raise SystemExit(2)
        mods[setting_id.strip()] = value.strip()
    return mods


def run_customizer(args: argparse.Namespace) -> None:
    """List the customizer settings, or print the overridden stylesheet."""
    mods = _parse_mods(args.mods)
    host, loader = load_theme_or_exit(args.theme, theme_mods=mods)

    stylesheet = loader.theme_path / loader.config.customizer_stylesheet
    if not stylesheet.is_file():
        print(f"Error: customizer stylesheet not found: {stylesheet}", file=sys.stderr)
        raise SystemExit(1)

    css = stylesheet.read_text(encoding="utf-8")
    if args.css:
        print(apply_overrides(css, host.get_theme_mod))
        return

    settings = parse_settings(css)
    if not settings:
        print("No customizer settings.")
        return

    for setting in settings:
        value = host.get_theme_mod(setting.setting_id, setting.value)
        print(f"{setting.setting_id}  {setting.control_kind:<5}  {setting.property}: {value}")
