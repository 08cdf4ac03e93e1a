"""``bluemountain check`` — theme layout validation command.

Loads the theme and reports missing templates, custom page templates and
context providers. Exits with code 1 if the fallback template is missing,
since every unmatched request would then fail to render.
"""

import argparse
import sys

from bluemountain.cli._resolve import load_theme_or_exit
from bluemountain.errors import ContextProviderError


def run_check(args: argparse.Namespace) -> None:
    _host, loader = load_theme_or_exit(args.theme)
    config = loader.config
    errors: list[str] = []

    if loader.template_exists(config.fallback_template):
        print(f"ok       fallback  {loader.template_path(config.fallback_template)}")
    else:
        errors.append(f"fallback template {config.fallback_template!r} not found")

    for page_type in config.template_hierarchy:
        status = "ok" if loader.template_exists(page_type) else "missing"
        print(f"{status:<8} {page_type}")

    templates = loader.get_custom_page_templates()
    for name, label in templates.items():
        print(f"page     {name}  ({label})")

    for template in (*config.template_hierarchy, *templates, config.fallback_template):
        try:
            loader.context_provider(template)
        except ContextProviderError as exc:
            errors.append(str(exc))

    if errors:
        for error in errors:
            print(f"error    {error}", file=sys.stderr)
        raise SystemExit(1)
