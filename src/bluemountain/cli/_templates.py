"""``bluemountain templates``, ``resolve`` and ``render`` commands."""

import argparse

from bluemountain.cli._resolve import load_theme_or_exit


def run_templates(args: argparse.Namespace) -> None:
    """Print the custom page templates offered to editors, one per line."""
    _host, loader = load_theme_or_exit(args.theme)
    templates = loader.get_custom_page_templates()
    if not templates:
        print("No custom page templates.")
        return

    width = max(len(name) for name in templates)
    for name, label in templates.items():
        print(f"{name:<{width}}  {label}")


def run_resolve(args: argparse.Namespace) -> None:
    """Print the template name and file the simulated request selects."""
    _host, loader = load_theme_or_exit(
        args.theme,
        query_types=args.query_types,
        page_template=args.page_template,
    )
    name = loader.current_template_name()
    path = loader.template_path(name)
    marker = "" if path.is_file() else "  (missing)"
    print(f"{name}  {path}{marker}")


def run_render(args: argparse.Namespace) -> None:
    """Print the rendered markup for the simulated request."""
    _host, loader = load_theme_or_exit(
        args.theme,
        query_types=args.query_types,
        page_template=args.page_template,
    )
    print(loader.render())
