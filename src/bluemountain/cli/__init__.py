"""Bluemountain CLI — inspect, resolve and render a theme outside its host.

Entry point registered as ``bluemountain`` in ``pyproject.toml``::

    [project.scripts]
    bluemountain = "bluemountain.cli:main"
"""

import argparse
import sys


def _add_request_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--is",
        dest="query_types",
        action="append",
        default=[],
        metavar="TYPE",
        help="Page type the simulated request matches (repeatable, e.g. --is single --is singular)",
    )
    parser.add_argument(
        "--page-template",
        default=None,
        help="Custom page template stored on the simulated post",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``bluemountain`` command."""
    parser = argparse.ArgumentParser(
        prog="bluemountain",
        description="Bluemountain — theme bootstrap and template resolution.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # -- bluemountain templates -------------------------------------------
    templates_parser = subparsers.add_parser("templates", help="List custom page templates")
    templates_parser.add_argument("theme", help="Theme directory")

    # -- bluemountain resolve ---------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Show the template a request selects")
    resolve_parser.add_argument("theme", help="Theme directory")
    _add_request_args(resolve_parser)

    # -- bluemountain render ----------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render the template a request selects")
    render_parser.add_argument("theme", help="Theme directory")
    _add_request_args(render_parser)

    # -- bluemountain customizer ------------------------------------------
    customizer_parser = subparsers.add_parser(
        "customizer", help="List customizer settings from the theme stylesheet"
    )
    customizer_parser.add_argument("theme", help="Theme directory")
    customizer_parser.add_argument(
        "--mod",
        dest="mods",
        action="append",
        default=[],
        metavar="ID=VALUE",
        help="Saved customizer value (repeatable)",
    )
    customizer_parser.add_argument(
        "--css",
        action="store_true",
        help="Print the stylesheet with saved values applied",
    )

    # -- bluemountain check -----------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate theme layout and config")
    check_parser.add_argument("theme", help="Theme directory")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        import logging

        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "templates":
        from bluemountain.cli._templates import run_templates

        run_templates(args)
    elif args.command == "resolve":
        from bluemountain.cli._templates import run_resolve

        run_resolve(args)
    elif args.command == "render":
        from bluemountain.cli._templates import run_render

        run_render(args)
    elif args.command == "customizer":
        from bluemountain.cli._customizer import run_customizer

        run_customizer(args)
    elif args.command == "check":
        from bluemountain.cli._check import run_check

        run_check(args)
