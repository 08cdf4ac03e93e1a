"""Starter theme routes.

Called once when the theme boots. Registers an extra filter to show how
a theme hooks its own behaviour into the host.
"""


def register(loader):
    loader.host.add_filter("body_class", lambda classes: [*classes, "theme-starter"])
