"""Starter theme configuration.

Read by the loader at startup. Asset URLs depend on where the host
serves the theme from, so this module exports a ``config(host)`` function
instead of a static ``CONFIG`` mapping.
"""


def config(host):
    uri = host.template_directory_uri()
    return {
        # Stylesheets included in the head of the page
        "styles": [
            f"{uri}/assets/css/bootstrap-4.0.0.min.css",
            f"{uri}/assets/css/style.css",
        ],
        # Scripts included at the end of the body
        "scripts": [
            f"{uri}/assets/js/custom.js",
        ],
        # Menu locations the theme can display
        "menus": {
            "primary": "Main Navigation",
            "footer": "Footer",
        },
    }
