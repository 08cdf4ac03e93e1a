"""Extra context for the front page."""


def context(ctx):
    return {**ctx, "hero": {"title": "Welcome", "subtitle": "A theme rendered with kida"}}
