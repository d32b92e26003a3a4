"""Route handlers for the API."""

from cvinsight.api.routes import builder, health, profile, render, templates

__all__ = [
    "builder",
    "health",
    "profile",
    "render",
    "templates",
]
