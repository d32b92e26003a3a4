"""Static catalog of selectable resume templates.

The catalog drives the template picker and the renderer dispatch.  It is
read-only at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "DEFAULT_TEMPLATE_ID",
    "LAYOUT_FILTERS",
    "RESUME_TEMPLATES",
    "THEME_COLORS",
    "TemplateDescriptor",
    "TemplateId",
    "TemplateLayout",
    "TemplateTheme",
    "filter_templates",
    "find_template",
]


class TemplateId(str, Enum):
    """Identifiers of the templates that have a renderer."""

    CLASSIC_BLUE = "temp-1"
    CLASSIC_LINES = "temp-2"
    HEALTH_GREEN = "temp-3"
    MONO_RULES = "temp-4"


DEFAULT_TEMPLATE_ID = TemplateId.CLASSIC_BLUE


class TemplateTheme(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    ORANGE = "orange"
    RED = "red"
    TEAL = "teal"
    MONO = "mono"


class TemplateLayout(str, Enum):
    CLASSIC = "classic"
    MODERN = "modern"
    MINIMAL = "minimal"
    CREATIVE = "creative"
    PROFESSIONAL = "professional"


# Accent colour (hex, no leading '#') used by the renderers for each theme.
THEME_COLORS: dict[TemplateTheme, str] = {
    TemplateTheme.BLUE: "2563EB",
    TemplateTheme.GREEN: "3B7F4A",
    TemplateTheme.PURPLE: "7C3AED",
    TemplateTheme.ORANGE: "EA580C",
    TemplateTheme.RED: "DC2626",
    TemplateTheme.TEAL: "0D9488",
    TemplateTheme.MONO: "111827",
}

LAYOUT_FILTERS: tuple[str, ...] = ("all", *(layout.value for layout in TemplateLayout))


@dataclass(frozen=True)
class TemplateDescriptor:
    """Display metadata for one catalog entry."""

    id: str
    name: str
    description: str
    thumbnail: str
    theme: TemplateTheme
    layout: TemplateLayout
    is_premium: bool = False


# temp-2 and temp-4 share a display name and thumbnail; they are still
# separate templates with separate renderers.
RESUME_TEMPLATES: tuple[TemplateDescriptor, ...] = (
    TemplateDescriptor(
        id=TemplateId.CLASSIC_BLUE.value,
        name="Classic Blue",
        description="Traditional professional layout with blue accents",
        thumbnail="/templates/classic-blue.png",
        theme=TemplateTheme.BLUE,
        layout=TemplateLayout.CLASSIC,
    ),
    TemplateDescriptor(
        id=TemplateId.CLASSIC_LINES.value,
        name="Classic Lines",
        description="Centered name, black separators, uppercase headings",
        thumbnail="/templates/classic-lines.png",
        theme=TemplateTheme.MONO,
        layout=TemplateLayout.CLASSIC,
    ),
    TemplateDescriptor(
        id=TemplateId.HEALTH_GREEN.value,
        name="Health Green",
        description="Clean healthcare style with green accent headings, dotted rules, and skill tags",
        thumbnail="/templates/health-green.png",
        theme=TemplateTheme.GREEN,
        layout=TemplateLayout.MODERN,
    ),
    TemplateDescriptor(
        id=TemplateId.MONO_RULES.value,
        name="Classic Lines",
        description="Monochrome, serif headings with subtle top rule and section separators",
        thumbnail="/templates/classic-lines.png",
        theme=TemplateTheme.MONO,
        layout=TemplateLayout.CLASSIC,
    ),
)


def find_template(template_id: str | None) -> TemplateDescriptor | None:
    """Return the catalog entry for *template_id*, or *None*."""
    for descriptor in RESUME_TEMPLATES:
        if descriptor.id == template_id:
            return descriptor
    return None


def filter_templates(layout: str = "all") -> list[TemplateDescriptor]:
    """Return catalog entries for *layout*, keeping catalog order.

    ``"all"`` passes every entry through.

    Raises:
        ValueError: If *layout* is not one of :data:`LAYOUT_FILTERS`.
    """
    if layout not in LAYOUT_FILTERS:
        available = ", ".join(LAYOUT_FILTERS)
        msg = f"Unknown layout {layout!r}. Available: {available}"
        raise ValueError(msg)
    if layout == "all":
        return list(RESUME_TEMPLATES)
    return [t for t in RESUME_TEMPLATES if t.layout.value == layout]
