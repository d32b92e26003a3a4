"""Template registry for resume rendering."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cvinsight.templates.base import ResumeTemplate
from cvinsight.templates.catalog import DEFAULT_TEMPLATE_ID, TemplateId
from cvinsight.templates.classic_blue import ClassicBlueTemplate
from cvinsight.templates.classic_lines import ClassicLinesTemplate
from cvinsight.templates.health_green import HealthGreenTemplate
from cvinsight.templates.mono_rules import MonoRulesTemplate

if TYPE_CHECKING:
    from pylatex import Document

    from cvinsight.builder.models import ResumeSnapshot

logger = logging.getLogger(__name__)

__all__ = [
    "ResumeTemplate",
    "get_template",
    "list_templates",
    "render",
]

_REGISTRY: dict[TemplateId, ResumeTemplate] = {
    TemplateId.CLASSIC_BLUE: ClassicBlueTemplate(),
    TemplateId.CLASSIC_LINES: ClassicLinesTemplate(),
    TemplateId.HEALTH_GREEN: HealthGreenTemplate(),
    TemplateId.MONO_RULES: MonoRulesTemplate(),
}


def get_template(template_id: str | None) -> ResumeTemplate:
    """Return the renderer registered under *template_id*.

    Unknown or missing ids fall back to the default template.
    """
    try:
        return _REGISTRY[TemplateId(template_id)]
    except ValueError:
        logger.debug("No renderer for template %r; using %s", template_id, DEFAULT_TEMPLATE_ID.value)
        return _REGISTRY[DEFAULT_TEMPLATE_ID]


def list_templates() -> list[str]:
    """Return the ids of all registered templates, in catalog order."""
    return [template_id.value for template_id in _REGISTRY]


def render(snapshot: ResumeSnapshot, template_id: str | None = None) -> Document:
    """Build the document for *snapshot* with its selected (or the given) template."""
    chosen = template_id if template_id is not None else snapshot.selected_template
    return get_template(chosen).build(snapshot)
