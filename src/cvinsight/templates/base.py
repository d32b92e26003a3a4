"""Abstract base class for pluggable resume templates."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from pylatex import Document, NoEscape, Package

from cvinsight.config import get_settings
from cvinsight.templates.catalog import THEME_COLORS, TemplateTheme

if TYPE_CHECKING:
    from cvinsight.builder.models import (
        CertificateEntry,
        EducationEntry,
        LanguageEntry,
        ResumeSnapshot,
        SocialActivityEntry,
        WorkEntry,
    )

__all__ = ["ResumeTemplate"]

# Characters that have special meaning in LaTeX, with their replacements.
_LATEX_REPLACEMENTS = {
    "\\": r"\textbackslash{}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
    **{ch: "\\" + ch for ch in "&%$#_{}"},
}
_LATEX_SPECIAL = re.compile(r"[\\~^&%$#_{}]")

_IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".pdf")
# Picture paths go into \includegraphics verbatim, so none of these may appear.
_UNSAFE_PATH = re.compile(r"[\s{}\\%#$&^~]")

# Packages every template needs for colour, rules and the page footer.
_BASE_PACKAGES: list[Package] = [
    Package("geometry", options=NoEscape("a4paper,top=0.35in,bottom=0.55in,left=0.4in,right=0.4in")),
    Package("fontenc", options=NoEscape("T1")),
    Package("xcolor"),
    Package("graphicx"),
    Package("enumitem"),
    Package("fancyhdr"),
    Package("lastpage"),
    Package("hyperref", options=NoEscape("hidelinks")),
]

_BASE_PREAMBLE = r"""
\setlength{\parindent}{0pt}
\setcounter{secnumdepth}{0}
\definecolor{muted}{HTML}{6B7280}
\pagestyle{fancy}
\fancyhf{}
\renewcommand{\headrulewidth}{0pt}
\renewcommand{\footrulewidth}{0pt}
\fancyfoot[C]{\footnotesize\color{muted}\thepage{} / \pageref*{LastPage}}
\raggedright
\pdfgentounicode=1
"""


class ResumeTemplate(ABC):
    """Interface that every resume template must implement.

    ``build`` must be pure: it reads the snapshot, never mutates it, and
    returns the same document for the same input.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable template name shown in the UI."""

    @property
    @abstractmethod
    def theme(self) -> TemplateTheme:
        """Colour theme the template is drawn in."""

    @abstractmethod
    def build(self, snapshot: ResumeSnapshot) -> Document:
        """Construct a PyLaTeX ``Document`` from *snapshot*."""

    # ------------------------------------------------------------------
    # Shared helpers available to all templates
    # ------------------------------------------------------------------

    def create_document(
        self,
        *,
        packages: list[Package] | None = None,
        preamble: str = "",
        font_size: str = "11pt",
    ) -> Document:
        """Return an A4 article with the shared preamble and an ``accent`` colour."""
        doc = Document(
            documentclass="article",
            document_options=["a4paper", font_size],
            page_numbers=False,
            indent=False,
            lmodern=False,
            textcomp=False,
            microtype=False,
            fontenc=None,
            inputenc=None,
        )
        for pkg in _BASE_PACKAGES + (packages or []):
            doc.packages.append(pkg)
        doc.preamble.append(NoEscape(rf"\definecolor{{accent}}{{HTML}}{{{THEME_COLORS[self.theme]}}}"))
        doc.preamble.append(NoEscape(_BASE_PREAMBLE))
        if preamble:
            doc.preamble.append(NoEscape(preamble))
        return doc

    @staticmethod
    def escape_latex(text: str) -> str:
        r"""Escape LaTeX special characters in *text*.

        Handles: ``& % $ # _ { } ~ ^ \``
        """
        # Single pass, so replacements are never escaped again.
        return _LATEX_SPECIAL.sub(lambda m: _LATEX_REPLACEMENTS[m.group()], text)

    @classmethod
    def text(cls, value: str | int | None) -> str:
        """Escape *value* for body text, keeping its line breaks."""
        if value is None:
            return ""
        lines = [line.strip() for line in cls.escape_latex(str(value)).splitlines()]
        # A break with no line before it is a LaTeX error.
        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()
        return r"\newline{} ".join(lines)

    @staticmethod
    def or_placeholder(value: str, placeholder: str) -> str:
        return value if value and value.strip() else placeholder

    @staticmethod
    def local_picture(picture: str, picture_dir: str | None = None) -> str | None:
        """Return the resolved path of *picture* if LaTeX may include it.

        Only image files inside *picture_dir* (``CVINSIGHT_PICTURE_DIR`` when
        not given) are embedded; relative paths are taken from there. Remote
        URLs, data URIs and paths holding LaTeX control characters or
        whitespace are skipped, as is everything when no directory is set.
        """
        if picture_dir is None:
            picture_dir = get_settings().picture_dir
        if not picture or not picture_dir or _UNSAFE_PATH.search(picture):
            return None
        if "://" in picture or picture.startswith("data:"):
            return None
        if not picture.lower().endswith(_IMAGE_SUFFIXES):
            return None
        root = Path(picture_dir).resolve()
        path = (root / picture).resolve()
        if not path.is_relative_to(root):
            return None
        resolved = path.as_posix()
        if _UNSAFE_PATH.search(resolved):
            return None
        return resolved

    @staticmethod
    def has_skills(snapshot: ResumeSnapshot) -> bool:
        return bool(snapshot.skills or snapshot.soft_skills or snapshot.interests)

    # -- shared line builders ------------------------------------------------

    def work_heading(self, entry: WorkEntry, *, placeholders: bool = True) -> str:
        """``Position — Company``."""
        position, company = entry.position, entry.company
        if placeholders:
            position = self.or_placeholder(position, "Position")
            company = self.or_placeholder(company, "Company")
        return f"{self.text(position)} — {self.text(company)}"

    def work_dates(self, entry: WorkEntry, *, placeholders: bool = True) -> str:
        """``start - end • type`` with ``Present`` for an open end date."""
        start = self.or_placeholder(entry.start_date, "Start") if placeholders else entry.start_date
        end = self.or_placeholder(entry.end_date, "Present")
        line = f"{self.text(start)} - {self.text(end)}"
        if entry.employment_type:
            line += f" • {self.text(entry.employment_type)}"
        return line

    def education_heading(self, entry: EducationEntry, *, placeholders: bool = True) -> str:
        degree, school = entry.degree, entry.school
        if placeholders:
            degree = self.or_placeholder(degree, "Degree")
            school = self.or_placeholder(school, "School")
        return f"{self.text(degree)} — {self.text(school)}"

    def education_dates(self, entry: EducationEntry) -> str:
        # A year of 0 means "not set".
        start = str(entry.start_year) if entry.start_year else ""
        end = str(entry.end_year) if entry.end_year else ""
        line = f"{start} - {end}"
        if entry.grade:
            line += f" • {self.text(entry.grade)}"
        return line

    def languages_line(self, languages: tuple[LanguageEntry, ...]) -> str:
        return ", ".join(f"{self.text(lang.name)} ({self.text(lang.level)})" for lang in languages)

    def certificate_line(self, entry: CertificateEntry) -> str:
        line = f"{self.text(entry.title)} — {self.text(entry.issuer)}"
        if entry.year:
            line += f" ({self.text(entry.year)})"
        return line

    def activity_heading(self, entry: SocialActivityEntry) -> str:
        return f"{self.text(entry.role)} — {self.text(entry.organization)}"

    @staticmethod
    def _strip_protocol(url: str) -> str:
        """Remove ``https://`` / ``http://`` prefix for display."""
        for prefix in ("https://", "http://"):
            if url.startswith(prefix):
                return url[len(prefix) :]
        return url
