"""Classic Blue resume template.

Traditional single-column layout: name, role and contact block on the
left, optional portrait on the right, a light rule under the header and
blue section titles.  This is the default template.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pylatex import Document, NoEscape, Package

from cvinsight.templates.base import ResumeTemplate
from cvinsight.templates.catalog import TemplateTheme

if TYPE_CHECKING:
    from cvinsight.builder.models import (
        AboutInfo,
        CertificateEntry,
        EducationEntry,
        LanguageEntry,
        ProjectEntry,
        ResumeSnapshot,
        SocialActivityEntry,
        WorkEntry,
    )

__all__ = ["ClassicBlueTemplate"]

# ---------------------------------------------------------------------------
# LaTeX preamble fragments
# ---------------------------------------------------------------------------

_PACKAGES: list[Package] = [
    Package("titlesec"),
]

_PREAMBLE_SETUP = r"""
\definecolor{headerrule}{HTML}{E5E7EB}
\titleformat{\section}{\color{accent}\normalsize\bfseries}{}{0em}{}
\titlespacing{\section}{0pt}{12pt}{6pt}
\setlength{\parskip}{2pt}
"""


class ClassicBlueTemplate(ResumeTemplate):
    """Traditional professional layout with blue accents."""

    @property
    def name(self) -> str:
        return "Classic Blue"

    @property
    def theme(self) -> TemplateTheme:
        return TemplateTheme.BLUE

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    def build(self, snapshot: ResumeSnapshot) -> Document:
        doc = self.create_document(packages=_PACKAGES, preamble=_PREAMBLE_SETUP)
        self._add_heading(doc, snapshot.about)

        if snapshot.about.summary:
            self._add_summary(doc, snapshot.about.summary)
        if snapshot.work_list:
            self._add_work(doc, snapshot.work_list)
        if snapshot.education_list:
            self._add_education(doc, snapshot.education_list)
        if snapshot.projects:
            self._add_projects(doc, snapshot.projects)
        if self.has_skills(snapshot):
            self._add_skills(doc, snapshot)
        if snapshot.languages:
            self._add_languages(doc, snapshot.languages)
        if snapshot.certificates:
            self._add_certificates(doc, snapshot.certificates)
        if snapshot.social_activities:
            self._add_social_activities(doc, snapshot.social_activities)

        return doc

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------

    def _add_heading(self, doc: Document, about: AboutInfo) -> None:
        ph = self.or_placeholder
        name = self.text(ph(about.name, "Your Name"))
        role = self.text(ph(about.role, "Your Role"))
        email = self.text(ph(about.email, "email@example.com"))
        phone = self.text(ph(about.phone, "+123456789"))
        address = self.text(ph(about.address, "City, Country"))

        lines = [
            r"\begin{minipage}[c]{0.78\linewidth}",
            rf"{{\LARGE\bfseries {name}}}\\[2pt]",
            rf"{{\color{{accent}}\large {role}}}\\[2pt]",
            rf"{email} • {phone}\\{{}}",
            address,
            r"\end{minipage}\hfill",
        ]
        picture = self.local_picture(about.picture)
        if picture:
            lines += [
                r"\begin{minipage}[c]{0.18\linewidth}\raggedleft",
                rf"\includegraphics[width=0.9in]{{{picture}}}",
                r"\end{minipage}",
            ]
        lines.append(r"\par\vspace{6pt}{\color{headerrule}\rule{\linewidth}{0.6pt}}")
        doc.append(NoEscape("\n".join(lines)))

    def _add_summary(self, doc: Document, summary: str) -> None:
        doc.append(NoEscape("\n".join([r"\section{Summary}", self.text(summary)])))

    def _add_work(self, doc: Document, entries: tuple[WorkEntry, ...]) -> None:
        lines = [r"\section{Work Experience}"]
        for entry in entries:
            lines.append(rf"{self.work_heading(entry)}\\{{}}")
            lines.append(rf"{{\color{{muted}}{self.work_dates(entry)}}}\\{{}}")
            if entry.description:
                lines.append(rf"{self.text(entry.description)}\\{{}}")
            lines.append(r"\vspace{4pt}")
        doc.append(NoEscape("\n".join(lines)))

    def _add_education(self, doc: Document, entries: tuple[EducationEntry, ...]) -> None:
        lines = [r"\section{Education}"]
        for entry in entries:
            lines.append(rf"{self.education_heading(entry)}\\{{}}")
            lines.append(rf"{{\color{{muted}}{self.education_dates(entry)}}}\\{{}}")
            lines.append(r"\vspace{4pt}")
        doc.append(NoEscape("\n".join(lines)))

    def _add_projects(self, doc: Document, entries: tuple[ProjectEntry, ...]) -> None:
        lines = [r"\section{Projects}"]
        for entry in entries:
            lines.append(rf"\textbf{{{self.text(self.or_placeholder(entry.name, 'Project'))}}}\\{{}}")
            if entry.description:
                lines.append(rf"{self.text(entry.description)}\\{{}}")
            if entry.url or entry.github:
                links = self.text(entry.url)
                if entry.github:
                    links += f" • {self.text(entry.github)}"
                lines.append(rf"{{\color{{accent}}{links.strip()}}}\\{{}}")
            lines.append(r"\vspace{4pt}")
        doc.append(NoEscape("\n".join(lines)))

    def _add_skills(self, doc: Document, snapshot: ResumeSnapshot) -> None:
        lines = [r"\section{Skills}"]
        groups = (
            ("Technical", snapshot.skills),
            ("Soft", snapshot.soft_skills),
            ("Interests", snapshot.interests),
        )
        for label, tags in groups:
            if tags:
                joined = ", ".join(self.text(tag.name) for tag in tags)
                lines.append(rf"{label}: {joined}\\{{}}")
        doc.append(NoEscape("\n".join(lines)))

    def _add_languages(self, doc: Document, languages: tuple[LanguageEntry, ...]) -> None:
        doc.append(NoEscape("\n".join([r"\section{Languages}", self.languages_line(languages)])))

    def _add_certificates(self, doc: Document, entries: tuple[CertificateEntry, ...]) -> None:
        lines = [r"\section{Certifications}"]
        lines += [rf"{self.certificate_line(entry)}\\{{}}" for entry in entries]
        doc.append(NoEscape("\n".join(lines)))

    def _add_social_activities(
        self,
        doc: Document,
        entries: tuple[SocialActivityEntry, ...],
    ) -> None:
        lines = [r"\section{Social Activities}"]
        for entry in entries:
            lines.append(rf"{self.activity_heading(entry)}\\{{}}")
            if entry.description:
                lines.append(rf"{self.text(entry.description)}\\{{}}")
            lines.append(r"\vspace{3pt}")
        doc.append(NoEscape("\n".join(lines)))
