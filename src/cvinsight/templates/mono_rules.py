"""Monochrome resume template with serif headings and ruled sections."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pylatex import Document, NoEscape, Package

from cvinsight.templates.base import ResumeTemplate
from cvinsight.templates.catalog import TemplateTheme

if TYPE_CHECKING:
    from cvinsight.builder.models import AboutInfo, ResumeSnapshot

__all__ = ["MonoRulesTemplate"]

_PACKAGES: list[Package] = [
    Package("titlesec"),
    Package("mathptmx"),
]

_PREAMBLE_SETUP = r"""
\titleformat{\section}{\normalsize\bfseries}{}{0em}{}
\titlespacing{\section}{0pt}{12pt}{4pt}
\setlist[itemize]{leftmargin=0.18in, itemsep=0pt, topsep=2pt, label=\textbullet}
"""


class MonoRulesTemplate(ResumeTemplate):
    @property
    def name(self) -> str:
        return "Classic Lines"

    @property
    def theme(self) -> TemplateTheme:
        return TemplateTheme.MONO

    def build(self, snapshot: ResumeSnapshot) -> Document:
        doc = self.create_document(packages=_PACKAGES, preamble=_PREAMBLE_SETUP, font_size="10pt")
        self._add_heading(doc, snapshot.about)

        if snapshot.about.summary:
            self._section(doc, "Summary", [self.text(snapshot.about.summary)])

        if snapshot.work_list:
            body = []
            for entry in snapshot.work_list:
                body.append(rf"\textbf{{{self.work_heading(entry)}}}\\{{}}")
                body.append(rf"\textit{{{self.work_dates(entry)}}}\\{{}}")
                if entry.description:
                    body.append(rf"{self.text(entry.description)}\\{{}}")
                body.append(r"\vspace{2pt}")
            self._section(doc, "Work Experience", body)

        if snapshot.education_list:
            body = []
            for entry in snapshot.education_list:
                body.append(rf"\textbf{{{self.education_heading(entry)}}}\\{{}}")
                body.append(rf"\textit{{{self.education_dates(entry)}}}\\{{}}")
            self._section(doc, "Education", body)

        if snapshot.projects:
            body = []
            for entry in snapshot.projects:
                line = rf"\textbf{{{self.text(self.or_placeholder(entry.name, 'Project'))}}}"
                links = [self.text(self._strip_protocol(u)) for u in (entry.url, entry.github) if u]
                if links:
                    line += " | " + " | ".join(links)
                body.append(rf"{line}\\{{}}")
                if entry.description:
                    body.append(rf"{self.text(entry.description)}\\{{}}")
            self._section(doc, "Projects", body)

        if self.has_skills(snapshot):
            tags = snapshot.skills + snapshot.soft_skills + snapshot.interests
            body = [r"\begin{itemize}", *(rf"\item{{}} {self.text(t.name)}" for t in tags), r"\end{itemize}"]
            self._section(doc, "Skills", body)

        if snapshot.languages:
            self._section(doc, "Languages", [self.languages_line(snapshot.languages)])

        if snapshot.certificates:
            self._section(
                doc,
                "Certifications",
                [rf"{self.certificate_line(e)}\\{{}}" for e in snapshot.certificates],
            )

        if snapshot.social_activities:
            body = []
            for entry in snapshot.social_activities:
                body.append(rf"\textbf{{{self.activity_heading(entry)}}}\\{{}}")
                if entry.description:
                    body.append(rf"{self.text(entry.description)}\\{{}}")
            self._section(doc, "Social Activities", body)

        return doc

    def _section(self, doc: Document, title: str, body: list[str]) -> None:
        # Thick rule above each uppercase title.
        rule = r"\par\vspace{6pt}{\color{accent}\rule{\linewidth}{1.2pt}}"
        doc.append(NoEscape("\n".join([rule, rf"\section{{{title.upper()}}}", *body])))

    def _add_heading(self, doc: Document, about: AboutInfo) -> None:
        ph = self.or_placeholder
        contact = " | ".join(
            [
                self.text(ph(about.email, "email@example.com")),
                self.text(ph(about.phone, "+123456789")),
                self.text(ph(about.address, "City, Country")),
            ]
        )
        lines = [
            r"{\color{accent}\rule{\linewidth}{0.4pt}}\\[4pt]",
            rf"{{\Huge\scshape {self.text(ph(about.name, 'Your Name'))}}}\\[2pt]",
            rf"{{\large\itshape {self.text(ph(about.role, 'Your Role'))}}}\\[2pt]",
            rf"{contact}\par",
        ]
        doc.append(NoEscape("\n".join(lines)))
