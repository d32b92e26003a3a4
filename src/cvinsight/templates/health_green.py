"""Health Green resume template.

Same header and section order as Classic Blue, drawn in green.  Every
section is closed by a dashed rule and skills are shown as tag chips.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pylatex import Document, NoEscape, Package

from cvinsight.templates.base import ResumeTemplate
from cvinsight.templates.catalog import TemplateTheme

if TYPE_CHECKING:
    from cvinsight.builder.models import AboutInfo, ResumeSnapshot, TagEntry

__all__ = ["HealthGreenTemplate"]

_PACKAGES: list[Package] = [
    Package("titlesec"),
    Package("dashrule"),
]

_PREAMBLE_SETUP = r"""
\definecolor{chipbg}{HTML}{E7F2EA}
\titleformat{\section}{\color{accent}\normalsize\bfseries}{}{0em}{}
\titlespacing{\section}{0pt}{10pt}{5pt}
\setlength{\fboxsep}{2pt}
\newcommand{\sectionend}{\par\vspace{4pt}{\color{accent}\hdashrule{\linewidth}{0.4pt}{2pt 1.5pt}}}
\newcommand{\chip}[1]{\colorbox{chipbg}{\strut\small #1}}
"""

_SEPARATOR = r"\sectionend"


class HealthGreenTemplate(ResumeTemplate):
    """Healthcare style with green headings, dashed rules and skill chips."""

    @property
    def name(self) -> str:
        return "Health Green"

    @property
    def theme(self) -> TemplateTheme:
        return TemplateTheme.GREEN

    def build(self, snapshot: ResumeSnapshot) -> Document:
        doc = self.create_document(packages=_PACKAGES, preamble=_PREAMBLE_SETUP)
        self._add_heading(doc, snapshot.about)

        sections: list[tuple[str, list[str]]] = []
        if snapshot.about.summary:
            sections.append(("Summary", [self.text(snapshot.about.summary)]))
        if snapshot.work_list:
            body = []
            for entry in snapshot.work_list:
                body.append(rf"\textbf{{{self.work_heading(entry)}}}\\{{}}")
                body.append(rf"{{\color{{muted}}{self.work_dates(entry)}}}\\{{}}")
                if entry.description:
                    body.append(rf"{self.text(entry.description)}\\{{}}")
            sections.append(("Work Experience", body))
        if snapshot.education_list:
            body = []
            for entry in snapshot.education_list:
                body.append(rf"\textbf{{{self.education_heading(entry)}}}\\{{}}")
                body.append(rf"{{\color{{muted}}{self.education_dates(entry)}}}\\{{}}")
            sections.append(("Education", body))
        if snapshot.projects:
            body = []
            for entry in snapshot.projects:
                body.append(rf"\textbf{{{self.text(self.or_placeholder(entry.name, 'Project'))}}}\\{{}}")
                if entry.description:
                    body.append(rf"{self.text(entry.description)}\\{{}}")
                for link in (entry.url, entry.github):
                    if link:
                        body.append(rf"{{\color{{accent}}{self.text(self._strip_protocol(link))}}}\\{{}}")
            sections.append(("Projects", body))
        if self.has_skills(snapshot):
            body = []
            for label, tags in (
                ("Technical", snapshot.skills),
                ("Soft", snapshot.soft_skills),
                ("Interests", snapshot.interests),
            ):
                if tags:
                    body.append(rf"\textit{{{label}}}\\[2pt]")
                    body.append(rf"{self._chips(tags)}\\[3pt]")
            sections.append(("Skills", body))
        if snapshot.languages:
            sections.append(("Languages", [self.languages_line(snapshot.languages)]))
        if snapshot.certificates:
            sections.append(
                ("Certifications", [rf"{self.certificate_line(e)}\\{{}}" for e in snapshot.certificates])
            )
        if snapshot.social_activities:
            body = []
            for entry in snapshot.social_activities:
                body.append(rf"\textbf{{{self.activity_heading(entry)}}}\\{{}}")
                if entry.description:
                    body.append(rf"{self.text(entry.description)}\\{{}}")
            sections.append(("Social Activities", body))

        for title, body in sections:
            doc.append(NoEscape("\n".join([rf"\section{{{title}}}", *body, _SEPARATOR])))

        return doc

    def _add_heading(self, doc: Document, about: AboutInfo) -> None:
        ph = self.or_placeholder
        lines = [
            r"\begin{minipage}[c]{0.78\linewidth}",
            rf"{{\LARGE\bfseries\color{{accent}} {self.text(ph(about.name, 'Your Name'))}}}\\[2pt]",
            rf"{{\large {self.text(ph(about.role, 'Your Role'))}}}\\[2pt]",
            rf"{self.text(ph(about.email, 'email@example.com'))} • "
            rf"{self.text(ph(about.phone, '+123456789'))}\\{{}}",
            self.text(ph(about.address, "City, Country")),
            r"\end{minipage}\hfill",
        ]
        picture = self.local_picture(about.picture)
        if picture:
            lines += [
                r"\begin{minipage}[c]{0.18\linewidth}\raggedleft",
                rf"\includegraphics[width=0.9in]{{{picture}}}",
                r"\end{minipage}",
            ]
        lines.append(_SEPARATOR)
        doc.append(NoEscape("\n".join(lines)))

    def _chips(self, tags: tuple[TagEntry, ...]) -> str:
        return r"\hspace{3pt}".join(rf"\chip{{{self.text(tag.name)}}}" for tag in tags)
