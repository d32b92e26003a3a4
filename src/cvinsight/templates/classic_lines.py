"""Classic Lines resume template.

Centered name over a ``phone | email | linkedin`` line, a black rule under
the header and uppercase section titles underlined by a thin rule.
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
        TagEntry,
        WorkEntry,
    )

__all__ = ["ClassicLinesTemplate"]

_PACKAGES: list[Package] = [
    Package("titlesec"),
]

_PREAMBLE_SETUP = r"""
\titleformat{\section}{\normalsize\bfseries}{}{0em}{}[\color{black}\titlerule]
\titlespacing{\section}{0pt}{10pt}{5pt}
\setlist[itemize]{leftmargin=0.15in, itemsep=0pt, topsep=2pt}
"""


class ClassicLinesTemplate(ResumeTemplate):
    """Black and white layout with ruled, uppercase headings."""

    @property
    def name(self) -> str:
        return "Classic Lines"

    @property
    def theme(self) -> TemplateTheme:
        return TemplateTheme.MONO

    def build(self, snapshot: ResumeSnapshot) -> Document:
        doc = self.create_document(packages=_PACKAGES, preamble=_PREAMBLE_SETUP)
        self._add_heading(doc, snapshot.about)

        if snapshot.about.summary:
            self._section(doc, "Summary", [self.text(snapshot.about.summary)])
        if snapshot.work_list:
            self._add_work(doc, snapshot.work_list)
        if snapshot.projects:
            self._add_projects(doc, snapshot.projects)
        if snapshot.education_list:
            self._add_education(doc, snapshot.education_list)
        if self.has_skills(snapshot):
            tags = snapshot.skills + snapshot.soft_skills + snapshot.interests
            self._add_skills(doc, tags)
        if snapshot.languages:
            self._add_languages(doc, snapshot.languages)
        if snapshot.certificates:
            self._add_certificates(doc, snapshot.certificates)
        if snapshot.social_activities:
            self._add_activities(doc, snapshot.social_activities)

        return doc

    # ------------------------------------------------------------------

    def _section(self, doc: Document, title: str, body: list[str]) -> None:
        heading = self.escape_latex(title.upper())
        doc.append(NoEscape("\n".join([rf"\section{{{heading}}}", *body])))

    def _add_heading(self, doc: Document, about: AboutInfo) -> None:
        name = self.text(self.or_placeholder(about.name, "Your Name"))
        contact = [
            self.text(self.or_placeholder(about.phone, "+123456789")),
            self.text(self.or_placeholder(about.email, "email@example.com")),
        ]
        if about.linkedin:
            contact.append(self.text(self._strip_protocol(about.linkedin)))

        lines = [
            r"\begin{center}",
            rf"{{\LARGE\bfseries {name}}}\\[3pt]",
        ]
        if about.role:
            lines.append(rf"{self.text(about.role)}\\[2pt]")
        lines += [
            r" $|$ ".join(contact),
            r"\end{center}",
            r"\vspace{-6pt}{\color{black}\rule{\linewidth}{1pt}}",
        ]
        doc.append(NoEscape("\n".join(lines)))

    def _add_work(self, doc: Document, entries: tuple[WorkEntry, ...]) -> None:
        body = []
        for entry in entries:
            body.append(
                rf"\textbf{{{self.work_heading(entry)}}}\hfill {self.work_dates(entry)}\\{{}}"
            )
            if entry.description:
                body.append(rf"{self.text(entry.description)}\\{{}}")
            body.append(r"\vspace{3pt}")
        self._section(doc, "Relevant Projects / Work Experience", body)

    def _add_projects(self, doc: Document, entries: tuple[ProjectEntry, ...]) -> None:
        body = []
        for entry in entries:
            heading = rf"\textbf{{{self.text(self.or_placeholder(entry.name, 'Project'))}}}"
            link = entry.url or entry.github
            if link:
                heading += rf"\hfill {self.text(self._strip_protocol(link))}"
            body.append(rf"{heading}\\{{}}")
            if entry.description:
                body.append(rf"{self.text(entry.description)}\\{{}}")
            body.append(r"\vspace{3pt}")
        self._section(doc, "Projects", body)

    def _add_education(self, doc: Document, entries: tuple[EducationEntry, ...]) -> None:
        body = []
        for entry in entries:
            body.append(
                rf"\textbf{{{self.education_heading(entry)}}}\hfill {self.education_dates(entry)}\\{{}}"
            )
            body.append(r"\vspace{3pt}")
        self._section(doc, "Education", body)

    def _add_skills(self, doc: Document, tags: tuple[TagEntry, ...]) -> None:
        body = [r"\begin{itemize}"]
        body += [rf"\item{{}} {self.text(tag.name)}" for tag in tags]
        body.append(r"\end{itemize}")
        self._section(doc, "Skills & Interests", body)

    def _add_languages(self, doc: Document, languages: tuple[LanguageEntry, ...]) -> None:
        self._section(doc, "Languages", [self.languages_line(languages)])

    def _add_certificates(self, doc: Document, entries: tuple[CertificateEntry, ...]) -> None:
        self._section(doc, "Certifications", [rf"{self.certificate_line(e)}\\{{}}" for e in entries])

    def _add_activities(self, doc: Document, entries: tuple[SocialActivityEntry, ...]) -> None:
        body = []
        for entry in entries:
            body.append(rf"\textbf{{{self.activity_heading(entry)}}}\\{{}}")
            if entry.description:
                body.append(rf"{self.text(entry.description)}\\{{}}")
        self._section(doc, "Activities & Leadership", body)
