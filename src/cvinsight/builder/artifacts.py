"""Compiled PDF artifacts and the helpers that produce them."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from pylatex import Document
from pylatex.errors import CompilerError

logger = logging.getLogger(__name__)

__all__ = [
    "Materializer",
    "PdfArtifact",
    "RenderError",
    "download_filename",
    "materialize_pdf",
]

_WHITESPACE = re.compile(r"\s+")


class RenderError(RuntimeError):
    """Raised when a document cannot be compiled to PDF."""


@dataclass
class PdfArtifact:
    """A compiled PDF living in its own temporary directory.

    The artifact owns *workdir*; :meth:`release` removes it and may be
    called any number of times.
    """

    workdir: Path
    path: Path
    released: bool = field(default=False, init=False)

    def read_bytes(self) -> bytes:
        if self.released:
            raise RenderError(f"Artifact {self.path.name} has already been released")
        return self.path.read_bytes()

    def release(self) -> None:
        if self.released:
            return
        self.released = True
        shutil.rmtree(self.workdir, ignore_errors=True)
        logger.debug("Released PDF artifact %s", self.workdir)


Materializer = Callable[[Document, str], PdfArtifact]


def materialize_pdf(doc: Document, stem: str = "resume", *, compiler: str | None = None) -> PdfArtifact:
    """Compile *doc* into a fresh temporary directory.

    Args:
        doc: Document produced by a template renderer.
        stem: File name for the ``.tex``/``.pdf`` pair, without extension.
        compiler: LaTeX compiler to invoke; PyLaTeX picks one when *None*.

    Raises:
        RenderError: If no compiler is installed or compilation fails.
    """
    workdir = Path(tempfile.mkdtemp(prefix="cvinsight-"))
    output_stem = workdir / stem
    try:
        # PyLaTeX appends .pdf/.tex automatically
        doc.generate_pdf(str(output_stem), clean_tex=False, compiler=compiler)
    except FileNotFoundError:
        shutil.rmtree(workdir, ignore_errors=True)
        raise RenderError("LaTeX compiler not found. Please install pdflatex.") from None
    except (subprocess.CalledProcessError, CompilerError) as exc:
        shutil.rmtree(workdir, ignore_errors=True)
        raise RenderError(
            "LaTeX compilation failed. Check that all required packages are installed."
        ) from exc

    return PdfArtifact(workdir=workdir, path=Path(f"{output_stem}.pdf"))


def download_filename(name: str) -> str:
    """Return the download file name for a resume owner called *name*.

    >>> download_filename("Ada  Lovelace")
    'Ada_Lovelace_Resume.pdf'
    >>> download_filename("")
    'Resume.pdf'
    """
    cleaned = (name or "").strip()
    if not cleaned:
        return "Resume.pdf"
    return f"{_WHITESPACE.sub('_', cleaned)}_Resume.pdf"
