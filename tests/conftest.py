from __future__ import annotations

import tempfile
import threading
from collections.abc import Iterator
from pathlib import Path

import pytest
from pylatex import Document

from cvinsight.builder.artifacts import PdfArtifact, RenderError


class FakeMaterializer:
    """Stands in for LaTeX compilation: writes a tiny PDF and records the source."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.sources: list[str] = []
        self.artifacts: list[PdfArtifact] = []

    def __call__(self, doc: Document, stem: str) -> PdfArtifact:
        source = doc.dumps()
        self.sources.append(source)
        if self.fail:
            raise RenderError("LaTeX compilation failed. Check that all required packages are installed.")
        workdir = Path(tempfile.mkdtemp(prefix="cvinsight-test-"))
        path = workdir / f"{stem}.pdf"
        path.write_bytes(b"%PDF-1.4 fake content")
        artifact = PdfArtifact(workdir=workdir, path=path)
        self.artifacts.append(artifact)
        return artifact


@pytest.fixture
def fake_materializer() -> Iterator[FakeMaterializer]:
    materializer = FakeMaterializer()
    yield materializer
    for artifact in materializer.artifacts:
        artifact.release()


@pytest.fixture
def failing_materializer() -> FakeMaterializer:
    return FakeMaterializer(fail=True)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer .env values out of the tests."""
    for name in (
        "CVINSIGHT_API_URL",
        "CVINSIGHT_API_TIMEOUT",
        "CVINSIGHT_API_TOKEN",
        "CVINSIGHT_LATEX_COMPILER",
        "CVINSIGHT_PREVIEW_DEBOUNCE_MS",
        "CVINSIGHT_PICTURE_DIR",
        "CVINSIGHT_SESSION_TTL",
        "CVINSIGHT_MAX_SESSIONS",
    ):
        monkeypatch.delenv(name, raising=False)


class GatedMaterializer(FakeMaterializer):
    """Blocks its first compile until ``gate`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.gate = threading.Event()
        self._calls = 0

    def __call__(self, doc: Document, stem: str) -> PdfArtifact:
        self._calls += 1
        if self._calls == 1:
            self.gate.wait(timeout=5)
        return super().__call__(doc, stem)


@pytest.fixture
def gated_materializer() -> Iterator[GatedMaterializer]:
    materializer = GatedMaterializer()
    yield materializer
    materializer.gate.set()
    for artifact in materializer.artifacts:
        artifact.release()
