"""Shared test fixtures."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import fitz
import pytest

from interleave.config import InterleaveConfig
from interleave.core.outline.org import OrgOutline
from interleave.core.session.lifecycle import SessionLifecycle
from interleave.layout import WindowLayout
from tests.unit.fakes import FakePrompter, FakeViewer, StartSession
from tests.unit.samples import MULTI_DOC, SINGLE_DOC


@pytest.fixture(autouse=True)
def _no_user_config() -> Iterator[None]:
    """Keep tests away from the user's config files."""
    with patch("interleave.config.CONFIG_FILES", []):
        yield


@pytest.fixture
def single_outline() -> OrgOutline:
    return OrgOutline.parse(SINGLE_DOC)


@pytest.fixture
def multi_outline() -> OrgOutline:
    return OrgOutline.parse(MULTI_DOC)


@pytest.fixture
def start_session() -> StartSession:
    """Return a helper that starts a session on an outline with a fake viewer."""

    def _start(
        outline: OrgOutline,
        *,
        config: InterleaveConfig | None = None,
        prompter: FakePrompter | None = None,
        page_count: int = 10,
    ) -> tuple[SessionLifecycle, FakeViewer, WindowLayout]:
        layout = WindowLayout()
        lifecycle = SessionLifecycle(
            layout, prompter or FakePrompter(), config or InterleaveConfig()
        )
        viewers: list[FakeViewer] = []

        def factory(path: Path) -> FakeViewer:
            viewers.append(FakeViewer(path, page_count))
            return viewers[-1]

        lifecycle.start(outline, factory)
        return lifecycle, viewers[0], layout

    return _start


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    """Write a blank 5-page PDF."""
    path = tmp_path / "sample.pdf"
    doc = fitz.open()
    for _ in range(5):
        doc.new_page()
    doc.save(str(path))
    doc.close()
    return path
