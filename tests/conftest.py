# Shared pytest fixtures
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from anki_paste.core.config import settings
from anki_paste.core.logging_config import reset_logging


@pytest.fixture(autouse=True)
def isolated_logs(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(settings, "LOG_DIR", tmp_path / "logs")
    yield tmp_path / "logs"
    reset_logging()


@pytest.fixture()
def isolated_cwd(monkeypatch, tmp_path: Path) -> Path:
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


class FakeAdapter:
    """Stand-in for AnkiConnectAdapter that records submitted notes."""

    def __init__(self, decks=None, models=None, version: int = 6, fail_indices=()):
        self.decks = decks if decks is not None else ["Default", "Geografia"]
        self.models = models if models is not None else ["Básico", "Cloze", "Omissão de Palavras"]
        self.version = version
        self.fail_indices = set(fail_indices)
        self.added: List[Dict[str, Any]] = []
        self.allow_duplicate: Optional[bool] = None

    def get_version(self) -> int:
        return self.version

    def get_deck_names(self) -> List[str]:
        return list(self.decks)

    def get_model_names(self) -> List[str]:
        return list(self.models)

    def add_notes(self, notes, allow_duplicate: bool = False):
        self.added.extend(notes)
        self.allow_duplicate = allow_duplicate
        return [None if i in self.fail_indices else 1000 + i for i in range(len(notes))]


@pytest.fixture()
def make_adapter():
    return FakeAdapter


@pytest.fixture()
def fake_adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture()
def sample_text() -> str:
    return (
        "Qual a capital da França?;Paris;geografia,europa\n"
        "\n"
        "Quem escreveu Dom Casmurro? | Machado de Assis | literatura\n"
        "2 + 2 // 4\n"
    )
