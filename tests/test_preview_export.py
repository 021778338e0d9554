from __future__ import annotations

from pathlib import Path

from ruamel.yaml import YAML

from anki_paste.core.parser import parse_notes
from anki_paste.services.preview_export import export_preview, preview_to_entries


def test_entries_shape():
    cards = parse_notes("Olá;Hello;idiomas", "Inglês", "Básico", ";", ";")
    cards[0].include_in_import = False

    assert preview_to_entries(cards) == [
        {
            "line": 1,
            "include": False,
            "deck": "Inglês",
            "model": "Básico",
            "tags": ["idiomas"],
            "fields": {"Frente": "Olá", "Verso": "Hello"},
        }
    ]


def test_export_writes_yaml(tmp_path: Path):
    cards = parse_notes("Olá;Hello;idiomas\n\nGato|Cat", "Inglês", "Básico", ";", ";")
    target = tmp_path / "out" / "preview.yaml"

    export_preview(cards, target)

    text = target.read_text(encoding="utf-8")
    assert "Olá" in text
    data = YAML(typ="safe").load(text)
    assert [entry["line"] for entry in data] == [1, 3]
    assert data[1]["fields"] == {"Frente": "Gato", "Verso": "Cat"}
    assert data[1]["tags"] == []
