from __future__ import annotations

import pytest
from pydantic import ValidationError

from anki_paste.models import (
    Delimiter,
    MODEL_FORMATS,
    ModelFormatConfig,
    NoteRecord,
    PreviewCard,
    get_model_format,
    supported_models,
)


def test_delimiter_tokens_and_string_equality():
    assert Delimiter.tokens() == [";", "|", "//"]
    assert Delimiter(";") is Delimiter.SEMICOLON
    assert Delimiter.DOUBLE_SLASH == "//"


def test_supported_models_table():
    assert supported_models() == [
        "Básico",
        "Básico (digite a resposta)",
        "Básico (e cartão invertido)",
        "Omissão de Palavras",
    ]
    assert get_model_format("Omissão de Palavras").field_names == ("Texto", "Verso Extra")
    assert get_model_format("Basic") is None


def test_model_formats_table_is_read_only():
    with pytest.raises(TypeError):
        MODEL_FORMATS["Basic"] = ModelFormatConfig(required_field_count=1, field_names=("Front",))


def test_model_format_config_is_frozen():
    config = get_model_format("Básico")
    with pytest.raises(ValidationError):
        config.required_field_count = 5


def test_model_format_config_field_names_must_match_count():
    with pytest.raises(ValidationError):
        ModelFormatConfig(required_field_count=3, field_names=("A", "B"))


def test_model_format_counts_and_hint():
    config = get_model_format("Básico")
    assert config.max_field_count == 3
    assert config.expected_counts() == (2, 3)
    assert config.expected_counts_label() == "2 or 3"
    assert config.format_hint("|") == "Frente|Verso|Tags (optional)"

    strict = ModelFormatConfig(required_field_count=1, field_names=("Front",), tags_optional=False)
    assert strict.max_field_count == 1
    assert strict.expected_counts_label() == "1"
    assert strict.format_hint() == "Front"


def _note(**overrides):
    data = {
        "deckName": "Default",
        "modelName": "Básico",
        "fields": {"Frente": "f", "Verso": "v"},
        "tags": ["a"],
    }
    data.update(overrides)
    return NoteRecord(**data)


def test_note_record_accepts_api_aliases():
    note = _note()
    assert note.deck_name == "Default"
    assert note.model_name == "Básico"
    assert note.get_field_content("Frente") == "f"
    assert note.get_field_content("Missing") == ""


def test_note_record_rejects_empty_deck():
    with pytest.raises(ValidationError):
        _note(deckName="")


def test_note_record_rejects_unknown_model():
    with pytest.raises(ValidationError):
        _note(modelName="Basic")


def test_note_record_requires_every_configured_field():
    with pytest.raises(ValidationError):
        _note(fields={"Frente": "only front"})


def test_note_record_tags_are_trimmed_and_deduplicated():
    note = _note(tags=[" b ", "a", "b"])
    assert note.tags == ["b", "a"]

    with pytest.raises(ValidationError):
        _note(tags=["ok", "   "])


def test_preview_card_defaults_and_toggle():
    card = PreviewCard(sequence_id=3, front_preview="f", back_preview="v", note=_note())
    assert card.include_in_import is True
    assert card.tags == []

    card.include_in_import = False
    assert card.include_in_import is False


def test_preview_card_sequence_id_is_one_based():
    with pytest.raises(ValidationError):
        PreviewCard(sequence_id=0, note=_note())
