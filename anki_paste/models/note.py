# Path: anki_paste/models/note.py
from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from anki_paste.models.model_format import MODEL_FORMATS

__all__ = ["NoteRecord", "PreviewCard"]

class NoteRecord(BaseModel):
    """
    Note sẵn sàng để gửi lên AnkiConnect (action 'addNotes').
    Alias camelCase map trực tiếp với payload của API.
    """

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    deck_name: str = Field(
        ...,
        alias="deckName",
        min_length=1,
        description="Target deck name in Anki (e.g. 'Default')"
    )

    model_name: str = Field(
        ...,
        alias="modelName",
        description="Note Type name, must be one of the supported formats"
    )

    # Fields là dict: {"Frente": "...", "Verso": "..."}
    fields: Dict[str, str] = Field(
        ...,
        description="Field name -> trimmed content"
    )

    tags: List[str] = Field(
        default_factory=list,
        description="Tags in order of appearance"
    )

    @field_validator("model_name")
    @classmethod
    def check_model_supported(cls, v: str) -> str:
        if v not in MODEL_FORMATS:
            raise ValueError(f"Unsupported note type: {v!r}")
        return v

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: List[str]) -> List[str]:
        cleaned = [tag.strip() for tag in v]
        if any(not tag for tag in cleaned):
            raise ValueError("Tags cannot be empty")
        # Giữ thứ tự xuất hiện, bỏ trùng lặp
        return list(dict.fromkeys(cleaned))

    @model_validator(mode="after")
    def check_required_fields_present(self) -> "NoteRecord":
        config = MODEL_FORMATS[self.model_name]
        missing = [name for name in config.field_names if name not in self.fields]
        if missing:
            raise ValueError(f"Missing fields for {self.model_name}: {', '.join(missing)}")
        return self

    def get_field_content(self, field_name: str) -> str:
        return self.fields.get(field_name, "")

    def to_payload(self) -> Dict[str, Any]:
        """Dict đúng format AnkiConnect: {deckName, modelName, fields, tags}."""
        return self.model_dump(by_alias=True)

class PreviewCard(BaseModel):
    """Một dòng hợp lệ của text đầu vào, kèm cờ chọn/bỏ trước khi import."""

    sequence_id: int = Field(
        ...,
        ge=1,
        description="1-based line number in the pasted text (gaps are expected)"
    )
    front_preview: str = ""
    back_preview: str = ""
    tags: List[str] = Field(default_factory=list)
    include_in_import: bool = True
    note: NoteRecord
