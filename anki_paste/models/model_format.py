# Path: anki_paste/models/model_format.py
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator

__all__ = [
    "Delimiter",
    "ModelFormatConfig",
    "MODEL_FORMATS",
    "get_model_format",
    "supported_models",
]

class Delimiter(str, Enum):
    """Các ký tự phân cách cột mà người dùng được phép dùng khi dán text."""

    SEMICOLON = ";"
    PIPE = "|"
    DOUBLE_SLASH = "//"

    @classmethod
    def tokens(cls) -> List[str]:
        return [member.value for member in cls]

class ModelFormatConfig(BaseModel):
    """
    Định dạng cột cho một Note Type.
    Thứ tự của field_names chính là thứ tự cột trong text đầu vào.
    """

    model_config = ConfigDict(frozen=True)

    required_field_count: int = Field(
        ...,
        ge=1,
        description="Number of mandatory content columns"
    )

    field_names: Tuple[str, ...] = Field(
        ...,
        description="Anki field names, in column order"
    )

    tags_optional: bool = Field(
        default=True,
        description="Whether one extra trailing column (tags) is accepted"
    )

    @model_validator(mode="after")
    def check_field_names_match_count(self) -> "ModelFormatConfig":
        if len(self.field_names) != self.required_field_count:
            raise ValueError(
                f"Expected {self.required_field_count} field names, got {len(self.field_names)}"
            )
        return self

    @property
    def max_field_count(self) -> int:
        return self.required_field_count + (1 if self.tags_optional else 0)

    def expected_counts(self) -> Tuple[int, ...]:
        if self.tags_optional:
            return (self.required_field_count, self.max_field_count)
        return (self.required_field_count,)

    def expected_counts_label(self) -> str:
        """'2' hoặc '2 or 3' (khi cho phép cột tags)."""
        return " or ".join(str(count) for count in self.expected_counts())

    def format_hint(self, delimiter: str = Delimiter.SEMICOLON.value) -> str:
        """Ví dụ: 'Frente;Verso;Tags (optional)'."""
        columns = list(self.field_names)
        if self.tags_optional:
            columns.append("Tags (optional)")
        return delimiter.join(columns)

def _basic(front: str = "Frente", back: str = "Verso") -> ModelFormatConfig:
    return ModelFormatConfig(required_field_count=2, field_names=(front, back), tags_optional=True)

# Tên model theo bản cài đặt tiếng Bồ Đào Nha của Anki.
MODEL_FORMATS: Mapping[str, ModelFormatConfig] = MappingProxyType({
    "Básico": _basic(),
    "Básico (digite a resposta)": _basic(),
    "Básico (e cartão invertido)": _basic(),
    "Omissão de Palavras": _basic("Texto", "Verso Extra"),
})

def get_model_format(model_name: str) -> Optional[ModelFormatConfig]:
    return MODEL_FORMATS.get(model_name)

def supported_models() -> List[str]:
    return list(MODEL_FORMATS.keys())
