# Path: anki_paste/core/preferences.py
import tomllib
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator

from anki_paste.core.config import settings
from anki_paste.models.model_format import Delimiter, MODEL_FORMATS, supported_models

__all__ = ["ImportPreferences", "Preferences", "load_preferences", "find_preferences_file", "resolve_preferences"]

class ImportPreferences(BaseModel):
    default_deck: str = Field(default="Default", description="Deck mặc định khi import")
    default_model: str = Field(default="Básico", description="Note Type mặc định")
    allowed_models: List[str] = Field(
        default_factory=lambda: ["Básico", "Básico (e cartão invertido)", "Omissão de Palavras"],
        description="Các Note Type hiển thị cho người dùng"
    )
    field_delimiter: Delimiter = Field(default=Delimiter.SEMICOLON, description="Delimiter của text dán vào")
    anki_delimiter: Delimiter = Field(default=Delimiter.SEMICOLON, description="Delimiter cấu hình bên Anki")

    @field_validator("default_model")
    @classmethod
    def check_default_model(cls, v: str) -> str:
        if v not in MODEL_FORMATS:
            raise ValueError(f"Unsupported note type: {v!r}. Choose one of: {', '.join(supported_models())}")
        return v

    @field_validator("allowed_models")
    @classmethod
    def check_allowed_models(cls, v: List[str]) -> List[str]:
        unknown = [name for name in v if name not in MODEL_FORMATS]
        if unknown:
            raise ValueError(f"Unsupported note types: {', '.join(unknown)}")
        return v

class Preferences(BaseModel):
    importer: ImportPreferences = Field(default_factory=ImportPreferences)

def load_preferences(path: Path) -> Preferences:
    """
    Đọc và validate file anki-paste.toml.

    Raises:
        FileNotFoundError: File không tồn tại.
        ValueError: TOML hỏng hoặc giá trị không hợp lệ (kèm tên file).
    """
    if not path.is_file():
        raise FileNotFoundError(f"Preferences file not found at: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"{path} is not valid TOML: {e}") from e

    try:
        return Preferences.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid preferences in {path}: {e}") from e

def find_preferences_file(start_path: Path = Path(".")) -> Optional[Path]:
    """File anki-paste.toml gần nhất, tính từ start_path đi lên root."""
    start = start_path.resolve()
    for directory in (start, *start.parents):
        candidate = directory / settings.PREFERENCES_FILENAME
        if candidate.is_file():
            return candidate
    return None

def resolve_preferences(start_path: Path = Path(".")) -> Preferences:
    """Preferences từ file gần nhất, hoặc giá trị mặc định nếu không có file."""
    path = find_preferences_file(start_path)
    if path is None:
        return Preferences()
    return load_preferences(path)
