# Path: anki_paste/models/__init__.py
from .model_format import Delimiter, ModelFormatConfig, MODEL_FORMATS, get_model_format, supported_models
from .note import NoteRecord, PreviewCard

__all__ = [
    "Delimiter",
    "ModelFormatConfig",
    "MODEL_FORMATS",
    "get_model_format",
    "supported_models",
    "NoteRecord",
    "PreviewCard",
]
