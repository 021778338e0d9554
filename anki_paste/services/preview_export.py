# Path: anki_paste/services/preview_export.py
import logging
from pathlib import Path
from typing import Any, Dict, List

from ruamel.yaml import YAML

from anki_paste.models.note import PreviewCard

logger = logging.getLogger(__name__)

def _create_yaml_dumper() -> YAML:
    yaml = YAML()
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.width = 4096
    yaml.allow_unicode = True
    return yaml

def preview_to_entries(cards: List[PreviewCard]) -> List[Dict[str, Any]]:
    return [
        {
            "line": card.sequence_id,
            "include": card.include_in_import,
            "deck": card.note.deck_name,
            "model": card.note.model_name,
            "tags": list(card.tags),
            "fields": dict(card.note.fields),
        }
        for card in cards
    ]

def export_preview(cards: List[PreviewCard], path: Path) -> Path:
    """Ghi preview ra file YAML để người dùng kiểm tra trước khi import."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        _create_yaml_dumper().dump(preview_to_entries(cards), f)
    logger.info(f"Preview with {len(cards)} cards written to {path}")
    return path
