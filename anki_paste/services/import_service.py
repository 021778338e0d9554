# Path: anki_paste/services/import_service.py
import logging
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from anki_paste.adapters import AnkiConnectAdapter
from anki_paste.core.parser import parse_notes
from anki_paste.core.preferences import ImportPreferences
from anki_paste.models.model_format import Delimiter, MODEL_FORMATS
from anki_paste.models.note import PreviewCard

__all__ = ["ImportService", "ImportServiceError", "NothingToImportError", "ImportResult", "AnkiData"]

logger = logging.getLogger(__name__)

class ImportServiceError(Exception):
    """Lỗi ở tầng workflow import (không phải lỗi parse hay lỗi HTTP)."""

class NothingToImportError(ImportServiceError):
    """Không có flashcard nào để gửi lên Anki."""

class AnkiData(BaseModel):
    version: int
    deck_names: List[str] = Field(default_factory=list)
    model_names: List[str] = Field(default_factory=list)

class ImportResult(BaseModel):
    deck_name: str
    note_ids: List[Optional[int]] = Field(default_factory=list)

    @property
    def submitted(self) -> int:
        return len(self.note_ids)

    @property
    def created(self) -> int:
        return sum(1 for note_id in self.note_ids if note_id is not None)

    @property
    def failed(self) -> int:
        return self.submitted - self.created

    def summary(self) -> str:
        return f"{self.created} of {self.submitted} flashcards imported into deck '{self.deck_name}'."

class ImportService:
    """
    Workflow: text dán vào -> preview -> chọn/bỏ từng card -> gửi lên Anki.
    """

    def __init__(self, adapter: AnkiConnectAdapter, preferences: Optional[ImportPreferences] = None):
        self.adapter = adapter
        self.preferences = preferences or ImportPreferences()

    def load_anki_data(self) -> AnkiData:
        """Kiểm tra kết nối, lấy deck và các Note Type mà parser hỗ trợ."""
        version = self.adapter.get_version()
        decks = self.adapter.get_deck_names()
        allowed = set(self.preferences.allowed_models) & set(MODEL_FORMATS)
        models = [name for name in self.adapter.get_model_names() if name in allowed]
        logger.debug(f"AnkiConnect v{version}: {len(decks)} decks, {len(models)} supported models")
        return AnkiData(version=version, deck_names=decks, model_names=models)

    def preview(
        self,
        raw_text: str,
        deck_name: Optional[str] = None,
        model_name: Optional[str] = None,
        delimiter: Optional[Delimiter] = None,
    ) -> List[PreviewCard]:
        deck_name = deck_name or self.preferences.default_deck
        model_name = model_name or self.preferences.default_model
        delimiter = delimiter or self.preferences.field_delimiter

        if not raw_text or not raw_text.strip():
            raise ImportServiceError("Please paste the flashcard text before parsing.")

        cards = parse_notes(raw_text, deck_name, model_name, delimiter, self.preferences.anki_delimiter)
        if not cards:
            raise NothingToImportError("No valid flashcard lines were found.")

        logger.info(f"Parsed {len(cards)} cards for deck '{deck_name}' ({model_name})")
        return cards

    @staticmethod
    def toggle(cards: List[PreviewCard], sequence_id: int) -> PreviewCard:
        for card in cards:
            if card.sequence_id == sequence_id:
                card.include_in_import = not card.include_in_import
                return card
        raise ImportServiceError(f"No card for line {sequence_id}.")

    @staticmethod
    def exclude(cards: List[PreviewCard], sequence_ids: Iterable[int]) -> int:
        """Bỏ chọn các card theo số dòng. Trả về số card đã bị bỏ."""
        targets = set(sequence_ids)
        known = {card.sequence_id for card in cards}
        unknown = sorted(targets - known)
        if unknown:
            raise ImportServiceError(f"No card for line(s): {', '.join(map(str, unknown))}.")

        count = 0
        for card in cards:
            if card.sequence_id in targets:
                card.include_in_import = False
                count += 1
        return count

    def import_cards(self, cards: List[PreviewCard], allow_duplicate: bool = False) -> ImportResult:
        selected = [card for card in cards if card.include_in_import]
        if not selected:
            raise NothingToImportError("No flashcards selected for import.")

        payload = [card.note.to_payload() for card in selected]
        deck_name = selected[0].note.deck_name

        logger.info(f"Sending {len(payload)} notes to Anki (deck '{deck_name}')...")
        note_ids = self.adapter.add_notes(payload, allow_duplicate=allow_duplicate)

        result = ImportResult(deck_name=deck_name, note_ids=note_ids or [])
        if result.failed:
            logger.warning(f"{result.failed} notes were rejected by Anki")
        logger.info(result.summary())
        return result
