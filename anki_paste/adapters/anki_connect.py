# Path: anki_paste/adapters/anki_connect.py
import logging
import requests
from typing import Any, Dict, List, Optional
from anki_paste.core.config import settings

__all__ = ["AnkiConnectAdapter", "AnkiConnectError"]

logger = logging.getLogger(__name__)

class AnkiConnectError(Exception):
    """Custom exception for logical errors returned by AnkiConnect."""
    pass

class AnkiConnectAdapter:
    """
    Adapter để giao tiếp với Anki thông qua AnkiConnect Add-on.
    Document: https://foosoft.net/projects/anki-connect/
    """

    def __init__(
        self,
        base_url: str = settings.ANKI_CONNECT_URL,
        version: int = settings.ANKI_CONNECT_VERSION,
        timeout: float = settings.REQUEST_TIMEOUT,
    ):
        self.base_url = base_url
        self.version = version
        self.timeout = timeout

    def _invoke(self, action: str, **params: Any) -> Any:
        """
        Gửi request POST đến AnkiConnect API.

        Args:
            action: Tên hành động API (ví dụ: 'deckNames', 'addNotes').
            params: Các tham số keyword arguments đi kèm.

        Returns:
            Giá trị trong trường 'result' của response.

        Raises:
            ConnectionError: Nếu không kết nối được với Anki (Anki chưa mở).
            AnkiConnectError: Nếu Anki trả về lỗi logic (ví dụ: sai tên deck).
        """
        payload: Dict[str, Any] = {
            "action": action,
            "version": self.version,
        }
        if params:
            payload["params"] = params

        try:
            response = requests.post(self.base_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            response_data = response.json()
        except requests.exceptions.ConnectionError:
            logger.error(f"Could not connect to Anki at {self.base_url}. Is Anki running?")
            raise ConnectionError(
                f"Failed to connect to Anki at {self.base_url}. Please make sure Anki is running and AnkiConnect is installed."
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"HTTP error invoking {action}: {e}")
            raise AnkiConnectError(f"HTTP error while calling AnkiConnect: {e}") from e

        if not isinstance(response_data, dict) or len(response_data) != 2:
            raise AnkiConnectError("Response has an unexpected number of fields.")

        if "error" not in response_data:
            raise AnkiConnectError("Response is missing required error field.")

        if "result" not in response_data:
            raise AnkiConnectError("Response is missing required result field.")

        if response_data["error"] is not None:
            error_msg = response_data["error"]
            logger.error(f"AnkiConnect Error [{action}]: {error_msg}")
            raise AnkiConnectError(f"{error_msg}")

        return response_data["result"]

    # =========================================================================
    # SYSTEM & CONNECTION
    # =========================================================================

    def get_version(self) -> int:
        return self._invoke("version")

    def ping(self) -> str:
        """Kiểm tra kết nối và lấy version API."""
        return f"AnkiConnect v{self.get_version()}"

    # =========================================================================
    # METADATA RETRIEVAL (Decks, Models)
    # =========================================================================

    def get_deck_names(self) -> List[str]:
        """Lấy danh sách tên tất cả các Deck."""
        return self._invoke("deckNames")

    def get_model_names(self) -> List[str]:
        """Lấy danh sách tên tất cả các Note Types (Models)."""
        return self._invoke("modelNames")

    def get_model_field_names(self, model_name: str) -> List[str]:
        """Lấy danh sách tên các Field của một Note Type."""
        return self._invoke("modelFieldNames", modelName=model_name)

    # =========================================================================
    # NOTE CREATION
    # =========================================================================

    def add_notes(self, notes: List[Dict[str, Any]], allow_duplicate: bool = False) -> List[Optional[int]]:
        """
        Thêm nhiều ghi chú cùng lúc (Bulk Insert).
        Returns: List các Note ID vừa tạo (theo thứ tự input), None nếu note đó lỗi.
        """
        if allow_duplicate:
            notes = [{**note, "options": {"allowDuplicate": True}} for note in notes]
        return self._invoke("addNotes", notes=notes)
