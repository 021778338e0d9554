# Path: anki_paste/adapters/__init__.py
from .anki_connect import AnkiConnectAdapter, AnkiConnectError

__all__ = ["AnkiConnectAdapter", "AnkiConnectError"]
