# Path: anki_paste/__init__.py
__version__ = "0.1.0"
