# Path: anki_paste/services/__init__.py
