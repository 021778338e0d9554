# Path: anki_paste/services/init_service.py
import json
from pathlib import Path
from typing import Optional
from rich.console import Console

from anki_paste.core.config import settings
from anki_paste.models.model_format import Delimiter

def _toml_string(value: str) -> str:
    # JSON string (không ép ASCII) cũng là basic string hợp lệ của TOML
    return json.dumps(value, ensure_ascii=False)

class InitService:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def create_preferences(
        self,
        path: Path,
        deck: str = "Default",
        model: str = "Básico",
        delimiter: Delimiter = Delimiter.SEMICOLON,
    ) -> Optional[Path]:
        """Tạo file anki-paste.toml mẫu. Không ghi đè file đã tồn tại."""
        config_file = path / settings.PREFERENCES_FILENAME

        if config_file.exists():
            self.console.print(f"[yellow]⚠️  Preferences file already exists at: {config_file}[/yellow]")
            return None

        template = f"""# Anki Paste preferences

[importer]
# Deck mặc định để chứa các thẻ mới tạo
default_deck = {_toml_string(deck)}
# Note Type mặc định. Phải chính xác từng ký tự.
default_model = {_toml_string(model)}
# Các Note Type được phép chọn
allowed_models = ["Básico", "Básico (e cartão invertido)", "Omissão de Palavras"]
# Delimiter trong text dán vào: ";", "|" hoặc "//"
field_delimiter = {_toml_string(delimiter.value)}
anki_delimiter = ";"
"""
        with open(config_file, "w", encoding="utf-8") as f:
            f.write(template)

        self.console.print(f"[green]✅ Created preferences at: {config_file}[/green]")
        return config_file
