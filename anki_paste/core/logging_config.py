# Path: anki_paste/core/logging_config.py
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from anki_paste.core.config import settings

__all__ = ["setup_logging", "reset_logging", "LOG_FILENAME"]

LOG_FILENAME = "anki_paste.log"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Thư viện HTTP log quá nhiều ở mức DEBUG
NOISY_LOGGERS = ("urllib3", "requests")

def _file_handler(log_file: Path) -> logging.Handler:
    # 5MB mỗi file, giữ 3 bản cũ
    handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    handler.setLevel(logging.DEBUG)
    return handler

def _console_handler(level: str) -> logging.Handler:
    # markup=False: nội dung log chứa text người dùng dán vào, có thể có "[...]"
    handler = RichHandler(rich_tracebacks=True, markup=False, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(level)
    return handler

def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> Path:
    """
    Console qua Rich theo log_level, file xoay vòng luôn ở mức DEBUG.
    Gọi lại nhiều lần sẽ thay thế handler cũ. Trả về đường dẫn file log.
    """
    directory = log_dir or settings.LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / LOG_FILENAME

    reset_logging()
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(_console_handler(log_level))
    root.addHandler(_file_handler(log_file))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return log_file

def reset_logging() -> None:
    """Đóng và gỡ mọi handler của root logger (giải phóng file log)."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
