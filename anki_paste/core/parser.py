# Path: anki_paste/core/parser.py
"""
Parser chuyển text dán từ clipboard (mỗi dòng một flashcard) thành PreviewCard.

Mỗi dòng có dạng `Field1;Field2[;Tags]`. Cả ba ký tự phân cách (`;`, `|`, `//`)
đều được chấp nhận trên cùng một lần dán, bất kể delimiter người dùng chọn.
Hàm thuần túy: không I/O, không log, không trạng thái chia sẻ.
"""
import re
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from anki_paste.models.model_format import Delimiter, ModelFormatConfig, get_model_format
from anki_paste.models.note import NoteRecord, PreviewCard

__all__ = [
    "ParseError",
    "ConfigurationError",
    "ConfigurationErrorKind",
    "FormatError",
    "CANONICAL_SEPARATOR",
    "normalize_line",
    "split_tags",
    "parse_notes",
    "collect_format_errors",
]

CANONICAL_SEPARATOR = ";"

# Gộp luôn khoảng trắng quanh delimiter: "a ; b" == "a;b"
_DELIMITER_PATTERN = re.compile(
    r"\s*(?:" + "|".join(re.escape(token) for token in Delimiter.tokens()) + r")\s*"
)
_TAG_SPLIT_PATTERN = re.compile(r"[\s,]+")

DelimiterLike = Union[Delimiter, str]

class ParseError(Exception):
    """Base class for errors raised while parsing pasted text."""

class ConfigurationErrorKind(str, Enum):
    MISSING_SELECTION = "missing-selection"
    UNKNOWN_MODEL = "unknown-model"

class ConfigurationError(ParseError):
    """Deck/model chưa được chọn, hoặc model không có trong bảng định dạng."""

    def __init__(self, kind: ConfigurationErrorKind, message: str, model_name: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.model_name = model_name

class FormatError(ParseError):
    """Số cột của một dòng không khớp với định dạng của model."""

    def __init__(
        self,
        line_number: int,
        line: str,
        model_name: str,
        expected_fields: Sequence[str],
        expected_counts: Tuple[int, ...],
        found: int,
        delimiter: str = CANONICAL_SEPARATOR,
    ):
        self.line_number = line_number
        self.line = line
        self.model_name = model_name
        self.expected_fields = list(expected_fields)
        self.expected_counts = expected_counts
        self.found = found
        self.delimiter = delimiter
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        counts = " or ".join(str(count) for count in self.expected_counts)
        expected_format = self.delimiter.join(self.expected_fields)
        if len(self.expected_counts) > 1:
            expected_format += f"{self.delimiter}Tags"
        return (
            f"Line {self.line_number}: invalid format for '{self.model_name}'. "
            f"Expected {counts} fields ({expected_format}), found {self.found}. "
            f"Line: {self.line!r}"
        )

def _delimiter_value(delimiter: DelimiterLike) -> str:
    return delimiter.value if isinstance(delimiter, Delimiter) else str(delimiter)

def normalize_line(line: str) -> str:
    """Thay mọi delimiter hợp lệ bằng ';' và bỏ khoảng trắng quanh nó."""
    return _DELIMITER_PATTERN.sub(CANONICAL_SEPARATOR, line)

def split_tags(text: str) -> List[str]:
    """'a, b  c' -> ['a', 'b', 'c']. Tag trùng lặp chỉ giữ lần xuất hiện đầu."""
    tokens = [token for token in _TAG_SPLIT_PATTERN.split(text.strip()) if token]
    return list(dict.fromkeys(tokens))

def _resolve_format(model_name: str) -> ModelFormatConfig:
    config = get_model_format(model_name)
    if config is None:
        raise ConfigurationError(
            ConfigurationErrorKind.UNKNOWN_MODEL,
            f"Note type '{model_name}' has no known field configuration.",
            model_name=model_name,
        )
    return config

def _iter_lines(raw_text: str) -> Iterator[Tuple[int, str, List[str]]]:
    """Yield (line_number, raw_line, parts) cho các dòng không rỗng."""
    for index, raw_line in enumerate(raw_text.strip().split("\n"), start=1):
        line = raw_line.strip()
        if not line:
            continue
        yield index, raw_line, normalize_line(line).split(CANONICAL_SEPARATOR)

def _check_field_count(
    line_number: int,
    raw_line: str,
    parts: List[str],
    model_name: str,
    config: ModelFormatConfig,
    delimiter: str,
) -> Optional[FormatError]:
    if config.required_field_count <= len(parts) <= config.max_field_count:
        return None
    return FormatError(
        line_number=line_number,
        line=raw_line,
        model_name=model_name,
        expected_fields=config.field_names,
        expected_counts=config.expected_counts(),
        found=len(parts),
        delimiter=delimiter,
    )

def parse_notes(
    raw_text: str,
    deck_name: str,
    model_name: str,
    input_delimiter: DelimiterLike,
    anki_delimiter: DelimiterLike,
) -> List[PreviewCard]:
    """
    Parse text dán vào thành danh sách PreviewCard (theo thứ tự dòng).

    Args:
        raw_text: Text thô, mỗi dòng một note.
        deck_name: Deck đích.
        model_name: Note Type, phải có trong MODEL_FORMATS.
        input_delimiter: Delimiter người dùng chọn (chỉ dùng cho thông báo lỗi).
        anki_delimiter: Giữ cho đồng bộ với cấu hình, không ảnh hưởng việc parse.

    Raises:
        ConfigurationError: Thiếu deck/model hoặc model không được hỗ trợ.
        FormatError: Dòng đầu tiên có số cột sai. Không trả về kết quả một phần.
    """
    if not deck_name or not model_name:
        raise ConfigurationError(
            ConfigurationErrorKind.MISSING_SELECTION,
            "A deck and a note type must be selected before parsing the text.",
            model_name=model_name or None,
        )
    config = _resolve_format(model_name)
    delimiter = _delimiter_value(input_delimiter)
    required = config.required_field_count

    cards: List[PreviewCard] = []
    for line_number, raw_line, parts in _iter_lines(raw_text):
        error = _check_field_count(line_number, raw_line, parts, model_name, config, delimiter)
        if error is not None:
            raise error

        fields = {name: parts[j].strip() for j, name in enumerate(config.field_names)}
        tags: List[str] = []
        if config.tags_optional and len(parts) == config.max_field_count:
            tags = split_tags(parts[required])

        note = NoteRecord(deck_name=deck_name, model_name=model_name, fields=fields, tags=tags)
        cards.append(
            PreviewCard(
                sequence_id=line_number,
                front_preview=fields.get(config.field_names[0], ""),
                back_preview=fields[config.field_names[1]] if required > 1 else "",
                tags=list(tags),
                include_in_import=True,
                note=note,
            )
        )
    return cards

def collect_format_errors(
    raw_text: str,
    model_name: str,
    input_delimiter: DelimiterLike = Delimiter.SEMICOLON,
) -> List[FormatError]:
    """
    Kiểm tra toàn bộ text và trả về tất cả các dòng sai định dạng
    (khác với parse_notes dừng ở lỗi đầu tiên). List rỗng = text hợp lệ.
    """
    if not model_name:
        raise ConfigurationError(
            ConfigurationErrorKind.MISSING_SELECTION,
            "A note type must be selected before checking the text.",
        )
    config = _resolve_format(model_name)
    delimiter = _delimiter_value(input_delimiter)
    errors = []
    for line_number, raw_line, parts in _iter_lines(raw_text):
        error = _check_field_count(line_number, raw_line, parts, model_name, config, delimiter)
        if error is not None:
            errors.append(error)
    return errors
