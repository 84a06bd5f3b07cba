from __future__ import annotations

from collections.abc import Callable, Sequence

import structlog

from .exceptions import InvalidCharset, MRZParseError, NotEnoughLines, WrongLength
from .layouts import extract_td1, extract_td2, extract_td3
from .models import MRZFormat, MRZResult
from .normalizer import charset_ok, normalize_block, split_lines, unfill

logger = structlog.get_logger("mrz_parser")

Extractor = Callable[[Sequence[str]], MRZResult]

# (line count, line length) -> layout
_LAYOUTS: dict[tuple[int, int], tuple[MRZFormat, Extractor]] = {
    (3, 30): (MRZFormat.TD1, extract_td1),
    (2, 36): (MRZFormat.TD2, extract_td2),
    (2, 44): (MRZFormat.TD3, extract_td3),
}


def _layout_for(lines: Sequence[str]) -> tuple[MRZFormat, Extractor]:
    if len(lines) < 2:
        raise NotEnoughLines(f"expected 2 or 3 MRZ lines, got {len(lines)}")
    if not all(charset_ok(ln) for ln in lines):
        raise InvalidCharset("MRZ lines may only contain A-Z, 0-9 and '<'")
    lengths = {len(ln) for ln in lines}
    layout = _LAYOUTS.get((len(lines), lengths.pop())) if len(lengths) == 1 else None
    if layout is None:
        shape = "/".join(str(len(ln)) for ln in lines)
        raise WrongLength(f"line lengths {shape} match no TD1, TD2 or TD3 layout")
    return layout


def detect_format(lines: Sequence[str]) -> MRZFormat:
    """Decide the layout from line count and exact line length only."""
    return _layout_for(lines)[0]


def parse_lines(lines: Sequence[str]) -> MRZResult:
    _, extractor = _layout_for(lines)
    return extractor(lines)


def parse_and_validate(raw_text: str, *, strict: bool = True) -> MRZResult:
    lines = split_lines(normalize_block(raw_text, strict=strict))
    try:
        result = parse_lines(lines)
    except MRZParseError as exc:
        logger.debug("mrz_parse_failed", code=exc.code, line_count=len(lines))
        raise
    logger.debug("mrz_parsed", format=result.format.value, is_valid=result.is_valid)
    return result


def mrz_key_from_text(raw_text: str, *, strict: bool = True) -> str:
    return parse_and_validate(raw_text, strict=strict).mrz_key


def yymmdd_to_iso(value: str | None) -> str:
    if not value or len(value) != 6 or not value.isascii() or not value.isdigit():
        return ""
    yy = int(value[:2])
    year = 1900 + yy if yy > 50 else 2000 + yy
    return f"{year:04d}-{value[2:4]}-{value[4:6]}"


def is_passport_document(result: MRZResult) -> bool:
    if result.format is MRZFormat.TD3:
        return True
    return unfill(result.document_type).upper().startswith("P")
