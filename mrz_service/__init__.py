from .checksum import compute_check_digit, validate
from .exceptions import InvalidCharset, MRZParseError, NotEnoughLines, SessionNotFound, WrongLength
from .extraction import extract_can, extract_mrz_candidate
from .frame_pump import FrameGate, FramePump, LatestResultSlot, ResultDeduplicator
from .models import Checks, MRZFormat, MRZResult, OCRLine, ScanEvent
from .mrz_parser import detect_format, is_passport_document, mrz_key_from_text, parse_and_validate, yymmdd_to_iso
from .normalizer import normalize, normalize_line

__all__ = [
    "compute_check_digit",
    "validate",
    "InvalidCharset",
    "MRZParseError",
    "NotEnoughLines",
    "SessionNotFound",
    "WrongLength",
    "extract_can",
    "extract_mrz_candidate",
    "FrameGate",
    "FramePump",
    "LatestResultSlot",
    "ResultDeduplicator",
    "Checks",
    "MRZFormat",
    "MRZResult",
    "OCRLine",
    "ScanEvent",
    "detect_format",
    "is_passport_document",
    "mrz_key_from_text",
    "parse_and_validate",
    "yymmdd_to_iso",
    "normalize",
    "normalize_line",
]
