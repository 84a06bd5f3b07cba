from __future__ import annotations

import re

MRZ_ALPHABET = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789<")
FILL = "<"

_NOT_MRZ_OR_NEWLINE = re.compile(r"[^A-Z0-9<\n]")
_NOT_MRZ = re.compile(r"[^A-Z0-9<]")
_INLINE_WHITESPACE = re.compile(r"[^\S\n]")


def normalize(text: str | None) -> str:
    """Uppercase, drop whitespace and keep only MRZ characters plus newlines."""
    return _NOT_MRZ_OR_NEWLINE.sub("", (text or "").upper().replace("\r\n", "\n").replace("\r", "\n"))


def normalize_line(text: str | None) -> str:
    return _NOT_MRZ.sub("", (text or "").upper())


def normalize_block(text: str | None, *, strict: bool = True) -> str:
    """Prepare a multi-line block for the parser.

    In strict mode only whitespace is removed, so foreign symbols survive and
    are reported by the charset check. Otherwise this is ``normalize``.
    """
    if not strict:
        return normalize(text)
    unified = (text or "").upper().replace("\r\n", "\n").replace("\r", "\n")
    return _INLINE_WHITESPACE.sub("", unified)


def split_lines(block: str) -> list[str]:
    return [ln for ln in block.split("\n") if ln]


def charset_ok(line: str) -> bool:
    return all(ch in MRZ_ALPHABET for ch in line)


def unfill(value: str) -> str:
    return value.replace(FILL, "").strip()
