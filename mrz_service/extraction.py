"""Heuristics that pick MRZ lines and the CAN out of unordered OCR output.

OCR engines return text lines in arbitrary order and mixed with the visual
zone of the document. Nothing here raises: a frame without a
usable candidate simply yields ``None``.
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from .normalizer import FILL, normalize_line

MIN_MRZ_LINE = 25
MIN_TWO_LINE = 30
TD1_MAX_LINE = 35
CAN_LENGTH = 6
CAN_LABELS = ("CAN", "CARD", "ACCESS")

_DIGIT_RUN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class _CandidateLine:
    text: str

    @property
    def score(self) -> int:
        return self.text.count(FILL) * 10 + len(self.text)


def _looks_like_mrz(line: str) -> bool:
    return len(line) >= MIN_MRZ_LINE and FILL * 2 in line


def _ranked(candidates: list[_CandidateLine]) -> list[_CandidateLine]:
    # sorted() is stable, equal scores keep OCR order
    return sorted(candidates, key=lambda c: c.score, reverse=True)


def extract_mrz_candidate(lines: Iterable[str]) -> str | None:
    normalized = [ln for ln in (normalize_line(raw) for raw in lines) if ln]
    mrz_like = [_CandidateLine(ln) for ln in normalized if _looks_like_mrz(ln)]

    # Lines are emitted in score order, which is not necessarily document order.
    td1 = [c for c in mrz_like if MIN_MRZ_LINE <= len(c.text) <= TD1_MAX_LINE]
    if len(td1) >= 3:
        top = _ranked(td1)[:3]
        if all(len(c.text) >= MIN_MRZ_LINE for c in top):
            return "\n".join(c.text for c in top)

    if len(mrz_like) >= 2:
        top = _ranked(mrz_like)[:2]
        if all(len(c.text) >= MIN_TWO_LINE for c in top):
            return "\n".join(c.text for c in top)

    return None


def digit_runs(text: str) -> list[str]:
    return _DIGIT_RUN.findall(text)


def _first_can(lines: Iterable[str]) -> str | None:
    for line in lines:
        for run in digit_runs(line):
            if len(run) == CAN_LENGTH:
                return run
    return None


def extract_can(lines: Iterable[str]) -> str | None:
    eligible = [ln for ln in lines if FILL not in ln]
    labeled = [ln for ln in eligible if any(label in ln.upper() for label in CAN_LABELS)]
    return _first_can(labeled) or _first_can(eligible)
