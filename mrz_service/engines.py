from __future__ import annotations

import abc
from typing import Any

from .models import OCRLine
from .settings import settings


class OCREngine(abc.ABC):
    """Text recognizer feeding the frame pump, one call per frame."""

    @abc.abstractmethod
    def recognize(self, image: Any) -> list[OCRLine]:
        raise NotImplementedError


class PaddleOCREngine(OCREngine):
    def __init__(self, *, lang: str | None = None, min_confidence: float | None = None):
        from paddleocr import PaddleOCR

        self.lang = (lang or settings.paddle_lang or "en").strip()
        self.min_confidence = float(min_confidence if min_confidence is not None else settings.min_confidence)
        self._ocr = PaddleOCR(use_angle_cls=True, lang=self.lang)

    def recognize(self, image: Any) -> list[OCRLine]:
        result = self._ocr.ocr(image, cls=True)
        return self.lines_from_result(result, min_confidence=self.min_confidence)

    @staticmethod
    def lines_from_result(result: Any, *, min_confidence: float) -> list[OCRLine]:
        lines: list[OCRLine] = []

        for block in result or []:
            if not block:
                continue
            for _, pred in block:
                text, conf = pred
                confidence = float(conf)
                if confidence < min_confidence:
                    continue
                cleaned = (text or "").strip()
                if not cleaned:
                    continue
                lines.append(OCRLine(text=cleaned, confidence=min(1.0, max(0.0, confidence))))

        return lines
