from __future__ import annotations

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field


class MRZFormat(str, Enum):
    TD1 = "TD1"
    TD2 = "TD2"
    TD3 = "TD3"


class Checks(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_lengths_ok: bool
    charset_ok: bool
    document_number_ok: bool
    birth_date_ok: bool
    expiry_date_ok: bool
    optional_data_ok: bool
    composite_ok: bool

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        # optional_data_ok and composite_ok are informational only
        return (
            self.line_lengths_ok
            and self.charset_ok
            and self.document_number_ok
            and self.birth_date_ok
            and self.expiry_date_ok
        )


class MRZResult(BaseModel):
    """Parsed MRZ with per-field check-digit results."""

    model_config = ConfigDict(frozen=True)

    format: MRZFormat
    document_type: str
    issuing_country: str
    surnames: str
    given_names: str

    document_number: str
    document_number_raw: str
    document_number_check_digit: str = Field(min_length=1, max_length=1)
    nationality: str
    birth_date_yymmdd: str
    birth_date_check_digit: str = Field(min_length=1, max_length=1)
    sex: str
    expiry_date_yymmdd: str
    expiry_date_check_digit: str = Field(min_length=1, max_length=1)
    optional_data: str

    checks: Checks

    @property
    def is_valid(self) -> bool:
        return self.checks.is_valid

    @computed_field  # type: ignore[prop-decorator]
    @property
    def mrz_key(self) -> str:
        """Key used for BAC/PACE chip access, always derived from the fields."""
        return (
            self.document_number_raw
            + self.document_number_check_digit
            + self.birth_date_yymmdd
            + self.birth_date_check_digit
            + self.expiry_date_yymmdd
            + self.expiry_date_check_digit
        )


class OCRLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)


class ScanEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    mrz: str
    can: str | None = None
    result: MRZResult | None = None
    error: str | None = None


class ParseRequest(BaseModel):
    text: str = Field(min_length=1)
    strict: bool | None = None


class MRZResultResponse(BaseModel):
    result: MRZResult
    is_valid: bool
    mrz_key: str
    is_passport: bool
    birth_date: str
    expiry_date: str


class ParseErrorResponse(BaseModel):
    code: str
    detail: str


class ExtractRequest(BaseModel):
    lines: list[OCRLine]


class ExtractResponse(BaseModel):
    mrz: str | None = None
    can: str | None = None
    result: MRZResultResponse | None = None
    error: ParseErrorResponse | None = None


class SessionResponse(BaseModel):
    session_id: str


class FrameRequest(BaseModel):
    lines: list[OCRLine]


class FrameResponse(BaseModel):
    session_id: str
    accepted: bool
    event: ScanEvent | None = None
