from __future__ import annotations

from fastapi import FastAPI, HTTPException

from .exceptions import MRZParseError, SessionNotFound
from .extraction import extract_can, extract_mrz_candidate
from .logging import configure_logging
from .models import (
    ExtractRequest,
    ExtractResponse,
    FrameRequest,
    FrameResponse,
    MRZResult,
    MRZResultResponse,
    ParseErrorResponse,
    ParseRequest,
    ScanEvent,
    SessionResponse,
)
from .mrz_parser import is_passport_document, parse_and_validate, yymmdd_to_iso
from .repository import ScanSession, ScanSessionRepository
from .settings import settings
from .sinks import WebhookSink

configure_logging(level=settings.log_level, json=settings.log_json)

app = FastAPI(title="MRZ Service", version="1.0.0")

sink = (
    WebhookSink(
        settings.webhook_url,
        retries=settings.webhook_retries,
        backoff=settings.webhook_backoff_seconds,
        timeout=settings.webhook_timeout_seconds,
    )
    if settings.webhook_url
    else None
)
repo = ScanSessionRepository(settings=settings, sink=sink)


def _result_response(result: MRZResult) -> MRZResultResponse:
    return MRZResultResponse(
        result=result,
        is_valid=result.is_valid,
        mrz_key=result.mrz_key,
        is_passport=is_passport_document(result),
        birth_date=yymmdd_to_iso(result.birth_date_yymmdd),
        expiry_date=yymmdd_to_iso(result.expiry_date_yymmdd),
    )


def _parse_error(exc: MRZParseError) -> ParseErrorResponse:
    return ParseErrorResponse(code=exc.code, detail=str(exc))


def _session(session_id: str) -> ScanSession:
    try:
        return repo.get(session_id)
    except SessionNotFound as exc:
        raise HTTPException(status_code=404, detail="session not found") from exc


@app.post("/v1/mrz/parse", response_model=MRZResultResponse)
async def parse_mrz(payload: ParseRequest) -> MRZResultResponse:
    strict = settings.strict_charset if payload.strict is None else payload.strict
    try:
        result = parse_and_validate(payload.text, strict=strict)
    except MRZParseError as exc:
        raise HTTPException(status_code=422, detail=_parse_error(exc).model_dump()) from exc
    return _result_response(result)


@app.post("/v1/mrz/extract", response_model=ExtractResponse)
async def extract_mrz(payload: ExtractRequest) -> ExtractResponse:
    texts = [ln.text for ln in payload.lines if ln.confidence >= settings.min_confidence]
    mrz = extract_mrz_candidate(texts)
    response = ExtractResponse(mrz=mrz, can=extract_can(texts))
    if mrz is None:
        return response
    try:
        response.result = _result_response(parse_and_validate(mrz, strict=settings.strict_charset))
    except MRZParseError as exc:
        response.error = _parse_error(exc)
    return response


@app.post("/v1/scan/sessions", response_model=SessionResponse)
async def create_session() -> SessionResponse:
    session = repo.create()
    return SessionResponse(session_id=session.session_id)


# sync route, sink delivery blocks on network I/O
@app.post("/v1/scan/sessions/{session_id}/frames", response_model=FrameResponse)
def submit_frame(session_id: str, payload: FrameRequest) -> FrameResponse:
    session = _session(session_id)
    repo.touch(session)
    event = session.pump.offer_lines(payload.lines)
    return FrameResponse(session_id=session_id, accepted=event is not None, event=event)


@app.get("/v1/scan/sessions/{session_id}/latest", response_model=ScanEvent | None)
async def latest_event(session_id: str) -> ScanEvent | None:
    return _session(session_id).pump.latest()


@app.delete("/v1/scan/sessions/{session_id}")
async def close_session(session_id: str) -> dict[str, str]:
    try:
        repo.close(session_id)
    except SessionNotFound as exc:
        raise HTTPException(status_code=404, detail="session not found") from exc
    return {"status": "closed", "session_id": session_id}
