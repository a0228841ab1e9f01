"""
Response envelope helpers.

Every endpoint answers with ``{"status", "message", "data"}``.  Soft
failures map to HTTP codes through ``STATUS_CODES``; a missing target is
always 404.
"""
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from studyhub.schemas import Envelope
from studyhub.services.outcomes import Outcome, Status

STATUS_CODES: dict[Status, int] = {
    Status.SUCCESS: 200,
    Status.PARTIAL: 409,
    Status.FAILURE: 400,
    Status.NOT_FOUND: 404,
    Status.FAIL: 409,
    Status.ERROR: 500,
}


def envelope(status: Status, message: str, data: Any = None, status_code: int | None = None) -> JSONResponse:
    body = Envelope(status=status.value, message=message, data=data)
    return JSONResponse(
        status_code=status_code or STATUS_CODES[status],
        content=jsonable_encoder(body),
    )


def from_outcome(outcome: Outcome, success_code: int = 200) -> JSONResponse:
    """Serialise *outcome*, using *success_code* when it succeeded."""
    code = success_code if outcome.status is Status.SUCCESS else None
    return envelope(outcome.status, outcome.message, outcome.data, code)


def not_found(message: str) -> JSONResponse:
    return envelope(Status.NOT_FOUND, message)
