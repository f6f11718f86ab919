from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from notary.core.exceptions import SubmitError, SubmitErrorKind


class ApiError(Exception):
    def __init__(self, code: str, message: str, status: int = 400, **extra: object) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = status
        self.extra = extra


_SUBMIT_STATUS: dict[SubmitErrorKind, int] = {
    SubmitErrorKind.MALFORMED_CHALLENGE: 400,
    SubmitErrorKind.MALFORMED_RECORD: 400,
    SubmitErrorKind.BAD_SIGNATURE: 401,
    SubmitErrorKind.EXPIRED: 410,
    SubmitErrorKind.CHAIN_REJECTED: 409,
    SubmitErrorKind.VERIFIER_FAILED: 502,
}


def from_submit_error(exc: SubmitError) -> ApiError:
    return ApiError(
        code=f"submit.{exc.kind}",
        message=exc.message,
        status=_SUBMIT_STATUS[exc.kind],
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    body = {"error": {"code": exc.code, "message": exc.message, **exc.extra}}
    return JSONResponse(status_code=exc.status, content=body)
