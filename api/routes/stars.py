from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import get_notary
from api.errors import ApiError, from_submit_error
from api.schemas.stars import StarSubmitRequest, ValidationRequest
from notary.core.exceptions import SubmitError
from notary.core.views import BlockView
from notary.notarization import OwnershipNotary

router = APIRouter()


@router.post("/requestValidation", response_model=str)
def request_validation(req: ValidationRequest, notary: OwnershipNotary = Depends(get_notary)) -> str:
    try:
        return notary.issue_challenge(req.address)
    except ValueError as e:
        raise ApiError(code="challenge.invalid_address", message=str(e), status=400) from e


@router.post("/submitstar", response_model=BlockView)
def submit_star(req: StarSubmitRequest, notary: OwnershipNotary = Depends(get_notary)) -> BlockView:
    try:
        block = notary.submit(req.address, req.message, req.signature, {"star": req.star})
    except SubmitError as e:
        raise from_submit_error(e) from e
    return BlockView.from_block(block)
