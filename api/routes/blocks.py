from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from api.deps import get_chain
from api.errors import ApiError
from api.schemas.stars import IssueResponse
from notary.core.chain import Chain
from notary.core.exceptions import OwnerLookupError
from notary.core.views import BlockView

router = APIRouter()


@router.get("/block/height/{height}", response_model=BlockView)
def block_by_height(height: int, chain: Chain = Depends(get_chain)) -> BlockView:
    block = chain.get_by_height(height)
    if block is None:
        raise ApiError(code="block.not_found", message="Block not found", status=404, height=height)
    return BlockView.from_block(block)


@router.get("/block/hash/{digest}", response_model=BlockView)
def block_by_hash(digest: str, chain: Chain = Depends(get_chain)) -> BlockView:
    block = chain.get_by_digest(digest)
    if block is None:
        raise ApiError(code="block.not_found", message="Block not found", status=404, digest=digest)
    return BlockView.from_block(block)


@router.get("/blocks/{address}", response_model=list[dict[str, Any]])
def stars_by_owner(address: str, chain: Chain = Depends(get_chain)) -> list[dict[str, Any]]:
    try:
        records = chain.get_records_by_owner(address)
    except OwnerLookupError as e:
        raise ApiError(code="chain.corrupt", message=str(e), status=500) from e
    return [r.model_dump(mode="json") for r in records]


@router.get("/chain/validate", response_model=list[IssueResponse])
def validate_chain(chain: Chain = Depends(get_chain)) -> list[IssueResponse]:
    return [IssueResponse(**issue.to_dict()) for issue in chain.validate()]
