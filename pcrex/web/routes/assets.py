"""Resolve raw image references for clients that hold them directly."""

from typing import List
from typing import Optional

from fastapi import APIRouter
from fastapi import Request

from pcrex.web.schemas import ResolveBatchRequest
from pcrex.web.schemas import ResolvedAssetOut
from pcrex.web.services.images import asset_payload

router = APIRouter(prefix="/api/assets", tags=["assets"])


@router.get("/resolve", response_model=ResolvedAssetOut)
async def resolve_reference(request: Request, ref: Optional[str] = None):
    asset = request.app.state.image_resolver.resolve(ref)
    request.app.state.metrics.image_resolutions.add(1, {"kind": asset.kind.value})
    return asset_payload(asset)


@router.post("/resolve", response_model=List[ResolvedAssetOut])
async def resolve_references(request: Request, payload: ResolveBatchRequest):
    resolver = request.app.state.image_resolver
    metrics = request.app.state.metrics
    results = []
    for asset in resolver.resolve_many(payload.refs):
        metrics.image_resolutions.add(1, {"kind": asset.kind.value})
        results.append(asset_payload(asset))
    return results
