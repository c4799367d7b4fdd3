from fastapi import APIRouter, Body, Depends, Query, Response
from app.api.deps import get_store, validate_payload, changes_from, get_or_404, update_or_404, delete_or_404
from app.schemas.schemas import AssetCreate, AssetUpdate, AssetResponse

router = APIRouter(prefix="/api/assets", tags=["assets"])


@router.get("", response_model=list[AssetResponse])
def list_assets(
    assigned_to: str = Query(None, alias="assignedTo"),
    status: str = Query(None),
    store=Depends(get_store)
):
    assets = store.assets.list_by_assignee(assigned_to) if assigned_to else store.assets.list()
    if status:
        assets = [a for a in assets if a.status == status]
    return assets


@router.post("", response_model=AssetResponse, status_code=201)
def create_asset(data: dict = Body(...), store=Depends(get_store)):
    payload = validate_payload(AssetCreate, data, "asset")
    return store.assets.create(payload.model_dump())


@router.get("/{asset_id}", response_model=AssetResponse)
def get_asset(asset_id: str, store=Depends(get_store)):
    return get_or_404(store.assets, asset_id)


@router.put("/{asset_id}", response_model=AssetResponse)
def update_asset(asset_id: str, data: dict = Body(...), store=Depends(get_store)):
    changes = changes_from(validate_payload(AssetUpdate, data, "asset"))
    return update_or_404(store.assets, asset_id, changes)


@router.delete("/{asset_id}", status_code=204)
def delete_asset(asset_id: str, store=Depends(get_store)):
    delete_or_404(store.assets, asset_id)
    return Response(status_code=204)
