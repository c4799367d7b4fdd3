from fastapi import APIRouter, Body, Depends, Query, Response
from app.api.deps import get_store, validate_payload, changes_from, get_or_404, update_or_404, delete_or_404
from app.schemas.schemas import ProposalCreate, ProposalUpdate, ProposalResponse

router = APIRouter(prefix="/api/proposals", tags=["proposals"])


@router.get("", response_model=list[ProposalResponse])
def list_proposals(status: str = Query(None), store=Depends(get_store)):
    if status:
        return store.proposals.filter_by(status=status)
    return store.proposals.list()


@router.post("", response_model=ProposalResponse, status_code=201)
def create_proposal(data: dict = Body(...), store=Depends(get_store)):
    payload = validate_payload(ProposalCreate, data, "proposal")
    return store.proposals.create(payload.model_dump())


@router.get("/{proposal_id}", response_model=ProposalResponse)
def get_proposal(proposal_id: str, store=Depends(get_store)):
    return get_or_404(store.proposals, proposal_id)


@router.put("/{proposal_id}", response_model=ProposalResponse)
def update_proposal(proposal_id: str, data: dict = Body(...), store=Depends(get_store)):
    changes = changes_from(validate_payload(ProposalUpdate, data, "proposal"))
    return update_or_404(store.proposals, proposal_id, changes)


@router.delete("/{proposal_id}", status_code=204)
def delete_proposal(proposal_id: str, store=Depends(get_store)):
    delete_or_404(store.proposals, proposal_id)
    return Response(status_code=204)
