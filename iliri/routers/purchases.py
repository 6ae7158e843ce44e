from uuid import UUID
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from iliri.models import User
from iliri.schemas.purchase import PurchaseCreate, PurchaseResponse
from iliri.services.purchase_service import create_purchase
from iliri.services.pdf_service import generate_purchase_pdf
from iliri.store import LedgerStore, get_store
from iliri.utils.security import get_current_user

router = APIRouter(prefix="/purchases", tags=["purchases"])


@router.get("/", response_model=list[PurchaseResponse])
def get_purchases(
    supplier_id: Optional[UUID] = None,
    only_mine: bool = False,
    search: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store)
):
    return store.filter_purchases(
        supplier_id=supplier_id,
        username=current_user.name if only_mine else None,
        search=search,
    )


@router.get("/{id}", response_model=PurchaseResponse)
def get_purchase(id: UUID, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    purchase = store.get_purchase(id)
    if not purchase:
        raise HTTPException(status_code=404, detail="Einkauf nicht gefunden")
    return purchase


@router.get("/{id}/pdf")
def get_purchase_pdf(id: UUID, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    purchase = store.get_purchase(id)
    if not purchase:
        raise HTTPException(status_code=404, detail="Einkauf nicht gefunden")
    return Response(
        content=generate_purchase_pdf(purchase),
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="einkauf-{purchase.number}.pdf"'},
    )


@router.post("/", response_model=PurchaseResponse)
def post_purchase(purchase: PurchaseCreate, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    new_purchase = create_purchase(store, purchase, current_user.name)
    store.refresh_analytics()
    return new_purchase


@router.delete("/{id}")
def delete_purchase(id: UUID, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    if not store.delete_purchase(id):
        raise HTTPException(status_code=404, detail="Einkauf nicht gefunden")
    store.refresh_analytics()
    return {"message": "Einkauf gelöscht"}
