from uuid import UUID
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from iliri.models import User
from iliri.schemas.sale import SaleCreate, SaleResponse, PaymentCreate, PaymentResponse, LastUsedPriceResponse
from iliri.services.sale_service import create_sale
from iliri.services.pdf_service import generate_sale_pdf
from iliri.store import LedgerStore, get_store
from iliri.utils.security import get_current_user

router = APIRouter(prefix="/sales", tags=["sales"])


def _get_sale_or_404(store: LedgerStore, id: UUID):
    sale = store.get_sale(id)
    if not sale:
        raise HTTPException(status_code=404, detail="Verkauf nicht gefunden")
    return sale


@router.get("/", response_model=list[SaleResponse])
def get_sales(
    client_id: Optional[UUID] = None,
    only_mine: bool = False,
    search: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store)
):
    return store.filter_sales(
        client_id=client_id,
        username=current_user.name if only_mine else None,
        search=search,
    )


@router.get("/last-price", response_model=Optional[LastUsedPriceResponse])
def get_last_price(
    client_id: UUID,
    article_id: UUID,
    current_user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store)
):
    return store.get_last_used_price(client_id, article_id)


@router.get("/{id}", response_model=SaleResponse)
def get_sale(id: UUID, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    return _get_sale_or_404(store, id)


@router.get("/{id}/pdf")
def get_sale_pdf(id: UUID, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    sale = _get_sale_or_404(store, id)
    return Response(
        content=generate_sale_pdf(sale, store.payments_for_sale(sale.id)),
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="verkauf-{sale.number}.pdf"'},
    )


@router.post("/", response_model=SaleResponse)
def post_sale(sale: SaleCreate, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    new_sale = create_sale(store, sale, current_user.name)
    store.refresh_analytics()
    return new_sale


@router.delete("/{id}")
def delete_sale(id: UUID, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    if not store.delete_sale(id):
        raise HTTPException(status_code=404, detail="Verkauf nicht gefunden")
    store.refresh_analytics()
    return {"message": "Verkauf gelöscht, Bestand zurückgebucht"}


# ============ ZAHLUNGEN ============

@router.get("/{id}/payments", response_model=list[PaymentResponse])
def get_sale_payments(id: UUID, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    sale = _get_sale_or_404(store, id)
    return store.payments_for_sale(sale.id)


@router.post("/{id}/payments", response_model=SaleResponse)
def post_payment(id: UUID, payment: PaymentCreate, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    sale = _get_sale_or_404(store, id)
    store.record_payment(sale.id, payment.amount)
    store.refresh_analytics()
    return sale


@router.post("/{id}/settle", response_model=SaleResponse)
def settle_sale(id: UUID, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    sale = _get_sale_or_404(store, id)
    store.settle_sale(sale.id)
    store.refresh_analytics()
    return sale
