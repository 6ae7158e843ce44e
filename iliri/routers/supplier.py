from fastapi import APIRouter, Depends, HTTPException
from uuid import UUID
from typing import Optional

from iliri.exceptions import DuplicateCodeError
from iliri.models import User, Supplier
from iliri.schemas.supplier import SupplierCreate, SupplierUpdate, SupplierResponse
from iliri.store import LedgerStore, get_store
from iliri.utils.security import get_current_user

router = APIRouter(prefix="/suppliers", tags=["suppliers"])


@router.get("/", response_model=list[SupplierResponse])
def get_all_suppliers(
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store)
):
    suppliers = store.suppliers
    if is_active is not None:
        suppliers = [s for s in suppliers if s.active == is_active]
    if search and search.strip():
        needle = search.strip().lower()
        suppliers = [
            s for s in suppliers
            if needle in s.name.lower()
            or needle in s.code.lower()
            or (s.telephone and needle in s.telephone.lower())
        ]
    return suppliers


@router.get("/{id}", response_model=SupplierResponse)
def get_supplier(id: UUID, user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    supplier = store.get_supplier(id)
    if not supplier:
        raise HTTPException(status_code=404, detail="Lieferant nicht gefunden")
    return supplier


@router.post("/", response_model=SupplierResponse)
def create_supplier(supplier: SupplierCreate, user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    data = supplier.model_dump()
    if data["code"]:
        if any(s.code == data["code"] for s in store.suppliers):
            raise DuplicateCodeError("Lieferantencode existiert bereits", field="code")
    else:
        data["code"] = store.new_supplier_code()
    return store.add_supplier(Supplier(**data))


@router.patch("/{id}", response_model=SupplierResponse)
def update_supplier(id: UUID, supplier_update: SupplierUpdate, user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    if not store.get_supplier(id):
        raise HTTPException(status_code=404, detail="Lieferant nicht gefunden")

    update_data = supplier_update.model_dump(exclude_unset=True)
    update_data = {k: v for k, v in update_data.items() if v is not None or k == "telephone"}
    return store.update_supplier(id, **update_data)


@router.delete("/{id}")
def delete_supplier(id: UUID, user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    if not store.delete_supplier(id):
        raise HTTPException(status_code=404, detail="Lieferant nicht gefunden")
    return {"message": "Lieferant gelöscht"}
