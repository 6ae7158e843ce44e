from fastapi import APIRouter, Depends, HTTPException
from uuid import UUID
from typing import Optional

from iliri.exceptions import DuplicateCodeError
from iliri.models import User, Client
from iliri.schemas.client import ClientCreate, ClientUpdate, ClientResponse
from iliri.store import LedgerStore, get_store
from iliri.utils.security import get_current_user

router = APIRouter(prefix="/clients", tags=["clients"])

OPTIONAL_FIELDS = ("telephone", "email", "address")


@router.get("/", response_model=list[ClientResponse])
def get_all_clients(
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
    user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store)
):
    clients = store.clients
    if is_active is not None:
        clients = [c for c in clients if c.active == is_active]
    if search and search.strip():
        needle = search.strip().lower()
        clients = [
            c for c in clients
            if needle in c.name.lower()
            or needle in c.code.lower()
            or (c.telephone and needle in c.telephone)
        ]
    return clients


@router.get("/{id}", response_model=ClientResponse)
def get_client(id: UUID, user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    client = store.get_client(id)
    if not client:
        raise HTTPException(status_code=404, detail="Kunde nicht gefunden")
    return client


@router.post("/", response_model=ClientResponse)
def create_client(client: ClientCreate, user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    data = client.model_dump()
    if data["code"]:
        if any(c.code == data["code"] for c in store.clients):
            raise DuplicateCodeError("Kundencode existiert bereits", field="code")
    else:
        data["code"] = store.new_client_code()
    return store.add_client(Client(**data))


@router.patch("/{id}", response_model=ClientResponse)
def update_client(id: UUID, client_update: ClientUpdate, user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    if not store.get_client(id):
        raise HTTPException(status_code=404, detail="Kunde nicht gefunden")

    update_data = client_update.model_dump(exclude_unset=True)
    update_data = {k: v for k, v in update_data.items() if v is not None or k in OPTIONAL_FIELDS}
    return store.update_client(id, **update_data)


@router.delete("/{id}")
def delete_client(id: UUID, user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    if not store.delete_client(id):
        raise HTTPException(status_code=404, detail="Kunde nicht gefunden")
    return {"message": "Kunde gelöscht"}
