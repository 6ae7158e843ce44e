from uuid import UUID
from typing import Optional, Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from iliri.exceptions import DuplicateCodeError, ValidationFailed
from iliri.models import User, Article
from iliri.schemas.article import ArticleCreate, ArticleResponse, ArticleUpdate
from iliri.store import LedgerStore, get_store
from iliri.utils.security import get_current_user

router = APIRouter(prefix="/articles", tags=["articles"])

REQUIRED_FIELDS = ("name", "code1", "cost", "current_stock", "price1", "unit", "active")


def _check_code_unique(store: LedgerStore, code1: str, article_id: Optional[UUID] = None):
    existing = store.find_article_by_code(code1)
    if existing and existing.id != article_id:
        raise DuplicateCodeError("Artikelcode existiert bereits", field="code1")


def _check_minimum_stock(current_stock: float, minimum_stock: Optional[float]):
    if minimum_stock is not None and minimum_stock > current_stock:
        raise ValidationFailed("Mindestbestand darf den aktuellen Bestand nicht übersteigen", field="minimum_stock")


@router.get("/", response_model=list[ArticleResponse])
def get_all_articles(
    view: Literal["Active", "Deleted", "All"] = "Active",
    search: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store)
):
    return store.filter_articles(view=view, search=search)


@router.get("/search", response_model=list[ArticleResponse])
def search_articles(
    q: str,
    by: Literal["code", "name"] = "code",
    limit: int = Query(default=10, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    store: LedgerStore = Depends(get_store)
):
    return store.search_articles(q, by=by, limit=limit)


@router.get("/{id}", response_model=ArticleResponse)
def get_article_id(id: UUID, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    article = store.get_article(id)
    if not article:
        raise HTTPException(status_code=404, detail="Artikel nicht gefunden")
    return article


@router.post("/", response_model=ArticleResponse)
def create_article(article: ArticleCreate,
                   current_user: User = Depends(get_current_user),
                   store: LedgerStore = Depends(get_store)
):
    _check_code_unique(store, article.code1)
    _check_minimum_stock(article.current_stock, article.minimum_stock)

    new_article = store.add_article(Article(**article.model_dump()))
    store.notify_low_stock(new_article)
    store.refresh_analytics()
    return new_article


@router.patch("/{id}", response_model=ArticleResponse)
def update_article(article_update: ArticleUpdate, id: UUID, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    article = store.get_article(id)
    if not article:
        raise HTTPException(status_code=404, detail="Artikel nicht gefunden")
    update_data = article_update.model_dump(exclude_unset=True)
    # Pflichtfelder lassen sich nicht auf None setzen
    update_data = {k: v for k, v in update_data.items() if v is not None or k not in REQUIRED_FIELDS}

    if update_data.get("code1"):
        _check_code_unique(store, update_data["code1"], article.id)
    if "current_stock" in update_data or "minimum_stock" in update_data:
        _check_minimum_stock(
            update_data.get("current_stock", article.current_stock),
            update_data.get("minimum_stock", article.minimum_stock),
        )

    article = store.update_article(id, **update_data)
    store.notify_low_stock(article)
    store.refresh_analytics()
    return article


@router.delete("/{id}")
def delete_article(id: UUID, current_user: User = Depends(get_current_user), store: LedgerStore = Depends(get_store)):
    if not store.soft_delete_article(id):
        raise HTTPException(status_code=404, detail="Artikel nicht gefunden")
    store.refresh_analytics()
    return {"message": "Artikel erfolgreich gelöscht"}
