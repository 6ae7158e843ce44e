from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from iliri.routers import auth, article, supplier, client, purchases, sales, notifications, dashboard
from iliri.config import settings
from iliri.exceptions import LedgerError
from iliri.store import LedgerStore
from iliri.services.session_service import SessionStore
from iliri.utils.logging_config import setup_logging
from iliri.middleware.logging_middleware import log_requests

ROUTERS = (auth, article, supplier, client, purchases, sales, notifications, dashboard)

logger = setup_logging()

app = FastAPI(title=settings.app_name, debug=settings.debug)

# Geschäftsdaten leben nur im Speicher, bei jedem Start leer
app.state.store = LedgerStore()
app.state.session = SessionStore()
logger.info(f"{settings.app_name} gestartet, Sitzung wiederhergestellt: {app.state.session.user is not None}")

app.middleware("http")(log_requests)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LedgerError)
async def handle_ledger_error(request: Request, error: LedgerError):
    logger.warning(f"LedgerError [{error.status_code}] {request.url.path}: {error.message}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


for module in ROUTERS:
    app.include_router(module.router)


@app.get("/")
def root() -> dict:
    return {"message": "Iliri läuft!", "app": settings.app_name}


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
