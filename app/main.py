# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app import models  # noqa: F401  registers every table on Base.metadata
from app.api.v1.api import api_router
from app.core.config import settings
from app.core.exceptions import BanError, ReservationError
from app.core.limiter import limiter
from app.db.base_class import Base
from app.db.session import engine
from app.scheduler import init_scheduler, shutdown_scheduler

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables checked and created if necessary.")
    if settings.SCHEDULER_ENABLED:
        init_scheduler()
    yield
    if settings.SCHEDULER_ENABLED:
        shutdown_scheduler()
    logger.info("Application shutting down...")


app = FastAPI(
    title="Campus Room Reservation Service",
    version="1.0.0",
    description="""
        Room booking backend for the campus community.

        ## Features

        * **Reservations**: Book rooms in slots of up to 2 hours, with overlap protection
        * **Check-in**: Check in from 10 minutes before to 30 minutes after the start
        * **Penalties**: No-shows and repeated lateness lead to temporary or permanent bans
        * **Administration**: Approve or reject bookings, manage rooms, lift bans

        ## Authentication

        Most endpoints require a JWT issued by the campus login via the
        `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(ReservationError)
async def reservation_error_handler(request: Request, exc: ReservationError):
    content = {"detail": exc.message}
    if isinstance(exc, BanError):
        content["permanent"] = exc.permanent
        content["ban_until"] = exc.ban_until.isoformat() if exc.ban_until else None
    return JSONResponse(status_code=exc.status_code, content=content)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "Room Reservation Service is running"}
