import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from core import config
from core.errors import install_error_handlers
from core.logging import configure_logging
from core.records import RecordClient
from dashboard import router as dashboard_router
from festivals import router as festivals_router
from locations import router as locations_router
from objectives import router as objectives_router
from objects import router as objects_router
from reviews import router as reviews_router
from transactions import router as transactions_router
from users import router as users_router

configure_logging(
    level=config.env_str("LOG_LEVEL", "INFO").upper(),
    json_logs=config.env_bool("LOG_JSON"),
)
logger = logging.getLogger("api.access")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One record store client per process.
    app.state.records = RecordClient(config.store_config_from_env())
    try:
        yield
    finally:
        await app.state.records.aclose()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)


@app.middleware("http")
async def access_log(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s %s %.1f ms - %s",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        response.headers.get("content-length", "-"),
    )
    return response


api = APIRouter(prefix="/api")


@api.get("/health")
def health() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


api.include_router(auth_router.router, tags=["auth"])
api.include_router(dashboard_router.router, tags=["dashboard"])
api.include_router(locations_router.router, tags=["locations"])
api.include_router(festivals_router.router, tags=["festivals"])
api.include_router(reviews_router.router, tags=["reviews"])
api.include_router(users_router.router, tags=["users"])
api.include_router(objects_router.router, tags=["objects"])
api.include_router(objectives_router.router, tags=["objectives"])
api.include_router(transactions_router.router, tags=["transactions"])
app.include_router(api)


@app.get("/")
def root() -> dict:
    return {"message": "travel admin api"}
