import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.health import router as health_router
from app.api.routes_cart import router as cart_router
from app.api.routes_catalogue import router as catalogue_router
from app.config import settings
from app.db import init_db
from app.utils.logging import get_logger

log = get_logger("app.http", prefix="SERVER")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Use env var RESET_DB=1 in tests/CI to force DB reset
    reset = os.environ.get("RESET_DB", "0") in ("1", "true", "True")
    log.info(f"Starting storefront backend (reset_db={reset})")
    init_db(reset=reset)
    yield


app = FastAPI(title="Storefront - Cart Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    log.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
    return response


app.include_router(health_router, prefix=settings.API_PREFIX, tags=["health"])

app.include_router(catalogue_router, prefix=settings.API_PREFIX, tags=["catalogue"])

app.include_router(cart_router, prefix=settings.API_PREFIX, tags=["cart"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)
