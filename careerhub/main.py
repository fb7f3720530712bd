# careerhub/main.py
import logging
import time

from fastapi import FastAPI, Request

from careerhub.api.maintenance import router as maintenance_router
from careerhub.api.v1.applications import router as applications_router
from careerhub.api.v1.assessments import router as assessments_router
from careerhub.api.v1.auth import router as auth_router
from careerhub.api.v1.brands import router as brands_router
from careerhub.api.v1.jobs import router as jobs_router
from careerhub.api.v1.profiles import router as profiles_router
from careerhub.core.config import settings
from careerhub.core.errors import register_error_handlers
from careerhub.db.mongo import close_db, init_db
from careerhub.services.cv_text import wait_for_pending_writes
from careerhub.services.deterministic_cache import cache

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("careerhub")

app = FastAPI(title="CareerHub API")
register_error_handlers(app)

app.include_router(auth_router, prefix="/api/v1")
app.include_router(brands_router, prefix="/api/v1")
app.include_router(jobs_router, prefix="/api/v1")
app.include_router(applications_router, prefix="/api/v1")
app.include_router(profiles_router, prefix="/api/v1")
app.include_router(assessments_router, prefix="/api/v1")
# seed, users, admin maintenance and assessment submit
app.include_router(maintenance_router, prefix="/api")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.get("/health")
async def health():
    return {"status": "ok", "env": settings.APP_ENV}


@app.on_event("startup")
async def startup_event():
    await init_db()


@app.on_event("shutdown")
async def shutdown_event():
    await wait_for_pending_writes()
    await cache.close()
    close_db()
