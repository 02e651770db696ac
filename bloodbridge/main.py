# bloodbridge/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bloodbridge.core.config import settings
from bloodbridge.deps import get_repo
from bloodbridge.routers import auth, events, stats, tables

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.use_mongo:
        from bloodbridge.core.db import get_client
        await get_repo().ensure_indexes()
        logger.info("mongo indexes ensured on %s", settings.mongo_db)
        yield
        get_client().close()
    else:
        logger.info("using in-memory store")
        yield

app = FastAPI(lifespan=lifespan, title=settings.app_name)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------- Include routers ----------------
app.include_router(auth.router)      # /api/auth
app.include_router(tables.router)    # /api/tables
app.include_router(events.router)    # /api/events
app.include_router(stats.router)     # /api/stats

# Health
@app.get("/health")
def health():
    return {"ok": True}
