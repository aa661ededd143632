import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bloglist.cache import cache
from bloglist.config import settings
from bloglist.database import init_db
from bloglist.error_handlers import register_error_handlers
from bloglist.logging_config import setup_logging
from bloglist.middleware import TimingMiddleware
from bloglist.routers import blogs, login, stats, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    await init_db()
    await cache.connect()
    logger.info("Bloglist API started (%s)", settings.APP_ENV)
    yield
    await cache.disconnect()
    logger.info("Bloglist API stopped")


app = FastAPI(
    title="Bloglist API",
    description="Blog records, user accounts and like statistics",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(blogs.router)
app.include_router(users.router)
app.include_router(login.router)
app.include_router(stats.router)


@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
