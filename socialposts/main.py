import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .database import create_client, ensure_indexes
from .errors import register_error_handlers
from .routes import posts

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pooled client for the whole process
    client = create_client()
    app.state.mongo_client = client
    app.state.db = client[config.DB_NAME]
    ensure_indexes(app.state.db)
    logger.info("Posts service started")

    yield

    client.close()
    logger.info("Posts service stopped")


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(posts.router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
