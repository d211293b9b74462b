"""
Etymograph API Server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from etymograph.core.config import get_settings
from etymograph.core.engine import Engine, get_engine, set_engine
from etymograph.core.errors import DataUnavailableError
from etymograph.core.word_index import WordIndex
from etymograph.server.deps import get_table_store
from etymograph.server.routes import words


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def log_routes(app: FastAPI):
    routes = []
    for route in app.routes:
        if isinstance(route, APIRoute):
            methods = ", ".join(sorted(route.methods - {"HEAD", "OPTIONS"}))
            routes.append((methods, route.path, route.name))

    routes.sort(key=lambda r: (r[1], r[0]))

    for methods, path, name in routes:
        logger.info("  %-8s %-40s -> %s", methods, path, name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    try:
        get_engine(settings, get_table_store(settings))
    except DataUnavailableError as e:
        logger.warning("Could not load etymology data, serving empty results: %s", e)
        set_engine(Engine(WordIndex(), max_depth=settings.max_depth))
    log_routes(app)
    yield


app = FastAPI(title="Etymograph API", version=VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(words.router)


@app.get("/")
async def root():
    return {"name": "Etymograph API", "version": VERSION}
