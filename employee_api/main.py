# main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import employees
from .database import Database
from .errors import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    try:
        await database.create_all()
        logger.info("Database connected")
    except Exception as exc:
        # Serving continues; requests fail until the database is reachable.
        logger.error(f"Database connection error: {exc}")

    yield

    await database.dispose()


def create_app(database: Optional[Database] = None) -> FastAPI:
    app = FastAPI(
        title="Employee Management API",
        description="Create, update, delete, search and list employee records.",
        lifespan=lifespan,
    )
    app.state.database = database or Database()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(employees.router)

    @app.get("/")
    def read_root():
        return {"message": "Employee records service is running", "employees": employees.router.prefix}

    return app
