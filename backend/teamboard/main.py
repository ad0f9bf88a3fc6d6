# teamboard/main.py

import asyncio
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from teamboard.core.config import settings
from teamboard.core.error_handlers import (
    app_error_handler,
    duplicate_key_handler,
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from teamboard.core.errors import AppError
from teamboard.db.database import MongoDatabase, create_indexes, user_collection

# Routers
from teamboard.routes.auth import auth_router
from teamboard.routes.boards import boards_router
from teamboard.routes.profile import profile_router
from teamboard.routes.skills import skills_router
from teamboard.routes.users import users_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("teamboard")

# ------------------------
# App init
# ------------------------
app = FastAPI(title="TeamBoard API", version="1.0.0")

# ------------------------
# CORS
# ------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------
# Routes
# ------------------------
app.include_router(auth_router, prefix="/auth")
app.include_router(profile_router)
app.include_router(users_router)
app.include_router(skills_router)
app.include_router(boards_router)

# ------------------------
# Exception handlers
# ------------------------
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
app.add_exception_handler(Exception, generic_exception_handler)


# ------------------------
# Health & root
# ------------------------
@app.get("/")
async def root():
    return {"message": "Welcome to TeamBoard API"}


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


# ------------------------
# DB connectivity check
# ------------------------
@app.on_event("startup")
async def startup_db_check():
    MongoDatabase.connect()
    try:
        await asyncio.wait_for(user_collection().find_one({}), timeout=5)
        await create_indexes()
        logger.info("MongoDB connected successfully.")
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)


@app.on_event("shutdown")
async def shutdown_db():
    MongoDatabase.close()
