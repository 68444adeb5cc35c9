# FastAPI entry point for the KeyMantra study API
# keymantra/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from keymantra.endpoints import (
    courses as courses_router,
    questions as questions_router,
    dictation as dictation_router,
    recitation as recitation_router,
    users as users_router,
)
from keymantra.services.course_service import DataAccessError, DuplicateEntryError
from keymantra.utils.logger import logger
from keymantra.utils.db import close_engine, init_models

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    logger.info("KeyMantra API starting up...")

    await init_models()

    logger.info("Startup complete.")
    yield
    logger.info("KeyMantra API shutting down...")
    await close_engine()

# --- FastAPI App Initialization ---
app = FastAPI(
    title="KeyMantra API",
    description="Courses, recitation flashcards and dictation checking for memorization practice.",
    version="0.1.0",
    lifespan=lifespan
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this to your frontend's domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Data-access failures ---
@app.exception_handler(DuplicateEntryError)
async def duplicate_entry_handler(request: Request, exc: DuplicateEntryError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})

@app.exception_handler(DataAccessError)
async def data_access_handler(request: Request, exc: DataAccessError):
    return JSONResponse(status_code=500, content={"detail": "Database operation failed"})

# --- API Routers ---
app.include_router(courses_router.router, prefix="/courses", tags=["Courses"])
app.include_router(questions_router.router, prefix="/questions", tags=["Questions"])
app.include_router(dictation_router.router, prefix="/dictation", tags=["Dictation"])
app.include_router(recitation_router.router, prefix="/recitation", tags=["Recitation"])
app.include_router(users_router.router, prefix="/users")

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {"message": "Welcome to the KeyMantra API"}
