from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from carnet.api.entries import router as entries_router
from carnet.db import Base, engine
from carnet.models.weekly_entry import WeeklyEntry  # noqa: F401  (import ensures table is registered)
from carnet.models.day_entry import DayEntry  # noqa: F401
from carnet.core.config import settings
from carnet.core.errors import EntryError
from carnet.core.logging import setup_logger


setup_logger(settings.log_level)

app = FastAPI(title="Carnet de Carême")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EntryError)
def entry_error_handler(request: Request, exc: EntryError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors()
    )
    return JSONResponse(status_code=400, content={"detail": f"Invalid request: {errors}"})


@app.exception_handler(Exception)
def unexpected_error_handler(request: Request, exc: Exception):
    # Details stay in the server log
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Create DB tables on startup
Base.metadata.create_all(bind=engine)

app.include_router(entries_router)


@app.get("/")
def root():
    return {"message": "Carnet backend is running"}
