from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

from libstore.core.error_handling import (
    CorruptCatalogueError,
    DeserializationError,
    SerializationError,
    handle_corrupt_catalogue_error,
    handle_deserialization_error,
    handle_serialization_error,
)
from libstore.core.logging import app_logger
from libstore.core.settings import settings
from libstore.src.routes import catalogue


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_logger.info("Starting up", extra={"path": settings.data_file})
    yield
    app_logger.info("Shutting down")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_exception_handler(DeserializationError, handle_deserialization_error)
app.add_exception_handler(SerializationError, handle_serialization_error)
app.add_exception_handler(CorruptCatalogueError, handle_corrupt_catalogue_error)

app.include_router(catalogue.router, prefix="/catalogue")


@app.get("/")
async def read_root():
    return {
        "service": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/health")
async def health_check():
    """Health check for Docker healthcheck"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": settings.app_name
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
