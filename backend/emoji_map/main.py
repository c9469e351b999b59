import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from emoji_map.core.config import settings
from emoji_map.core.db_connection import db_connection, get_db
from emoji_map.core.errors import PlacesError, UpstreamError
from emoji_map.core.logger import logs
from emoji_map.core.redis_connection import redis_connection
from emoji_map.repos.places_repo import MongoCacheRepository
from emoji_map.routes.filters_route import router as filters_router
from emoji_map.routes.places_route import router as places_router

# --- Startup / shutdown ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CACHE_BACKEND == "mongodb":
        try:
            await MongoCacheRepository(await get_db()).ensure_indexes()
            logs.log(logging.INFO, "MongoDB cache indexes ensured")
        except Exception as e:
            logs.log(logging.ERROR, f"Could not create MongoDB cache indexes: {str(e)}")
    yield
    db_connection.close()
    await redis_connection.close()

app = FastAPI(title="Emoji Map Places API", lifespan=lifespan)
app.include_router(places_router)
app.include_router(filters_router)

# --- Error envelope ---
@app.exception_handler(PlacesError)
async def places_error_handler(request: Request, exc: PlacesError):
    if isinstance(exc, UpstreamError):
        logs.log(logging.ERROR, f"Upstream failure on {request.url.path}: {exc.message}", {"detail": exc.detail, "status": exc.status})
    elif exc.status_code >= 500:
        logs.log(logging.ERROR, f"Request to {request.url.path} failed: {exc.message}")
    else:
        logs.log(logging.INFO, f"Rejected {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Welcome to Emoji Map Places API",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "nearby": "/api/places/nearby",
            "details": "/api/places/details",
            "photos": "/api/places/photos",
            "filters": "/api/filters/{session_id}",
            "docs": "/docs"
        },
        "version": "1.0.0"
    }

# --- Health Check ---
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "Emoji Map Places API"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("emoji_map.main:app", host="0.0.0.0", port=8000, reload=True)
