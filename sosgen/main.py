import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Depends, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sosgen.config import get_settings
from sosgen.errors import SosgenError, IncompleteExtraction
from sosgen.models import (
    DeleteResponse,
    ErrorResponse,
    Favorite,
    GenerateMessageRequest,
    GeneratedMessages,
    InsertFavorite,
    InsertMessageHistory,
    MessageHistory,
)
from sosgen.pipeline import generate_mayday_messages
from sosgen.provider import GenerationProvider, get_provider
from sosgen.redis_client import init_redis, close_redis
from sosgen.storage import Storage, MemStorage, RedisStorage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    # Startup
    if settings.redis_url:
        client = await init_redis(settings.redis_url)
        app.state.storage = RedisStorage(client, ttl=settings.history_ttl)
        logger.info("Using Redis history store")
    else:
        app.state.storage = MemStorage()
        logger.info("Using in-memory history store; records are lost on restart")
    yield
    # Shutdown
    await close_redis()


app = FastAPI(
    title="SOSGEN",
    description="MAYDAY RELAY message generator for coastal radio stations",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_storage(request: Request) -> Storage:
    """Storage built during startup."""
    return request.app.state.storage


# --- Error handlers ---

@app.exception_handler(SosgenError)
async def sosgen_error_handler(request: Request, exc: SosgenError):
    body = ErrorResponse(
        error=exc.message,
        code=exc.code,
        missing_fields=exc.missing_fields if isinstance(exc, IncompleteExtraction) else None
    )
    return JSONResponse(status_code=500, content=body.model_dump(by_alias=True, exclude_none=True))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Datos de entrada inválidos"})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# --- Routes ---

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/api/generate-message", response_model=GeneratedMessages)
async def generate_message(
    request: GenerateMessageRequest,
    provider: GenerationProvider = Depends(get_provider),
    storage: Storage = Depends(get_storage)
):
    """
    Turn a free-text distress description into the MAYDAY RELAY pair.

    The result is also written to history; a storage failure is logged and
    does not affect the response.
    """
    messages = await generate_mayday_messages(request.natural_input, provider)

    try:
        await storage.save_message_to_history(InsertMessageHistory(
            natural_input=request.natural_input,
            spanish_message=messages.es,
            english_message=messages.en
        ))
    except Exception as e:
        logger.error("Failed to save message to history: %s", e)

    return messages


@app.get("/api/history", response_model=list[MessageHistory])
async def list_history(
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    q: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage)
):
    """History, newest first. With ``q``, search instead of paging."""
    if q:
        return await storage.search_message_history(q)
    return await storage.get_message_history(limit, offset)


@app.post("/api/history", response_model=MessageHistory)
async def save_history(
    request: InsertMessageHistory,
    storage: Storage = Depends(get_storage)
):
    """Save an operator-edited message pair as-is."""
    return await storage.save_message_to_history(request)


@app.patch("/api/history/{message_id}/favorite", response_model=MessageHistory)
async def toggle_favorite(message_id: str, storage: Storage = Depends(get_storage)):
    """Flip the favorite flag of a history record."""
    message = await storage.toggle_message_favorite(message_id)
    if message is None:
        raise HTTPException(status_code=404, detail="Mensaje no encontrado")
    return message


@app.get("/api/favorites", response_model=list[Favorite])
async def list_favorites(storage: Storage = Depends(get_storage)):
    """Favorite templates, newest first."""
    return await storage.get_favorites()


@app.post("/api/favorites", response_model=Favorite)
async def add_favorite(request: InsertFavorite, storage: Storage = Depends(get_storage)):
    """Save a message pair as a favorite template."""
    return await storage.add_to_favorites(request)


@app.delete("/api/favorites/{favorite_id}", response_model=DeleteResponse)
async def delete_favorite(favorite_id: str, storage: Storage = Depends(get_storage)):
    """Delete a favorite template."""
    if not await storage.delete_favorite(favorite_id):
        raise HTTPException(status_code=404, detail="Favorito no encontrado")
    return DeleteResponse(deleted=True)


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
