# /wrestling_bot/app.py
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from .completion import CompletionGateway
from .config import Settings, get_settings
from .db import init_db
from .errors import UpstreamError, ValidationError
from .routes.chat_routes import router as chat_router
from .utils import now_iso

logger = logging.getLogger(__name__)

UPSTREAM_ERROR = "Mistral API error"


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[CompletionGateway] = None,
    engine: Optional[Engine] = None,
) -> FastAPI:
    """
    Build the FastAPI app. Settings are resolved first, so a missing
    MISTRAL_API_KEY raises ConfigurationError before anything is served.
    """
    settings = settings or get_settings()

    # -------------------- Startup --------------------
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(settings.database_url, engine=engine)
        logger.info("Database: %s", settings.database_url)
        logger.info("Model: %s", settings.model)
        logger.info("Wrestling bot API running on port %s", settings.port)
        yield

    app = FastAPI(title="Wrestling Bot API", lifespan=lifespan)
    app.state.settings = settings
    app.state.gateway = gateway or CompletionGateway(settings)

    app.include_router(chat_router)

    # -------------------- Error mapping --------------------
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        return JSONResponse(status_code=500, content={"error": UPSTREAM_ERROR, "details": exc.details})

    # -------------------- Middleware (debug logging) --------------------
    @app.middleware("http")
    async def debug_logger(request: Request, call_next):
        """
        Lightweight access log when DEBUG_LOG=1.
        Example:
          127.0.0.1 POST /wrestling_bot -> 200 (812.4 ms)
        """
        start = time.perf_counter()
        try:
            response = await call_next(request)
            if settings.debug_log:
                dur_ms = (time.perf_counter() - start) * 1000
                client = getattr(request.client, "host", "-")
                logger.info(
                    "%s %s %s -> %s (%.1f ms)",
                    client, request.method, request.url.path, response.status_code, dur_ms,
                )
            return response
        except Exception as e:
            if settings.debug_log:
                client = getattr(request.client, "host", "-")
                logger.info("%s %s %s !! %s", client, request.method, request.url.path, e)
            raise

    # -------------------- Health --------------------
    @app.get("/health")
    def health():
        return {
            "ok": True,
            "time": now_iso(),
            "db": settings.database_url,
            "model": settings.model,
        }

    return app


def main() -> None:
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")

    # fail fast on missing credentials, before binding the port
    settings = get_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
