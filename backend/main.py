import os
import sys
import time
import asyncio
import logging
from contextlib import asynccontextmanager

# Ensure this directory is in the path for runners started from the repo root
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.append(current_dir)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from config import CORS_ORIGINS, DATABASE_URL, REQUEST_TIMEOUT_SECONDS
from database import init_db, make_engine, make_session_factory
from errors import ConflictError, SocialError
from routes.auth_routes import router as auth_router
from routes.friend_routes import router as friend_router
from routes.post_routes import router as post_router
from routes.user_routes import router as user_router

logger = logging.getLogger(__name__)


def create_app(database_url: str = DATABASE_URL, engine: Engine | None = None) -> FastAPI:
    """
    Build the application. The engine and session factory are created here
    and hung on app.state; every request gets its session from them.
    """
    owns_engine = engine is None
    if engine is None:
        engine = make_engine(database_url)
    init_db(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_engine:
            engine.dispose()

    app = FastAPI(title="UniNet API", lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    @app.exception_handler(SocialError)
    async def social_error_handler(request: Request, exc: SocialError):
        body = {"detail": exc.message}
        if isinstance(exc, ConflictError) and exc.status:
            body["status"] = exc.status
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.middleware("http")
    async def timeout_and_log(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await asyncio.wait_for(call_next(request), timeout=REQUEST_TIMEOUT_SECONDS)
        except asyncio.TimeoutError:
            logger.error(f"{request.method} {request.url.path} timed out after {REQUEST_TIMEOUT_SECONDS}s")
            return JSONResponse(status_code=504, content={"detail": "Request timeout"})

        if request.url.path.startswith("/api"):
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(f"{request.method} {request.url.path} {response.status_code} in {duration_ms:.0f}ms")
        response.headers["Cache-Control"] = "no-store, max-age=0"
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(post_router)
    app.include_router(friend_router)

    @app.get("/api/v1/health-check")
    async def health():
        return {"status": "ok", "message": "Backend is alive!"}

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
