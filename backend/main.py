# backend/main.py

import argparse
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from routers.files import router as files_router
from routers.users import router as users_router
from utils.data_store import TableStore
from utils.logger import get_logger
from utils.settings import Settings, load_settings


def create_app(settings: Optional[Settings] = None, store: Optional[TableStore] = None) -> FastAPI:
    settings = settings or load_settings()
    logger = get_logger(settings.log_level)

    # ---------------------------------------------------------
    # APP INIT
    # ---------------------------------------------------------

    app = FastAPI(
        title="CSV Search API",
        description="Upload a CSV file and search its rows in memory.",
        version="0.1.0",
    )

    app.state.settings = settings
    app.state.store = store if store is not None else TableStore(dedupe_matches=settings.dedupe_matches)

    logger.info(f"Allowed CORS origins: {settings.allowed_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        ms = int((time.perf_counter() - start) * 1000)
        response.headers["X-Response-Time"] = f"{ms}ms"
        logger.info(f"{request.method} {request.url.path} - {response.status_code} - {ms}ms")
        return response

    # ---------------------------------------------------------
    # ERROR HANDLERS
    # ---------------------------------------------------------

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=422, content={"message": "Invalid request"})

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        # Never expose internal errors to the client
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    # ---------------------------------------------------------
    # ROUTERS
    # ---------------------------------------------------------

    app.include_router(files_router)
    app.include_router(users_router)

    @app.get("/")
    def root():
        return {"message": "CSV Search API running."}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()

    parser = argparse.ArgumentParser(description="Run the CSV Search API")
    parser.add_argument("--port", type=int, default=settings.port, help="HTTP port")
    parser.add_argument("--host", default=settings.host, help="Bind address")
    args = parser.parse_args()

    get_logger(settings.log_level).info(f"server is running at http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())
