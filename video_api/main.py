import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from video_api.api import video_router
from video_api.config import Settings
from video_api.db import create_db_engine, create_session_factory, init_db
from video_api.services.upload_storage import ensure_upload_folder

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def format_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # binding errors are client errors with the same body as every other failure
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": format_validation_error(exc)})


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    settings.log_config()
    init_db(app.state.engine)
    ensure_upload_folder(settings.UPLOAD_FOLDER_PATH)
    yield
    app.state.engine.dispose()
    logger.info("Database connections released")


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """Build the API application.

    Settings are read from the environment when not given; the engine is
    created from the settings unless one is passed in.
    """
    if settings is None:
        settings = Settings.from_env()
    if engine is None:
        engine = create_db_engine(settings)

    # 創建 FastAPI 實例
    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # 註冊路由
    app.include_router(video_router)

    @app.get("/")
    async def root():
        return {"message": "Video Backend API", "docs": "/docs"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


def run():
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
