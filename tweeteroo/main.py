# tweeteroo/main.py
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from tweeteroo.core.config import settings
from tweeteroo.core.errors import internal_error_handler, validation_exception_handler
from tweeteroo.database import init_db
from tweeteroo.routers import health, tweet_routes, user_routes

load_dotenv()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        init_db()
    except Exception:
        # no retry: refuse to serve without a store
        logger.exception("Database connection error")
        raise
    logger.info("%s started", settings.APP_NAME)
    yield
    logger.info("%s stopped", settings.APP_NAME)


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOW_ORIGINS,
        allow_credentials=settings.ALLOW_CREDENTIALS,
        allow_methods=settings.ALLOW_METHODS,
        allow_headers=settings.ALLOW_HEADERS,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    # handled inside CORSMiddleware, so store failures keep their CORS headers
    app.add_exception_handler(SQLAlchemyError, internal_error_handler)
    # anything else reaches ServerErrorMiddleware, outside CORS
    app.add_exception_handler(Exception, internal_error_handler)

    @app.get("/")
    def read_root():
        return {"message": "Tweeteroo backend running"}

    # Routers
    app.include_router(health.router)
    app.include_router(user_routes.router)
    app.include_router(tweet_routes.router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    logger.info("Server running on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
