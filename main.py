from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quizhub.api.v1 import api_router
from quizhub.core.config import Settings, load_settings
from quizhub.core.database import close_db, init_db
from quizhub.core.errors import register_error_handlers
from quizhub.core.logging_config import configure_logging

load_dotenv()


def make_app(settings: Settings = None, init_database: bool = True):
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if init_database:
            await init_db(settings)
        yield
        if init_database:
            close_db()

    app = FastAPI(title="quizhub", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app, debug=settings.debug)
    app.include_router(
        api_router,
    )
    return app


app = make_app()


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
