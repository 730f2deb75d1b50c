from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from chainvault.app import App
from chainvault.config import Config
from chainvault.errors import UserError
from chainvault.web.error_handlers import general_exception_handler, request_validation_error_handler, user_error_handler
from chainvault.web.openapi import set_custom_openapi
from chainvault.web.routers import admin_router, auth_router, files_router, profile_router

API_PREFIX = "/api"
API_ROUTERS: tuple[APIRouter, ...] = (auth_router, profile_router, files_router, admin_router)


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Build the HTTP application around an App; the App starts and stops with it."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="ChainVault API", lifespan=lifespan)

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    for router in API_ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)
    return app
