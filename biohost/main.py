import uuid

from fastapi import FastAPI, Request
from .config import get_settings
from .logging_config import configure_logging
from .database import init_db
from .api.health import router as health_router
from .api.targeting import router as targeting_router
from .api.pages import router as pages_router
from .api.redirects import router as redirects_router


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title="BioHost Targeting Service", version="0.1.0")

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.on_event("startup")
    def startup() -> None:
        init_db()

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(targeting_router, prefix="/api/v1")
    app.include_router(pages_router, prefix="/api/v1")
    app.include_router(redirects_router, prefix="/api/v1")

    return app


app = create_app()
