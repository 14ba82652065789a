# app/main.py
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.modules.router import router as modules_router
from core.conf import Settings, settings
from core.config import close_services, wire_services
from core.logging import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(app_settings: Settings = settings) -> FastAPI:
    configure_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version="1.0.0",
        docs_url="/docs" if app_settings.ENVIRONMENT == "dev" else None,
        redoc_url=None,
        openapi_url="/openapi.json" if app_settings.ENVIRONMENT == "dev" else None,
    )
    wire_services(app, app_settings)
    app.include_router(modules_router)

    # Middleware to log every request
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        logger.info(f"➡️ Incoming request: {request.method} {request.url}")

        response = await call_next(request)

        process_time = (time.time() - start_time) * 1000
        logger.info(f"⬅️ Response status: {response.status_code} | Time: {process_time:.2f}ms")
        return response

    @app.api_route("/healthz", methods=["GET", "HEAD"], include_in_schema=False)
    async def healthz():
        return JSONResponse({"status": "ok"})

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"🚀 {app_settings.PROJECT_NAME} started")

    @app.on_event("shutdown")
    async def shutdown_event():
        await close_services(app)
        logger.info(f"🛑 {app_settings.PROJECT_NAME} stopped")

    for route in app.routes:
        path = getattr(route, "path", None)
        if path is None:
            continue
        methods = ",".join(sorted(getattr(route, "methods", None) or []))
        logger.debug(f"ROUTE {methods} {path}")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
