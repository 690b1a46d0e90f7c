from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devconnector.core.settings import S
from devconnector.core.time import now_ts
from devconnector.error_handlers import register_exception_handlers
from devconnector.metrics import metrics_endpoint, metrics_middleware, set_app_info
from devconnector.routers.profile import router as profile_router

def create_app() -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, S.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(title="DevConnector Profile API", version="0.1.0")

    @app.get("/healthz")
    async def healthz():
        return {"ok": True, "ts": now_ts()}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if S.metrics_enabled:
        app.middleware("http")(metrics_middleware)
        set_app_info(app.title, app.version)
        app.get("/metrics")(metrics_endpoint)

    register_exception_handlers(app)
    app.include_router(profile_router)

    return app

app = create_app()
