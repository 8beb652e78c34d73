import logging
import os
from typing import Callable, Optional
from fastapi import FastAPI
from .config import Settings
from .routers import metrics
from .services.druid_client import DruidClient
from .services.metrics import build_registry


def exit_now(code: int) -> None:
    # Runs on a worker thread, so SystemExit would only end the request
    logging.shutdown()
    os._exit(code)


def create_app(
    settings: Settings,
    client: Optional[DruidClient] = None,
    terminate: Optional[Callable[[int], None]] = None,
) -> FastAPI:
    app = FastAPI(title="Druid Tasks Exporter", version="1.0.0")
    app.state.settings = settings
    app.state.registry = build_registry(client or DruidClient(settings.druid_uri, strict=settings.strict_records))
    app.state.terminate = terminate or exit_now
    app.include_router(metrics.router)
    return app
