import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, status

from .config import Settings, get_settings
from .delivery import ReceiptCallback
from .logging import setup_logging
from .metrics import metrics_content
from .webhooks import create_receipt_router, validate_listener_args

logger = logging.getLogger(__name__)


def create_app(
    path: Optional[str],
    callback: ReceiptCallback,
    settings: Optional[Settings] = None,
) -> FastAPI:
    settings = settings or get_settings()
    if path is None:
        path = settings.receipt_path

    app = FastAPI(title=f"{settings.service_name} receipts")
    app.include_router(create_receipt_router(path, callback))

    @app.get("/healthz", status_code=status.HTTP_200_OK)
    async def healthz():
        return {"status": "ok"}

    @app.get("/metrics", status_code=status.HTTP_200_OK)
    async def get_metrics():
        return metrics_content()

    return app


def listen(
    path: Optional[str],
    callback: ReceiptCallback,
    port: Optional[int] = None,
    host: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> None:
    """Serve delivery receipts on ``path`` until the process is stopped.

    ``path`` must start with "/", e.g. "/delivery-receipts". ``None`` falls back to
    the configured receipt path, as do ``port`` and ``host``.
    """
    settings = settings or get_settings()
    if path is None:
        path = settings.receipt_path
    validate_listener_args(path, callback)

    setup_logging(settings.log_level, settings.service_name)
    app = create_app(path, callback, settings)

    host = host or settings.receipt_host
    port = settings.receipt_port if port is None else port
    logger.info(f"Listening for delivery receipts on {host}:{port}{path}")
    # log_config=None keeps the JSON handlers installed by setup_logging
    uvicorn.run(app, host=host, port=port, log_config=None)
