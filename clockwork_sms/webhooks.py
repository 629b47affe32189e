import inspect
import logging
from typing import Mapping, Optional
from urllib.parse import parse_qs

from fastapi import APIRouter, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from .delivery import ReceiptCallback, decode_receipt
from .metrics import DELIVERY_RECEIPTS_DROPPED_TOTAL, DELIVERY_RECEIPTS_TOTAL

logger = logging.getLogger(__name__)


def validate_listener_args(path: str, callback: Optional[ReceiptCallback]) -> None:
    if callback is None or not callable(callback):
        raise ValueError("callback is required")
    if not path:
        raise ValueError("path is empty")
    if not path.startswith("/"):
        raise ValueError(f"path must start with '/', got {path!r}")


async def read_notification(request: Request) -> Optional[Mapping]:
    """Return the notification parameters, or None when the request cannot be read.

    GET notifications carry them in the query string, POST notifications as a
    URL-encoded body.
    """
    if request.method == "GET":
        return request.query_params

    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.warning(f"Delivery notification body is not valid UTF-8: {e}")
        return None
    return parse_qs(text, keep_blank_values=True)


def create_receipt_router(path: str, callback: ReceiptCallback) -> APIRouter:
    """Router accepting the gateway's delivery notifications on ``path``.

    The callback runs before the 200 acknowledgement is sent. Plain functions run in
    the threadpool so a slow callback only holds back its own request. Notifications
    that cannot be read or carry no parameters are answered with 400 so the gateway
    delivers them again.
    """
    validate_listener_args(path, callback)
    router = APIRouter()

    @router.api_route(path, methods=["GET", "POST"], response_class=PlainTextResponse)
    async def handle_receipt(request: Request):
        params = await read_notification(request)
        if params is None:
            DELIVERY_RECEIPTS_DROPPED_TOTAL.labels(reason="unreadable").inc()
            return PlainTextResponse("unreadable notification", status_code=status.HTTP_400_BAD_REQUEST)
        if len(params) == 0:
            logger.warning("Dropping delivery notification without parameters.")
            DELIVERY_RECEIPTS_DROPPED_TOTAL.labels(reason="empty").inc()
            return PlainTextResponse("empty notification", status_code=status.HTTP_400_BAD_REQUEST)

        receipt = decode_receipt(params)
        logger.info(
            f"Delivery receipt received: {receipt.status}.",
            extra={"msg_id": receipt.msg_id, "recipient": receipt.to},
        )

        if inspect.iscoroutinefunction(callback):
            await callback(receipt)
        else:
            await run_in_threadpool(callback, receipt)

        DELIVERY_RECEIPTS_TOTAL.labels(state=receipt.status.name).inc()
        return PlainTextResponse("OK", status_code=status.HTTP_200_OK)

    return router
