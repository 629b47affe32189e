import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from .errors import ErrorKind, classify_detail


class DeliveryState(enum.Enum):
    """Delivery state of a message as reported in a delivery receipt.

    UNRECOGNIZED is never sent by the gateway: it marks a status the decoder could not
    map and must not be confused with the gateway's own UNKNOWN state.
    """

    QUEUED = "QUEUED"
    ENROUTE = "ENROUTE"
    DELIVERED = "DELIVRD"
    EXPIRED = "EXPIRED"
    DELETED = "DELETED"
    UNDELIVERED = "UNDELIV"
    ACCEPTED = "ACCEPTD"
    UNKNOWN = "UNKNOWN"
    REJECTED = "REJECTD"
    UNRECOGNIZED = "!UNRECOGNIZED"

    @classmethod
    def from_gateway(cls, value: str) -> "DeliveryState":
        try:
            state = cls(value)
        except ValueError:
            return cls.UNRECOGNIZED
        return state

    def __str__(self) -> str:
        return self.name.capitalize()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DeliveryReceipt:
    msg_id: str = ""
    to: str = ""
    status: DeliveryState = DeliveryState.UNRECOGNIZED
    error: Optional[ErrorKind] = None
    timestamp: datetime = field(default_factory=_utcnow)


ReceiptCallback = Callable[[DeliveryReceipt], Any]


def _first_value(params: Mapping, key: str) -> Optional[str]:
    if hasattr(params, "getlist"):
        values = params.getlist(key)
    else:
        values = params.get(key)
    if values is None:
        return None
    if isinstance(values, str):
        return values
    return values[0] if values else None


def decode_receipt(params: Mapping) -> DeliveryReceipt:
    """Build a receipt from notification parameters (``msg_id``, ``to``, ``status``, ``detail``).

    ``params`` may be a ``parse_qs`` style mapping of lists, a multi-dict such as
    Starlette's ``QueryParams`` or a plain mapping of strings. Missing keys keep the
    receipt's zero values; decoding never fails.
    """
    msg_id = _first_value(params, "msg_id")
    to = _first_value(params, "to")
    status = _first_value(params, "status")
    detail = _first_value(params, "detail")

    return DeliveryReceipt(
        msg_id=msg_id or "",
        to=to or "",
        status=DeliveryState.from_gateway(status) if status is not None else DeliveryState.UNRECOGNIZED,
        error=classify_detail(detail) if detail is not None else None,
        timestamp=_utcnow(),
    )
