"""Client for the Clockwork SMS gateway.

    from clockwork_sms import ClockworkClient, SMS

    client = ClockworkClient("API-KEY")
    result = client.send(SMS(to=["44123456789"], from_="Clockwork", content="Hello"))
    for number, msg_id in result.messages.items():
        print(number, msg_id)
"""
from .client import ClockworkClient
from .delivery import DeliveryReceipt, DeliveryState, decode_receipt
from .errors import (
    ClockworkError,
    ErrorKind,
    GatewayError,
    ResponseParseError,
    StatusCodeError,
    TransportError,
    classify,
    classify_detail,
)
from .main import create_app, listen
from .responses import (
    CreditResult,
    SendResult,
    SendStatus,
    parse_credit_response,
    parse_send_response,
)
from .schemas import SMS, Concat, InvalidCharAction, MsgType, Truncate
from .version import __version__

__all__ = [
    "ClockworkClient",
    "ClockworkError",
    "Concat",
    "CreditResult",
    "DeliveryReceipt",
    "DeliveryState",
    "ErrorKind",
    "GatewayError",
    "InvalidCharAction",
    "MsgType",
    "ResponseParseError",
    "SMS",
    "SendResult",
    "SendStatus",
    "StatusCodeError",
    "TransportError",
    "Truncate",
    "__version__",
    "classify",
    "classify_detail",
    "create_app",
    "decode_receipt",
    "listen",
    "parse_credit_response",
    "parse_send_response",
]
