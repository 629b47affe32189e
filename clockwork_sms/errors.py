import enum
from types import MappingProxyType
from typing import Optional


class ErrorKind(enum.Enum):
    """Named gateway error conditions.

    API error codes are documented at
    https://www.clockworksms.com/doc/reference/faqs/api-error-codes/ and delivery
    detail codes at https://www.clockworksms.com/doc/reference/faqs/delivery-states/
    """

    INTERNAL = "internal error"
    INVALID_USERNAME_PASSWORD = "invalid username or password"
    INSUFFICIENT_CREDIT = "insufficient credits available"
    AUTH_FAIL = "authentication failure"
    INVALID_MSG_TYPE = "invalid 'MsgType'"
    MISSING_TO = "'To' parameter not specified"
    MISSING_CONTENT = "'Content' parameter not specified"
    MISSING_MESSAGE_ID = "'MessageID' parameter not specified"
    UNKNOWN_MESSAGE_ID = "unknown 'MessageID'"
    INVALID_TO = "invalid 'To' parameter some or all numbers were not correct"
    INVALID_FROM = "invalid 'From' parameter"
    MESSAGE_TOO_LONG = "message text is too long"
    ROUTING_MESSAGE = "cannot route message"
    MESSAGE_EXPIRED = "message expired"
    NO_ROUTE = "no route defined for this number"
    MISSING_URL = "'URL' parameter not set"
    INVALID_SOURCE_IP = "invalid source IP"
    MISSING_UDH = "'UDH' parameter not specified"
    INVALID_SERV_TYPE = "invalid 'ServType' parameter"
    INVALID_EXPIRY_TIME = "invalid 'ExpiryTime' parameter"
    DUPLICATE_CLIENT_ID = "duplicate 'ClientID' received"
    INVALID_TIMESTAMP = "invalid 'TimeStamp' parameter"
    INVALID_ABS_EXPIRY = "invalid 'AbsExpiry' parameter"
    INVALID_DLR_TYPE = "invalid 'DlrType' parameter"
    INVALID_CONCAT = "invalid 'Concat' parameter"
    INVALID_UNIQUE_ID = "invalid 'UniqueId' parameter"
    CLIENT_ID_REQUIRED = (
        "'ClientID' required - the account checks for a unique client ID on every message"
    )
    INVALID_CHAR_IN_CONTENT = "invalid character in 'Content' parameter"
    INVALID_TEXT_PAYLOAD = "invalid 'TextPayload' MMS text has an invalid character"
    INVALID_HEX_PAYLOAD = "invalid 'HexPayload' MMS payload can't be decoded as hex"
    INVALID_BASE64_PAYLOAD = "invalid 'Base64Payload' MMS payload can't be decoded as base64"
    MISSING_CONTENT_TYPE = "missing 'ContentType'"
    MISSING_ID = "missing 'ID' all MMS payload parts must have an ID"
    MMS_MESSAGE_TOO_LARGE = "the combined MMS parts are too large to send"
    INVALID_PAYLOAD_ID = "invalid payload ID"
    DUPLICATE_PAYLOAD_ID = "duplicate payload ID"
    NO_PAYLOAD_ON_MMS = "no payload on MMS"
    DUPLICATE_FILE_NAME = "duplicate 'filename' attribute on payload"
    MISSING_ITEM_ID = "'ItemId' parameter not specified"
    INVALID_ITEM_ID = "invalid 'ItemId' parameter"
    GENERATE_FILE_NAME = "unable to generate filename for 'Content-Type'"
    INVALID_CHAR_ACTION = "invalid 'InvalidCharAction' parameter"
    INVALID_DLR_ENROUTE = "invalid 'DlrEnroute' parameter"
    INVALID_TRUNCATE = "invalid 'Truncate' parameter"
    INVALID_LONG = "invalid 'Long' parameter"
    NO_API_KEY = "no API key provided"
    INVALID_API_KEY = (
        "invalid API key - log in to your API account to check the key or create a new one"
    )
    MUST_USE_API_KEYS = "account must use API keys"
    BLOCKED_SPAM = "blocked by spam filter"
    INVALID_XML = "invalid XML - API post can't be parsed as XML"
    INVALID_XML_DOC = "XML document does not validate"
    LONG_CLIENT_ID = "client ID too long"
    RATE_EXCEEDED = "query throttling rate exceeded"
    UNKNOWN = "unknown API error code"

    # Delivery failure reasons
    MESSAGE_DETAILS_WRONG = "message details wrong"
    PERM_OPERATOR = "operator error - permanent"
    TEMP_OPERATOR = "operator error - temporary"
    PERM_ABSENT_SUBSCRIBER = "absent subscriber - permanent"
    TEMP_ABSENT_SUBSCRIBER = "absent subscriber - temporary"
    PERM_PHONE = "phone related error - permanent"
    TEMP_PHONE = "phone related error - temporary"


# The keys match the gateway's documented API error codes.
ERROR_CODES = MappingProxyType({
    1: ErrorKind.INTERNAL,
    2: ErrorKind.INVALID_USERNAME_PASSWORD,
    3: ErrorKind.INSUFFICIENT_CREDIT,
    4: ErrorKind.AUTH_FAIL,
    5: ErrorKind.INVALID_MSG_TYPE,
    6: ErrorKind.MISSING_TO,
    7: ErrorKind.MISSING_CONTENT,
    8: ErrorKind.MISSING_MESSAGE_ID,
    9: ErrorKind.UNKNOWN_MESSAGE_ID,
    10: ErrorKind.INVALID_TO,
    11: ErrorKind.INVALID_FROM,
    12: ErrorKind.MESSAGE_TOO_LONG,
    13: ErrorKind.ROUTING_MESSAGE,
    14: ErrorKind.MESSAGE_EXPIRED,
    15: ErrorKind.NO_ROUTE,
    16: ErrorKind.MISSING_URL,
    17: ErrorKind.INVALID_SOURCE_IP,
    18: ErrorKind.MISSING_UDH,
    19: ErrorKind.INVALID_SERV_TYPE,
    20: ErrorKind.INVALID_EXPIRY_TIME,
    25: ErrorKind.DUPLICATE_CLIENT_ID,
    26: ErrorKind.INTERNAL,
    27: ErrorKind.INVALID_TIMESTAMP,
    28: ErrorKind.INVALID_ABS_EXPIRY,
    29: ErrorKind.INVALID_DLR_TYPE,
    31: ErrorKind.INVALID_CONCAT,
    32: ErrorKind.INVALID_UNIQUE_ID,
    33: ErrorKind.CLIENT_ID_REQUIRED,
    39: ErrorKind.INVALID_CHAR_IN_CONTENT,
    40: ErrorKind.INVALID_TEXT_PAYLOAD,
    41: ErrorKind.INVALID_HEX_PAYLOAD,
    42: ErrorKind.INVALID_BASE64_PAYLOAD,
    43: ErrorKind.MISSING_CONTENT_TYPE,
    44: ErrorKind.MISSING_ID,
    45: ErrorKind.MMS_MESSAGE_TOO_LARGE,
    46: ErrorKind.INVALID_PAYLOAD_ID,
    47: ErrorKind.DUPLICATE_PAYLOAD_ID,
    48: ErrorKind.NO_PAYLOAD_ON_MMS,
    49: ErrorKind.DUPLICATE_FILE_NAME,
    50: ErrorKind.MISSING_ITEM_ID,
    51: ErrorKind.INVALID_ITEM_ID,
    52: ErrorKind.GENERATE_FILE_NAME,
    53: ErrorKind.INVALID_CHAR_ACTION,
    54: ErrorKind.INVALID_DLR_ENROUTE,
    55: ErrorKind.INVALID_TRUNCATE,
    56: ErrorKind.INVALID_LONG,
    57: ErrorKind.NO_API_KEY,
    58: ErrorKind.INVALID_API_KEY,
    59: ErrorKind.MUST_USE_API_KEYS,
    60: ErrorKind.BLOCKED_SPAM,
    100: ErrorKind.INTERNAL,
    101: ErrorKind.INTERNAL,
    102: ErrorKind.INVALID_XML,
    103: ErrorKind.INVALID_XML_DOC,
    300: ErrorKind.LONG_CLIENT_ID,
    305: ErrorKind.RATE_EXCEEDED,
})

# Detail codes sent with delivery receipts. Codes outside this table carry no reason.
DETAIL_CODES = MappingProxyType({
    "2": ErrorKind.MESSAGE_DETAILS_WRONG,
    "3": ErrorKind.PERM_OPERATOR,
    "4": ErrorKind.TEMP_OPERATOR,
    "5": ErrorKind.PERM_ABSENT_SUBSCRIBER,
    "6": ErrorKind.TEMP_ABSENT_SUBSCRIBER,
    "9": ErrorKind.PERM_PHONE,
    "10": ErrorKind.TEMP_PHONE,
})


def classify(code: int) -> ErrorKind:
    """Map a gateway API error code to its kind, falling back to ``ErrorKind.UNKNOWN``."""
    return ERROR_CODES.get(code, ErrorKind.UNKNOWN)


def classify_detail(code: str) -> Optional[ErrorKind]:
    """Map a delivery detail code to a failure reason, or None when the network gave none."""
    return DETAIL_CODES.get(code)


class ClockworkError(Exception):
    """Base class for every error raised by this library."""


class GatewayError(ClockworkError):
    def __init__(self, kind: ErrorKind, code: Optional[int] = None):
        self.kind = kind
        self.code = code
        super().__init__(f"clockwork: {kind.value}")


class TransportError(ClockworkError):
    """The request never produced a usable HTTP response."""


class StatusCodeError(TransportError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"clockwork: API request did not return HTTP 200 OK (got {status_code})")


class ResponseParseError(ClockworkError):
    """A gateway response body could not be read."""

    def __init__(self, message: str, body: str = ""):
        self.body = body
        super().__init__(message)
