import pytest

from clockwork_sms.errors import (
    DETAIL_CODES,
    ERROR_CODES,
    ErrorKind,
    GatewayError,
    StatusCodeError,
    TransportError,
    classify,
    classify_detail,
)

# Written out independently of ERROR_CODES so a typo in either table shows up.
DOCUMENTED_CODES = {
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
}


def test_code_table_matches_documentation():
    assert dict(ERROR_CODES) == DOCUMENTED_CODES


def test_classify_covers_whole_code_domain():
    for code in range(-10, 2001):
        assert classify(code) is DOCUMENTED_CODES.get(code, ErrorKind.UNKNOWN), code


@pytest.mark.parametrize("code", [0, 21, 30, 34, 61, 99, 104, 299, 301, 306, 10**9])
def test_classify_unknown_codes(code):
    assert classify(code) is ErrorKind.UNKNOWN


def test_code_table_is_read_only():
    with pytest.raises(TypeError):
        ERROR_CODES[1] = ErrorKind.UNKNOWN
    with pytest.raises(TypeError):
        DETAIL_CODES["2"] = ErrorKind.UNKNOWN


@pytest.mark.parametrize(
    "code, expected",
    [
        ("2", ErrorKind.MESSAGE_DETAILS_WRONG),
        ("3", ErrorKind.PERM_OPERATOR),
        ("4", ErrorKind.TEMP_OPERATOR),
        ("5", ErrorKind.PERM_ABSENT_SUBSCRIBER),
        ("6", ErrorKind.TEMP_ABSENT_SUBSCRIBER),
        ("9", ErrorKind.PERM_PHONE),
        ("10", ErrorKind.TEMP_PHONE),
    ],
)
def test_classify_detail_known_codes(code, expected):
    assert classify_detail(code) is expected


@pytest.mark.parametrize("code", ["", "0", "1", "7", "8", "11", "abc", "58", " 5 ", "10\n"])
def test_classify_detail_without_reason_is_none(code):
    assert classify_detail(code) is None


def test_gateway_error_carries_kind_and_code():
    err = GatewayError(ErrorKind.INVALID_API_KEY, 58)
    assert err.kind is ErrorKind.INVALID_API_KEY
    assert err.code == 58
    assert str(err).startswith("clockwork: invalid API key")


def test_status_code_error_is_a_transport_error():
    err = StatusCodeError(503)
    assert isinstance(err, TransportError)
    assert err.status_code == 503
    assert "503" in str(err)
