"""Parsers for the gateway's plain-text send and balance responses.

A send response carries one line per recipient::

    To: 441234567890 ID: VE_439221450
    To: 123 Error 10: Invalid 'To' Parameter

unless the whole request failed, in which case it is a single ``Error <code>: <message>``
line. A balance response is either ``Balance: 287.58 (GBP)`` or an error line.
"""
import enum
import logging
import string
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .errors import ErrorKind, GatewayError, ResponseParseError, classify

logger = logging.getLogger(__name__)

ERROR_MARKER = "Error"
TO_LABEL = "To:"
ID_LABEL = "ID:"

_DIGITS = frozenset(string.digits)
_UPPERCASE = frozenset(string.ascii_uppercase)


class SendStatus(enum.Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


@dataclass(frozen=True)
class SendResult:
    """Outcome of a send request.

    ``messages`` maps every accepted recipient to its gateway message ID. A PARTIAL
    result always carries ``ErrorKind.INVALID_TO`` and lists the refused numbers in
    ``rejected``; a FAILURE carries only the classified error.
    """

    status: SendStatus
    messages: Mapping[str, str] = field(default_factory=dict, hash=False)
    error: Optional[ErrorKind] = None
    code: Optional[int] = None
    rejected: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))
        if self.status is SendStatus.SUCCESS:
            if self.error is not None or self.rejected:
                raise ValueError("a successful send result cannot carry an error")
        elif self.status is SendStatus.PARTIAL:
            if self.error is not ErrorKind.INVALID_TO:
                raise ValueError("a partial send result must carry ErrorKind.INVALID_TO")
        elif self.error is None or self.messages or self.rejected:
            raise ValueError("a failed send result carries an error and nothing else")

    @classmethod
    def success(cls, messages: Dict[str, str]) -> "SendResult":
        return cls(SendStatus.SUCCESS, messages)

    @classmethod
    def partial(cls, messages: Dict[str, str], rejected: List[str]) -> "SendResult":
        return cls(
            SendStatus.PARTIAL,
            messages,
            error=ErrorKind.INVALID_TO,
            code=10,
            rejected=tuple(rejected),
        )

    @classmethod
    def failure(cls, kind: ErrorKind, code: Optional[int] = None) -> "SendResult":
        return cls(SendStatus.FAILURE, error=kind, code=code)

    @property
    def ok(self) -> bool:
        return self.status is SendStatus.SUCCESS

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise GatewayError(self.error, self.code)


@dataclass(frozen=True)
class CreditResult:
    balance: Optional[float] = None
    currency: Optional[str] = None
    error: Optional[ErrorKind] = None
    code: Optional[int] = None

    def __post_init__(self):
        if (self.balance is None) == (self.error is None):
            raise ValueError("a credit result carries either a balance or an error")

    @classmethod
    def success(cls, balance: float, currency: str) -> "CreditResult":
        return cls(balance=balance, currency=currency)

    @classmethod
    def failure(cls, kind: ErrorKind, code: Optional[int] = None) -> "CreditResult":
        return cls(error=kind, code=code)

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise GatewayError(self.error, self.code)


def _digit_run(text: str, start: int) -> int:
    end = start
    while end < len(text) and text[end] in _DIGITS:
        end += 1
    return end


def _word_after(text: str, label: str) -> str:
    """Return the whitespace-delimited token that follows ``label``, or ""."""
    _, found, rest = text.partition(label)
    if not found:
        return ""
    words = rest.split(None, 1)
    return words[0] if words else ""


def _error_code(text: str) -> int:
    """Return the first integer after the error marker, e.g. 58 for ``Error 58: ...``."""
    _, _, rest = text.partition(ERROR_MARKER)
    for index, char in enumerate(rest):
        if char in _DIGITS:
            return int(rest[index:_digit_run(rest, index)])
    raise ResponseParseError(f"clockwork: no error code in response {text!r}", body=text)


def _first_number(text: str) -> Optional[str]:
    # Leftmost signed integer or decimal; the integer part may be omitted (".5").
    for start in range(len(text)):
        pos = start + 1 if text[start] in "+-" else start
        int_end = _digit_run(text, pos)
        if int_end + 1 < len(text) and text[int_end] == "." and text[int_end + 1] in _DIGITS:
            return text[start:_digit_run(text, int_end + 1)]
        if int_end > pos:
            return text[start:int_end]
    return None


def _currency_code(text: str) -> str:
    """Return the first run of two or more uppercase letters, e.g. "GBP"."""
    run: List[str] = []
    for char in text + " ":
        if char in _UPPERCASE:
            run.append(char)
            continue
        if len(run) >= 2:
            return "".join(run)
        run = []
    return ""


def parse_send_response(body: str) -> SendResult:
    messages: Dict[str, str] = {}
    rejected: List[str] = []
    has_rejected = False

    for raw_line in body.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        if ERROR_MARKER in line:
            if TO_LABEL in line:
                # One refused number; the rest of the response may still hold accepted ones.
                has_rejected = True
                recipient = _word_after(line, TO_LABEL)
                if recipient:
                    rejected.append(recipient)
                continue

            code = _error_code(line)
            kind = classify(code)
            logger.warning(
                "Gateway rejected send request.",
                extra={"error_code": code, "error_kind": kind.name},
            )
            return SendResult.failure(kind, code)

        head, _, tail = line.partition(ID_LABEL)
        recipient = _word_after(head, TO_LABEL)
        words = tail.split(None, 1)
        if not recipient or not words:
            logger.warning("Skipping unrecognised send response line.", extra={"line": line})
            continue
        messages[recipient] = words[0]

    if has_rejected:
        logger.info(
            "Gateway refused %d recipient(s), accepted %d.",
            len(rejected),
            len(messages),
        )
        return SendResult.partial(messages, rejected)
    return SendResult.success(messages)


def parse_credit_response(body: str) -> CreditResult:
    if ERROR_MARKER in body:
        code = _error_code(body)
        kind = classify(code)
        logger.warning(
            "Gateway rejected balance request.",
            extra={"error_code": code, "error_kind": kind.name},
        )
        return CreditResult.failure(kind, code)

    amount = _first_number(body)
    if amount is None:
        raise ResponseParseError(f"clockwork: no balance in response {body!r}", body=body)
    return CreditResult.success(float(amount), _currency_code(body))
