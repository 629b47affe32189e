import enum
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Union

# The gateway ignores expiry times below this many minutes.
MIN_EXPIRY_MINUTES = 10


class MsgType(str, enum.Enum):
    TEXT = "TEXT"  # GSM character set, 160 characters per part
    UCS2 = "UCS2"  # any UCS-2 unicode character


class Concat(enum.IntEnum):
    ONE_PART = 1
    TWO_PARTS = 2
    THREE_PARTS = 3


class InvalidCharAction(enum.IntEnum):
    ERROR = 1
    REMOVE = 2
    REPLACE = 3


class Truncate(enum.IntEnum):
    ERROR_IF_TOO_LONG = 1
    REPLACE_EXTRA_TEXT = 2


def format_abs_expiry(value: datetime) -> str:
    """Format an absolute expiry as ``YYYYMMDDHHmm`` in UTC; naive datetimes are taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y%m%d%H%M")


@dataclass
class SMS:
    """A single outbound message.

    ``to`` holds up to 50 numbers in international format without a leading '+' or
    dialling prefix, e.g. 441234567890. Fields left at their defaults are not sent.
    """

    to: List[str] = field(default_factory=list)
    content: str = ""
    from_: str = ""
    msg_type: Optional[Union[MsgType, str]] = None
    concat: int = 0
    client_id: str = ""
    expiry: Optional[timedelta] = None
    abs_expiry: Optional[datetime] = None
    unique_id_checks: bool = False
    invalid_char_action: int = 0
    truncate: int = 0

    def to_query_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.to:
            params["To"] = ",".join(self.to)
        if self.content:
            params["Content"] = self.content
        if self.from_:
            params["From"] = self.from_
        if self.msg_type:
            params["MsgType"] = self.msg_type.value if isinstance(self.msg_type, MsgType) else self.msg_type
        if self.concat:
            params["Concat"] = str(int(self.concat))
        if self.client_id:
            params["ClientID"] = self.client_id
        if self.expiry is not None:
            minutes = self.expiry.total_seconds() / 60
            if minutes > MIN_EXPIRY_MINUTES:
                params["ExpiryTime"] = str(int(minutes))
        if self.abs_expiry is not None:
            params["AbsExpiry"] = format_abs_expiry(self.abs_expiry)
        if self.unique_id_checks:
            params["UniqueId"] = "1"
        if self.invalid_char_action:
            params["InvalidCharAction"] = str(int(self.invalid_char_action))
        if self.truncate:
            # The gateway's Truncate flag is 0/1 while the option values start at 1.
            params["Truncate"] = str(int(self.truncate) - 1)
        return params
