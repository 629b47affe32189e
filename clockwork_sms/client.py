import logging
import time
from typing import Dict, Optional
from urllib.parse import urlencode

import requests

from .config import Settings, get_settings
from .errors import StatusCodeError, TransportError
from .metrics import (
    GATEWAY_REQUESTS_TOTAL,
    GATEWAY_REQUEST_LATENCY_SECONDS,
    GATEWAY_TRANSPORT_ERRORS_TOTAL,
    SMS_RECIPIENTS_TOTAL,
    SMS_SEND_RESULTS_TOTAL,
)
from .responses import CreditResult, SendResult, parse_credit_response, parse_send_response
from .schemas import SMS
from .version import USER_AGENT

logger = logging.getLogger(__name__)

HEADERS = {
    'User-Agent': USER_AGENT,
    'Content-Type': 'text/plain; charset=utf-8',
}


class ClockworkClient:
    """Synchronous client for the Clockwork HTTP API.

    ``session`` is anything with a requests-style ``request(method, url, headers=, timeout=)``
    method; a fresh ``requests.Session`` is used when omitted. Every call issues exactly
    one GET request and never retries.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        session=None,
        *,
        send_url: Optional[str] = None,
        credit_url: Optional[str] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.api_key = api_key if api_key is not None else settings.api_key
        self.send_url = send_url or settings.send_url
        self.credit_url = credit_url or settings.credit_url
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._owns_session = session is None
        self.session = session or requests.Session()

    def __enter__(self) -> "ClockworkClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def send(self, sms: SMS) -> SendResult:
        """Send one message; see ``SendResult`` for the partial-success case."""
        params = sms.to_query_params()
        params['Key'] = self.api_key

        body = self._get('send', self.send_url, params)
        result = parse_send_response(body)

        SMS_SEND_RESULTS_TOTAL.labels(status=result.status.value).inc()
        SMS_RECIPIENTS_TOTAL.labels(outcome='accepted').inc(len(result.messages))
        SMS_RECIPIENTS_TOTAL.labels(outcome='rejected').inc(len(result.rejected))
        logger.info(
            "SMS send request processed.",
            extra={
                "status": result.status.value,
                "accepted": len(result.messages),
                "rejected": len(result.rejected),
            },
        )
        return result

    def credit(self) -> CreditResult:
        """Check how much credit is left on the account."""
        body = self._get('credit', self.credit_url, {'key': self.api_key})
        result = parse_credit_response(body)
        if result.ok:
            logger.info(f"Account balance is {result.balance} {result.currency}.")
        return result

    def _get(self, operation: str, url: str, params: Dict[str, str]) -> str:
        separator = "&" if "?" in url else "?"
        target = f"{url}{separator}{urlencode(params)}"
        GATEWAY_REQUESTS_TOTAL.labels(operation=operation).inc()
        start_time = time.monotonic()
        try:
            response = self.session.request('GET', target, headers=dict(HEADERS), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            GATEWAY_TRANSPORT_ERRORS_TOTAL.labels(operation=operation).inc()
            logger.error(f"Gateway {operation} request failed: {e}")
            raise TransportError(f"clockwork: {operation} request failed: {e}") from e
        finally:
            GATEWAY_REQUEST_LATENCY_SECONDS.labels(operation=operation).observe(
                time.monotonic() - start_time
            )

        if response.status_code != 200:
            GATEWAY_TRANSPORT_ERRORS_TOTAL.labels(operation=operation).inc()
            logger.error(
                f"Gateway {operation} request returned HTTP {response.status_code}.",
                extra={"status_code": response.status_code},
            )
            raise StatusCodeError(response.status_code)

        return response.text
