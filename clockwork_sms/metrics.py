from fastapi import Response
from prometheus_client import Counter, Histogram, generate_latest
from prometheus_client.core import CollectorRegistry

# Dedicated registry so only this library's metrics are exposed on the listener.
APP_REGISTRY = CollectorRegistry()

GATEWAY_REQUESTS_TOTAL = Counter(
    'clockwork_gateway_requests_total',
    'Total number of requests made to the SMS gateway.',
    ['operation'],
    registry=APP_REGISTRY
)
GATEWAY_REQUEST_LATENCY_SECONDS = Histogram(
    'clockwork_gateway_request_latency_seconds',
    'Latency of SMS gateway requests in seconds.',
    ['operation'],
    registry=APP_REGISTRY
)
GATEWAY_TRANSPORT_ERRORS_TOTAL = Counter(
    'clockwork_gateway_transport_errors_total',
    'Total number of gateway requests that failed before a usable response.',
    ['operation'],
    registry=APP_REGISTRY
)
SMS_SEND_RESULTS_TOTAL = Counter(
    'clockwork_sms_send_results_total',
    'Total number of parsed send responses by outcome.',
    ['status'],
    registry=APP_REGISTRY
)
SMS_RECIPIENTS_TOTAL = Counter(
    'clockwork_sms_recipients_total',
    'Total number of recipients accepted or rejected by the gateway.',
    ['outcome'],
    registry=APP_REGISTRY
)
DELIVERY_RECEIPTS_TOTAL = Counter(
    'clockwork_delivery_receipts_total',
    'Total number of delivery receipts handed to the callback.',
    ['state'],
    registry=APP_REGISTRY
)
DELIVERY_RECEIPTS_DROPPED_TOTAL = Counter(
    'clockwork_delivery_receipts_dropped_total',
    'Total number of delivery notifications dropped without invoking the callback.',
    ['reason'],
    registry=APP_REGISTRY
)


def metrics_content() -> Response:
    """Returns Prometheus metrics in the text exposition format."""
    payload = generate_latest(APP_REGISTRY)
    return Response(
        content=payload,
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
