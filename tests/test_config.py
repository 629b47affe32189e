import json
import logging

from clockwork_sms import config
from clockwork_sms.config import Settings
from clockwork_sms.logging import ReceiptJsonFormatter


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.send_url == config.SEND_URL
    assert settings.credit_url == config.CREDIT_URL
    assert settings.request_timeout_seconds is None
    assert settings.receipt_port == 9090
    assert settings.receipt_path == "/receipts"


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("CLOCKWORK_API_KEY", "env-key")
    monkeypatch.setenv("CLOCKWORK_RECEIPT_PORT", "8081")
    monkeypatch.setenv("CLOCKWORK_LOG_LEVEL", "debug")
    monkeypatch.setenv("CLOCKWORK_REQUEST_TIMEOUT_SECONDS", "5")

    settings = Settings(_env_file=None)

    assert settings.api_key == "env-key"
    assert settings.receipt_port == 8081
    assert settings.log_level == "DEBUG"
    assert settings.request_timeout_seconds == 5.0


def test_blank_or_zero_timeout_means_none(monkeypatch):
    monkeypatch.setenv("CLOCKWORK_REQUEST_TIMEOUT_SECONDS", "")
    assert Settings(_env_file=None).request_timeout_seconds is None
    monkeypatch.setenv("CLOCKWORK_REQUEST_TIMEOUT_SECONDS", "0")
    assert Settings(_env_file=None).request_timeout_seconds is None


def test_get_settings_is_cached(monkeypatch):
    config.get_settings.cache_clear()
    try:
        assert config.get_settings() is config.get_settings()
    finally:
        config.get_settings.cache_clear()


def test_json_formatter_adds_receipt_fields():
    formatter = ReceiptJsonFormatter(
        '%(timestamp)s %(level)s %(service)s %(message)s',
        static_fields={'service': 'clockwork-sms'},
    )
    record = logging.makeLogRecord({
        "name": "clockwork_sms.webhooks",
        "levelname": "INFO",
        "levelno": logging.INFO,
        "msg": "Delivery receipt received.",
        "msg_id": "LA_424242",
        "recipient": "441234567890",
    })

    payload = json.loads(formatter.format(record))

    assert payload["service"] == "clockwork-sms"
    assert payload["level"] == "INFO"
    assert payload["message"] == "Delivery receipt received."
    assert payload["msg_id"] == "LA_424242"
    assert payload["recipient"] == "441234567890"
    assert payload["timestamp"]
