import logging
import sys

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "clockwork-sms"


class ReceiptJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get('level'):
            log_record['level'] = record.levelname
        if not log_record.get('timestamp'):
            log_record['timestamp'] = self.formatTime(record, self.datefmt)
        if 'message' not in log_record:
            log_record['message'] = record.getMessage()

        # Message and recipient identifiers, when the caller passed them in extra
        if hasattr(record, 'msg_id'):
            log_record['msg_id'] = record.msg_id
        if hasattr(record, 'recipient'):
            log_record['recipient'] = record.recipient


def setup_logging(level: str = "INFO", service: str = SERVICE_NAME) -> None:
    logger = logging.getLogger()
    logger.setLevel(level)

    # Drop handlers from earlier calls so records are not written twice
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    formatter = ReceiptJsonFormatter(
        '%(timestamp)s %(level)s %(service)s %(name)s %(message)s',
        static_fields={'service': service},
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # The receipt listener runs under uvicorn; route its loggers through the same handler
    for name in ("uvicorn.access", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.addHandler(handler)
        uvicorn_logger.propagate = False
