"""JSON log lines, LogContext propagation, and logger setup."""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest

from citrus_kernel.domain.values import OrderStatus
from citrus_kernel.exceptions import InvalidTransitionError, ValidationError
from citrus_kernel.logging_config import (
    ROOT_LOGGER_NAME,
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def emitted():
    """Configure logging into a buffer; calling the fixture value parses the lines."""
    stream = StringIO()

    def _configure(level=logging.INFO):
        configure_logging(stream=stream, level=level)

    def _lines() -> list[dict]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    _lines.configure = _configure
    return _lines


class TestEnvelope:

    def test_fixed_keys(self, emitted):
        emitted.configure()
        get_logger("orders").info("order_created")

        (line,) = emitted()
        assert line["level"] == "INFO"
        assert line["message"] == "order_created"
        assert line["logger"] == "citrus_kernel.orders"
        assert datetime.fromisoformat(line["ts"]).tzinfo is not None

    def test_level_threshold(self, emitted):
        emitted.configure()
        log = get_logger("orders")
        log.debug("hidden")
        log.info("shown")
        log.warning("also_shown")
        assert [line["message"] for line in emitted()] == ["shown", "also_shown"]

    def test_debug_level_reaches_nested_loggers(self, emitted):
        emitted.configure(level=logging.DEBUG)
        get_logger("modules.reporting.service").debug("snapshot_read")
        (line,) = emitted()
        assert line["logger"] == "citrus_kernel.modules.reporting.service"


class TestExtraFields:

    def test_plain_extras(self, emitted):
        emitted.configure()
        get_logger("t").info("order_created", extra={"quantity": 2, "customer": "Harbour"})
        (line,) = emitted()
        assert line["quantity"] == 2
        assert line["customer"] == "Harbour"

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("12.50"), "12.50"),
            (OrderStatus.SHIPPED, "shipped"),
            (datetime(2024, 3, 1, tzinfo=timezone.utc), "2024-03-01T00:00:00+00:00"),
            (("a", "b"), ["a", "b"]),
        ],
    )
    def test_domain_values(self, emitted, value, expected):
        emitted.configure()
        get_logger("t").info("value", extra={"value": value})
        assert emitted()[0]["value"] == expected

    def test_uuid(self, emitted):
        emitted.configure()
        uid = uuid4()
        get_logger("t").info("value", extra={"partner": uid})
        assert emitted()[0]["partner"] == str(uid)


class TestExceptionFields:

    def test_plain_exception(self, emitted):
        emitted.configure()
        try:
            raise RuntimeError("database went away")
        except RuntimeError:
            get_logger("t").exception("read_failed")

        (line,) = emitted()
        assert line["exc_type"] == "RuntimeError"
        assert line["exc_message"] == "database went away"
        assert "exc_code" not in line
        assert "Traceback" in line["traceback"]

    def test_kernel_error_attributes(self, emitted):
        emitted.configure()
        try:
            raise InvalidTransitionError("ord-1", "pending", "delivered")
        except InvalidTransitionError:
            get_logger("t").error("transition_error", exc_info=True)

        (line,) = emitted()
        assert line["exc_code"] == "INVALID_STATUS_TRANSITION"
        assert line["exc_order_id"] == "ord-1"
        assert line["exc_current_status"] == "pending"
        assert line["exc_requested_status"] == "delivered"

    def test_validation_error_attributes(self, emitted):
        emitted.configure()
        try:
            raise ValidationError("order", [])
        except ValidationError:
            get_logger("t").warning("rejected", exc_info=True)
        (line,) = emitted()
        assert line["exc_entity_type"] == "order"
        assert line["exc_field_errors"] == []


class TestLogContext:

    def test_fields_appear_on_every_line(self, emitted):
        emitted.configure()
        LogContext.set(correlation_id="req-9", actor_id="partner-1")
        log = get_logger("t")
        log.info("one")
        log.info("two")
        for line in emitted():
            assert line["correlation_id"] == "req-9"
            assert line["actor_id"] == "partner-1"

    def test_absent_when_unset(self, emitted):
        emitted.configure()
        get_logger("t").info("bare")
        (line,) = emitted()
        assert not set(line) & {"correlation_id", "actor_id", "order_id", "partner_id"}

    def test_set_ignores_none(self):
        LogContext.set(order_id="o-1")
        LogContext.set(order_id=None, partner_id="p-1")
        assert LogContext.get_all() == {"order_id": "o-1", "partner_id": "p-1"}

    def test_clear(self):
        LogContext.set(correlation_id="x")
        LogContext.clear()
        assert LogContext.get_all() == {}

    def test_bind_nests_and_restores(self):
        LogContext.set(actor_id="outer")
        with LogContext.bind(actor_id="inner", order_id="o-1"):
            assert LogContext.get_all() == {"actor_id": "inner", "order_id": "o-1"}
        assert LogContext.get_all() == {"actor_id": "outer"}

    def test_bind_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with LogContext.bind(order_id="o-1"):
                raise RuntimeError
        assert LogContext.get_all() == {}

    def test_bind_stringifies_uuids(self):
        uid = uuid4()
        with LogContext.bind(partner_id=uid):
            assert LogContext.get_all()["partner_id"] == str(uid)

    def test_unknown_field_rejected(self):
        with pytest.raises(KeyError):
            LogContext.set(ordr_id="typo")
        with pytest.raises(KeyError):
            with LogContext.bind(customer="x"):
                pass


class TestConfigureLogging:

    @staticmethod
    def _json_handlers() -> list[logging.Handler]:
        # pytest attaches its own capture handlers; count only ours.
        return [
            h
            for h in logging.getLogger(ROOT_LOGGER_NAME).handlers
            if isinstance(h.formatter, StructuredFormatter)
        ]

    def test_second_call_is_noop(self):
        reset_logging()
        first, second = StringIO(), StringIO()
        configure_logging(stream=first)
        configure_logging(stream=second, level=logging.DEBUG)

        assert len(self._json_handlers()) == 1
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.INFO
        get_logger("t").info("once")
        assert first.getvalue() and not second.getvalue()

    def test_does_not_propagate_to_root(self):
        configure_logging(stream=StringIO())
        assert logging.getLogger(ROOT_LOGGER_NAME).propagate is False

    def test_reset_detaches_handler(self):
        configure_logging(stream=StringIO())
        reset_logging()
        assert self._json_handlers() == []
