"""Tests for logging setup."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator

import pytest

from sheet_access import AccessConfig, AccessService, ShareRole
from sheet_access.logging_utils import (
    StructuredJsonFormatter,
    access_context,
    configure_logging,
    configure_structured_logging,
)


def make_record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="sheet_access.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="granted %s",
        args=("viewer",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredJsonFormatter:
    def test_basic_fields(self) -> None:
        data = json.loads(StructuredJsonFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "sheet_access.test"
        assert data["message"] == "granted viewer"
        assert "timestamp" in data

    def test_context_fields_grouped(self) -> None:
        record = make_record(**access_context("grant", owner="alice", target="bob", role="viewer"))
        data = json.loads(StructuredJsonFormatter().format(record))

        assert data["event"] == "grant"
        assert data["context"] == {"owner": "alice", "target": "bob", "role": "viewer"}
        assert "owner" not in data

    def test_no_context_without_fields(self) -> None:
        data = json.loads(StructuredJsonFormatter().format(make_record()))
        assert "context" not in data
        assert "event" not in data

    def test_other_extras_stay_top_level(self) -> None:
        data = json.loads(StructuredJsonFormatter().format(make_record(request_id="r-1")))
        assert data["request_id"] == "r-1"

    def test_unserializable_extra(self) -> None:
        data = json.loads(StructuredJsonFormatter().format(make_record(targets={"bob"})))
        assert data["targets"] == "{'bob'}"

    def test_exception_info(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record()
            record.exc_info = sys.exc_info()

        data = json.loads(StructuredJsonFormatter().format(record))
        assert "RuntimeError: boom" in data["exception"]


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_logger(self) -> Iterator[None]:
        logger = logging.getLogger("sheet_access.logtest")
        yield
        logger.handlers.clear()

    def test_json_handler(self) -> None:
        logger = configure_structured_logging(logging.DEBUG, "sheet_access.logtest")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, StructuredJsonFormatter)

    def test_text_handler(self) -> None:
        logger = configure_structured_logging(
            logging.INFO, "sheet_access.logtest", json_output=False
        )
        assert not isinstance(logger.handlers[0].formatter, StructuredJsonFormatter)

    def test_no_duplicate_handlers(self) -> None:
        configure_structured_logging(logging.INFO, "sheet_access.logtest")
        logger = configure_structured_logging(logging.INFO, "sheet_access.logtest")
        assert len(logger.handlers) == 1

    def test_from_config(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            logger = configure_logging(AccessConfig(log_level="warning", log_json=True))
            assert logger is root
            assert root.level == logging.WARNING
            assert isinstance(root.handlers[0].formatter, StructuredJsonFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


class TestAccessContext:
    def test_drops_missing_fields(self) -> None:
        assert access_context("revoke", owner="alice", target=None) == {
            "event": "revoke",
            "owner": "alice",
        }

    def test_grant_log_carries_owner_and_target(
        self, alice_bob_carol: AccessService, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="sheet_access.access.policy"):
            alice_bob_carol.grant_role("alice", "bob", ShareRole.VIEWER)

        (record,) = [r for r in caplog.records if getattr(r, "event", None) == "grant"]
        assert record.owner == "alice"
        assert record.target == "bob"
        assert record.role == "viewer"

    def test_login_log_carries_username(
        self, alice_bob_carol: AccessService, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="sheet_access.identity.sessions"):
            alice_bob_carol.authenticate("bob", "pw2")

        (record,) = [r for r in caplog.records if getattr(r, "event", None) == "login"]
        assert record.username == "bob"
