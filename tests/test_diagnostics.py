"""Tests for the parser diagnostics side channel."""

import logging

import pytest

from cssast import (
    Diagnostics,
    LoggingDiagnostics,
    NullDiagnostics,
    RecordingDiagnostics,
    parse,
)

TOKENS = [
    {"kind": "bogus", "text": "?"},
    {"kind": "selector", "text": "a"},
    {"kind": "property", "name": "color", "value": "red"},
]


class TestProtocol:
    @pytest.mark.parametrize(
        "diagnostics", [LoggingDiagnostics(), NullDiagnostics(), RecordingDiagnostics()]
    )
    def test_implementations(self, diagnostics) -> None:
        assert isinstance(diagnostics, Diagnostics)


class TestRecording:
    def test_events(self) -> None:
        diagnostics = RecordingDiagnostics()
        parse(TOKENS, diagnostics=diagnostics)

        unexpected = diagnostics.named("unexpected-token")
        assert len(unexpected) == 1
        assert unexpected[0]["token"].kind == "bogus"

        assert len(diagnostics.named("ran")) == 1
        assert len(diagnostics.named("node")) == 2

    def test_next_reports_exhaustion(self) -> None:
        diagnostics = RecordingDiagnostics()
        parse([], diagnostics=diagnostics)
        assert diagnostics.named("next") == [{"token": None}]

    def test_malformed_events(self) -> None:
        diagnostics = RecordingDiagnostics()
        parse([{"kind": "block-end"}], diagnostics=diagnostics)
        parse([{"kind": "media"}], diagnostics=diagnostics)
        assert diagnostics.named("depth-underflow")[0]["depth"] == 0
        assert diagnostics.named("unclosed-group")[0]["depth"] == 1

    def test_does_not_change_result(self) -> None:
        assert parse(TOKENS, diagnostics=RecordingDiagnostics()) == parse(
            TOKENS, diagnostics=NullDiagnostics()
        )


class TestLogging:
    def test_default_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="cssast.parse")
        parse(TOKENS)
        assert any(message.startswith("[parse] ran ms=") for message in caplog.messages)
        assert any(message.startswith("[parse] unexpected-token") for message in caplog.messages)

    def test_custom_logger_and_label(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("tests.diagnostics")
        caplog.set_level(logging.DEBUG, logger="tests.diagnostics")
        parse(TOKENS, diagnostics=LoggingDiagnostics(logger, label="css"))
        assert caplog.records
        assert all(record.name == "tests.diagnostics" for record in caplog.records)
        assert all(message.startswith("[css] ") for message in caplog.messages)

    def test_quiet_when_disabled(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING, logger="cssast.parse")
        parse(TOKENS)
        assert [r for r in caplog.records if r.name == "cssast.parse"] == []

    def test_deep_tree(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="cssast.parse")
        tokens = [{"kind": "media"}] * 500 + [{"kind": "block-end"}] * 500
        ast = parse(tokens)
        assert len(ast["rules"]) == 1
        assert any(message.startswith("[parse] node") for message in caplog.messages)
