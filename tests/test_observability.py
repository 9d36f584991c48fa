"""Tests for the observability module."""

from uuid import uuid4

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from src.infrastructure.observability.structlog_processor import (
    REDACTED,
    add_trace_context,
    redact_secrets,
)
from src.infrastructure.observability.tracing import (
    add_span_attributes,
    get_tracer,
    record_auth_outcome,
    traced,
)
from src.modules.auth.exceptions import AccountNotFoundError
from src.modules.auth.gate import AuthGate
from src.modules.auth.password import PasswordHasher
from src.modules.auth.service import AuthService
from src.modules.auth.tokens import TokenIssuer

TEST_SECRET = "test-secret-key-for-testing-only-0123456789"

# Module-level setup: configure TracerProvider once before any tests run
_exporter = InMemorySpanExporter()
_provider = TracerProvider()
_provider.add_span_processor(SimpleSpanProcessor(_exporter))
trace.set_tracer_provider(_provider)


@pytest.fixture(autouse=True)
def clear_spans():
    """Clear spans before each test."""
    _exporter.clear()
    yield
    _exporter.clear()


def get_finished_spans():
    """Get finished spans from the module-level exporter."""
    return _exporter.get_finished_spans()


class TestTracedDecorator:
    """Tests for @traced decorator."""

    def test_sync_function_creates_span(self):
        @traced
        def compute():
            return "result"

        assert compute() == "result"

        spans = get_finished_spans()
        assert len(spans) == 1
        assert spans[0].name.endswith("compute")
        assert spans[0].status.status_code == trace.StatusCode.OK

    async def test_async_function_creates_named_span(self):
        @traced(span_name="custom.name", attributes={"component": "test"})
        async def compute():
            return 42

        assert await compute() == 42

        spans = get_finished_spans()
        assert len(spans) == 1
        assert spans[0].name == "custom.name"
        assert dict(spans[0].attributes or {})["component"] == "test"

    async def test_exception_marks_span_as_error(self):
        @traced(span_name="failing")
        async def fail():
            raise ValueError("secret@example.com is bad")

        with pytest.raises(ValueError):
            await fail()

        span = get_finished_spans()[0]
        assert span.status.status_code == trace.StatusCode.ERROR
        # Only the exception type goes into the status description
        assert span.status.description == "ValueError"
        assert any(event.name == "exception" for event in span.events)

    def test_record_exception_can_be_disabled(self):
        @traced(record_exception=False)
        def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            fail()

        span = get_finished_spans()[0]
        assert span.status.status_code == trace.StatusCode.ERROR
        assert not span.events


class TestSpanAttributes:
    """Tests for span attribute helpers."""

    def test_adds_attributes_to_current_span(self):
        with get_tracer("test").start_as_current_span("test_span"):
            add_span_attributes({"custom_key": "custom_value", "number": 100})

        attrs = dict(get_finished_spans()[0].attributes or {})
        assert attrs["custom_key"] == "custom_value"
        assert attrs["number"] == 100

    def test_does_nothing_without_active_span(self):
        add_span_attributes({"key": "value"})
        record_auth_outcome("accepted")

    def test_record_auth_outcome(self):
        with get_tracer("test").start_as_current_span("request"):
            record_auth_outcome("rejected", reason="expired")

        attrs = dict(get_finished_spans()[0].attributes or {})
        assert attrs["auth.outcome"] == "rejected"
        assert attrs["auth.rejection_reason"] == "expired"

    def test_gate_tags_current_span(self):
        issuer = TokenIssuer(TEST_SECRET)
        gate = AuthGate(issuer)

        with get_tracer("test").start_as_current_span("request"):
            gate.authenticate(issuer.issue(uuid4()))

        attrs = dict(get_finished_spans()[0].attributes or {})
        assert attrs["auth.outcome"] == "accepted"
        assert "auth.rejection_reason" not in attrs


class TestServiceSpans:
    """Account operations are traced."""

    async def test_failed_login_produces_error_span(self, memory_store):
        service = AuthService(memory_store, PasswordHasher(), TokenIssuer(TEST_SECRET))

        with pytest.raises(AccountNotFoundError):
            await service.login("nobody@example.com", "secret1")

        spans = [s for s in get_finished_spans() if s.name == "auth.login"]
        assert len(spans) == 1
        assert spans[0].status.status_code == trace.StatusCode.ERROR
        assert spans[0].status.description == "AccountNotFoundError"


class TestStructlogProcessors:
    """Tests for structlog processors."""

    def test_adds_trace_context_when_in_span(self):
        with get_tracer("test").start_as_current_span("test_span"):
            result = add_trace_context(None, "info", {"event": "test_event"})

            assert len(result["trace_id"]) == 32
            assert len(result["span_id"]) == 16

    def test_no_trace_context_without_span(self):
        result = add_trace_context(None, "info", {"event": "test_event"})

        assert "trace_id" not in result

    def test_redacts_credentials(self):
        event = {
            "event": "debug_login",
            "email": "a@x.com",
            "password": "secret1",
            "access_token": "abc.def.ghi",
        }

        result = redact_secrets(None, "info", event)

        assert result["password"] == REDACTED
        assert result["access_token"] == REDACTED
        assert result["email"] == "a@x.com"
