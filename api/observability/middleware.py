"""
Observability Middleware

Instruments the Flask app with OpenTelemetry and tags every calculation
request with the action code it resolved to and whether that code was
recognized, so request spans and logs can be filtered by action type.
"""

import time
import logging
from typing import Optional
from flask import Flask, request, g
from opentelemetry import trace
from opentelemetry.instrumentation.flask import FlaskInstrumentor

logger = logging.getLogger(__name__)

TRACE_ID_HEADER = 'X-Trace-Id'


def tag_calculation_request(action_code: str, recognized: bool) -> None:
    """Remember the outcome of the calculation handled by the current request."""
    g.action_code = action_code
    g.action_recognized = recognized


def _request_outcome() -> Optional[dict]:
    action_code = g.get('action_code')
    if action_code is None:
        return None
    return {
        "terms.action_code": action_code,
        "terms.recognized": g.get('action_recognized', False)
    }


def add_observability_middleware(app: Flask):
    """Instrument the app and tag request spans with the calculation outcome."""

    FlaskInstrumentor().instrument_app(app)

    @app.before_request
    def start_request_timer():
        g.start_time = time.perf_counter()

    @app.after_request
    def tag_request_span(response):
        duration_ms = round((time.perf_counter() - g.get('start_time', time.perf_counter())) * 1000, 2)
        outcome = _request_outcome()

        span = trace.get_current_span()
        if span.is_recording():
            span.set_attribute("http.duration_ms", duration_ms)
            if outcome:
                span.set_attributes(outcome)
            response.headers[TRACE_ID_HEADER] = format(span.get_span_context().trace_id, "032x")

        if outcome:
            logger.info(
                "Calculation request completed",
                extra={
                    "action_code": outcome["terms.action_code"],
                    "recognized": outcome["terms.recognized"],
                    "status_code": response.status_code,
                    "duration_ms": duration_ms
                }
            )
        else:
            logger.debug(
                f"{request.method} {request.path} -> {response.status_code}",
                extra={"duration_ms": duration_ms}
            )

        return response
