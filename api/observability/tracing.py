"""
Calculation tracing hook.

Wraps a call into the pure calculation engine with a span and debug logs so
the domain functions never trace themselves.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from opentelemetry import trace

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)


@contextmanager
def trace_calculation(action_type: str, start_date: Optional[str]) -> Iterator[trace.Span]:
    """
    Open a span around a term calculation.

    Args:
        action_type: Action type as received
        start_date: Start date as received, possibly None
    """
    with tracer.start_as_current_span(
        "terms.calculate",
        attributes={
            "terms.action_type": action_type,
            "terms.start_date": start_date or ""
        }
    ) as span:
        logger.debug(
            "Calculating terms",
            extra={"action_type": action_type, "start_date": start_date}
        )
        yield span


def record_calculation_result(span: trace.Span, result: Dict[str, str]) -> None:
    """Attach the outcome of a calculation to its span and debug log."""
    recognized = "error" not in result
    span.set_attribute("terms.recognized", recognized)

    milestones = [
        key for key in result
        if key not in ("tipo", "descripcion", "fundamentoJuridico", "error", "tiposValidos")
    ]
    for key in milestones:
        span.set_attribute(f"terms.{key}", result[key])

    logger.debug(
        "Terms calculated",
        extra={
            "recognized": recognized,
            "milestones": {key: result[key] for key in milestones}
        }
    )
