"""
Observability package - OpenTelemetry tracing and request logging.
"""
