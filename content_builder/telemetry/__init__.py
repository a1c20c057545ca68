"""Call-level telemetry helpers."""
