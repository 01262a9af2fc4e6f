"""Errors raised by the scheduling and scoring core."""


class InvalidInput(ValueError):
    """A caller passed a value outside the accepted domain.

    Surfaced to API clients as HTTP 400 and never retried.
    """


class SttUnavailable(RuntimeError):
    """No speech-to-text candidate produced a transcription."""
