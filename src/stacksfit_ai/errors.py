# src/stacksfit_ai/errors.py
"""
Internal error signals for plan generation.

None of these reach an HTTP caller: the orchestrator catches them and moves on
to the next fallback stage.
"""

from enum import Enum


class ErrorKind(str, Enum):
    UNREACHABLE = "unreachable"
    RATE_LIMITED = "rate_limited"
    AUTH_ERROR = "auth_error"
    UNKNOWN = "unknown"


class GenerationError(Exception):
    def __init__(self, backend: str, message: str = ""):
        super().__init__(f"{backend}: {message}" if message else backend)
        self.backend = backend
        self.message = message


class AdapterUnavailable(GenerationError):
    def __init__(self, backend: str):
        super().__init__(backend, "not configured")


class AdapterCallFailed(GenerationError):
    def __init__(self, backend: str, kind: ErrorKind, message: str = ""):
        super().__init__(backend, f"{kind.value}: {message}" if message else kind.value)
        self.kind = kind
        self.reason = message


class ResponseUnparseable(GenerationError):
    pass
