"""Error Hierarchy — typed, categorized exceptions for all reachq failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Resolution errors (400-level) reject the query; nothing partial is returned
    - to_response() produces the REST envelope
    - The offending field and raw expression travel in ErrorContext

Design Decisions:
    - Single hierarchy with ReachqError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Resolvers raise plain ValueError; core wraps it with field context (ADR: resolvers stay field-agnostic)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    question: str | None = None
    field: str | None = None
    expression: str | None = None
    debug_info: dict[str, Any] | None = None


class ReachqError(Exception):
    """Base exception for all reachq errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "question": self.context.question,
                    "field": self.context.field,
                    "expression": self.context.expression,
                },
            }
        }


# ─── Resolution Errors (400-level) ──────────────────────────────

class InvalidSpecifierError(ReachqError):
    """An expression could not be parsed/resolved into a specifier."""
    def __init__(
        self,
        field: str,
        expression: str | None,
        reason: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = field
        ctx.expression = expression
        super().__init__(
            f"Invalid specifier for '{field}': {expression!r} ({reason})",
            "INVALID_SPECIFIER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field
        self.expression = expression
        self.reason = reason


# ─── Infrastructure Errors (500-level) ──────────────────────────

class ResolversNotLoadedError(ReachqError):
    """Request arrived before the resolver bundle was built."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Specifier resolvers are not loaded",
            "RESOLVERS_NOT_LOADED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 503,
        )
