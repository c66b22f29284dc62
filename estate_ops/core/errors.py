"""Error Hierarchy — typed, categorized exceptions for every record-mutation failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation failures carry the COMPLETE violation list, never just the first
    - Only DependencyError is retryable
    - ConflictError is raised only for a unique key; other store constraint
      failures surface as StoreIntegrityError (500)
    - to_response() produces the REST envelope; no internal details leak into messages

Design Decisions:
    - Single hierarchy with EstateOpsError base: FastAPI global handler catches all (uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to the logging framework
    - StructuralError and BusinessRuleViolation share ValidationFailedError so callers
      can catch "the candidate was rejected" without caring which layer rejected it
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from estate_ops.core.validation import RuleViolation


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    DEPENDENCY = "dependency"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity_kind: str | None = None
    record_id: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class EstateOpsError(Exception):
    """Base exception for all estate-ops errors."""

    retryable: bool = False

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
                "retryable": self.retryable,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "entity_kind": self.context.entity_kind,
                    "record_id": self.context.record_id,
                    "field": self.context.field,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(EstateOpsError):
    """Candidate record rejected — carries every violated rule."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        violations: list[RuleViolation],
        context: ErrorContext | None = None,
        http_status: int = 400,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.ERROR, context, http_status,
        )
        self.violations = list(violations)

    @property
    def rule_ids(self) -> list[str]:
        return [v.rule_id for v in self.violations]

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["violations"] = [v.to_dict() for v in self.violations]
        return response


class StructuralError(ValidationFailedError):
    """Required field missing or malformed."""
    def __init__(
        self, violations: list[RuleViolation], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Record is malformed: {len(violations)} structural violation(s)",
            "STRUCTURAL_ERROR", ErrorCategory.VALIDATION,
            violations, context, 400,
        )


class BusinessRuleViolation(ValidationFailedError):
    """One or more named business invariants failed."""
    def __init__(
        self, violations: list[RuleViolation], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Business rules violated: {', '.join(v.rule_id for v in violations)}",
            "BUSINESS_RULE_VIOLATION", ErrorCategory.BUSINESS_RULE,
            violations, context, 422,
        )


class ConflictError(EstateOpsError):
    """Uniqueness constraint violated (pre-check or authoritative store constraint)."""
    def __init__(
        self, field: str, entity_kind: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = field
        ctx.entity_kind = ctx.entity_kind or entity_kind
        super().__init__(
            f"A record with this {field} already exists",
            "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.field = field


class ResourceNotFoundError(EstateOpsError):
    """Requested record does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity_kind = ctx.entity_kind or resource_type
        ctx.record_id = ctx.record_id or resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class AuthenticationError(EstateOpsError):
    """Credential check failed. Never says whether the email or the password was wrong."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid email or password",
            "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DependencyError(EstateOpsError):
    """Entity store or credential primitive failed for infrastructural reasons."""

    retryable = True

    def __init__(
        self,
        message: str,
        operation: str,
        category: ErrorCategory = ErrorCategory.DEPENDENCY,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{operation} failed: {message}",
            "DEPENDENCY_ERROR", category,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class StoreIntegrityError(EstateOpsError):
    """Store rejected a write on a constraint other than uniqueness (NOT NULL, foreign key).

    Validation should have caught it, so retrying the same record cannot help.
    """
    def __init__(
        self, operation: str, entity_kind: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity_kind = ctx.entity_kind or entity_kind
        super().__init__(
            f"{operation} rejected by a store integrity constraint",
            "STORE_INTEGRITY_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
