"""Error taxonomy shared by every bounded context.

Each error carries a stable ``kind`` tag and the payload needed to render an
actionable message (entity, key used, attempted value). Bounded contexts
specialise these classes; the presentation layer maps the four kinds onto
HTTP status codes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, ClassVar


class CoreError(Exception):
    """Base class for every error raised by the core.

    Attributes:
        kind: Stable, machine-readable error category
    """

    kind: ClassVar[str] = "core_error"


class InvalidArgumentError(CoreError, ValueError):
    """Raised when input is malformed or missing.

    Always raised before any mutation takes place.
    """

    kind: ClassVar[str] = "invalid_argument"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(CoreError, LookupError):
    """Raised when a lookup by key finds nothing.

    Args:
        entity: Kind of entity looked up (e.g. "user")
        key: Name of the key used for the lookup (e.g. "id", "email")
        value: The value that was looked up
    """

    kind: ClassVar[str] = "not_found"

    def __init__(self, entity: str, key: str, value: Any):
        super().__init__(f"{entity.capitalize()} not found with {key}: {value}")
        self.entity = entity
        self.key = key
        self.value = value


class DuplicateValueError(CoreError):
    """Raised when a write would violate a uniqueness rule.

    Args:
        field: Name of the unique field
        value: The offending value
    """

    kind: ClassVar[str] = "duplicate"

    def __init__(self, field: str, value: Any, message: str | None = None):
        super().__init__(message or f"A record with {field} '{value}' already exists")
        self.field = field
        self.value = value


class InternalFailureError(CoreError):
    """Raised when storage access fails unexpectedly.

    The underlying exception is chained as ``__cause__`` and also kept on
    ``cause`` for callers that inspect it directly.
    """

    kind: ClassVar[str] = "internal_failure"

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


@contextmanager
def internal_failure_boundary(
    operation: str,
    on_failure: Callable[[str, str], None] | None = None,
) -> Iterator[None]:
    """Re-raise unexpected errors escaping the block as InternalFailureError.

    CoreError subclasses pass through untouched. Anything else is reported to
    ``on_failure(operation, error)`` when given, then wrapped.

    Args:
        operation: Human-readable operation name, e.g. "create user"
        on_failure: Optional callback, typically a probe's operation_failed
    """
    try:
        yield
    except CoreError:
        raise
    except Exception as e:
        if on_failure is not None:
            on_failure(operation, str(e))
        raise InternalFailureError(f"Failed to {operation}: {e}", cause=e) from e
