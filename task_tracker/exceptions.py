"""Exception hierarchy for the task tracker.

Every operation on a backend reports failure by raising one of these
exceptions. The CLI recovers from most of them at the command boundary and
prints a message; ``PersistenceError`` is the only one that aborts a run.

Exception Hierarchy:
    TrackerError (base)
    ├── ConfigurationError   - Invalid or incomplete settings
    ├── NotFoundError        - Task or category id is absent
    ├── InvalidInputError    - Unknown edit field, unrecognized theme
    ├── TransportError       - Remote mode: connection/DNS/timeout failure
    ├── RemoteFailureError   - Remote mode: unexpected HTTP status
    └── PersistenceError     - Local mode: document unreadable/unwritable

Example:
    >>> try:
    ...     backend.delete_task(42)
    ... except NotFoundError as e:
    ...     print(e)
    Task 42 not found

"""

from __future__ import annotations

from pathlib import Path


class TrackerError(Exception):
    """Base exception for all task tracker errors.

    Attributes:
        message: Human-readable error description.

    """

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.

        """
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        """Return a detailed representation for debugging."""
        return f"{self.__class__.__name__}(message={self.message!r})"


class ConfigurationError(TrackerError):
    """Raised when tracker configuration is invalid.

    Example:
        >>> TrackerConfig(mode="remote", base_url=None)
        ConfigurationError: Remote mode requires a base URL

    """


class NotFoundError(TrackerError):
    """Raised when a task or category id does not exist.

    Attributes:
        resource_type: ``"task"`` or ``"category"``.
        resource_id: The id that was looked up.

    """

    def __init__(
        self,
        resource_type: str,
        resource_id: int,
        message: str | None = None,
    ) -> None:
        """Initialize not found error.

        Args:
            resource_type: Kind of record that was missing.
            resource_id: Identifier of the missing record.
            message: Optional override of the default message.

        """
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message or f"{resource_type.capitalize()} {resource_id} not found")


class InvalidInputError(TrackerError):
    """Raised for input the operation cannot accept.

    Covers unknown edit fields and theme names outside the supported set.
    Nothing is mutated when this is raised.

    Attributes:
        value: The rejected value.
        allowed: The values that would have been accepted.

    """

    def __init__(
        self,
        message: str,
        value: str | None = None,
        allowed: tuple[str, ...] = (),
    ) -> None:
        """Initialize invalid input error.

        Args:
            message: Human-readable error description.
            value: The rejected value.
            allowed: The accepted values, if the set is closed.

        """
        self.value = value
        self.allowed = allowed
        super().__init__(message)


class TransportError(TrackerError):
    """Raised when the remote service cannot be reached.

    This includes connection failures, DNS resolution errors and timeouts.

    Attributes:
        original_error: The underlying exception that caused this error.

    """

    def __init__(
        self,
        message: str = "Transport error",
        original_error: Exception | None = None,
    ) -> None:
        """Initialize transport error.

        Args:
            message: Human-readable error description.
            original_error: The underlying exception.

        """
        self.original_error = original_error
        super().__init__(message)


class RemoteFailureError(TrackerError):
    """Raised when the remote service answers with an unexpected status.

    Attributes:
        status_code: The HTTP status code received.
        expected_status: The status code the operation required.
        body: The response body, verbatim.

    """

    def __init__(
        self,
        status_code: int,
        body: str,
        expected_status: int = 200,
    ) -> None:
        """Initialize remote failure error.

        Args:
            status_code: The HTTP status code received.
            body: Raw response body text.
            expected_status: The success code the request expected.

        """
        self.status_code = status_code
        self.expected_status = expected_status
        self.body = body
        super().__init__(f"Remote service returned HTTP {status_code}: {body}")


class PersistenceError(TrackerError):
    """Raised when the local state document cannot be read, parsed or written.

    There is no recovery path for this error; the run is aborted.

    Attributes:
        path: Location of the document.
        original_error: The underlying exception, if any.

    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize persistence error.

        Args:
            message: Human-readable error description.
            path: Location of the state document.
            original_error: The underlying exception.

        """
        self.path = Path(path) if path is not None else None
        self.original_error = original_error
        super().__init__(message)
