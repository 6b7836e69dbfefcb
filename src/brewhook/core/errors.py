"""Module defining custom exceptions for brewhook."""

from __future__ import annotations

from typing import Any, Self

# Exit Codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2
EXIT_TRANSIENT_ERROR = 3


class BrewError(Exception):
    """Base exception class with context propagation.

    All exceptions in brewhook should inherit from this class.
    Context is a dictionary that accumulates relevant information
    as the exception propagates up the call stack.

    Example:
        raise BrewError("An error occurred", context={"package": "wget"})

        # Or with context propagation
        try:
            ...
        except BrewError as e:
            raise e.with_context(operation="install")
    """
    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **new_context: Any) -> Self:
        """Add context to the exception and return it.

        Args:
            **new_context: Additional context to add to the exception.

        Returns:
            The same exception with merged context.
        """
        self.context.update(new_context)
        return self

    def __str__(self) -> str:
        """String representation of the exception including context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{context_str}]"
        return self.message


class TransientError(BrewError):
    """Errors caused by temporary conditions.

    Network hiccups, brew server trouble or a busy lock. brewhook never
    retries these itself; callers may.
    """
    pass


class UserError(BrewError):
    """Errors caused by user actions or inputs.

    These should not be retried without correcting the input.
    """
    pass


class SystemError(BrewError):
    """Errors due to system-level issues.

    A missing Homebrew installation, permissions, or other conditions
    that need intervention on the machine itself.
    """
    pass


## Specific Exceptions ##

class BrewCommandError(TransientError):
    """Brew command failed, could not be spawned, or produced unusable output."""
    def __init__(
        self,
        message: str | None = None,
        command: str | None = None,
        returncode: int | None = None,
        error: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        """Initialise BrewCommandError with detailed context.

        Args:
            message: Optional custom error message.
            command: The brew command that was executed.
            returncode: The exit code returned by the command.
            error: The error output from the command.
            context: Additional context information.
        """
        ctx = context or {}
        if command:
            ctx["command"] = command
        if returncode is not None:
            ctx["returncode"] = returncode
        if error:
            ctx["error"] = error

        if message is None:
            message = f"Brew command failed with exit code {returncode or 'unknown'}"

        super().__init__(message, context=ctx)


class BrewTimeoutError(TransientError):
    """Captured brew command did not finish in time.

    Only raised when a caller passes a timeout to the shell helpers.
    """
    def __init__(
        self,
        message: str | None = None,
        command: str | None = None,
        timeout: float | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        if command:
            ctx["command"] = command
        if timeout is not None:
            ctx["timeout"] = timeout

        if message is None:
            message = f"Brew command timed out after {timeout or 'unknown'}s"

        super().__init__(message, context=ctx)


class BrewNotFoundError(SystemError):
    """No Homebrew executable in the probe list or on PATH.

    Fatal when building a hook: without a backend there is nothing to
    delegate to.
    """
    def __init__(
        self,
        message: str | None = None,
        searched: list[str] | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        if searched:
            ctx["searched"] = ", ".join(searched)

        if message is None:
            message = "Homebrew not found. Install from https://brew.sh"

        super().__init__(message, context=ctx)


class ManifestError(UserError):
    """The system.brew section of a manifest has the wrong shape."""
    def __init__(
        self,
        message: str | None = None,
        section: str | None = None,
        context: dict[str, Any] | None = None
    ) -> None:
        ctx = context or {}
        if section:
            ctx["section"] = section

        if message is None:
            message = f"Invalid manifest section '{section or 'unknown'}'"

        super().__init__(message, context=ctx)


# CLI Error Message Templates

ERROR_TEMPLATES = {
    BrewNotFoundError: (
        "❌ {message}\n"
        "   Searched: {searched}\n"
        "   Fix: install Homebrew or set BREWHOOK_BREW to the brew executable"
    ),
    ManifestError: (
        "❌ {message}\n"
        "   Expected system.brew.formulas/casks as objects and taps as a list"
    ),
    BrewTimeoutError: (
        "⚠️ Command timed out after {timeout}s: {command}\n"
        "   The operation took too long - this may be due to network issues"
    ),
    BrewCommandError: (
        "⚠️ Brew command failed: {command}\n"
        "   Exit Code: {returncode}\n"
        "   Error: {error}"
    ),
    TransientError: (
        "⚠️ Temporary failure: {message}\n"
        "   This may resolve itself - try again in a moment"
    ),
    UserError: (
        "❌ {message}"
    ),
    SystemError: (
        "⚠️ System error: {message}\n"
        "   Please check your system configuration and try again"
    ),
    BrewError: (
        "❌ {message}"
    ),
}


def format_error_message(error: BrewError) -> str:
    """Formats an error message for CLI display based on the error type.

    Args:
        error: The BrewError instance to format.

    Returns:
        A formatted string message for CLI display.
    """
    template = next(
        (ERROR_TEMPLATES[cls] for cls in type(error).__mro__ if cls in ERROR_TEMPLATES),
        ERROR_TEMPLATES[BrewError],
    )
    try:
        return template.format(message=error.message, **error.context)
    except KeyError:
        return f"❌ {error.message}"
