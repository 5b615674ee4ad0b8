"""Exceptions raised while interpreting and rendering command output.

Nothing in this package retries on failure; every error is raised to the
caller (the host process or the CLI) as-is.
"""


class XRunError(Exception):
    """Base exception for xrun operations."""

    pass


class TemplateLoadError(XRunError):
    """Raised when template definitions cannot be fetched or decoded."""

    pass


class CommandExecutionError(XRunError):
    """Raised when the wrapped CLI command fails or times out.

    Attributes:
        command: The command that was executed
        stdout: Captured standard output, if any
        stderr: Captured standard error, if any
    """

    def __init__(self, message: str, command: str = "", stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.stdout = stdout
        self.stderr = stderr


class RenderDispatchError(XRunError):
    """Raised when no renderer is registered for a template type."""

    def __init__(self, requested: str, available: str):
        super().__init__(
            f"formatter {requested!r} is not available, allowed formatters {available!r}"
        )
        self.requested = requested
        self.available = available


class TemplateRenderError(XRunError):
    """Raised when a key, preview or action template fails to parse or execute."""

    pass


class RegistryConflictError(XRunError):
    """Raised when a renderer key is registered twice."""

    pass
