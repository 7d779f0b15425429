"""Error types for the Exploro MCP server.

Tool handlers never let these escape: the result combinator in
exploro_mcp.tools.registry turns them into "Error: <message>" text.
Loader failures are caught and logged at the loader boundary.
"""

from typing import Optional


class ExploroError(Exception):
    """Base exception for Exploro MCP failures.

    Attributes:
        message: Error description.
        cause: Optional underlying exception being wrapped.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ApiError(ExploroError):
    """Exploro API returned a non-success status or the transport failed.

    Attributes:
        status_code: HTTP status, or None when no response was received.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause)
        self.status_code = status_code


class UnsupportedArgumentType(ExploroError):
    """An external tool declares an argument type we cannot build a field for."""

    def __init__(self, arg_type: str, arg_name: Optional[str] = None):
        super().__init__(f"Unsupported argument type: {arg_type}")
        self.arg_type = arg_type
        self.arg_name = arg_name


class RegistryFetchFailure(ExploroError):
    """The external tool registry was unreachable or returned a bad payload."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause)
        self.status_code = status_code


class DuplicateToolError(ExploroError):
    """A tool with the same name is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Tool already registered: {name}")
        self.name = name


class ToolInvocationError(ExploroError):
    """Unknown tool or arguments rejected by the tool's parameter schema."""
