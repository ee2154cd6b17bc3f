"""
Tool Error Types

Validation errors are raised before any GitHub request is made.
Execution errors are raised while talking to GitHub or shaping its response.
"""

from typing import Dict, Optional


class MCPToolError(Exception):
    """Base exception for MCP tool errors."""

    code = "tool_error"

    def __init__(self, message: str, tool_name: str = None, details: Dict = None):
        self.message = message
        self.tool_name = tool_name
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(MCPToolError):
    """Raised when tool input validation fails."""

    code = "validation"


class MissingParameterError(ValidationError):
    """A required argument is absent or null."""

    code = "missing_parameter"

    def __init__(self, key: str, tool_name: str = None):
        super().__init__(
            f"missing required parameter: {key}",
            tool_name=tool_name,
            details={"parameter": key},
        )


class WrongTypeError(ValidationError):
    """An argument is present but is not of the declared kind."""

    code = "wrong_type"

    def __init__(self, key: str, expected: str, actual: str, tool_name: str = None):
        super().__init__(
            f"parameter {key} is not of type {expected}, is {actual}",
            tool_name=tool_name,
            details={"parameter": key, "expected": expected, "actual": actual},
        )


class OutOfRangeError(ValidationError):
    """An argument has the right kind but falls outside its allowed bounds."""

    code = "out_of_range"

    def __init__(self, key: str, reason: str, tool_name: str = None):
        super().__init__(
            f"parameter {key} {reason}",
            tool_name=tool_name,
            details={"parameter": key},
        )


class ExecutionError(MCPToolError):
    """Raised when tool execution fails."""

    code = "execution"


class UpstreamError(ExecutionError):
    """GitHub answered with an unexpected status, or could not be reached."""

    code = "upstream"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
        tool_name: str = None,
    ):
        self.status_code = status_code
        self.body = body
        super().__init__(
            message,
            tool_name=tool_name,
            details={"status_code": status_code},
        )


class SanitizeError(ExecutionError):
    """A GitHub payload did not have the shape its sanitizer expects."""

    code = "sanitize"
