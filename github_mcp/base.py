"""
MCP Tool Base Classes

Provides the parameter/definition types, the error hierarchy and the
three-way tool result shared by every GitHub tool.
"""

import json
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

ArgumentBag = Mapping[str, Any]


@dataclass(frozen=True)
class ToolParameter:
    """Definition of a tool parameter."""
    name: str
    type: str
    description: str
    required: bool = False
    default: Any = None
    enum: Optional[List[str]] = None
    items: Optional[Dict[str, Any]] = None
    minimum: Optional[int] = None
    maximum: Optional[int] = None

    def to_schema(self) -> Dict[str, Any]:
        """JSON schema fragment for this parameter."""
        prop: Dict[str, Any] = {
            "type": self.type,
            "description": self.description,
        }
        if self.type == "array":
            prop["items"] = self.items or {"type": "string"}
        if self.enum:
            prop["enum"] = list(self.enum)
        if self.default is not None:
            prop["default"] = self.default
        if self.minimum is not None:
            prop["minimum"] = self.minimum
        if self.maximum is not None:
            prop["maximum"] = self.maximum
        return prop


@dataclass(frozen=True)
class ToolContext:
    """Per-call context handed to a tool handler."""
    tool_name: str
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)


class ResultStatus(str, Enum):
    SUCCESS = "success"
    TOOL_ERROR = "tool_error"
    SYSTEM_ERROR = "system_error"


@dataclass(frozen=True)
class ToolResult:
    """
    Outcome of a tool call.

    - SUCCESS: ``content`` holds the serialized payload.
    - TOOL_ERROR: the request was rejected or GitHub answered with a
      failure status. The calling agent can correct and retry.
    - SYSTEM_ERROR: GitHub could not be reached, or the server itself
      failed. Transports surface this as a fault; ``unexpected`` marks
      the second case.
    """
    status: ResultStatus
    content: Optional[str] = None
    error: Optional[str] = None
    unexpected: bool = False

    @classmethod
    def text(cls, content: str) -> "ToolResult":
        return cls(status=ResultStatus.SUCCESS, content=content)

    @classmethod
    def from_payload(cls, payload: Any) -> "ToolResult":
        try:
            return cls.text(json.dumps(payload))
        except (TypeError, ValueError) as e:
            raise ExecutionError(f"failed to marshal result: {e}") from e

    @classmethod
    def tool_error(cls, message: str) -> "ToolResult":
        return cls(status=ResultStatus.TOOL_ERROR, error=message)

    @classmethod
    def system_error(cls, message: str, unexpected: bool = False) -> "ToolResult":
        return cls(status=ResultStatus.SYSTEM_ERROR, error=message, unexpected=unexpected)

    @property
    def success(self) -> bool:
        return self.status is ResultStatus.SUCCESS

    @property
    def is_system_error(self) -> bool:
        return self.status is ResultStatus.SYSTEM_ERROR

    def to_dict(self, tool_name: str) -> Dict[str, Any]:
        """Standardized response format used by the HTTP layer."""
        payload: Dict[str, Any] = {"success": self.success, "tool": tool_name}
        if self.success:
            payload["result"] = self.content
        else:
            payload["error"] = self.error
            payload["error_type"] = self.status.value
        return payload


ToolHandler = Callable[[ToolContext, ArgumentBag], Awaitable[ToolResult]]


@dataclass(frozen=True)
class ToolDefinition:
    """Complete definition of an MCP tool."""
    name: str
    description: str
    parameters: List[ToolParameter] = field(default_factory=list)
    handler: Optional[ToolHandler] = None
    category: str = "general"
    mutating: bool = False

    def input_schema(self) -> Dict[str, Any]:
        properties = {p.name: p.to_schema() for p in self.parameters}
        schema: Dict[str, Any] = {"type": "object", "properties": properties}
        required = [p.name for p in self.parameters if p.required]
        # only emit "required" when something is
        if required:
            schema["required"] = required
        return schema


class MCPToolError(Exception):
    """Base exception for MCP tool errors."""
    def __init__(self, message: str, tool_name: str = None, details: Dict = None):
        self.message = message
        self.tool_name = tool_name
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(MCPToolError):
    """Raised when tool input validation fails."""
    pass


class MissingParameterError(ValidationError):
    """A required parameter is absent or holds its zero value."""
    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(
            f"missing required parameter: {parameter}",
            details={"parameter": parameter},
        )


class TypeMismatchError(ValidationError):
    """A parameter is present but cannot be read as the declared type."""
    def __init__(self, parameter: str, expected: str, actual: str):
        self.parameter = parameter
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"parameter {parameter} is not of type {expected}, is {actual}",
            details={"parameter": parameter, "expected": expected, "actual": actual},
        )


class ExecutionError(MCPToolError):
    """Raised when the downstream call could not be completed."""
    pass


class ToolNotFoundError(MCPToolError):
    """Raised when a tool is not part of the exposed catalog."""
    def __init__(self, tool_name: str):
        super().__init__(f"Tool not found: {tool_name}", tool_name=tool_name)


class MCPTool(ABC):
    """
    Abstract base class for MCP tools.

    All tools must inherit from this class and implement:
    - name: Tool identifier
    - description: What the tool does
    - parameters: List of ToolParameter definitions
    - execute(): The actual tool logic

    Tools that change state on GitHub set ``mutating`` so the registry can
    leave them out in read-only mode.
    """

    mutating: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for the tool."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        pass

    @property
    def parameters(self) -> List[ToolParameter]:
        """List of parameters the tool accepts."""
        return []

    @property
    def category(self) -> str:
        """Category for grouping tools."""
        return "general"

    @abstractmethod
    async def execute(self, ctx: ToolContext, args: ArgumentBag) -> ToolResult:
        """
        Execute the tool against an argument bag.

        Parameters are pulled with the accessors in ``github_mcp.params``,
        which raise ValidationError before any request is sent.
        """
        pass

    async def run(self, ctx: ToolContext, args: Optional[ArgumentBag] = None) -> ToolResult:
        """
        Public entry point: execute and fold errors into a ToolResult.
        """
        try:
            return await self.execute(ctx, args or {})
        except ValidationError as e:
            logger.warning(f"Validation error in {self.name}: {e.message}")
            return ToolResult.tool_error(e.message)
        except ExecutionError as e:
            logger.error(f"Execution error in {self.name}: {e.message}")
            return ToolResult.system_error(e.message)
        except Exception as e:
            logger.exception(f"Unexpected error in {self.name}")
            return ToolResult.system_error(str(e), unexpected=True)

    def to_definition(self) -> ToolDefinition:
        """Convert tool to ToolDefinition for registry."""
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters=self.parameters,
            handler=self.run,
            category=self.category,
            mutating=self.mutating,
        )
