"""
MCP Tool Base Classes

Provides common wrapper, validation, and error handling for all GitHub tools.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .errors import ExecutionError, UpstreamError, ValidationError
from .params import (
    MAX_PER_PAGE,
    Kind,
    check_enum,
    is_present,
    optional_value,
    required_value,
    resolve_pagination,
)

logger = logging.getLogger(__name__)


@dataclass
class ToolParameter:
    """Definition of a tool parameter."""
    name: str
    type: str
    description: str
    required: bool = True
    default: Any = None
    enum: Optional[List[str]] = None
    items_type: Optional[str] = None
    minimum: Optional[int] = None
    maximum: Optional[int] = None

    @property
    def kind(self) -> Kind:
        return Kind(self.type)

    @property
    def items_kind(self) -> Optional[Kind]:
        return Kind(self.items_type) if self.items_type else None

    def to_schema(self) -> Dict[str, Any]:
        """JSON schema fragment for this parameter."""
        prop: Dict[str, Any] = {"type": self.type, "description": self.description}
        if self.type == "array":
            prop["items"] = {"type": self.items_type or "string"}
        if self.enum:
            prop["enum"] = list(self.enum)
        if self.minimum is not None:
            prop["minimum"] = self.minimum
        if self.maximum is not None:
            prop["maximum"] = self.maximum
        if self.default is not None:
            prop["default"] = self.default
        return prop


@dataclass
class ToolDefinition:
    """Complete definition of an MCP tool."""
    name: str
    description: str
    parameters: List[ToolParameter] = field(default_factory=list)
    handler: Optional[Callable] = None
    category: str = "general"
    read_only: bool = True

    def to_openai_schema(self) -> Dict[str, Any]:
        """OpenAI function calling format; an empty required list is left out."""
        properties: Dict[str, Dict] = {}
        required: List[str] = []

        for param in self.parameters:
            properties[param.name] = param.to_schema()
            if param.required:
                required.append(param.name)

        parameters: Dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            parameters["required"] = required

        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": parameters
            }
        }


def pagination_parameters() -> List[ToolParameter]:
    """The page/perPage pair shared by every list-style tool."""
    return [
        ToolParameter(
            name="page",
            type="integer",
            description="Page number for pagination (min 1)",
            required=False,
            minimum=1,
        ),
        ToolParameter(
            name="perPage",
            type="integer",
            description=f"Results per page for pagination (min 1, max {MAX_PER_PAGE})",
            required=False,
            minimum=1,
            maximum=MAX_PER_PAGE,
        ),
    ]


class MCPTool(ABC):
    """
    Abstract base class for MCP tools.

    All tools must inherit from this class and implement:
    - name: Tool identifier
    - description: What the tool does
    - parameters: List of ToolParameter definitions
    - execute(): The actual tool logic

    Tools that list things set `paginated = True`; they then accept
    `page`/`perPage` and receive a resolved `pagination` argument.
    """

    paginated: bool = False

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

    @property
    def read_only(self) -> bool:
        """Whether the tool leaves repository state untouched."""
        return True

    def all_parameters(self) -> List[ToolParameter]:
        params = list(self.parameters)
        if self.paginated:
            params.extend(pagination_parameters())
        return params

    def validate(self, **kwargs) -> Dict[str, Any]:
        """
        Validate input parameters.
        Returns validated/normalized parameters.
        Raises ValidationError if validation fails.

        Optional parameters the caller did not send are left out unless the
        parameter declares a default, so `execute` can tell "not sent" from
        a zero value. An optional enum sent as "" counts as not sent.
        """
        validated = {}

        for param in self.parameters:
            if param.required:
                value = required_value(kwargs, param.name, param.kind, param.items_kind)
            elif is_present(kwargs, param.name):
                value = optional_value(kwargs, param.name, param.kind, items=param.items_kind)
                if param.enum and value == "":
                    continue
            elif param.default is not None:
                value = param.default
            else:
                continue

            if param.enum:
                check_enum(param.name, value, param.enum)
            validated[param.name] = value

        if self.paginated:
            validated["pagination"] = resolve_pagination(kwargs)

        return validated

    @abstractmethod
    async def execute(self, **kwargs) -> Any:
        """
        Execute the tool with given parameters.
        This method should contain the actual tool logic.
        """
        pass

    def to_text(self, result: Any) -> str:
        """Serialize a tool result as the JSON text handed back to the agent."""
        if isinstance(result, str):
            return result
        return json.dumps(result, ensure_ascii=False)

    async def run(self, **kwargs) -> Dict[str, Any]:
        """
        Public entry point: validate and execute.
        Returns standardized response format.
        """
        try:
            validated = self.validate(**kwargs)
            result = await self.execute(**validated)
            return {
                "success": True,
                "tool": self.name,
                "result": self.to_text(result)
            }
        except ValidationError as e:
            e.tool_name = self.name
            logger.error(f"Validation error in {self.name}: {e.message}")
            return {
                "success": False,
                "tool": self.name,
                "error": e.message,
                "error_type": "validation",
                "error_code": e.code
            }
        except UpstreamError as e:
            logger.error(f"GitHub error in {self.name} (status={e.status_code}): {e.message}")
            return {
                "success": False,
                "tool": self.name,
                "error": e.message,
                "error_type": "upstream",
                "error_code": e.code
            }
        except ExecutionError as e:
            logger.error(f"Execution error in {self.name}: {e.message}")
            return {
                "success": False,
                "tool": self.name,
                "error": e.message,
                "error_type": "execution",
                "error_code": e.code
            }
        except Exception as e:
            logger.exception(f"Unexpected error in {self.name}")
            return {
                "success": False,
                "tool": self.name,
                "error": str(e),
                "error_type": "unexpected"
            }

    def to_definition(self) -> ToolDefinition:
        """Convert tool to ToolDefinition for registry."""
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters=self.all_parameters(),
            handler=self.run,
            category=self.category,
            read_only=self.read_only
        )

    def to_openai_schema(self) -> Dict:
        """Convert tool to OpenAI function calling schema."""
        return self.to_definition().to_openai_schema()
