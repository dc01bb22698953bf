"""
MCP Tool Base Classes

Provides the parameter contracts, side-effect annotations, error taxonomy
and validation shared by every Mailchimp tool.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# RFC 3339 date-time; the offset is mandatory.
DATETIME_PATTERN = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(\.\d+)?([Zz]|[+-](\d{2}):(\d{2}))\Z"
)

_JSON_TYPES = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "array": list,
    "object": dict,
}


@dataclass
class ToolParameter:
    """Definition of a tool parameter."""
    name: str
    type: str
    description: str
    required: bool = True
    default: Any = None
    enum: Optional[List[str]] = None
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    min_length: Optional[int] = None
    pattern: Optional[str] = None
    format: Optional[str] = None
    items_type: str = "string"
    items_format: Optional[str] = None

    def to_json_schema(self) -> Dict[str, Any]:
        """JSON Schema fragment for this parameter."""
        prop: Dict[str, Any] = {"type": self.type, "description": self.description}
        if self.enum is not None:
            prop["enum"] = list(self.enum)
        if self.minimum is not None:
            prop["minimum"] = self.minimum
        if self.maximum is not None:
            prop["maximum"] = self.maximum
        if self.min_length is not None:
            prop["minLength"] = self.min_length
        if self.pattern is not None:
            prop["pattern"] = self.pattern
        if self.format is not None:
            prop["format"] = self.format
        if self.type == "array":
            items: Dict[str, Any] = {"type": self.items_type}
            if self.items_format is not None:
                items["format"] = self.items_format
            prop["items"] = items
            if self.min_items is not None:
                prop["minItems"] = self.min_items
            if self.max_items is not None:
                prop["maxItems"] = self.max_items
        if self.default is not None:
            prop["default"] = self.default
        return prop


@dataclass(frozen=True)
class ToolAnnotations:
    """Side-effect class of a tool, exposed so callers can gate risky calls."""
    read_only: bool = False
    destructive: bool = False
    idempotent: bool = False
    open_world: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "readOnlyHint": self.read_only,
            "destructiveHint": self.destructive,
            "idempotentHint": self.idempotent,
            "openWorldHint": self.open_world,
        }


@dataclass
class ToolDefinition:
    """Complete definition of an MCP tool."""
    name: str
    title: str
    description: str
    parameters: List[ToolParameter] = field(default_factory=list)
    annotations: ToolAnnotations = field(default_factory=ToolAnnotations)
    tool: Optional["MCPTool"] = None
    category: str = "general"

    def input_schema(self) -> Dict[str, Any]:
        properties = {p.name: p.to_json_schema() for p in self.parameters}
        required = [p.name for p in self.parameters if p.required]
        schema: Dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        return schema


class MCPToolError(Exception):
    """Base exception for MCP tool errors."""
    error_type = "execution"

    def __init__(self, message: str, tool_name: str = None, details: Dict = None):
        self.message = message
        self.tool_name = tool_name
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(MCPToolError):
    """Raised when the gateway is missing required configuration."""
    error_type = "configuration"


class ValidationError(MCPToolError):
    """Raised when tool input validation fails."""
    error_type = "validation"

    def __init__(self, message: str, field_name: str = None, tool_name: str = None):
        super().__init__(message, tool_name=tool_name, details={"field": field_name})
        self.field_name = field_name


class RemoteAPIError(MCPToolError):
    """Raised when Mailchimp answers with a non-success status."""
    error_type = "remote"

    def __init__(self, status_code: int, detail: str, tool_name: str = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(
            f"Mailchimp API error ({status_code}): {detail}",
            tool_name=tool_name,
            details={"status_code": status_code, "detail": detail},
        )


class TransportError(MCPToolError):
    """Raised on network failures and unreadable responses."""
    error_type = "transport"


class ToolNotFoundError(MCPToolError):
    error_type = "not_found"


def render_result(result: Any) -> str:
    """Tools answer with one text block holding pretty-printed JSON."""
    return json.dumps(result, indent=2, ensure_ascii=False)


def _is_datetime(value: str) -> bool:
    match = DATETIME_PATTERN.match(value)
    if match is None:
        return False
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    try:
        # Leap seconds (:60) are not accepted.
        datetime(year, month, day, hour, minute, second)
    except ValueError:
        return False
    offset_hours, offset_minutes = match.group(9), match.group(10)
    if offset_hours is not None and (int(offset_hours) > 23 or int(offset_minutes) > 59):
        return False
    return True


def _check_format(param: ToolParameter, fmt: Optional[str], value: Any, label: str) -> None:
    if fmt == "email" and not EMAIL_PATTERN.match(value):
        raise ValidationError(f"Invalid email address for {label}: {value!r}", field_name=param.name)
    if fmt == "date-time" and not _is_datetime(value):
        raise ValidationError(
            f"Invalid RFC 3339 date-time for {label}: {value!r} (e.g., '2026-02-14T10:00:00Z')",
            field_name=param.name,
        )


def _check_type(expected: str, value: Any) -> bool:
    if isinstance(value, bool) and expected in ("integer", "number"):
        return False
    return isinstance(value, _JSON_TYPES.get(expected, object))


def validate_parameter(param: ToolParameter, value: Any) -> Any:
    """Check one value against its contract, returning it unchanged."""
    if not _check_type(param.type, value):
        raise ValidationError(
            f"Parameter {param.name} must be of type {param.type}", field_name=param.name
        )

    if param.enum is not None and value not in param.enum:
        allowed = ", ".join(param.enum)
        raise ValidationError(
            f"Parameter {param.name} must be one of: {allowed}", field_name=param.name
        )

    if param.minimum is not None and value < param.minimum:
        raise ValidationError(
            f"Parameter {param.name} must be >= {param.minimum}", field_name=param.name
        )
    if param.maximum is not None and value > param.maximum:
        raise ValidationError(
            f"Parameter {param.name} must be <= {param.maximum}", field_name=param.name
        )

    if param.min_length is not None and len(value) < param.min_length:
        raise ValidationError(
            f"Parameter {param.name} must not be empty", field_name=param.name
        )

    if param.pattern is not None and isinstance(value, str) and not re.fullmatch(param.pattern, value):
        raise ValidationError(
            f"Parameter {param.name} has invalid characters: {value!r}", field_name=param.name
        )

    if param.type == "array":
        if param.min_items is not None and len(value) < param.min_items:
            raise ValidationError(
                f"Parameter {param.name} needs at least {param.min_items} item(s)",
                field_name=param.name,
            )
        if param.max_items is not None and len(value) > param.max_items:
            raise ValidationError(
                f"Parameter {param.name} accepts at most {param.max_items} item(s)",
                field_name=param.name,
            )
        for i, item in enumerate(value):
            if not _check_type(param.items_type, item):
                raise ValidationError(
                    f"Parameter {param.name}[{i}] must be of type {param.items_type}",
                    field_name=param.name,
                )
            _check_format(param, param.items_format, item, f"{param.name}[{i}]")
    else:
        _check_format(param, param.format, value, param.name)

    return value


class MCPTool(ABC):
    """
    Abstract base class for MCP tools.

    All tools must inherit from this class and implement:
    - name: Tool identifier
    - description: What the tool does
    - parameters: List of ToolParameter definitions
    - execute(): The actual tool logic
    """

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
    def title(self) -> str:
        return self.name

    @property
    def parameters(self) -> List[ToolParameter]:
        """List of parameters the tool accepts."""
        return []

    @property
    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations()

    @property
    def category(self) -> str:
        """Category for grouping tools."""
        return "general"

    def validate(self, **kwargs) -> Dict[str, Any]:
        """
        Validate input parameters.
        Returns validated/normalized parameters.
        Raises ValidationError if validation fails.
        """
        validated = {}

        for param in self.parameters:
            value = kwargs.get(param.name)

            if value is None:
                if param.required:
                    raise ValidationError(
                        f"Missing required parameter: {param.name}",
                        field_name=param.name,
                        tool_name=self.name,
                    )
                if param.default is not None:
                    validated[param.name] = param.default
                continue

            try:
                validated[param.name] = validate_parameter(param, value)
            except ValidationError as e:
                e.tool_name = self.name
                raise

        return validated

    @abstractmethod
    async def execute(self, **kwargs) -> Any:
        """
        Execute the tool with given parameters.
        This method should contain the actual tool logic.
        """
        pass

    async def invoke(self, **kwargs) -> Any:
        """Validate and execute, letting every error propagate to the caller."""
        validated = self.validate(**kwargs)
        return await self.execute(**validated)

    async def run(self, **kwargs) -> Dict[str, Any]:
        """
        Public entry point for the REST surface: validate and execute.
        Returns standardized response format.
        """
        try:
            result = await self.invoke(**kwargs)
            return {
                "success": True,
                "tool": self.name,
                "result": result
            }
        except MCPToolError as e:
            logger.error(f"{e.error_type.capitalize()} error in {self.name}: {e.message}")
            response = {
                "success": False,
                "tool": self.name,
                "error": e.message,
                "error_type": e.error_type,
            }
            if isinstance(e, RemoteAPIError):
                response["status_code"] = e.status_code
            return response
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
            title=self.title,
            description=self.description,
            parameters=self.parameters,
            annotations=self.annotations,
            tool=self,
            category=self.category
        )
