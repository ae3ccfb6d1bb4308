"""Tool registry for the MCP surface.

Provides:
- ToolDefinition: name, description, JSON input schema and handler
- ToolResult: the uniform response shape (text + error flag)
- ToolRegistry: registration and lookup by name
"""

from dataclasses import dataclass, field
from typing import Any, Callable

# Handler signature: (taskwarrior, arguments) -> response text
ToolHandler = Callable[[Any, dict[str, Any]], str]


@dataclass
class ToolDefinition:
    """A tool exposed to MCP clients.

    Attributes:
        name: Tool name
        description: Human-readable description shown to the agent
        input_schema: JSON schema of the accepted arguments
        func: Handler producing the response text
    """

    name: str
    description: str
    func: ToolHandler
    input_schema: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )


@dataclass
class ToolResult:
    """Uniform response: a single text block, flagged when it is an error."""

    text: str
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        """Create a successful result."""
        return cls(text=text)

    @classmethod
    def fail(cls, message: str) -> "ToolResult":
        """Create a failed result."""
        return cls(text=f"Error: {message}", is_error=True)


class ToolRegistry:
    """Registry for managing and discovering tools.

    Can be used as a decorator:
        @registry.register(description="...", input_schema={...})
        def list_tasks(tw, args):
            ...
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def register(
        self,
        func: ToolHandler | None = None,
        *,
        name: str | None = None,
        description: str | None = None,
        input_schema: dict[str, Any] | None = None,
    ) -> Callable[..., Any]:
        """Register a tool handler. Usable directly or as a decorator."""

        def decorator(f: ToolHandler) -> ToolHandler:
            tool_name = name or f.__name__
            tool_desc = description or (f.__doc__ or "").split("\n")[0].strip()
            definition = ToolDefinition(
                name=tool_name,
                description=tool_desc,
                func=f,
                input_schema=input_schema or {"type": "object", "properties": {}},
            )
            self._tools[tool_name] = definition
            return f

        if func is not None:
            return decorator(func)
        return decorator

    def get(self, name: str) -> ToolDefinition | None:
        """Get a tool definition by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[ToolDefinition]:
        """List all registered tools in registration order."""
        return list(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools
