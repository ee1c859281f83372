"""Tool normalization: canonical tools and tool choice onto the wire function-calling schema."""

from typing import Any, Dict, List, Optional, Tuple, Union

from ...errors import UnsupportedFunctionalityError
from ...models.generation import CallWarning
from ...models.prompt import FunctionTool, ProviderDefinedTool, ToolChoice

WireToolChoice = Union[str, Dict[str, Any]]

PASSTHROUGH_TOOL_CHOICES = ("auto", "none", "required")


def prepare_tools(
    tools: Optional[List[Union[FunctionTool, ProviderDefinedTool]]],
    tool_choice: Optional[ToolChoice] = None,
) -> Tuple[Optional[List[Dict[str, Any]]], Optional[WireToolChoice], List[CallWarning]]:
    """
    Map canonical tools and tool choice onto the wire function-calling schema.

    Provider-defined tools cannot be expressed on the wire; they are dropped
    with an ``unsupported-tool`` warning. An empty tool list is treated as no
    tools, in which case tool choice is not sent either.

    Returns:
        Tuple of (wire tools, wire tool choice, warnings)

    Raises:
        UnsupportedFunctionalityError: For an unknown tool-choice type
    """
    warnings: List[CallWarning] = []

    if not tools:
        return None, None, warnings

    wire_tools: List[Dict[str, Any]] = []
    for tool in tools:
        if isinstance(tool, ProviderDefinedTool):
            warnings.append(CallWarning(type="unsupported-tool", tool=tool.model_dump()))
        else:
            wire_tools.append({
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": tool.input_schema or {},
                },
            })

    if tool_choice is None:
        return wire_tools, None, warnings

    choice_type = tool_choice.type
    if choice_type in PASSTHROUGH_TOOL_CHOICES:
        return wire_tools, choice_type, warnings
    if choice_type == "tool":
        return (
            wire_tools,
            {"type": "function", "function": {"name": tool_choice.tool_name}},
            warnings,
        )
    raise UnsupportedFunctionalityError(f"tool choice type: {choice_type}")
