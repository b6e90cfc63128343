from typing import List, Literal, Optional, Union

from .base import StrictModel


class Message(StrictModel):
    role: Literal["user", "assistant"]
    content: Union[str, List[dict]]


class Metadata(StrictModel):
    user_id: Optional[str] = None


class Tool(StrictModel):
    name: str
    description: str
    input_schema: dict


class ToolChoice(StrictModel):
    type: Literal["auto", "any", "tool"]
    name: Optional[str] = None


class AnthropicMessagesRequest(StrictModel):
    """Options for the Anthropic Messages API."""

    model: str
    messages: List[Message]
    max_tokens: int = 4096
    metadata: Optional[Metadata] = None
    stop_sequences: Optional[List[str]] = None
    stream: Optional[bool] = None
    system: Optional[str] = None
    temperature: Optional[float] = None
    tools: Optional[List[Tool]] = None
    tool_choice: Optional[ToolChoice] = None
    top_k: Optional[int] = None
    top_p: Optional[float] = None
