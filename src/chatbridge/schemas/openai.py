from typing import Dict, List, Literal, Optional, Union

from pydantic import Field, NonNegativeInt

from .base import StrictModel


class FunctionCall(StrictModel):
    name: str
    arguments: str


class ToolCall(StrictModel):
    id: str
    type: Literal["function"]
    function: FunctionCall


class Message(StrictModel):
    role: Literal["system", "user", "assistant", "tool"]
    content: str
    name: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    tool_call_id: Optional[str] = None


class ResponseFormat(StrictModel):
    type: Literal["text", "json_object"]


class StreamOptions(StrictModel):
    include_usage: Optional[bool] = None


class FunctionDefinition(StrictModel):
    name: str
    description: Optional[str] = None
    parameters: Optional[dict] = None


class Tool(StrictModel):
    type: Literal["function"]
    function: FunctionDefinition


class ToolChoiceFunction(StrictModel):
    name: str


class ToolChoice(StrictModel):
    type: Literal["function"]
    function: ToolChoiceFunction


class OpenAIChatRequest(StrictModel):
    """Options for the OpenAI Chat Completions API."""

    model: str
    messages: List[Message]
    logit_bias: Optional[Dict[str, int]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = Field(default=None, ge=0, le=20)
    max_tokens: Optional[NonNegativeInt] = None
    n: Optional[NonNegativeInt] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    response_format: Optional[ResponseFormat] = None
    seed: Optional[int] = None
    stop: Optional[Union[str, List[str]]] = None
    stream: Optional[bool] = None
    stream_options: Optional[StreamOptions] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    tools: Optional[List[Tool]] = None
    tool_choice: Optional[Union[Literal["none", "auto", "required"], ToolChoice]] = None
    user: Optional[str] = None
