from typing import Any, Dict, List, Literal, Optional, Union

from .base import StrictModel


class Message(StrictModel):
    role: Literal["user", "assistant", "system"]
    content: str
    images: Optional[List[str]] = None


class OllamaChatRequest(StrictModel):
    """Options for the Ollama chat API."""

    model: str
    messages: List[Message]
    format: Optional[str] = None
    stream: Optional[bool] = None
    keep_alive: Optional[Union[int, str]] = None
    options: Optional[Dict[str, Any]] = None


class OllamaGenerateRequest(StrictModel):
    """Options for the Ollama completion API."""

    model: str
    prompt: str
    images: Optional[List[str]] = None
    system: Optional[str] = None
    template: Optional[str] = None
    context: Optional[List[Union[int, float]]] = None
    format: Optional[str] = None
    raw: Optional[bool] = None
    stream: Optional[bool] = None
    keep_alive: Optional[Union[int, str]] = None
    options: Optional[Dict[str, Any]] = None
