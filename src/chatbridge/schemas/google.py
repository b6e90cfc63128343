from typing import List, Literal, Optional

from .base import StrictModel

FunctionCallingMode = Literal["AUTO", "ANY", "NONE"]

HarmCategory = Literal[
    "HARM_CATEGORY_UNSPECIFIED",
    "HARM_CATEGORY_DEROGATORY",
    "HARM_CATEGORY_TOXICITY",
    "HARM_CATEGORY_VIOLENCE",
    "HARM_CATEGORY_SEXUAL",
    "HARM_CATEGORY_MEDICAL",
    "HARM_CATEGORY_DANGEROUS",
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
]

HarmThreshold = Literal[
    "HARM_BLOCK_THRESHOLD_UNSPECIFIED",
    "BLOCK_LOW_AND_ABOVE",
    "BLOCK_MEDIUM_AND_ABOVE",
    "BLOCK_ONLY_HIGH",
    "BLOCK_NONE",
]


class InlineData(StrictModel):
    mime_type: str
    data: str


class FileData(StrictModel):
    mime_type: Optional[str] = None
    file_uri: str


class FunctionCall(StrictModel):
    name: str
    args: Optional[dict] = None


class FunctionResponse(StrictModel):
    name: str
    response: dict


class Part(StrictModel):
    text: Optional[str] = None
    inline_data: Optional[InlineData] = None
    file_data: Optional[FileData] = None
    function_call: Optional[FunctionCall] = None
    function_response: Optional[FunctionResponse] = None


class Content(StrictModel):
    role: Literal["model", "user"]
    parts: List[Part]


class SystemInstruction(StrictModel):
    text: str


class FunctionDeclaration(StrictModel):
    name: str
    description: str
    parameters: Optional[dict] = None


class Tool(StrictModel):
    function_declarations: Optional[List[FunctionDeclaration]] = None


class FunctionCallingConfig(StrictModel):
    mode: Optional[FunctionCallingMode] = None
    allowed_function_names: Optional[List[str]] = None


class ToolConfig(StrictModel):
    function_calling_config: Optional[FunctionCallingConfig] = None


class GenerationConfig(StrictModel):
    stop_sequences: Optional[List[str]] = None
    response_mime_type: Optional[Literal["text/plain", "application/json"]] = None
    response_schema: Optional[dict] = None
    candidate_count: Optional[int] = None
    max_output_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None


class SafetySetting(StrictModel):
    category: HarmCategory
    threshold: HarmThreshold


class GoogleGenerateRequest(StrictModel):
    """Options for the Gemini generateContent API."""

    model: str
    contents: List[Content]
    system: Optional[SystemInstruction] = None
    tools: Optional[List[Tool]] = None
    tool_config: Optional[ToolConfig] = None
    generation: Optional[GenerationConfig] = None
    safety: Optional[List[SafetySetting]] = None
