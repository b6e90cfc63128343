from typing import Any, Dict, List, Optional, Tuple, Type, Union

from pydantic import BaseModel

from ..streaming.framing import ParsedChunk, StreamSignal

HeaderValue = Union[str, List[str]]
Endpoint = Tuple[str, Dict[str, Any]]


class BaseProvider:
    """
    Contract every backend implements.

    ``config`` holds the init options (``api_key``, ``base_url`` and any
    provider specific keys) and is never modified after construction.
    Every method is a pure function of its arguments and that config.
    """

    name: str = "base"
    default_base_url: Optional[str] = None
    # Providers that can talk to API-compatible services honour a ``base_url`` init option
    base_url_configurable: bool = False
    api_key_env: Optional[str] = None

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = dict(config or {})

    @property
    def api_key(self) -> Optional[str]:
        return self.config.get("api_key")

    def base_url(self, options: Optional[Dict[str, Any]] = None) -> str:
        if self.base_url_configurable and self.config.get("base_url"):
            return self.config["base_url"]
        return self.default_base_url

    def request_headers(self, options: Optional[Dict[str, Any]] = None) -> Dict[str, HeaderValue]:
        return {}

    def resolve_endpoint(self, options: Dict[str, Any]) -> Endpoint:
        raise NotImplementedError

    def resolve_stream_endpoint(self, options: Dict[str, Any]) -> Endpoint:
        raise NotImplementedError

    def build_body(self, options: Dict[str, Any]) -> Dict[str, Any]:
        return dict(options)

    def schema(self) -> Type[BaseModel]:
        raise NotImplementedError

    def parse_chunk(self, data: str) -> ParsedChunk:
        raise NotImplementedError

    def merge_event(self, accumulator: Any, event: Dict[str, Any]) -> Any:
        """Default merge keeps the accumulator untouched; events are still delivered."""
        return accumulator

    def finish_stream(self, accumulator: Any) -> Any:
        """Called once with the final accumulator after the stream completes."""
        return accumulator

    def __repr__(self):
        return f"{self.__class__.__name__}(base_url={self.base_url()!r})"


__all__ = ['BaseProvider', 'ParsedChunk', 'StreamSignal', 'HeaderValue', 'Endpoint']
