import httpx
import json
from contextlib import asynccontextmanager
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, Union

from .core.logging import logger
from .core.error_handling import ErrorHandler, ErrorContext
from .streaming.framing import StreamSignal

HeaderValue = Union[str, List[str]]
ChunkHandler = Callable[[bytes], StreamSignal]

SENSITIVE_HEADERS = {"authorization", "x-api-key", "x-goog-api-key"}


class TransportResponse(NamedTuple):
    status: int
    body: Any


def header_items(headers: Dict[str, HeaderValue]) -> List[Tuple[str, str]]:
    """Flatten a header mapping whose values may be lists into (name, value) pairs."""
    items = []
    for name, value in headers.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        items.extend((name, str(v)) for v in values)
    return items


def redact_headers(headers: Dict[str, HeaderValue]) -> Dict[str, HeaderValue]:
    return {name: ("***" if name.lower() in SENSITIVE_HEADERS else value) for name, value in headers.items()}


class Transport:
    """
    POSTs JSON bodies to one provider.

    Pass ``http_client`` to share a long-lived ``httpx.AsyncClient`` (it is
    never closed here); otherwise a client is opened per request, optionally
    on top of a custom ``transport`` such as ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str,
        headers: Dict[str, HeaderValue],
        provider_name: Optional[str] = None,
        receive_timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = headers
        self.provider_name = provider_name
        self.http_client = http_client
        self.transport = transport
        # - connect: 10s to establish connection
        # - read: time between chunks when streaming, full body otherwise
        self.timeout = httpx.Timeout(
            connect=10.0,
            read=receive_timeout,
            write=10.0,
            pool=10.0
        )

    @asynccontextmanager
    async def _client(self):
        if self.http_client is not None:
            yield self.http_client
        else:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                yield client

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return response.text

    async def perform_request(
        self,
        path: str,
        body: Dict[str, Any],
        on_chunk: Optional[ChunkHandler] = None,
        request_id: str = "unknown",
    ) -> TransportResponse:
        """
        Send one request.

        Without ``on_chunk`` the decoded response body is returned. With it,
        ``on_chunk`` is called once per network read of a 2xx response and
        reading stops early when it returns ``StreamSignal.HALT``; the returned
        body is then None. Non-2xx streaming responses are read in full and
        their decoded body returned, like the blocking path.
        """
        url = f"{self.base_url}{path}"
        context = ErrorContext(request_id=request_id, provider_name=self.provider_name, url=url)

        logger.debug_data(
            title="Provider Request",
            data={
                "url": url,
                "headers": redact_headers(self.headers),
                "request_body": body,
                "streaming": on_chunk is not None
            },
            request_id=request_id,
            component="transport",
            data_flow="to_provider"
        )

        try:
            async with self._client() as client:
                if on_chunk is None:
                    response = await client.post(url, headers=header_items(self.headers), json=body, timeout=self.timeout)
                    decoded = self._decode_body(response)
                    logger.debug_data(
                        title="Provider Response",
                        data={"status_code": response.status_code, "body": decoded},
                        request_id=request_id,
                        component="transport",
                        data_flow="from_provider"
                    )
                    return TransportResponse(response.status_code, decoded)

                async with client.stream("POST", url, headers=header_items(self.headers), json=body, timeout=self.timeout) as response:
                    logger.debug_data(
                        title="Provider Response Headers",
                        data={"status_code": response.status_code, "headers": dict(response.headers)},
                        request_id=request_id,
                        component="transport",
                        data_flow="from_provider"
                    )

                    if not response.is_success:
                        await response.aread()
                        return TransportResponse(response.status_code, self._decode_body(response))

                    async for chunk in response.aiter_bytes():
                        if on_chunk(chunk) is StreamSignal.HALT:
                            logger.debug("Chunk parser halted the stream", request_id=request_id, component="transport")
                            break
                    return TransportResponse(response.status_code, None)
        except httpx.RequestError as e:
            raise ErrorHandler.handle_provider_network_error(e, context) from e
