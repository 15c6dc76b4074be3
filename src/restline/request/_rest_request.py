from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .._utils.constants import HEADER_ACCEPT, HEADER_CONTENT_TYPE, JSON_TYPE, HttpMethods
from ._body import BodyProcessor


@dataclass(frozen=True)
class RestRequest:
    """Immutable description of a request sent to a REST service.

    The endpoint is relative to the base URL of the client sending the
    request and already contains its query string. Instances are created
    through :meth:`RestRequest.builder`.

    Attributes:
        endpoint: Request target, query parameters included.
        headers: Read-only request headers.
        method: HTTP method. Any string is accepted.
        timeout: Timeout in milliseconds, ``None`` for no timeout.
        body_processor: Writer of the request payload, if any.
    """

    endpoint: str
    headers: Mapping[str, str] = field(default_factory=dict)
    method: str = HttpMethods.GET
    timeout: Optional[int] = None
    body_processor: Optional[BodyProcessor] = None

    def __post_init__(self) -> None:
        if self.endpoint is None:
            raise ValueError("endpoint cannot be None")
        if self.method is None:
            raise ValueError("method cannot be None")
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def has_output(self) -> bool:
        """Whether the request carries a payload."""
        return self.body_processor is not None

    @staticmethod
    def builder(endpoint: Optional[str]) -> "RestRequestBuilder":
        """Start building a request for ``endpoint``.

        Examples:
            >>> request = (
            ...     RestRequest.builder("/users")
            ...     .post()
            ...     .json()
            ...     .parameter("page", 2)
            ...     .build()
            ... )
            >>> request.endpoint
            '/users?page=2'
        """
        return RestRequestBuilder(endpoint)


class RestRequestBuilder:
    """Accumulates the configuration of a :class:`RestRequest`.

    Every setter returns the builder so calls can be chained. The builder can
    be reused: each :meth:`build` takes a snapshot of its current state.
    """

    def __init__(self, endpoint: Optional[str]) -> None:
        self._endpoint = endpoint if endpoint is not None else ""
        self._headers: dict[str, str] = {}
        self._parameters: dict[str, Any] = {}
        self._method = HttpMethods.GET
        self._timeout: Optional[int] = None
        self._body_processor: Optional[BodyProcessor] = None

    def method(self, method: str) -> "RestRequestBuilder":
        self._method = method
        return self

    def get(self) -> "RestRequestBuilder":
        return self.method(HttpMethods.GET)

    def post(self) -> "RestRequestBuilder":
        return self.method(HttpMethods.POST)

    def put(self) -> "RestRequestBuilder":
        return self.method(HttpMethods.PUT)

    def patch(self) -> "RestRequestBuilder":
        return self.method(HttpMethods.PATCH)

    def delete(self) -> "RestRequestBuilder":
        return self.method(HttpMethods.DELETE)

    def timeout(self, duration_in_millis: Optional[int]) -> "RestRequestBuilder":
        """Set the request timeout in milliseconds.

        ``None`` clears it. 0 and negative values also mean no timeout.
        """
        self._timeout = duration_in_millis
        return self

    def header(self, name: str, value: str) -> "RestRequestBuilder":
        self._headers[name] = value
        return self

    def headers(self, headers: Optional[Mapping[str, str]]) -> "RestRequestBuilder":
        """Add every entry of ``headers``, replacing existing names.

        Raises:
            ValueError: If ``headers`` is None.
        """
        if headers is None:
            raise ValueError("headers cannot be None")
        self._headers.update(headers)
        return self

    def header_pairs(self, *pairs: str) -> "RestRequestBuilder":
        """Add headers given as a flat ``name, value, name, value...`` list.

        Raises:
            ValueError: If an odd number of arguments is given.
        """
        if len(pairs) % 2 != 0:
            raise ValueError("Should have pairs of (name, value)")
        for name, value in zip(pairs[::2], pairs[1::2]):
            self.header(name, value)
        return self

    def json_body(self) -> "RestRequestBuilder":
        return self.header(HEADER_CONTENT_TYPE, JSON_TYPE)

    def accept_json(self) -> "RestRequestBuilder":
        return self.header(HEADER_ACCEPT, JSON_TYPE)

    def json(self) -> "RestRequestBuilder":
        return self.json_body().accept_json()

    def parameter(self, name: str, value: Any) -> "RestRequestBuilder":
        """Add a URL query parameter. ``value`` is rendered with ``str()``."""
        self._parameters[name] = value
        return self

    def parameters(self, parameters: Optional[Mapping[str, Any]]) -> "RestRequestBuilder":
        if parameters is None:
            raise ValueError("parameters cannot be None")
        self._parameters.update(parameters)
        return self

    def body(self, body_processor: Optional[BodyProcessor]) -> "RestRequestBuilder":
        self._body_processor = body_processor
        return self

    def build(self) -> RestRequest:
        return RestRequest(
            endpoint=self._endpoint_with_parameters(),
            headers=self._headers,
            method=self._method,
            timeout=self._timeout,
            body_processor=self._body_processor,
        )

    def _endpoint_with_parameters(self) -> str:
        if not self._parameters:
            return self._endpoint
        # values are not escaped, httpx encodes what is illegal in a URL
        query = "&".join(f"{key}={value}" for key, value in self._parameters.items())
        return f"{self._endpoint}?{query}"
