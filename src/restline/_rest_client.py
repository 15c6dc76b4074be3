from logging import getLogger
from os import environ as env
from tempfile import SpooledTemporaryFile
from typing import Any, Optional, Union

from dotenv import load_dotenv
from httpx import (
    Client,
    Headers,
    HTTPStatusError,
    Response,
    Timeout,
    TimeoutException,
)
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from ._config import Config
from ._utils import format_base_url, get_httpx_client_kwargs, rest_url, setup_logging
from ._utils.constants import (
    ENV_BASE_URL,
    ENV_TIMEOUT,
    HEADER_CONTENT_LENGTH,
    HEADER_USER_AGENT,
    IDEMPOTENT_METHODS,
    SPOOL_MAX_SIZE,
)
from ._version import __version__
from .models import BaseUrlMissingError, EnrichedException
from .request import RestRequest


def is_retryable_exception(exception: BaseException) -> bool:
    return isinstance(exception, TimeoutException)


def is_retryable_status_code(response: Response) -> bool:
    return response.status_code >= 500 and response.status_code < 600


def _last_response(retry_state: RetryCallState) -> Response:
    # retries exhausted on a 5xx, hand the response back for raise_for_status
    return retry_state.outcome.result()  # type: ignore[union-attr]


class RestClient:
    """Sends :class:`RestRequest` instances to a REST service.

    Every request endpoint is resolved against the base URL of the client, so
    requests only carry the endpoint of the service.

    Idempotent requests (GET, HEAD, OPTIONS, PUT, DELETE) timing out or
    answered with a 5xx status are retried with exponential backoff, and their
    body is written again on each attempt. Other methods are sent once.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[int] = None,
        max_retries: Optional[int] = None,
        retry_backoff: Optional[float] = None,
        debug: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the REST service. If not provided, it is read
                from the ``RESTLINE_BASE_URL`` environment variable.
            timeout: Default timeout in milliseconds for requests that set
                none. If not provided, it is read from ``RESTLINE_TIMEOUT``.
                ``None`` everywhere means no timeout.
            max_retries: Extra attempts for transient failures. Defaults to 3.
            retry_backoff: Backoff multiplier in seconds. Defaults to 1.
            debug: Enable debug logging if set to True.

        Raises:
            BaseUrlMissingError: If no base URL is configured.
        """
        load_dotenv()

        base_url_value = base_url or env.get(ENV_BASE_URL)
        if not base_url_value:
            raise BaseUrlMissingError()

        timeout_value = timeout if timeout is not None else env.get(ENV_TIMEOUT)

        overrides: dict[str, Any] = {}
        if max_retries is not None:
            overrides["max_retries"] = max_retries
        if retry_backoff is not None:
            overrides["retry_backoff"] = retry_backoff

        self._config = Config(
            base_url=format_base_url(base_url_value),
            timeout=timeout_value,  # type: ignore[arg-type]
            **overrides,
        )

        setup_logging(debug)
        self._logger = getLogger("restline")

        self._client = Client(
            **get_httpx_client_kwargs(self._config),
            headers=Headers(self.default_headers),
        )
        self._retrying = Retrying(
            retry=(
                retry_if_exception(is_retryable_exception)
                | retry_if_result(is_retryable_status_code)
            ),
            wait=wait_exponential(
                multiplier=self._config.retry_backoff,
                min=self._config.retry_backoff,
                max=10,
            ),
            stop=stop_after_attempt(self._config.max_retries + 1),
            before_sleep=self._log_retry,
            retry_error_callback=_last_response,
            reraise=True,
        )

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def default_headers(self) -> dict[str, str]:
        return {HEADER_USER_AGENT: f"restline/{__version__}"}

    def url(self, endpoint: str) -> str:
        """Absolute URL targeted by ``endpoint``."""
        return rest_url(self._config.base_url, endpoint)

    def execute(self, request: RestRequest) -> Response:
        """Send ``request`` and return the response.

        Args:
            request: The request to send.

        Returns:
            Response: The HTTP response, fully read.

        Raises:
            EnrichedException: If the response has a 4xx or 5xx status.
            OSError: If the body processor fails to read its payload.
            httpx.RequestError: If the request could not be sent.
        """
        if request.method.upper() in IDEMPOTENT_METHODS:
            response = self._retrying(self._send, request)
        else:
            response = self._send(request)

        try:
            response.raise_for_status()
        except HTTPStatusError as e:
            # include the http response in the error message
            response.close()
            raise EnrichedException(e) from e

        return response

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _send(self, request: RestRequest) -> Response:
        url = self.url(request.endpoint)
        headers = Headers(request.headers)

        self._logger.debug(f"Request: {request.method} {url}")

        if not request.has_output():
            self._logger.debug(f"HEADERS: {headers}")
            return self._client.request(
                request.method, url, headers=headers, timeout=self._timeout(request)
            )

        body_processor = request.body_processor
        body_processor.prepare_transport(headers)  # type: ignore[union-attr]

        # large payloads go to disk instead of being held in memory
        with SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE) as sink:
            body_processor.write_content(sink)  # type: ignore[union-attr,arg-type]
            headers[HEADER_CONTENT_LENGTH] = str(sink.tell())
            sink.seek(0)

            self._logger.debug(f"HEADERS: {headers}")
            return self._client.request(
                request.method,
                url,
                headers=headers,
                content=sink,
                timeout=self._timeout(request),
            )

    def _timeout(self, request: RestRequest) -> Union[Timeout, None]:
        millis = request.timeout if request.timeout is not None else self._config.timeout
        # 0 or less means no limit
        if millis is None or millis <= 0:
            return None
        return Timeout(millis / 1000)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        if outcome is not None and outcome.failed:
            reason = repr(outcome.exception())
        else:
            reason = f"status {outcome.result().status_code}"  # type: ignore[union-attr]
            outcome.result().close()  # type: ignore[union-attr]
        self._logger.warning(
            f"Retrying after {reason} "
            f"(attempt {retry_state.attempt_number}/{self._config.max_retries})"
        )
