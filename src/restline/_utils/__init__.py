from ._logs import setup_logging
from ._ssl_context import get_httpx_client_kwargs
from ._url import format_base_url, rest_url

__all__ = [
    "format_base_url",
    "get_httpx_client_kwargs",
    "rest_url",
    "setup_logging",
]
