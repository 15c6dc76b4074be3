from ._config import Config
from ._rest_client import RestClient
from ._utils.constants import HttpMethods
from ._version import __version__
from .models import BaseUrlMissingError, EnrichedException
from .request import (
    BodyKind,
    BodyProcessor,
    RestRequest,
    RestRequestBuilder,
    StreamSupplier,
    body_processors,
)

__all__ = [
    "BaseUrlMissingError",
    "BodyKind",
    "BodyProcessor",
    "Config",
    "EnrichedException",
    "HttpMethods",
    "RestClient",
    "RestRequest",
    "RestRequestBuilder",
    "StreamSupplier",
    "__version__",
    "body_processors",
]
