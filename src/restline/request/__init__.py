from . import body_processors
from ._body import BodyKind, BodyProcessor, StreamSupplier
from ._rest_request import RestRequest, RestRequestBuilder

__all__ = [
    "BodyKind",
    "BodyProcessor",
    "RestRequest",
    "RestRequestBuilder",
    "StreamSupplier",
    "body_processors",
]
