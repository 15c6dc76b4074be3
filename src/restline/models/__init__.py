from .errors import BaseUrlMissingError
from .exceptions import EnrichedException

__all__ = ["BaseUrlMissingError", "EnrichedException"]
