# Environment variables
ENV_BASE_URL = "RESTLINE_BASE_URL"
ENV_TIMEOUT = "RESTLINE_TIMEOUT"


class HttpMethods:
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


# Headers
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_CONTENT_LENGTH = "Content-Length"
HEADER_ACCEPT = "Accept"
HEADER_CONNECTION = "Connection"
HEADER_CACHE_CONTROL = "Cache-Control"
HEADER_USER_AGENT = "User-Agent"

# Content types
JSON_TYPE = "application/json"
MULTIPART_FORM_DATA_TYPE = "multipart/form-data"

# Multipart envelope
MULTIPART_BOUNDARY = "*****"
CRLF = "\r\n"
TWO_HYPHENS = "--"

# I/O
DEFAULT_BUFFER_SIZE = 8192

# Bodies larger than this are spooled to disk before being sent
SPOOL_MAX_SIZE = 1024 * 1024

# Methods safe to send again after a timeout or a 5xx response
IDEMPOTENT_METHODS = frozenset(
    {
        HttpMethods.GET,
        HttpMethods.HEAD,
        HttpMethods.OPTIONS,
        HttpMethods.PUT,
        HttpMethods.DELETE,
    }
)
