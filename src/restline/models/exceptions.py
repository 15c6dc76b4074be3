from httpx import HTTPStatusError


class EnrichedException(Exception):
    """HTTP error status raised by :class:`restline.RestClient`.

    Wraps the original :class:`httpx.HTTPStatusError` and keeps the parts of
    the failed exchange needed to report it.
    """

    def __init__(self, error: HTTPStatusError) -> None:
        self.status_code = error.response.status_code
        self.url = str(error.request.url)
        self.http_method = error.request.method
        self.response_content = error.response.text
        self.response = error.response

        super().__init__(
            f"\nRequest URL: {self.url}"
            f"\nHTTP Method: {self.http_method}"
            f"\nStatus Code: {self.status_code}"
            f"\nResponse Content: {self.response_content[:1000]}"
        )
