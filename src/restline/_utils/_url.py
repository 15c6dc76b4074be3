from httpx import URL


def format_base_url(base_url: str) -> str:
    """Return ``base_url`` without its trailing slashes."""
    return base_url.rstrip("/")


def rest_url(base_url: str, endpoint: str) -> str:
    """Resolve ``endpoint`` against ``base_url``.

    Absolute endpoints are returned unchanged, whatever the case of their
    scheme. Otherwise the endpoint is appended to the base URL with exactly
    one ``/`` between them.

    Examples:
        >>> rest_url("https://api.example.com/v1/", "users?page=2")
        'https://api.example.com/v1/users?page=2'
        >>> rest_url("https://api.example.com", "")
        'https://api.example.com'
    """
    if URL(endpoint).is_absolute_url:
        return endpoint

    base_url = format_base_url(base_url)
    if not endpoint:
        return base_url
    if endpoint.startswith("?"):
        return f"{base_url}{endpoint}"

    return f"{base_url}/{endpoint.lstrip('/')}"
