import pydantic_core
import pytest

from restline import Config


class TestConfig:
    def test_defaults(self):
        config = Config(base_url="https://example.com")

        assert config.timeout is None
        assert config.max_retries == 3
        assert config.retry_backoff == 1.0
        assert config.follow_redirects is True

    def test_base_url_required(self):
        with pytest.raises(pydantic_core.ValidationError) as exc_info:
            Config()  # type: ignore[call-arg]

        assert exc_info.value.errors(include_url=False)[0]["loc"] == ("base_url",)

    def test_negative_retries_rejected(self):
        with pytest.raises(pydantic_core.ValidationError):
            Config(base_url="https://example.com", max_retries=-1)
