from typing import Optional

from pydantic import BaseModel, Field


class Config(BaseModel):
    base_url: str
    timeout: Optional[int] = Field(
        default=None, description="Default request timeout in milliseconds"
    )
    max_retries: int = Field(default=3, ge=0)
    retry_backoff: float = Field(
        default=1.0, ge=0, description="Exponential backoff multiplier in seconds"
    )
    follow_redirects: bool = True
