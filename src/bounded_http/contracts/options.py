# src/bounded_http/contracts/options.py
"""Per-request limits and policy switches."""

from pydantic import BaseModel, Field

DEFAULT_MAX_RESPONSE_BODY_SIZE = 1 * 1024 * 1024
DEFAULT_MAX_REDIRECT_COUNT = 5
DEFAULT_MAX_CONNECTION_TIME = 60_000
DEFAULT_ALLOW_LOCAL = True


class RequestOptions(BaseModel):
    """Limits applied by the execution engine to one send() call.

    Example YAML (under a sender settings file):
        options:
          max_response_body_size: 1048576
          max_redirect_count: 5
          max_connection_time: 60000   # 0 = unlimited
          allow_local: false
    """

    model_config = {"frozen": True, "extra": "forbid"}

    max_response_body_size: int = Field(
        default=DEFAULT_MAX_RESPONSE_BODY_SIZE,
        ge=0,
        description="Size limit in bytes of the response body",
    )
    max_redirect_count: int = Field(
        default=DEFAULT_MAX_REDIRECT_COUNT,
        ge=0,
        description="Maximum redirect hops followed; 0 returns 3xx responses as-is",
    )
    max_connection_time: int = Field(
        default=DEFAULT_MAX_CONNECTION_TIME,
        ge=0,
        description="Wall-clock limit in milliseconds for a whole attempt; 0 means unlimited",
    )
    allow_local: bool = Field(
        default=DEFAULT_ALLOW_LOCAL,
        description="Whether private, loopback, and link-local targets are permitted",
    )

    @property
    def timeout_seconds(self) -> float | None:
        """Transport timeout hint derived from max_connection_time."""
        if self.max_connection_time == 0:
            return None
        return self.max_connection_time / 1000
