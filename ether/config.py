"""Configuration for the request pipeline."""

import threading
from collections.abc import Mapping
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from ether.settings import EtherSettings


class DomainHeaders:
    """Trusted headers per hostname.

    Headers registered for a host (typically session tokens) are attached
    only to requests whose URL host matches exactly, so they never leak to
    other domains. Hostnames compare case-insensitively.

    Thread-safe: writes are serialized and reads return copies.
    """

    def __init__(self, initial: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self._lock = threading.Lock()
        self._table: dict[str, dict[str, str]] = {}
        for host, headers in (initial or {}).items():
            self.set(host, headers)

    def set(self, host: str, headers: Mapping[str, str]) -> None:
        """Register (or replace) the trusted headers for a host."""
        with self._lock:
            self._table[host.lower()] = dict(headers)

    def remove(self, host: str) -> None:
        """Forget the trusted headers for a host."""
        with self._lock:
            self._table.pop(host.lower(), None)

    def clear(self) -> None:
        """Forget all trusted headers."""
        with self._lock:
            self._table.clear()

    def get(self, host: str | None) -> dict[str, str] | None:
        """Get a copy of the trusted headers for a host.

        Args:
            host: Request hostname.

        Returns:
            Headers for the host, or None if the host is not registered.
        """
        if not host:
            return None
        with self._lock:
            headers = self._table.get(host.lower())
            return dict(headers) if headers is not None else None

    def hosts(self) -> list[str]:
        """List registered hostnames."""
        with self._lock:
            return sorted(self._table)

    def __contains__(self, host: object) -> bool:
        if not isinstance(host, str):
            return False
        with self._lock:
            return host.lower() in self._table

    def __len__(self) -> int:
        with self._lock:
            return len(self._table)

    def __repr__(self) -> str:
        return f"DomainHeaders(hosts={self.hosts()!r})"


class EtherConfig(BaseModel):
    """Configuration injected into ``EtherClient``.

    Attributes:
        domain_headers: Trusted headers per hostname.
        log_requests: Log every assembled request at debug level. Has no
            effect when Python runs with ``-O``, since headers may carry
            secrets.
        timeout_seconds: Transport timeout; None keeps the httpx default.
        user_agent: User-Agent header; None keeps the httpx default.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    domain_headers: DomainHeaders = Field(default_factory=DomainHeaders)
    log_requests: bool = False
    timeout_seconds: Annotated[float, Field(gt=0.0, le=600.0)] | None = None
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] | None = None

    @classmethod
    def from_settings(
        cls,
        settings: EtherSettings | None = None,
        domain_headers: DomainHeaders | None = None,
    ) -> "EtherConfig":
        """Build a config from environment settings.

        Args:
            settings: Settings to read; loaded from the environment if None.
            domain_headers: Trusted headers table to use.

        Returns:
            EtherConfig instance.
        """
        settings = settings or EtherSettings()
        return cls(
            domain_headers=domain_headers if domain_headers is not None else DomainHeaders(),
            log_requests=settings.log_requests,
            timeout_seconds=settings.timeout_seconds,
            user_agent=settings.user_agent,
        )

    @property
    def request_logging_enabled(self) -> bool:
        """Whether assembled requests are logged."""
        return self.log_requests and __debug__
