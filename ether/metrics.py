"""Metrics collection for dispatched requests."""

import threading
from dataclasses import dataclass, field
from typing import ClassVar

from ether.errors import EtherErrorKind


@dataclass
class RequestMetrics:
    """Metrics for dispatched requests.

    Singleton class that tracks request counts by status code, bytes
    received, and failures by error kind. Transport failures are counted
    under their exception class name.
    """

    http_requests_total: dict[int, int] = field(default_factory=dict)
    http_failures_total: dict[str, int] = field(default_factory=dict)
    http_bytes_total: int = 0
    http_duration_ms_total: float = 0.0
    http_request_count: int = 0

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    _instance: ClassVar["RequestMetrics | None"] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def get_instance(cls) -> "RequestMetrics":
        """Get singleton metrics instance."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        with cls._instance_lock:
            cls._instance = None

    def record_response(self, status_code: int, bytes_received: int, duration_ms: float) -> None:
        """Record a completed HTTP exchange.

        Args:
            status_code: HTTP status code.
            bytes_received: Number of body bytes received.
            duration_ms: Round-trip duration in milliseconds.
        """
        with self._lock:
            self.http_requests_total[status_code] = (
                self.http_requests_total.get(status_code, 0) + 1
            )
            self.http_bytes_total += bytes_received
            self.http_duration_ms_total += duration_ms
            self.http_request_count += 1

    def record_failure(self, kind: EtherErrorKind | str) -> None:
        """Record a failed call.

        Args:
            kind: Error kind, or an exception class name for transport errors.
        """
        key = kind.value if isinstance(kind, EtherErrorKind) else kind
        with self._lock:
            self.http_failures_total[key] = self.http_failures_total.get(key, 0) + 1

    def to_dict(self) -> dict[str, int | float | dict[str, int] | dict[int, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        with self._lock:
            return {
                "http_requests_total": dict(self.http_requests_total),
                "http_failures_total": dict(self.http_failures_total),
                "http_bytes_total": self.http_bytes_total,
                "http_duration_ms_total": self.http_duration_ms_total,
                "http_request_count": self.http_request_count,
            }

    @property
    def avg_duration_ms(self) -> float:
        """Calculate average request duration."""
        with self._lock:
            if self.http_request_count == 0:
                return 0.0
            return self.http_duration_ms_total / self.http_request_count
