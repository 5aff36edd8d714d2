"""Metrics collection for the search service.

Thin convenience wrapper around ``prometheus_client`` so the HTTP layer and
the remote client record consistent request and upstream metrics.

Design notes
- Metrics and labels are predeclared to keep label sets bounded
- Each collector owns its registry so tests can build isolated instances
"""

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


class MetricsCollector:
    """Centralized metrics collection.

    Parameters
    - service_name: Logical name of the owning service
    - registry: Optional custom ``CollectorRegistry`` (e.g. for testing)
    """

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        self.registry = registry or CollectorRegistry()

        self.request_count = Counter(
            'http_requests_total',
            'Total HTTP requests',
            ['method', 'endpoint', 'status'],
            registry=self.registry
        )

        self.request_duration = Histogram(
            'http_request_duration_seconds',
            'HTTP request duration',
            ['method', 'endpoint'],
            registry=self.registry
        )

        self.upstream_requests = Counter(
            'omdb_upstream_requests_total',
            'Total outbound OMDb search requests',
            ['outcome'],
            registry=self.registry
        )

        self.upstream_duration = Histogram(
            'omdb_upstream_request_duration_seconds',
            'Outbound OMDb search duration',
            registry=self.registry
        )

    def record_http_request(
        self,
        method: str,
        endpoint: str,
        status: int,
        duration: float
    ) -> None:
        """Record HTTP request metrics.

        duration is expected in seconds to match Prometheus histogram units.
        """
        self.request_count.labels(method=method, endpoint=endpoint, status=status).inc()
        self.request_duration.labels(method=method, endpoint=endpoint).observe(duration)

    def record_upstream_request(self, outcome: str, duration: float) -> None:
        """Record one outbound search call (``success`` or ``error``)."""
        self.upstream_requests.labels(outcome=outcome).inc()
        self.upstream_duration.observe(duration)

    def get_metrics(self) -> str:
        """Get metrics in Prometheus exposition format for scraping."""
        return generate_latest(self.registry).decode('utf-8')
