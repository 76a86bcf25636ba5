"""Server metrics tracking for the health endpoint."""

from models.response import MetricsSnapshot

# Maximum response times to keep for averaging
MAX_RESPONSE_TIMES = 1000


class Metrics:
    """
    Counts completion requests by outcome and language.
    Response times are averaged over a rolling window.
    """

    def __init__(self):
        self._total_requests = 0
        self._empty_completions = 0
        self._response_times: list[float] = []
        self._requests_by_language: dict[str, int] = {}
        self._error_count = 0

    def record_request(
        self,
        language: str,
        response_time_ms: float,
        empty: bool,
        error: bool,
    ) -> None:
        """
        Record a completed request.

        Args:
            language: Language identifier of the document
            response_time_ms: How long the request took in milliseconds
            empty: Whether no suggestion was returned
            error: Whether the request resulted in an error
        """
        self._total_requests += 1

        if empty:
            self._empty_completions += 1

        if error:
            self._error_count += 1

        self._requests_by_language[language] = self._requests_by_language.get(language, 0) + 1

        self._response_times.append(response_time_ms)
        if len(self._response_times) > MAX_RESPONSE_TIMES:
            self._response_times.pop(0)

    def get_metrics(self) -> MetricsSnapshot:
        """Get a snapshot of current metrics."""
        avg_response_time_ms = (
            round(sum(self._response_times) / len(self._response_times))
            if self._response_times
            else 0
        )

        return MetricsSnapshot(
            totalRequests=self._total_requests,
            emptyCompletions=self._empty_completions,
            avgResponseTimeMs=avg_response_time_ms,
            requestsByLanguage=dict(self._requests_by_language),
            errorCount=self._error_count,
        )

    def reset(self) -> None:
        """Reset all metrics. Useful for testing."""
        self._total_requests = 0
        self._empty_completions = 0
        self._response_times = []
        self._requests_by_language = {}
        self._error_count = 0


# Shared metrics instance
metrics = Metrics()
