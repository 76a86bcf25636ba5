"""Tests for the metrics module."""

import pytest

from utils.metrics import MAX_RESPONSE_TIMES, Metrics


@pytest.fixture
def metrics_instance():
    """Create a fresh metrics instance for each test."""
    return Metrics()


def test_start_with_zero_metrics(metrics_instance):
    """Should start with zero metrics."""
    snapshot = metrics_instance.get_metrics()

    assert snapshot.totalRequests == 0
    assert snapshot.emptyCompletions == 0
    assert snapshot.avgResponseTimeMs == 0
    assert snapshot.requestsByLanguage == {}
    assert snapshot.errorCount == 0


def test_track_total_requests(metrics_instance):
    """Should track total requests."""
    metrics_instance.record_request("python", 100, empty=False, error=False)
    metrics_instance.record_request("python", 150, empty=False, error=False)
    metrics_instance.record_request("typescript", 200, empty=False, error=False)

    assert metrics_instance.get_metrics().totalRequests == 3


def test_track_empty_completions(metrics_instance):
    """Should count requests that produced no suggestion."""
    metrics_instance.record_request("python", 100, empty=True, error=False)
    metrics_instance.record_request("python", 100, empty=False, error=False)
    metrics_instance.record_request("python", 100, empty=True, error=True)

    snapshot = metrics_instance.get_metrics()
    assert snapshot.emptyCompletions == 2
    assert snapshot.errorCount == 1


def test_track_requests_by_language(metrics_instance):
    """Should count requests per language."""
    metrics_instance.record_request("python", 100, empty=False, error=False)
    metrics_instance.record_request("javascript", 100, empty=False, error=False)
    metrics_instance.record_request("python", 100, empty=False, error=False)

    assert metrics_instance.get_metrics().requestsByLanguage == {"python": 2, "javascript": 1}


def test_average_response_time(metrics_instance):
    """Should average response times."""
    metrics_instance.record_request("python", 100, empty=False, error=False)
    metrics_instance.record_request("python", 200, empty=False, error=False)
    metrics_instance.record_request("python", 300, empty=False, error=False)

    assert metrics_instance.get_metrics().avgResponseTimeMs == 200


def test_rolling_window(metrics_instance):
    """Should only average the most recent response times."""
    metrics_instance.record_request("python", 10000, empty=False, error=False)
    for _ in range(MAX_RESPONSE_TIMES):
        metrics_instance.record_request("python", 50, empty=False, error=False)

    assert metrics_instance.get_metrics().avgResponseTimeMs == 50


def test_reset(metrics_instance):
    """Should reset all metrics."""
    metrics_instance.record_request("python", 100, empty=True, error=True)
    metrics_instance.reset()

    snapshot = metrics_instance.get_metrics()
    assert snapshot.totalRequests == 0
    assert snapshot.emptyCompletions == 0
    assert snapshot.errorCount == 0
    assert snapshot.requestsByLanguage == {}
