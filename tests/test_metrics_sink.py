# -*- coding: utf-8 -*-
"""Tests for the Prometheus metrics sink."""

import pytest
from prometheus_client import CollectorRegistry

from collector.metrics_sink import PrometheusMetricsSink
from collector.poller import RateLimitPoller

from conftest import make_response


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def prometheus_sink(registry) -> PrometheusMetricsSink:
    return PrometheusMetricsSink(registry=registry)


def gauge_value(registry, rate):
    return registry.get_sample_value('ms_ratelimit_remaining_resource_gauge', {'rate': rate})


class TestPrometheusMetricsSink:

    def test_record_sets_gauge(self, registry, prometheus_sink):
        prometheus_sink.record("reads", 42)
        assert gauge_value(registry, "reads") == 42.0

    def test_record_overwrites_previous_value(self, registry, prometheus_sink):
        prometheus_sink.record("reads", 42)
        prometheus_sink.record("reads", 17)
        assert gauge_value(registry, "reads") == 17.0

    def test_failure_counter(self, registry, prometheus_sink):
        assert registry.get_sample_value('ms_ratelimit_failures_total') == 0.0
        prometheus_sink.increment_failures()
        prometheus_sink.increment_failures()
        assert registry.get_sample_value('ms_ratelimit_failures_total') == 2.0

    def test_exposition_text(self, prometheus_sink):
        prometheus_sink.record("Microsoft.Compute/GetVMScaleSet3Min", 190)
        text = prometheus_sink.get_metrics().decode('utf-8')
        assert '# HELP ms_ratelimit_remaining_resource_gauge Remaining resource reads' in text
        assert 'ms_ratelimit_remaining_resource_gauge{rate="Microsoft.Compute/GetVMScaleSet3Min"} 190.0' in text
        assert '# TYPE ms_ratelimit_failures_total counter' in text

    def test_poller_cycle_against_registry(self, registry, prometheus_sink, target, token_provider, session):
        session.queue(
            make_response(200, {"x-ms-ratelimit-remaining-resource": "a;1,b;2,c;3"}),
            make_response(200, {"x-ms-ratelimit-remaining-resource": "a;0"}),
            make_response(500),
        )
        poller = RateLimitPoller(target, token_provider, prometheus_sink, session=session)

        poller.run()
        assert gauge_value(registry, "a") == 1.0
        assert gauge_value(registry, "b") == 2.0
        assert gauge_value(registry, "c") == 3.0

        poller.run()
        assert gauge_value(registry, "a") == 0.0
        assert gauge_value(registry, "b") == 2.0

        poller.run()
        assert registry.get_sample_value('ms_ratelimit_failures_total') == 1.0
