"""Prometheus metrics instrumentation for the translation relay.

Metrics are exposed via HTTP on a separate port (METRICS_PORT) when
METRICS_ENABLED is set.

Metrics exported:
- relay_stage_latency_seconds: Histogram of adapter call time per stage
- relay_turns_total: Counter of finished turns by status
- relay_active_connections: Gauge of currently open WebSocket connections
- relay_cache_lookups_total: Counter of translation cache lookups by result

Usage:
    from speech_relay.services.metrics import start_metrics_server, turns_processed

    start_metrics_server(port=8001)
    turns_processed.labels(status='success', language_pair='sv-en').inc()
"""

from prometheus_client import Histogram, Counter, Gauge, start_http_server
import logging

logger = logging.getLogger(__name__)

# Latency per adapter call
stage_latency = Histogram(
    'relay_stage_latency_seconds',
    'Time spent in each provider call',
    labelnames=['component']  # component: transcription, translation, synthesis
)

turns_processed = Counter(
    'relay_turns_total',
    'Total turns run after a stop',
    labelnames=['status', 'language_pair']  # status: success, error
)

active_connections_gauge = Gauge(
    'relay_active_connections',
    'Number of currently open WebSocket connections'
)

cache_lookups = Counter(
    'relay_cache_lookups_total',
    'Translation cache lookups',
    labelnames=['result']  # result: hit, miss, error
)


def start_metrics_server(port: int = 8001):
    """Start Prometheus metrics HTTP server."""
    try:
        start_http_server(port)
        logger.info(f"✅ Metrics server started on port {port}")
    except OSError as e:
        logger.error(f"❌ Failed to start metrics server: {e}")
