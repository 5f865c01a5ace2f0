"""
Prometheus metrics for tool and resource invocations.
Uses a private registry so repeated imports (tests, reloads) never clash with the default one.
"""
from __future__ import annotations

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

# Single registry for the process
_REGISTRY: Optional[CollectorRegistry] = None

INVOCATIONS_TOTAL: Optional[Counter] = None
INVOCATION_LATENCY: Optional[Histogram] = None


def _get_registry() -> CollectorRegistry:
    global _REGISTRY
    if _REGISTRY is None:
        _REGISTRY = CollectorRegistry()
    return _REGISTRY


def init_metrics() -> None:
    global INVOCATIONS_TOTAL, INVOCATION_LATENCY
    if INVOCATIONS_TOTAL is not None:
        return
    reg = _get_registry()
    labelnames = ["kind", "name"]
    INVOCATIONS_TOTAL = Counter("leetcode_mcp_invocations_total", "Invocations by unit and outcome",
                                labelnames + ["outcome"], registry=reg)
    INVOCATION_LATENCY = Histogram("leetcode_mcp_invocation_latency_seconds", "Invocation latency by unit",
                                   labelnames, registry=reg)


init_metrics()


def record_invocation(kind: str, name: str, success: bool, latency_s: float) -> None:
    outcome = "success" if success else "error"
    INVOCATIONS_TOTAL.labels(kind=kind, name=name, outcome=outcome).inc()
    INVOCATION_LATENCY.labels(kind=kind, name=name).observe(max(0.0, latency_s))


def invocation_count(kind: str, name: str, outcome: str) -> float:
    value = _get_registry().get_sample_value(
        "leetcode_mcp_invocations_total", {"kind": kind, "name": name, "outcome": outcome}
    )
    return value or 0.0


def metrics_payload_bytes() -> bytes:
    return generate_latest(_get_registry())


def metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
