"""Prometheus metrics for round-up volume and projection usage"""

from decimal import Decimal
from prometheus_client import Counter, Histogram

# Round-up metrics
transactions_counter = Counter(
    "roundup_transactions_total",
    "Transactions submitted for round-up",
    ["outcome"],  # processed | rejected
)

round_up_amount_counter = Counter(
    "roundup_amount_total",
    "Sum of computed round-ups in currency units",
)

# Projection metrics
projection_counter = Counter(
    "roundup_projection_total",
    "Projections computed",
    ["kind"],  # checkpoints | custom | goal_timeline | goals
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_round_up_batch(processed_count: int, rejected_count: int, total_round_ups: Decimal) -> None:
    """Record batch volume and the amount of spare change generated"""
    transactions_counter.labels(outcome="processed").inc(processed_count)
    transactions_counter.labels(outcome="rejected").inc(rejected_count)
    round_up_amount_counter.inc(float(total_round_ups))


def record_projection(kind: str) -> None:
    projection_counter.labels(kind=kind).inc()
