"""
Prometheus Metrics Registration.

Counters and histograms for the AI tool layer.
"""

from prometheus_client import Counter, Histogram

# ============================================================================
# COUNTERS
# ============================================================================

tool_dispatch_total = Counter(
    "tool_dispatch_total",
    "Tool dispatch outcomes",
    ["tool_name", "outcome"],  # success, confirmation_required, or failure reason
)

confirmations_total = Counter(
    "confirmations_total",
    "Pending confirmation transitions",
    ["status"],  # pending, confirmed, declined, expired
)

# ============================================================================
# HISTOGRAMS
# ============================================================================

tool_execution_duration = Histogram(
    "tool_execution_duration_seconds",
    "Tool handler execution duration",
    ["tool_name"],
    buckets=(0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0),
)
