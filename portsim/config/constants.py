"""
Core constants for the cargo port simulator.

Tick intervals, identity rules, dispatch priority tiers,
snapshot tags and runtime defaults.
"""

# ---------------------------------------------------------------------------
# Tick engine: every interval is in simulated minutes
# ---------------------------------------------------------------------------
DOCKING_INTERVAL_MINUTES = 10     # queue head is offered to empty quays
UNLOADING_INTERVAL_MINUTES = 5    # docked ships discharge to the warehouse
THROUGHPUT_WINDOW_MINUTES = 60    # sliding window for ShipThroughputEvaluator

# ---------------------------------------------------------------------------
# Identity rules
# ---------------------------------------------------------------------------
IMO_NUMBER_DIGITS = 7             # IMO ship numbers: exactly 7 digits, no leading zero

# ---------------------------------------------------------------------------
# Nautical signal flags (ICS single-letter meanings)
# ---------------------------------------------------------------------------
NAUTICAL_FLAG_MEANINGS = {
    "BRAVO":    "Carrying dangerous cargo",
    "HOTEL":    "Ready to dock",
    "WHISKEY":  "Requires medical assistance",
    "NOVEMBER": "No special status",
}

# Flag tiers checked by ShipQueue.peek, highest priority first.
# After the flags, container ships beat bulk carriers, then plain FIFO.
PRIORITY_FLAGS = ("BRAVO", "WHISKEY", "HOTEL")

# ---------------------------------------------------------------------------
# Snapshot format
# ---------------------------------------------------------------------------
FIELD_SEPARATOR = ":"
LIST_SEPARATOR = ","
EMPTY_QUAY_MARKER = "None"

SHIP_QUEUE_TAG = "ShipQueue"
STORED_CARGO_TAG = "StoredCargo"
MOVEMENTS_TAG = "Movements"
EVALUATORS_TAG = "Evaluators"

# ---------------------------------------------------------------------------
# Runtime defaults (overridable through environment variables)
# ---------------------------------------------------------------------------
LOG_LEVEL = "INFO"                          # overridden by PORTSIM_LOG_LEVEL
DEFAULT_SIMULATION_MINUTES = 60
MAX_TICK_REQUEST_MINUTES = 24 * 60          # web API upper bound per request
WEB_HOST = "0.0.0.0"
WEB_PORT = 8000
