"""Search app: pass-through flight and hotel search against the aggregator."""
