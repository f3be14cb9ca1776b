"""Partner campaign tracking dashboard and benchmarking engine."""
