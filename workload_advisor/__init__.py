"""Hardware recommendation gateway for machine-learning workloads."""
