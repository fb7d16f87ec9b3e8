"""Host GPU capability probes."""
