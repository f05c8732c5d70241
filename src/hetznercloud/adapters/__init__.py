"""I/O adapters: HTTP binding and exporters."""
