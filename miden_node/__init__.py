"""Protocol types, message conversions, configuration, RPC request checks and transaction batching for a rollup node."""

__version__ = "0.1.0"