"""External reference data sources."""
