"""Exchange connectors."""
