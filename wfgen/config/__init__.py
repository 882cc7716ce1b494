"""Loading and validation of bootstrap configuration."""
