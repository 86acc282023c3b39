"""Domain models, exceptions and workspace configuration."""
