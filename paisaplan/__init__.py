"""paisa-plan: personal expense and budget tracking."""

__version__ = "0.1.0"
