"""Terminal admin console for a warehouse management REST backend."""

__version__ = "0.1.0"
