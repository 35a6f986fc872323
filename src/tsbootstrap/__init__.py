"""Bootstrap a minimal Node.js TypeScript project skeleton."""

__all__ = ["__version__"]

__version__ = "0.1.0"
