"""Dynamic content binding for the business backend: template rendering and attachment binding."""

__version__ = "0.1.0"
