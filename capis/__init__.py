"""Send HTTP requests described in YAML files and log the responses."""

__version__ = "0.1.0"