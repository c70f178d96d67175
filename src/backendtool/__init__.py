"""backendtool - Primitive operations and one-way sync for remote storage backends."""

__version__ = "0.1.0"
