"""Browser-driven extraction of AI overview panels from search result pages."""

__version__ = "1.0.0"
