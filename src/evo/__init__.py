"""Evolution Metadata Extractor: structured metadata from Markdown proposals."""

__version__ = "0.1.0"
