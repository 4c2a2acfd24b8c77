"""stylejit: just-in-time CSS subsetting, at build time or live in a document."""

__version__ = "0.1.0"
