"""WordFlow: grid tracing, validation, scoring and word discovery for a word-connection puzzle."""

__version__ = "0.1.0"
