"""build-sources: make rules and header dependencies for C/C++ trees."""

__version__ = "0.1.0"
