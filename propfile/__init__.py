"""propfile — generate grouped, commented ``.properties`` files."""

__version__ = "0.1.0"
