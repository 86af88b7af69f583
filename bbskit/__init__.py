"""Data formats and storage of PTT-style and FormosaBBS bulletin boards."""

__version__ = "0.1.0"