"""Command line front end for PP-OCR text detection and recognition."""

__version__ = "0.1.0"
