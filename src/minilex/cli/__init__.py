"""
minilex Command-Line Interface
==============================

This package provides the ``minilex`` command, which scans a source file
and prints its tokens one per line. It is implemented as a Click-based
application.
"""

__all__ = ["minilex"]
