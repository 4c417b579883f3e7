"""
gbs2gb Command-Line Interface
=============================

This package provides the gbs2gb command-line tool, a Click-based
application that converts GBS files to Game Boy ROMs.
"""

__all__ = ["gbs2gb"]
