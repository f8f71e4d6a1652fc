"""
LINE booking server for a hair salon, backed by Google Sheets.
"""

__version__ = "1.0.0"
