"""
Core enums, exceptions and models.
"""
