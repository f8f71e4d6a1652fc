"""
Configuration-related exceptions.
"""


class ConfigurationError(Exception):
    """Raised at startup when required configuration or credentials are unusable."""
    pass
