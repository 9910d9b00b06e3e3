"""Custom exception classes for RBI Registry.

All exceptions inherit from RBIRegistryError to allow catching all custom exceptions.
The classification engine itself never raises; these are used by the roster
ingestion, configuration and CLI layers around it.
"""


class RBIRegistryError(Exception):
    """Base exception for all RBI Registry custom exceptions."""

    pass


class ValidationError(RBIRegistryError):
    """Raised when roster data validation fails.
    
    Examples:
        - Resident CSV missing the birthdate column
        - Unreadable or non UTF-8 CSV file
        - Duplicate resident identifiers
    """

    pass


class ConfigurationError(RBIRegistryError):
    """Raised when configuration loading or validation fails.
    
    Examples:
        - Invalid configuration file format
        - Unknown log level
        - Malformed reference date
    """

    pass
