"""
Persistence-specific exceptions for the ground-truth adapters.
"""


class PersistenceException(Exception):
    """Base exception for persistence layer"""

    pass


class ConnectionError(PersistenceException):
    """Raised when connection to storage fails"""

    pass


class MigrationError(PersistenceException):
    """Raised when migration fails"""

    pass


class RecordNotFoundError(PersistenceException):
    """Raised when a requested record doesn't exist"""

    pass


class QueryError(PersistenceException):
    """Raised when a query fails"""

    pass


class ConfigurationError(PersistenceException):
    """Raised when the adapter config is missing or malformed"""

    pass
