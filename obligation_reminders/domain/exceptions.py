"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ConfigurationError(DomainException):
    """Required configuration (secret, storage credentials) is missing"""

    pass


class StorageError(DomainException):
    """Obligation or notification storage failed"""

    pass


class StorageReadError(StorageError):
    """Obligations could not be listed"""

    pass


class StorageWriteError(StorageError):
    """A reminder could not be checked or written"""

    pass


class PushDeliveryError(DomainException):
    """Push gateway rejected a reminder or is unavailable"""

    pass
