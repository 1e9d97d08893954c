"""Error taxonomy shared by the domain core and the store adapter."""


class LedgerError(Exception):
    """Base class for every error shopledger raises on purpose."""


class ValidationError(LedgerError):
    """A value violates an entity invariant (raised before any store call)."""


class NotFoundError(LedgerError):
    """An update or delete target does not exist."""


class StoreError(LedgerError):
    """The underlying record store operation failed."""


class ConfigError(LedgerError):
    """The config file exists but cannot be parsed."""
