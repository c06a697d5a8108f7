"""Domain exceptions"""


class SlotEngineError(Exception):
    """Base class for slot engine errors"""


class ValidationError(SlotEngineError):
    """Request input failed validation"""


class AuthenticationError(SlotEngineError):
    """Credentials did not match any account"""


class NotFoundError(SlotEngineError):
    """Requested account or session does not exist"""


class ConflictError(SlotEngineError):
    """Resource already exists"""


class StoreError(SlotEngineError):
    """External data store failed"""
