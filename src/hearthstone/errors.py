"""
Hearthstone - Exception types.

Validation problems in user input are coerced to defaults and never raise.
These exceptions cover programmer errors and remote failures only.
"""


class HearthstoneError(Exception):
    """Base class for Hearthstone errors."""
    pass


class PreconditionError(HearthstoneError):
    """Raised when an engine operation is called in a state that wiring should prevent."""
    pass


class SyncError(HearthstoneError):
    """Raised by the remote profile store when Supabase rejects or fails a request."""
    pass


class PartnerLinkError(HearthstoneError):
    """Raised when an invite code cannot be accepted (invalid, used, expired or own code)."""
    pass
