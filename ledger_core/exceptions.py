from django.core.exceptions import ValidationError


class UnbalancedJournalError(ValidationError):
    """Raised when a voucher's journal entries fail the double-entry balance check."""
    pass


class MissingAccountError(ValidationError):
    """Raised when a required ledger account (system code or party account) can't be resolved."""
    pass


class IntegrityGuardError(Exception):
    """Raised when a delete is refused because dependent ledger records exist."""
    pass


class UnknownVoucherTypeError(Exception):
    """Raised when no number sequence is configured for a voucher type."""
    pass
