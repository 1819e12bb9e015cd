"""
Error types raised by the ledger engine.
"""


class ValidationError(ValueError):
    """Rejected allocation input. The message is safe to show to the user."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
