from typing import Optional


class ConfigurationError(Exception):
    """Configuration-specific exception for setup errors."""

    def __init__(self, message: str, setting_name: Optional[str] = None):
        self.setting_name = setting_name
        super().__init__(message)


class InvalidInputError(Exception):
    """
    Malformed user input for an operation.

    Raised before any request is sent, so it is never worth retrying.
    ``item_index`` points at the batch item the input came from, when known.
    """

    def __init__(self, message: str, item_index: Optional[int] = None):
        self.message = message
        self.item_index = item_index
        super().__init__(message)

    def with_item(self, item_index: int) -> "InvalidInputError":
        """Return a copy attributed to ``item_index``."""
        return InvalidInputError(self.message, item_index)
