class BotError(Exception):
    """Base exception for the concierge bot."""


class NullArgumentError(BotError, ValueError):
    """A required collaborator was not supplied."""

    def __init__(self, argument_name):
        self.argument_name = argument_name
        super().__init__(f"'{argument_name}' is required and cannot be None.")


class NoResolutionError(BotError):
    """Date/time recognition produced no usable candidate."""


class DialogNotFoundError(BotError):
    """A dialog id could not be found in the dialog set or its parents."""


class UnexpectedResultError(BotError):
    """A completed flow returned a result the caller does not handle."""
