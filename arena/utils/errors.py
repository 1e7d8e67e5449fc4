# arena/utils/errors.py
"""Error types shown to the console operator."""


class UserError(Exception):
    """Errors shown to the operator - must be clear and actionable."""
    pass


class UsageError(UserError):
    """Missing or malformed command arguments."""
    pass


class CommandError(UserError):
    """A command's state precondition does not hold."""
    pass


class ExpressionError(UserError):
    """An operator expression could not be evaluated."""
    pass
