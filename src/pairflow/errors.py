class InputValidationError(Exception):
    """
    Exception raised when the inputs are not valid.
    This is used to indicate that the inputs do not meet the requirements of the operator.
    """


class MissingArgumentError(InputValidationError, TypeError):
    """Raised when a required stream or cursor argument is None."""

    pass


class InvalidArgumentError(InputValidationError, ValueError):
    """
    Raised when an argument has the right type but an unacceptable value,
    e.g. two inputs that must be distinct are the same instance, or a skip
    or limit count is negative.
    """


class InvalidStateError(RuntimeError):
    """
    Raised when a stream is used after it has already been operated upon or closed,
    i.e. its single traversal handle has already been handed out.
    """


class ConcurrentModificationError(RuntimeError):
    """
    Raised by a fail-fast cursor when its backing collection was structurally
    modified after traversal began.
    """


class ExhaustedError(LookupError):
    """Raised when a cursor is advanced past its last element."""

    pass
