"""Exceptions raised by the record protocol beyond the builtin ones."""


class ArgumentError(TypeError):
    """Raised for a bad argument list: too many constructor values or an invalid field name."""


class ControlFlowError(RuntimeError):
    """Raised when an enumeration that needs a callback is called without one."""
