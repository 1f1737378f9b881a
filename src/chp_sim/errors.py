"""Exception types raised by the simulator."""


class ChpSimError(Exception):
    """Base class for all simulator errors."""


class InvalidArgumentError(ChpSimError, ValueError):
    """A caller supplied an out-of-range index, a bad shape or an unknown name."""


class InternalConsistencyError(ChpSimError, RuntimeError):
    """The tableau bookkeeping is broken. Not recoverable."""
