"""Exception types raised by fractal_cell_noise."""


class ConfigurationError(ValueError):
    """Raised when a noise table or noise field is configured with bad values.

    the bitmask wraparound used for tiling only works for power-of-two table
    widths and cell densities, so those are rejected here instead of silently
    wrapping to the wrong cell.
    """


class EmptyDrawError(RuntimeError):
    """Raised when the table shuffle draws from an exhausted working sequence.

    this means the table size bookkeeping is wrong. it is never recovered from.
    """
