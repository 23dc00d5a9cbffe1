"""Exception types raised by chord-search."""


class ChordSearchError(Exception):
    """Base class for all chord-search errors."""


class ParseError(ChordSearchError, ValueError):
    """A chord symbol could not be parsed.

    Parameters
    ----------
    symbol : str
        The offending chord symbol.
    reason : str
        Short description of what was wrong with it.
    """

    def __init__(self, symbol: str, reason: str) -> None:
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"Cannot parse chord {symbol!r}: {reason}")


class EmptyInputError(ChordSearchError, ValueError):
    """A progression or corpus that must be non-empty was empty."""


class InvalidDegreeError(ChordSearchError, ValueError):
    """A Nashville number is empty, out of the 1-7 range, or has an unknown suffix.

    Parameters
    ----------
    number : str
        The offending Nashville number.
    reason : str
        Short description of what was wrong with it.
    """

    def __init__(self, number: str, reason: str) -> None:
        self.number = number
        self.reason = reason
        super().__init__(f"Invalid Nashville number {number!r}: {reason}")
