class InvalidSymbol(ValueError):
    """A symbol is negative, not an integer, or above the declared maximum."""

    def __init__(self, value, position=None, reason="symbols must be non-negative integers"):
        self.value = value
        self.position = position
        if position is None:
            message = f"{reason}: got {value!r}"
        else:
            message = f"{reason}: got {value!r} at position {position}"
        super().__init__(message)
