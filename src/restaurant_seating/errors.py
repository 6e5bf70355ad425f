"""Exception hierarchy for restaurant seating."""


class SeatingError(Exception):
    """Base exception."""


class InvalidState(SeatingError):
    """Operation does not match the group's current seating state."""


class InvalidArgument(SeatingError, ValueError):
    """Malformed group size or table capacity."""


class Unseatable(InvalidArgument):
    """Group is larger than every table in the room."""
