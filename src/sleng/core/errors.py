"""Domain errors shared by the core, the API and the interactive session."""


class SlangError(Exception):
    """Base class for all sleng errors."""

    pass


class ValidationError(SlangError):
    """A required field is empty or too short."""

    pass


class DuplicateError(SlangError):
    """An entry with the same word (case-insensitive) already exists."""

    pass


class RangeError(SlangError):
    """A position is outside [1, count]."""

    def __init__(self, position: int, count: int):
        super().__init__(f"No entry at position {position} (have {count})")
        self.position = position
        self.count = count


class AlreadyRegisteredError(SlangError):
    """A user is already registered."""

    pass


class NotRegisteredError(SlangError):
    """No user has been registered yet."""

    pass


class InvalidCredentialsError(SlangError):
    """Username or password does not match the stored user."""

    pass


class PersistenceError(SlangError):
    """Reading, parsing or writing the backing document failed."""

    pass
