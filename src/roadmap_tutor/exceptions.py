"""Exceptions raised inside the tutor."""


class TutorError(Exception):
    pass


class CorruptSessionError(TutorError):
    """A persisted review session could not be decoded."""


class DayLockedError(TutorError):
    """A day was requested that the user cannot open yet."""

    def __init__(self, day: int):
        super().__init__(f"Day {day} is locked")
        self.day = day
