"""Exceptions raised outside the projection core."""


class MissingProjectionError(RuntimeError):
    """A report or view was requested before any projection was run."""
