class PostseasonError(Exception):
    """A postseason cannot be run from the teams it was given."""


class SeriesError(PostseasonError):
    """The game-outcome provider broke its contract during a series."""
