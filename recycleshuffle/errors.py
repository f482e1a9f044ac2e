class ShuffleError(ValueError):
    pass


class InvalidPlaylist(ShuffleError):
    """Raised when a playlist cannot be shuffled (empty or duplicate items)."""


class InvalidParameter(ShuffleError):
    """Raised when a shuffle or simulation parameter is out of range."""
