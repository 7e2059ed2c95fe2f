"""Exceptions raised by the game engine and its renderers."""


class SnakyError(Exception):
    pass


class CellOutOfRange(SnakyError):
    def __init__(self, message: str = "cell out of range"):
        super().__init__(message)


class MoveError(SnakyError):
    """A step that the snake could not take. The message is shown to the player."""


class WallHit(MoveError):
    def __init__(self, message: str = "wall hit"):
        super().__init__(message)


class SnakeBite(MoveError):
    def __init__(self, message: str = "snake bite"):
        super().__init__(message)


class BoardCleared(MoveError):
    def __init__(self, message: str = "board cleared"):
        super().__init__(message)


class RenderError(SnakyError):
    pass


class InputError(SnakyError):
    pass
