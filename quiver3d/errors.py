"""Exceptions raised while building arrow glyphs and quivers."""


class Quiver3DError(ValueError):
    """Base class for all quiver3d errors."""


class InvalidArgumentShapeError(Quiver3DError):
    """An input array has the wrong rank or length."""


class InvalidRangeError(Quiver3DError):
    """A styling value lies outside its permitted range."""


class DegenerateDirectionError(Quiver3DError):
    """A direction vector has zero length and therefore no orientation."""


class UnknownColorNameError(Quiver3DError):
    """A color name is not one of the recognised short or long names."""


class InvalidGeometryError(Quiver3DError):
    """Inputs or produced vertices contain NaN or infinite values."""
