"""Exceptions raised by the unit layer."""


class UnitError(Exception):
    """
    Base exception for unit and dimension errors.
    """


class DimensionMismatchError(UnitError, TypeError):
    """
    Raised when quantities of incompatible dimensions are added, subtracted,
    compared or converted.
    """


class UnknownUnitError(UnitError, ValueError):
    """
    Raised when a unit symbol is not registered.
    """
