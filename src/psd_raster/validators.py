"""
Validation functions for attrs.

Validators raise :py:exc:`~psd_raster.exceptions.UnsupportedFormat` so that a
rejected header field surfaces as a decode failure.
"""

from typing import Any, Container

from attrs import define, field

from psd_raster.exceptions import UnsupportedFormat

__all__ = ["in_", "range_", "not_in"]


@define(repr=False, frozen=True)
class _RangeValidator:
    minimum: int
    maximum: int

    def __call__(self, inst: Any, attr: Any, value: Any) -> None:
        try:
            in_range = self.minimum <= value <= self.maximum
        except TypeError:
            in_range = False

        if not in_range:
            raise UnsupportedFormat(
                "'{name}' must be in range [{minimum}, {maximum}]: {value!r}".format(
                    name=attr.name,
                    minimum=self.minimum,
                    maximum=self.maximum,
                    value=value,
                )
            )

    def __repr__(self) -> str:
        return "<range_ validator with [{minimum!r}, {maximum!r}]>".format(
            minimum=self.minimum, maximum=self.maximum
        )


@define(repr=False, frozen=True)
class _InValidator:
    options: Container = field()
    negate: bool = False

    def __call__(self, inst: Any, attr: Any, value: Any) -> None:
        try:
            found = value in self.options
        except TypeError:
            found = False

        if found == self.negate:
            raise UnsupportedFormat(
                "'{name}' {verb} be in {options!r}: {value!r}".format(
                    name=attr.name,
                    verb="must not" if self.negate else "must",
                    options=self.options,
                    value=value,
                )
            )

    def __repr__(self) -> str:
        return "<in_ validator with options {options!r}>".format(options=self.options)


def range_(minimum: int, maximum: int) -> _RangeValidator:
    """
    A validator that raises :py:exc:`UnsupportedFormat` if the initializer is
    called with a value that does not belong in the [minimum, maximum] range.
    The check is performed using ``minimum <= value and value <= maximum``.
    """
    return _RangeValidator(minimum, maximum)


def in_(options: Container) -> _InValidator:
    """
    A validator that raises :py:exc:`UnsupportedFormat` if the initializer is
    called with a value that is not in ``options``.
    """
    return _InValidator(options)


def not_in(options: Container) -> _InValidator:
    """
    A validator that raises :py:exc:`UnsupportedFormat` if the value is one of
    ``options``.
    """
    return _InValidator(options, negate=True)
