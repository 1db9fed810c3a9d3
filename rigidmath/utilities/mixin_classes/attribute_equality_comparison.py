import numpy as np

from typing import Self, Any


class AttributeEqualityComparison:
    """
    A base class that implements equality comparison based on attributes.

    Two objects compare equal when they are the same type and every attribute compares equal.  Numeric attributes
    (numpy arrays, sequences, and any of the rigidmath value types since they support the array protocol) are compared
    with :func:`numpy.allclose`; everything else uses ``==``.

    Attributes named in the ``_comparison_exclusions`` class attribute are ignored, which is used to skip bookkeeping
    such as the stored original options of a :class:`.UserOptionConfigured` object.
    """

    _comparison_exclusions: tuple[str, ...] = ()

    __hash__ = None

    def __eq__(self, other: Any) -> bool:
        """
        Compare this object with another for equality by checking equality of all attributes.

        :param other: The object to compare with
        :return: True if the objects are equal, False otherwise
        """

        if not isinstance(other, self.__class__):
            return NotImplemented

        if set(self._compared_keys()) != set(other._compared_keys()):
            return False

        return all(self.comparison_dictionary(other).values())

    def _compared_keys(self) -> list[str]:
        return [key for key in self.__dict__ if key not in self._comparison_exclusions]

    @staticmethod
    def _value_comparison(val1: Any, val2: Any) -> bool:
        """
        Compare two values, handling array-like objects.

        :param val1: First value to compare
        :param val2: Second value to compare
        :return: True if values are equal, False otherwise
        """

        if hasattr(val1, '__array__') or isinstance(val1, (list, tuple)):
            try:
                return np.shape(val1) == np.shape(val2) and bool(np.allclose(np.asarray(val1), np.asarray(val2)))
            except TypeError:
                # non-numeric sequences
                return bool(np.all(np.asarray(val1) == np.asarray(val2)))
        return bool(val1 == val2)

    def comparison_dictionary(self, other: Self) -> dict[str, bool]:
        """
        Compares each attribute of self to other and stores the result in a dict mapping the attribute to the
        comparison result.

        This assumes that other and self are the same type and have the same attributes.

        :param other: The other instance to compare with
        :return: A dictionary mapping attribute names to comparison results
        """

        return {key: self._value_comparison(getattr(self, key), getattr(other, key))
                for key in self._compared_keys()}
