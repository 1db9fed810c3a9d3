"""
This module provides the 2, 3, and 4 component vector value types.

Vectors are stored as a 1D numpy array in ``x, y, z, w`` order with the dtype of their :class:`.ScalarPolicy`.  They
support componentwise arithmetic with vectors of the same size, scaling by scalars, the dot product (and the cross
product for :class:`Vector3`), and normalization::

    >>> from rigidmath import Vector3
    >>> v = Vector3(3, 0, 4)
    >>> print(v.length())
    5.0
    >>> print(v.normalized())
    (0.60 0.00 0.80)
"""

from typing import Any, Self

import numpy as np

from rigidmath._value import ArrayValue, _is_scalar
from rigidmath.core._helpers import _is_unit
from rigidmath.scalars import ScalarPolicy


__all__ = ['Vector', 'Vector2', 'Vector3', 'Vector4']


class Vector(ArrayValue):
    """
    The base class for the fixed size vectors.

    A vector can be created from its components, from a single sequence of components, or with no arguments for the
    zero vector::

        >>> Vector3(1, 2, 3) == Vector3([1, 2, 3])
        True
    """

    size: int = 0
    """
    The number of components
    """

    uniform_kind = 'vec'

    def __init__(self, *components: Any, policy: ScalarPolicy | None = None):
        """
        :param components: The components, or a single sequence/array/vector of them.  Defaults to all zeros
        :param policy: The scalar policy of the vector
        """

        if not components:
            data = np.zeros(self.size)
        elif len(components) == 1 and not _is_scalar(components[0]):
            data = components[0]
        else:
            data = components

        super().__init__(data, policy=policy)

    @property
    def shape(self) -> tuple[int]:  # type: ignore[override]
        return (self.size,)

    @classmethod
    def zero(cls, policy: ScalarPolicy | None = None) -> Self:
        """
        The vector with every component 0
        """
        return cls(policy=policy)

    @classmethod
    def one(cls, policy: ScalarPolicy | None = None) -> Self:
        """
        The vector with every component 1
        """
        return cls.all(1, policy=policy)

    @classmethod
    def all(cls, value: float, policy: ScalarPolicy | None = None) -> Self:
        """
        The vector with every component set to ``value``
        """
        return cls(np.full(cls.size, value, dtype=np.float64), policy=policy)

    @property
    def x(self) -> float:
        """
        The first component
        """
        return self._data[0]

    @property
    def y(self) -> float:
        """
        The second component
        """
        return self._data[1]

    def __getitem__(self, index: int) -> float:
        return self._data[index]

    def __iter__(self):
        return iter(self._data.tolist())

    def __len__(self) -> int:
        return self.size

    def dot(self, other: 'Vector') -> float:
        """
        The dot product with another vector of the same size.

        :param other: The other vector
        :return: The dot product
        """

        if not isinstance(other, type(self)):
            raise TypeError(f'Cannot take the dot product of {type(self).__name__} and {type(other).__name__}')

        return self._data @ other._data

    def length_squared(self) -> float:
        """
        The squared euclidean length, which avoids the square root of :meth:`length`.
        """
        return self._data @ self._data

    def length(self) -> float:
        """
        The euclidean length.
        """
        return np.sqrt(self.length_squared())

    def is_unit(self) -> bool:
        """
        Whether the vector is unit length within the epsilon of its policy.
        """
        return _is_unit(self._data, self.policy.epsilon)

    def normalized(self) -> Self:
        """
        Returns a unit length copy of this vector.

        :raises ValueError: If the vector has zero length
        """

        result = self.copy()
        result.normalize()
        return result

    def normalize(self) -> None:
        """
        Scales this vector to unit length in place.

        :raises ValueError: If the vector has zero length
        """

        length = self.length()

        if length == 0:
            raise ValueError('A zero length vector cannot be normalized')

        self._data /= length

    def __add__(self, other: Any) -> Self:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._new(self._data + other._data)

    def __sub__(self, other: Any) -> Self:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._new(self._data - other._data)

    def __neg__(self) -> Self:
        return self._new(-self._data)

    def __mul__(self, other: Any) -> Self:
        # scalars scale, vectors of the same size multiply componentwise
        if _is_scalar(other):
            return self._new(self._data * other)
        if isinstance(other, type(self)):
            return self._new(self._data * other._data)
        return NotImplemented

    def __rmul__(self, other: Any) -> Self:
        if _is_scalar(other):
            return self._new(self._data * other)
        return NotImplemented

    def __truediv__(self, other: Any) -> Self:
        if _is_scalar(other):
            return self._new(self._data / other)
        if isinstance(other, type(self)):
            return self._new(self._data / other._data)
        return NotImplemented

    def __imul__(self, other: Any) -> Self:
        if _is_scalar(other):
            self._data *= other
        elif isinstance(other, type(self)):
            self._data *= other._data
        else:
            return NotImplemented
        return self

    def __itruediv__(self, other: Any) -> Self:
        if _is_scalar(other):
            self._data /= other
        elif isinstance(other, type(self)):
            self._data /= other._data
        else:
            return NotImplemented
        return self

    def __str__(self) -> str:
        return '(' + ' '.join(f'{component:.2f}' for component in self._data) + ')'

    def __repr__(self) -> str:
        return f'{type(self).__name__}({", ".join(repr(float(component)) for component in self._data)})'


class Vector2(Vector):
    """
    A 2 component vector ``(x, y)``.
    """

    size = 2

    @classmethod
    def right(cls, policy: ScalarPolicy | None = None) -> 'Vector2':
        """
        The unit x axis
        """
        return cls(1, 0, policy=policy)

    @classmethod
    def up(cls, policy: ScalarPolicy | None = None) -> 'Vector2':
        """
        The unit y axis
        """
        return cls(0, 1, policy=policy)

    @classmethod
    def from_vector3(cls, vector: 'Vector3') -> 'Vector2':
        """
        Drops the z component of a :class:`Vector3`.
        """
        return cls(vector.to_array()[:2], policy=vector.policy)


class Vector3(Vector):
    """
    A 3 component vector ``(x, y, z)``.
    """

    size = 3

    @property
    def z(self) -> float:
        """
        The third component
        """
        return self._data[2]

    @classmethod
    def right(cls, policy: ScalarPolicy | None = None) -> 'Vector3':
        """
        The unit x axis
        """
        return cls(1, 0, 0, policy=policy)

    @classmethod
    def up(cls, policy: ScalarPolicy | None = None) -> 'Vector3':
        """
        The unit y axis
        """
        return cls(0, 1, 0, policy=policy)

    @classmethod
    def forward(cls, policy: ScalarPolicy | None = None) -> 'Vector3':
        """
        The unit z axis
        """
        return cls(0, 0, 1, policy=policy)

    def cross(self, other: 'Vector3') -> 'Vector3':
        """
        The right handed cross product ``self × other``.

        :param other: The other vector
        :return: The cross product
        """

        if not isinstance(other, Vector3):
            raise TypeError(f'Cannot take the cross product of Vector3 and {type(other).__name__}')

        return self._new(np.cross(self._data, other._data))

    @classmethod
    def from_vector2(cls, vector: Vector2, z: float = 0) -> 'Vector3':
        """
        Extends a :class:`Vector2` with a z component.
        """
        return cls(np.append(vector.to_array(), z), policy=vector.policy)

    @classmethod
    def from_vector4(cls, vector: 'Vector4') -> 'Vector3':
        """
        Drops the w component of a :class:`Vector4`.
        """
        return cls(vector.to_array()[:3], policy=vector.policy)


class Vector4(Vector):
    """
    A 4 component vector ``(x, y, z, w)``.
    """

    size = 4

    @property
    def z(self) -> float:
        """
        The third component
        """
        return self._data[2]

    @property
    def w(self) -> float:
        """
        The fourth component
        """
        return self._data[3]

    @classmethod
    def right(cls, policy: ScalarPolicy | None = None) -> 'Vector4':
        """
        The unit x axis with w 0
        """
        return cls(1, 0, 0, 0, policy=policy)

    @classmethod
    def up(cls, policy: ScalarPolicy | None = None) -> 'Vector4':
        """
        The unit y axis with w 0
        """
        return cls(0, 1, 0, 0, policy=policy)

    @classmethod
    def forward(cls, policy: ScalarPolicy | None = None) -> 'Vector4':
        """
        The unit z axis with w 0
        """
        return cls(0, 0, 1, 0, policy=policy)

    @classmethod
    def w_only(cls, policy: ScalarPolicy | None = None) -> 'Vector4':
        """
        The vector ``(0, 0, 0, 1)``
        """
        return cls(0, 0, 0, 1, policy=policy)

    @classmethod
    def from_vector3(cls, vector: Vector3, w: float = 0) -> 'Vector4':
        """
        Extends a :class:`Vector3` with a w component (1 for a point, 0 for a direction).
        """
        return cls(np.append(vector.to_array(), w), policy=vector.policy)
