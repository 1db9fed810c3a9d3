"""
This module provides the base class shared by the vector, matrix, and quaternion value types.
"""

from numbers import Real

from typing import Any, Self

import numpy as np

from rigidmath._typing import ARRAY_LIKE, REAL_ARRAY
from rigidmath.scalars import ScalarPolicy, policy_for
from rigidmath.uniforms import UniformValue, as_uniform_value


def _is_scalar(value: Any) -> bool:
    return isinstance(value, Real)


class ArrayValue:
    """
    A fixed shape value stored in a numpy array together with the :class:`.ScalarPolicy` that fixes its dtype and
    tolerances.

    Values behave as immutable: operators return new values and only the explicitly documented in-place methods (and
    the in-place operators) modify the underlying storage.  Equality is approximate (using the policy's epsilon), so
    values are not hashable.
    """

    shape: tuple[int, ...] = ()
    """
    The shape of the underlying array
    """

    uniform_kind: str = ''
    """
    The GLSL type family used when uploading the value (``'vec'`` or ``'mat'``)
    """

    __hash__ = None

    def __init__(self, data: ARRAY_LIKE, policy: ScalarPolicy | None = None):
        """
        :param data: The values to store.  They are always copied.
        :param policy: The scalar policy.  If ``None`` the policy of ``data`` is used when it is a value or a single
                       precision numpy array, otherwise :data:`.DEFAULT_POLICY`
        """

        if policy is None:
            if isinstance(data, ArrayValue):
                policy = data.policy
            elif isinstance(data, np.ndarray):
                policy = policy_for(data)
            else:
                policy = policy_for()

        self.policy: ScalarPolicy = policy
        """
        The scalar policy of this value
        """

        array = np.array(data, dtype=policy.dtype)

        if array.shape != self.shape:
            raise ValueError(f'{type(self).__name__} requires data of shape {self.shape}.  Got {array.shape}')

        self._data: REAL_ARRAY = array

    def _new(self, data: ARRAY_LIKE) -> Self:
        """
        Creates a new value of the same type and policy as this one.
        """

        return type(self)(np.asarray(data), policy=self.policy)

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> REAL_ARRAY:
        if dtype is None:
            return self._data.copy()
        return self._data.astype(dtype)

    def to_array(self) -> REAL_ARRAY:
        """
        Returns a copy of the underlying numpy array.
        """

        return self._data.copy()

    def copy(self) -> Self:
        """
        Returns a copy of this value.
        """

        return self._new(self._data)

    @property
    def dtype(self) -> np.dtype:
        """
        The dtype of the underlying array
        """
        return self._data.dtype

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented

        return self.policy.approx_equal(self._data, other._data)

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)

        if result is NotImplemented:
            return result

        return not result

    def as_uniform_value(self) -> UniformValue:
        """
        Returns this value in the layout expected by a GPU uniform (see :func:`.as_uniform_value`).
        """

        return as_uniform_value(self)
