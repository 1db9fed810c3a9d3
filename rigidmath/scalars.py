r"""
This module defines the scalar policy used by rigidmath.

Every value type (vectors, matrices, quaternions) is backed by a numpy array of a single floating point width.  The
:class:`ScalarPolicy` attached to a value fixes that width together with the tolerances used for approximate
comparisons and for the branch decisions made by the rotation routines (gimbal lock detection, the SLERP linear
fallback, and the small angle axis fallback).

Two policies are provided, :data:`FLOAT32` for single precision (what is typically uploaded to a GPU) and
:data:`FLOAT64` for double precision (the default).  The tolerance used for approximate equality is scaled by the
magnitude of the compared values so that large values are not held to an absolute epsilon:

.. math::
    |a-b|\leq\epsilon\max(1, |a|, |b|)
"""

from dataclasses import dataclass

from typing import Any

import numpy as np

from rigidmath._typing import ARRAY_LIKE
from rigidmath.utilities.options import UserOptions


__all__ = ['ScalarPolicy', 'FLOAT32', 'FLOAT64', 'DEFAULT_POLICY', 'policy_for', 'approx_equal']


@dataclass
class ScalarPolicy(UserOptions):
    """
    The floating point width and tolerances used by a value.

    The module level :data:`FLOAT32` and :data:`FLOAT64` instances are shared by every value that uses them and should
    be treated as read only.  Create a new instance if different tolerances are needed.
    """

    dtype: type[np.floating] = np.float64
    """
    The numpy floating point type values are stored with
    """

    epsilon: float = 1e-9
    """
    The tolerance used for approximate equality, unit length checks, and singular matrix detection
    """

    gimbal_lock_threshold: float = 0.9999
    """
    The absolute value of the sine of the middle euler angle above which the extraction is considered gimbal locked
    """

    slerp_linear_threshold: float = 0.9999
    """
    The cosine of the angle between two quaternions above which SLERP falls back to a linear blend
    """

    angle_axis_small_sine: float = 0.001
    """
    The sine of the half angle below which the rotation axis of a quaternion is considered ill defined
    """

    @property
    def name(self) -> str:
        """
        The name of the floating point type (``'float32'`` or ``'float64'``)
        """
        return np.dtype(self.dtype).name

    def asarray(self, values: ARRAY_LIKE) -> np.ndarray:
        """
        Returns ``values`` as a new numpy array of this policy's dtype.

        :param values: The values to convert
        :return: A copy of the values with the dtype of this policy
        """

        return np.array(values, dtype=self.dtype)

    def approx_equal(self, first: ARRAY_LIKE, second: ARRAY_LIKE) -> bool:
        """
        Element-wise approximate equality using this policy's epsilon.

        :param first: The first value(s) to compare
        :param second: The second value(s) to compare
        :return: ``True`` if every element is approximately equal
        """

        return approx_equal(first, second, self.epsilon)


FLOAT32 = ScalarPolicy(dtype=np.float32, epsilon=1e-5)
"""
The single precision policy
"""

FLOAT64 = ScalarPolicy(dtype=np.float64, epsilon=1e-9)
"""
The double precision policy
"""

DEFAULT_POLICY = FLOAT64
"""
The policy used when none is specified
"""


def policy_for(value: Any = None) -> ScalarPolicy:
    """
    Determine the scalar policy for a value.

    ``value`` may be a :class:`ScalarPolicy` (returned as is), a numpy dtype or floating point type, a numpy array
    (whose dtype is used), or ``None`` for the :data:`DEFAULT_POLICY`.  Anything that is not single precision
    resolves to :data:`FLOAT64`.

    :param value: The policy, dtype, or array to resolve
    :return: The matching policy
    """

    if value is None:
        return DEFAULT_POLICY

    if isinstance(value, ScalarPolicy):
        return value

    if isinstance(value, np.ndarray):
        value = value.dtype

    try:
        dtype = np.dtype(value)
    except TypeError:
        return DEFAULT_POLICY

    if dtype == np.float32:
        return FLOAT32

    return FLOAT64


def approx_equal(first: ARRAY_LIKE, second: ARRAY_LIKE, epsilon: float | None = None) -> bool:
    r"""
    Element-wise approximate equality scaled by the magnitude of the compared values.

    Two values are considered equal when

    .. math::
        |a-b|\leq\epsilon\max(1, |a|, |b|)

    holds for every element.  When ``epsilon`` is ``None`` the epsilon of the policy matching the dtype of ``first`` is
    used.

    :param first: The first value(s) to compare
    :param second: The second value(s) to compare
    :param epsilon: The tolerance to use
    :return: ``True`` if every element is approximately equal
    """

    first = np.asarray(first)
    second = np.asarray(second)

    if first.shape != second.shape:
        return False

    if epsilon is None:
        epsilon = policy_for(first).epsilon

    first = first.astype(np.float64)
    second = second.astype(np.float64)

    scale = np.maximum(1.0, np.maximum(np.abs(first), np.abs(second)))

    return bool(np.all(np.abs(first - second) <= epsilon * scale))
