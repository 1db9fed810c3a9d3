"""
This module provides the :class:`Quaternion` value type.
"""

from typing import Any, Self

import numpy as np

from rigidmath._typing import ARRAY_LIKE, EULER_ANGLES, DatetimeLike
from rigidmath._value import ArrayValue, _is_scalar
from rigidmath.core._helpers import _is_unit
from rigidmath.core.conversions import (euler_to_quaternion, upright_to_object_quaternion,
                                        object_to_upright_quaternion, quaternion_to_euler, angle_axis_to_quaternion,
                                        quaternion_to_angle_axis, quaternion_to_rotmat, rotmat_to_quaternion)
from rigidmath.core.orders import RotationOrder
from rigidmath.core.quaternion_math import (quaternion_multiplication, quaternion_conjugate, quaternion_inverse,
                                            quaternion_normalize, rotate_vector, quaternion_power, slerp, lerp)
from rigidmath.matrices import Matrix, Matrix3, Matrix4
from rigidmath.scalars import ScalarPolicy
from rigidmath.vectors import Vector3


__all__ = ['Quaternion']


def _angles_in_radians(angles: EULER_ANGLES) -> np.ndarray:
    return np.radians(np.asarray(angles, dtype=np.float64))


class Quaternion(ArrayValue):
    """
    A quaternion :math:`w + x\\mathbf{i} + y\\mathbf{j} + z\\mathbf{k}`, stored as ``[w, x, y, z]``.

    Unit quaternions represent rotations.  They compose with the Hamilton product (``q1 * q2`` applies ``q2`` first,
    exactly as the matrix product ``Matrix3.from_quaternion(q1) * Matrix3.from_quaternion(q2)`` does) and rotate vectors
    with the sandwich product::

        >>> from rigidmath import Quaternion, Vector3
        >>> turn = Quaternion.from_angle_axis_degrees(Vector3.up(), 90)
        >>> print(turn * Vector3.forward())
        (1.00 0.00 0.00)

    Since :math:`\\mathbf{q}` and :math:`-\\mathbf{q}` represent the same rotation, ``==`` compares components while
    :meth:`same_rotation` compares the rotations.

    Conversions which require a rotation (to matrices, euler angles, angle-axis, powers, and interpolation) raise
    :class:`.NonUnitQuaternionError` for quaternions that are not unit length.  Everything else, including the inverse
    and rotating a vector, works for any non-zero quaternion.
    """

    shape = (4,)

    uniform_kind = 'vec'

    def __init__(self, *components: Any, policy: ScalarPolicy | None = None):
        """
        :param components: ``w, x, y, z``, or a single sequence/array/quaternion of them.  Defaults to the identity
        :param policy: The scalar policy of the quaternion
        """

        if not components:
            data = [1, 0, 0, 0]
        elif len(components) == 1 and not _is_scalar(components[0]):
            data = components[0]
        else:
            data = components

        super().__init__(data, policy=policy)

    @classmethod
    def identity(cls, policy: ScalarPolicy | None = None) -> Self:
        """
        The identity rotation ``1 + 0i + 0j + 0k``
        """
        return cls(policy=policy)

    @classmethod
    def from_scalar_vector(cls, w: float, vector: Vector3 | ARRAY_LIKE, policy: ScalarPolicy | None = None) -> Self:
        """
        Builds a quaternion from its scalar and vector parts.
        """
        if policy is None and isinstance(vector, Vector3):
            policy = vector.policy
        return cls(np.concatenate([[w], np.asarray(vector, dtype=np.float64)]), policy=policy)

    @property
    def w(self) -> float:
        """
        The scalar part
        """
        return self._data[0]

    @property
    def x(self) -> float:
        """
        The i component of the vector part
        """
        return self._data[1]

    @property
    def y(self) -> float:
        """
        The j component of the vector part
        """
        return self._data[2]

    @property
    def z(self) -> float:
        """
        The k component of the vector part
        """
        return self._data[3]

    @property
    def v(self) -> Vector3:
        """
        The vector part ``(x, y, z)``
        """
        return Vector3(self._data[1:], policy=self.policy)

    def __getitem__(self, index: int) -> float:
        return self._data[index]

    def __iter__(self):
        return iter(self._data.tolist())

    def __len__(self) -> int:
        return 4

    # construction from rotations

    @classmethod
    def from_euler_radians(cls, angles: EULER_ANGLES, order: RotationOrder | str = RotationOrder.BPH,
                           policy: ScalarPolicy | None = None) -> Self:
        """
        Composes the pitch, heading, and bank elemental quaternions in ``order`` (see :func:`.euler_to_quaternion`).
        This is the same rotation as :meth:`.Matrix3.from_euler_radians` with the same arguments.
        """
        return cls(euler_to_quaternion(np.asarray(angles, dtype=np.float64), order), policy=policy)

    @classmethod
    def from_euler_degrees(cls, angles: EULER_ANGLES, order: RotationOrder | str = RotationOrder.BPH,
                           policy: ScalarPolicy | None = None) -> Self:
        """
        :meth:`from_euler_radians` with the angles in degrees
        """
        return cls.from_euler_radians(_angles_in_radians(angles), order, policy=policy)

    @classmethod
    def upright_to_object_radians(cls, pitch: float, heading: float, bank: float,
                                  policy: ScalarPolicy | None = None) -> Self:
        """
        The upright-to-object rotation in closed form (see :func:`.upright_to_object_quaternion`).
        """
        return cls(upright_to_object_quaternion(np.array([pitch, heading, bank], dtype=np.float64)), policy=policy)

    @classmethod
    def upright_to_object_degrees(cls, pitch: float, heading: float, bank: float,
                                  policy: ScalarPolicy | None = None) -> Self:
        """
        :meth:`upright_to_object_radians` with the angles in degrees
        """
        return cls.upright_to_object_radians(*_angles_in_radians([pitch, heading, bank]), policy=policy)

    @classmethod
    def object_to_upright_radians(cls, pitch: float, heading: float, bank: float,
                                  policy: ScalarPolicy | None = None) -> Self:
        """
        The object-to-upright rotation in closed form (see :func:`.object_to_upright_quaternion`).
        """
        return cls(object_to_upright_quaternion(np.array([pitch, heading, bank], dtype=np.float64)), policy=policy)

    @classmethod
    def object_to_upright_degrees(cls, pitch: float, heading: float, bank: float,
                                  policy: ScalarPolicy | None = None) -> Self:
        """
        :meth:`object_to_upright_radians` with the angles in degrees
        """
        return cls.object_to_upright_radians(*_angles_in_radians([pitch, heading, bank]), policy=policy)

    @classmethod
    def from_angle_axis_radians(cls, axis: Vector3 | ARRAY_LIKE, theta: float,
                                policy: ScalarPolicy | None = None) -> Self:
        """
        The rotation by ``theta`` radians about a unit ``axis`` (see :func:`.angle_axis_to_quaternion`).

        :raises NonUnitVectorError: If the axis is not unit length
        """
        if policy is None and isinstance(axis, Vector3):
            policy = axis.policy
        return cls(angle_axis_to_quaternion(np.asarray(axis), theta), policy=policy)

    @classmethod
    def from_angle_axis_degrees(cls, axis: Vector3 | ARRAY_LIKE, theta: float,
                                policy: ScalarPolicy | None = None) -> Self:
        """
        :meth:`from_angle_axis_radians` with the angle in degrees
        """
        return cls.from_angle_axis_radians(axis, np.radians(theta), policy=policy)

    @classmethod
    def from_matrix(cls, matrix: Matrix | ARRAY_LIKE, policy: ScalarPolicy | None = None) -> Self:
        """
        The rotation of a 3x3 rotation matrix, or of the upper left block of a 4x4 matrix, using Shepperd's method
        (see :func:`.rotmat_to_quaternion`).
        """
        if policy is None and isinstance(matrix, Matrix):
            policy = matrix.policy
        return cls(rotmat_to_quaternion(np.asarray(matrix)), policy=policy)

    # decomposition

    def to_matrix3(self) -> Matrix3:
        """
        The rotation matrix of this unit quaternion.

        :raises NonUnitQuaternionError: If the quaternion is not unit length
        """
        return Matrix3(quaternion_to_rotmat(self._data), policy=self.policy)

    def to_matrix4(self) -> Matrix4:
        """
        The rotation matrix of this unit quaternion embedded in a 4x4 identity.

        :raises NonUnitQuaternionError: If the quaternion is not unit length
        """
        return Matrix4.from_matrix3(self.to_matrix3())

    def to_euler_radians(self, order: RotationOrder | str = RotationOrder.BPH) -> Vector3:
        """
        Extracts the ``(pitch, heading, bank)`` angles for a rotation composed in ``order`` (see
        :func:`.quaternion_to_euler`).

        :raises NonUnitQuaternionError: If the quaternion is not unit length
        """
        return Vector3(quaternion_to_euler(self._data, order), policy=self.policy)

    def to_euler_degrees(self, order: RotationOrder | str = RotationOrder.BPH) -> Vector3:
        """
        :meth:`to_euler_radians` in degrees
        """
        return Vector3(np.degrees(self.to_euler_radians(order).to_array()), policy=self.policy)

    def to_object_upright_euler_radians(self) -> Vector3:
        """
        Extracts the ``(pitch, heading, bank)`` angles of an object-to-upright rotation (see
        :meth:`object_to_upright_radians`).

        :raises NonUnitQuaternionError: If the quaternion is not unit length
        """
        return Vector3(quaternion_to_euler(quaternion_conjugate(self._data), RotationOrder.BPH), policy=self.policy)

    def to_object_upright_euler_degrees(self) -> Vector3:
        """
        :meth:`to_object_upright_euler_radians` in degrees
        """
        return Vector3(np.degrees(self.to_object_upright_euler_radians().to_array()), policy=self.policy)

    def to_angle_axis_radians(self) -> tuple[Vector3, float]:
        """
        The unit rotation axis and the angle in radians (in :math:`[0, 2\\pi]`, see :func:`.quaternion_to_angle_axis`).

        :raises NonUnitQuaternionError: If the quaternion is not unit length
        """
        axis, theta = quaternion_to_angle_axis(self._data, self.policy.angle_axis_small_sine)
        return Vector3(axis, policy=self.policy), theta

    def to_angle_axis_degrees(self) -> tuple[Vector3, float]:
        """
        :meth:`to_angle_axis_radians` with the angle in degrees
        """
        axis, theta = self.to_angle_axis_radians()
        return axis, np.degrees(theta)

    # algebra

    def dot(self, other: 'Quaternion') -> float:
        """
        The four dimensional dot product.
        """
        return self._data @ other._data

    def magnitude_squared(self) -> float:
        """
        The squared magnitude :math:`w^2+x^2+y^2+z^2`
        """
        return self._data @ self._data

    def magnitude(self) -> float:
        """
        The magnitude
        """
        return np.sqrt(self.magnitude_squared())

    def is_unit(self) -> bool:
        """
        Whether this is a rotation quaternion (unit magnitude within the policy's epsilon).
        """
        return _is_unit(self._data, self.policy.epsilon)

    def is_pure(self) -> bool:
        """
        Whether the scalar part is zero (within the policy's epsilon).
        """
        return abs(self._data[0]) <= self.policy.epsilon

    def is_pure_unit(self) -> bool:
        """
        Whether this is both pure and unit, as a rotation by 180 degrees is.
        """
        return self.is_pure() and self.is_unit()

    def conjugate(self) -> Self:
        """
        The conjugate, with the vector part negated.  For a unit quaternion this is also the inverse.
        """
        return self._new(quaternion_conjugate(self._data))

    def inverse(self) -> Self:
        """
        The multiplicative inverse, the conjugate divided by the squared magnitude.

        :raises ZeroDivisionError: for the zero quaternion
        """
        return self._new(quaternion_inverse(self._data))

    def __invert__(self) -> Self:
        return self.inverse()

    def normalized(self) -> Self:
        """
        A unit length copy of this quaternion.
        """
        return self._new(quaternion_normalize(self._data))

    def normalize(self) -> None:
        """
        Scales this quaternion to unit length in place.
        """
        self._data[...] = quaternion_normalize(self._data)

    def pow(self, exponent: float) -> Self:
        """
        Scales the rotation angle of this unit quaternion by ``exponent`` (see :func:`.quaternion_power`).

        :raises NonUnitQuaternionError: If the quaternion is not unit length
        """
        return self._new(quaternion_power(self._data, exponent, self.policy.gimbal_lock_threshold))

    __pow__ = pow

    def same_rotation(self, other: 'Quaternion') -> bool:
        """
        Whether this and another unit quaternion represent the same rotation, treating ``q`` and ``-q`` as equal.
        """
        return self.policy.approx_equal(self._data, other._data) or self.policy.approx_equal(self._data, -other._data)

    def rotate(self, vector: Vector3 | ARRAY_LIKE) -> Vector3:
        """
        Rotates a vector with the sandwich product :math:`\\mathbf{q}\\otimes\\mathbf{v}\\otimes\\mathbf{q}^{-1}`.
        """
        return Vector3(rotate_vector(self._data, np.asarray(vector, dtype=self.dtype)), policy=self.policy)

    def rotate_around_radians(self, axis: Vector3 | ARRAY_LIKE, theta: float) -> None:
        """
        Post multiplies this quaternion in place by the rotation of ``theta`` radians about a unit ``axis``.

        :raises NonUnitVectorError: If the axis is not unit length
        """
        self._data[...] = quaternion_multiplication(self._data, angle_axis_to_quaternion(np.asarray(axis), theta))

    def rotate_around_degrees(self, axis: Vector3 | ARRAY_LIKE, theta: float) -> None:
        """
        :meth:`rotate_around_radians` with the angle in degrees
        """
        self.rotate_around_radians(axis, np.radians(theta))

    # interpolation

    def slerp(self, other: 'Quaternion', time: float | DatetimeLike,
              time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1) -> Self:
        """
        Spherical linear interpolation from this unit quaternion to ``other`` along the shorter arc (see
        :func:`.slerp`).

        :raises NonUnitQuaternionError: If either quaternion is not unit length
        """
        return self._new(slerp(self._data, other._data, time, time0, time1,
                               threshold=self.policy.slerp_linear_threshold))

    def lerp(self, other: 'Quaternion', time: float | DatetimeLike,
             time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1, normalize: bool = True) -> Self:
        """
        Linear interpolation from this unit quaternion to ``other`` along the shorter arc (see :func:`.lerp`).

        :raises NonUnitQuaternionError: If either quaternion is not unit length
        """
        return self._new(lerp(self._data, other._data, time, time0, time1, normalize=normalize))

    # operators

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, Quaternion):
            return self._new(quaternion_multiplication(self._data, other._data))
        if isinstance(other, Vector3):
            return self.rotate(other)
        if _is_scalar(other):
            return self._new(self._data * other)
        return NotImplemented

    def __rmul__(self, other: Any) -> Self:
        if _is_scalar(other):
            return self._new(self._data * other)
        return NotImplemented

    def __imul__(self, other: Any) -> Self:
        if isinstance(other, Quaternion):
            self._data[...] = quaternion_multiplication(self._data, other._data)
        elif _is_scalar(other):
            self._data *= other
        else:
            return NotImplemented
        return self

    def __truediv__(self, other: Any) -> Self:
        # dividing by a quaternion multiplies by its inverse
        if isinstance(other, Quaternion):
            return self._new(quaternion_multiplication(self._data, quaternion_inverse(other._data)))
        if _is_scalar(other):
            return self._new(self._data / other)
        return NotImplemented

    def __add__(self, other: Any) -> Self:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self._new(self._data + other._data)

    def __sub__(self, other: Any) -> Self:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self._new(self._data - other._data)

    def __neg__(self) -> Self:
        return self._new(-self._data)

    def __str__(self) -> str:
        w, x, y, z = self._data
        return f'{w:.2f} ({x:.2f}i {y:.2f}j {z:.2f}k)'

    def __repr__(self) -> str:
        return f'Quaternion({", ".join(repr(float(component)) for component in self._data)})'
