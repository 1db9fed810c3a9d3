"""
This module provides the 2x2, 3x3, and 4x4 square matrix value types.

Matrices are stored row-major: ``matrix[i]`` is row ``i`` as a vector and ``matrix[i, j]`` is the element in row ``i``
and column ``j``.  Vectors are treated as columns, so ``matrix * vector`` is the matrix-vector product and
``a * b`` applies ``b`` first when both are used to transform a vector.

The determinant, adjugate, and inverse are computed with the closed form cofactor expansions of
:mod:`rigidmath.core.cofactors` and inverting a (nearly) singular matrix raises :class:`.SingularMatrixError` for
every size.

:class:`Matrix3` and :class:`Matrix4` additionally build and decompose rotations (euler angles in any
:class:`.RotationOrder`, the fused upright/object forms, angle-axis, quaternions) and scales.  Every method taking or
returning angles comes as a ``_radians``/``_degrees`` pair::

    >>> from rigidmath import Matrix3, RotationOrder
    >>> matrix = Matrix3.from_euler_degrees([30, 45, 60], RotationOrder.HPB)
    >>> print(matrix.to_euler_degrees(RotationOrder.HPB))
    (30.00 45.00 60.00)
"""

from typing import Any, Self, Sequence

import numpy as np

from rigidmath._typing import ARRAY_LIKE, EULER_ANGLES, REAL_ARRAY
from rigidmath._value import ArrayValue, _is_scalar
from rigidmath.core.cofactors import determinant, adjugate, inverse, is_invertible
from rigidmath.core.conversions import (euler_to_rotmat, upright_to_object_rotmat, object_to_upright_rotmat,
                                        rotmat_to_euler, angle_axis_to_rotmat, quaternion_to_rotmat,
                                        rotmat_to_quaternion)
from rigidmath.core._helpers import _check_vector_array_and_shape, _require_unit_vector
from rigidmath.core.orders import RotationOrder
from rigidmath.scalars import ScalarPolicy
from rigidmath.vectors import Vector, Vector2, Vector3, Vector4


__all__ = ['Matrix', 'Matrix2', 'Matrix3', 'Matrix4']


class Matrix(ArrayValue):
    """
    The base class for the square matrices.

    A matrix can be created from nested rows (sequences, vectors, or a 2D array), from another matrix of the same size,
    or with no arguments for the identity.
    """

    size: int = 0
    """
    The number of rows (and columns)
    """

    vector_type: type[Vector] = Vector
    """
    The vector type of a row or column
    """

    uniform_kind = 'mat'

    def __init__(self, rows: ARRAY_LIKE | Sequence[Vector] | None = None, policy: ScalarPolicy | None = None):
        """
        :param rows: The rows of the matrix.  Defaults to the identity
        :param policy: The scalar policy of the matrix
        """

        if rows is None:
            rows = np.eye(self.size)
        elif isinstance(rows, (list, tuple)) and rows and isinstance(rows[0], Vector):
            if policy is None:
                policy = rows[0].policy
            rows = np.array([row.to_array() for row in rows])

        super().__init__(rows, policy=policy)

    @property
    def shape(self) -> tuple[int, int]:  # type: ignore[override]
        return self.size, self.size

    @classmethod
    def identity(cls, policy: ScalarPolicy | None = None) -> Self:
        """
        The identity matrix
        """
        return cls(policy=policy)

    @classmethod
    def zero(cls, policy: ScalarPolicy | None = None) -> Self:
        """
        The matrix with every element 0
        """
        return cls(np.zeros((cls.size, cls.size)), policy=policy)

    @classmethod
    def from_rows(cls, *rows: Vector | ARRAY_LIKE, policy: ScalarPolicy | None = None) -> Self:
        """
        Builds a matrix from its rows.
        """
        return cls(np.array([np.asarray(row) for row in rows]), policy=policy)

    @classmethod
    def from_columns(cls, *columns: Vector | ARRAY_LIKE, policy: ScalarPolicy | None = None) -> Self:
        """
        Builds a matrix from its columns.
        """
        return cls(np.array([np.asarray(column) for column in columns]).T, policy=policy)

    @classmethod
    def from_values(cls, *values: float, policy: ScalarPolicy | None = None) -> Self:
        """
        Builds a matrix from its elements listed row by row.
        """
        return cls(np.reshape(values, (cls.size, cls.size)), policy=policy)

    def row(self, index: int) -> Vector:
        """
        Row ``index`` as a vector
        """
        return self.vector_type(self._data[index], policy=self.policy)

    def column(self, index: int) -> Vector:
        """
        Column ``index`` as a vector
        """
        return self.vector_type(self._data[:, index], policy=self.policy)

    def __getitem__(self, index: int | tuple[int, int]) -> Any:
        if isinstance(index, tuple):
            return self._data[index]
        return self.row(index)

    def __iter__(self):
        return (self.row(index) for index in range(self.size))

    def __len__(self) -> int:
        return self.size

    def transpose(self) -> Self:
        """
        Returns the transpose of this matrix.
        """
        return self._new(self._data.T)

    def determinant(self) -> float:
        """
        The determinant of this matrix.
        """
        return determinant(self._data)

    def adjugate(self) -> Self:
        """
        The adjugate (classical adjoint) of this matrix, the transpose of its cofactor matrix.
        """
        return self._new(adjugate(self._data))

    adjoint = adjugate

    def inverse(self) -> Self:
        """
        The inverse of this matrix.

        :raises SingularMatrixError: If the matrix is singular within the policy's epsilon (see :func:`.is_invertible`)
        """
        return self._new(inverse(self._data, self.policy.epsilon))

    def is_invertible(self) -> bool:
        """
        Whether the determinant is farther than the policy's epsilon from zero relative to the lengths of the rows
        or columns.
        """
        return is_invertible(self._data, self.policy.epsilon)

    def __invert__(self) -> Self:
        return self.inverse()

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

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, type(self)):
            return self._new(self._data @ other._data)
        if isinstance(other, self.vector_type):
            return self.vector_type(self._data @ other.to_array(), policy=self.policy)
        if _is_scalar(other):
            return self._new(self._data * other)
        return NotImplemented

    __matmul__ = __mul__

    def __rmul__(self, other: Any) -> Self:
        if _is_scalar(other):
            return self._new(self._data * other)
        return NotImplemented

    def __truediv__(self, other: Any) -> Self:
        # dividing by a matrix multiplies by its inverse
        if isinstance(other, type(self)):
            return self._new(self._data @ inverse(other._data, other.policy.epsilon))
        if _is_scalar(other):
            return self._new(self._data / other)
        return NotImplemented

    def __imul__(self, other: Any) -> Self:
        if isinstance(other, type(self)):
            self._data[...] = self._data @ other._data
        elif _is_scalar(other):
            self._data *= other
        else:
            return NotImplemented
        return self

    def __itruediv__(self, other: Any) -> Self:
        if isinstance(other, type(self)):
            self._data[...] = self._data @ inverse(other._data, other.policy.epsilon)
        elif _is_scalar(other):
            self._data /= other
        else:
            return NotImplemented
        return self

    def __str__(self) -> str:
        rows = [' '.join(f'{element:.2f}' for element in row) for row in self._data]

        lines = [f'⌈{rows[0]}⌉']
        lines.extend(f'|{row}|' for row in rows[1:-1])
        lines.append(f'⌊{rows[-1]}⌋')

        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._data.tolist()!r})'


class Matrix2(Matrix):
    """
    A 2x2 matrix.
    """

    size = 2
    vector_type = Vector2

    @classmethod
    def rotation_radians(cls, theta: float, policy: ScalarPolicy | None = None) -> 'Matrix2':
        r"""
        The 2D frame rotation by ``theta`` radians

        .. math::
            \mathbf{M}=\left[\begin{array}{cc}\text{cos}(\theta) & \text{sin}(\theta) \\
            -\text{sin}(\theta) & \text{cos}(\theta)\end{array}\right]
        """

        ctheta, stheta = np.cos(theta), np.sin(theta)

        return cls([[ctheta, stheta], [-stheta, ctheta]], policy=policy)

    @classmethod
    def rotation_degrees(cls, theta: float, policy: ScalarPolicy | None = None) -> 'Matrix2':
        """
        The 2D frame rotation by ``theta`` degrees (see :meth:`rotation_radians`)
        """
        return cls.rotation_radians(np.radians(theta), policy=policy)


def _angles_in_radians(angles: EULER_ANGLES) -> REAL_ARRAY:
    return np.radians(np.asarray(angles, dtype=np.float64))


class _RotationMatrix(Matrix):
    """
    The rotation and scale builders shared by :class:`Matrix3` and :class:`Matrix4`.

    Everything is computed on a 3x3 block, which :class:`Matrix4` embeds into the upper left of an identity.
    """

    @classmethod
    def _from_block(cls, block: ARRAY_LIKE, policy: ScalarPolicy | None) -> Self:
        data = np.eye(cls.size)
        data[:3, :3] = block
        return cls(data, policy=policy)

    def _block(self) -> REAL_ARRAY:
        return self._data[:3, :3]

    def _apply_block(self, block: ARRAY_LIKE) -> None:
        # self = self * block
        self._data[...] = self._data @ self._from_block(block, self.policy)._data

    @classmethod
    def from_euler_radians(cls, angles: EULER_ANGLES, order: RotationOrder | str = RotationOrder.BPH,
                           policy: ScalarPolicy | None = None) -> Self:
        """
        Composes the pitch, heading, and bank elemental matrices in ``order`` (see :func:`.euler_to_rotmat`).

        :param angles: The ``(pitch, heading, bank)`` angles in radians
        :param order: The order to compose the elemental matrices in
        :param policy: The scalar policy of the result
        """
        return cls._from_block(euler_to_rotmat(np.asarray(angles, dtype=np.float64), order), policy)

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
        The upright-to-object rotation in closed form (see :func:`.upright_to_object_rotmat`).
        """
        return cls._from_block(upright_to_object_rotmat(np.array([pitch, heading, bank], dtype=np.float64)), policy)

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
        The object-to-upright rotation in closed form (see :func:`.object_to_upright_rotmat`).
        """
        return cls._from_block(object_to_upright_rotmat(np.array([pitch, heading, bank], dtype=np.float64)), policy)

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
        The rotation by ``theta`` radians about a unit ``axis`` (see :func:`.angle_axis_to_rotmat`).

        :raises NonUnitVectorError: If the axis is not unit length
        """
        if policy is None and isinstance(axis, Vector3):
            policy = axis.policy
        return cls._from_block(angle_axis_to_rotmat(np.asarray(axis), theta), policy)

    @classmethod
    def from_angle_axis_degrees(cls, axis: Vector3 | ARRAY_LIKE, theta: float,
                                policy: ScalarPolicy | None = None) -> Self:
        """
        :meth:`from_angle_axis_radians` with the angle in degrees
        """
        return cls.from_angle_axis_radians(axis, np.radians(theta), policy=policy)

    @classmethod
    def from_quaternion(cls, quaternion: ARRAY_LIKE, policy: ScalarPolicy | None = None) -> Self:
        """
        The rotation represented by a unit quaternion (a :class:`.Quaternion` or a ``[w, x, y, z]`` array).

        :raises NonUnitQuaternionError: If the quaternion is not unit length
        """
        if policy is None:
            policy = getattr(quaternion, 'policy', None)
        return cls._from_block(quaternion_to_rotmat(np.asarray(quaternion)), policy)

    @classmethod
    def scale_matrix(cls, factors: float | Vector3 | ARRAY_LIKE, policy: ScalarPolicy | None = None) -> Self:
        """
        The scale along the x, y, and z axes by ``factors`` (a single factor scales all three equally).
        """
        return cls._from_block(np.diag(np.broadcast_to(np.asarray(factors, dtype=np.float64), (3,))), policy)

    @classmethod
    def axis_scale_matrix(cls, axis: Vector3 | ARRAY_LIKE, factor: float, policy: ScalarPolicy | None = None) -> Self:
        r"""
        The scale by ``factor`` along a unit ``axis``, leaving the perpendicular plane unchanged:

        .. math::
            \mathbf{M}=\mathbf{I}+(k-1)\hat{\mathbf{n}}\hat{\mathbf{n}}^T

        :raises NonUnitVectorError: If the axis is not unit length
        """

        axis = _check_vector_array_and_shape(np.asarray(axis))

        _require_unit_vector(axis)

        return cls._from_block(np.eye(3) + (factor - 1) * np.outer(axis, axis), policy)

    def to_euler_radians(self, order: RotationOrder | str = RotationOrder.BPH) -> Vector3:
        """
        Extracts the ``(pitch, heading, bank)`` angles for a rotation composed in ``order`` (see
        :func:`.rotmat_to_euler`).  For the default order this decodes :meth:`upright_to_object_radians`.
        """
        return Vector3(rotmat_to_euler(self._block(), order), policy=self.policy)

    def to_euler_degrees(self, order: RotationOrder | str = RotationOrder.BPH) -> Vector3:
        """
        :meth:`to_euler_radians` in degrees
        """
        return Vector3(np.degrees(self.to_euler_radians(order).to_array()), policy=self.policy)

    def to_object_upright_euler_radians(self) -> Vector3:
        """
        Extracts the ``(pitch, heading, bank)`` angles of an object-to-upright rotation (see
        :meth:`object_to_upright_radians`).
        """
        return Vector3(rotmat_to_euler(self._block().T, RotationOrder.BPH), policy=self.policy)

    def to_object_upright_euler_degrees(self) -> Vector3:
        """
        :meth:`to_object_upright_euler_radians` in degrees
        """
        return Vector3(np.degrees(self.to_object_upright_euler_radians().to_array()), policy=self.policy)

    def to_quaternion(self) -> 'Quaternion':
        """
        The unit quaternion of the rotation in this matrix (Shepperd's method, see :func:`.rotmat_to_quaternion`).
        """
        from rigidmath.quaternion import Quaternion

        return Quaternion(rotmat_to_quaternion(self._block()), policy=self.policy)

    def is_rotation(self) -> bool:
        """
        Whether the rotation block is orthonormal with a determinant of +1 (within the policy's epsilon).
        """
        block = self._block()
        return (self.policy.approx_equal(block @ block.T, np.eye(3)) and
                self.policy.approx_equal(determinant(block), 1))

    def rotate_by_euler_radians(self, angles: EULER_ANGLES, order: RotationOrder | str = RotationOrder.BPH) -> None:
        """
        Post multiplies this matrix in place by :meth:`from_euler_radians`.
        """
        self._apply_block(euler_to_rotmat(np.asarray(angles, dtype=np.float64), order))

    def rotate_by_euler_degrees(self, angles: EULER_ANGLES, order: RotationOrder | str = RotationOrder.BPH) -> None:
        """
        :meth:`rotate_by_euler_radians` with the angles in degrees
        """
        self.rotate_by_euler_radians(_angles_in_radians(angles), order)

    def rotate_by_upright_to_object_radians(self, pitch: float, heading: float, bank: float) -> None:
        """
        Post multiplies this matrix in place by :meth:`upright_to_object_radians`.
        """
        self._apply_block(upright_to_object_rotmat(np.array([pitch, heading, bank], dtype=np.float64)))

    def rotate_by_upright_to_object_degrees(self, pitch: float, heading: float, bank: float) -> None:
        """
        :meth:`rotate_by_upright_to_object_radians` with the angles in degrees
        """
        self.rotate_by_upright_to_object_radians(*_angles_in_radians([pitch, heading, bank]))

    def rotate_by_object_to_upright_radians(self, pitch: float, heading: float, bank: float) -> None:
        """
        Post multiplies this matrix in place by :meth:`object_to_upright_radians`.
        """
        self._apply_block(object_to_upright_rotmat(np.array([pitch, heading, bank], dtype=np.float64)))

    def rotate_by_object_to_upright_degrees(self, pitch: float, heading: float, bank: float) -> None:
        """
        :meth:`rotate_by_object_to_upright_radians` with the angles in degrees
        """
        self.rotate_by_object_to_upright_radians(*_angles_in_radians([pitch, heading, bank]))

    def rotate_around_axis_radians(self, axis: Vector3 | ARRAY_LIKE, theta: float) -> None:
        """
        Post multiplies this matrix in place by :meth:`from_angle_axis_radians`.

        :raises NonUnitVectorError: If the axis is not unit length
        """
        self._apply_block(angle_axis_to_rotmat(np.asarray(axis), theta))

    def rotate_around_axis_degrees(self, axis: Vector3 | ARRAY_LIKE, theta: float) -> None:
        """
        :meth:`rotate_around_axis_radians` with the angle in degrees
        """
        self.rotate_around_axis_radians(axis, np.radians(theta))

    def scale_by(self, factors: float | Vector3 | ARRAY_LIKE) -> None:
        """
        Post multiplies this matrix in place by :meth:`scale_matrix`.
        """
        self._apply_block(self.scale_matrix(factors)._block())

    def scale_along_axis(self, axis: Vector3 | ARRAY_LIKE, factor: float) -> None:
        """
        Post multiplies this matrix in place by :meth:`axis_scale_matrix`.

        :raises NonUnitVectorError: If the axis is not unit length
        """
        self._apply_block(self.axis_scale_matrix(axis, factor)._block())


class Matrix3(_RotationMatrix):
    """
    A 3x3 matrix, typically a rotation and/or scale.
    """

    size = 3
    vector_type = Vector3

    @classmethod
    def from_matrix2(cls, matrix: Matrix2) -> 'Matrix3':
        """
        Embeds a :class:`Matrix2` into the upper left of the identity.
        """
        data = np.eye(3)
        data[:2, :2] = matrix.to_array()
        return cls(data, policy=matrix.policy)

    @classmethod
    def from_matrix4(cls, matrix: 'Matrix4') -> 'Matrix3':
        """
        The upper left 3x3 block of a :class:`Matrix4`.
        """
        return cls(matrix.to_array()[:3, :3], policy=matrix.policy)


class Matrix4(_RotationMatrix):
    """
    A 4x4 matrix, typically an affine transform (rotation and scale in the upper left 3x3 block, translation in the
    last column).
    """

    size = 4
    vector_type = Vector4

    @classmethod
    def from_matrix2(cls, matrix: Matrix2) -> 'Matrix4':
        """
        Embeds a :class:`Matrix2` into the upper left of the identity.
        """
        data = np.eye(4)
        data[:2, :2] = matrix.to_array()
        return cls(data, policy=matrix.policy)

    @classmethod
    def from_matrix3(cls, matrix: Matrix3) -> 'Matrix4':
        """
        Embeds a :class:`Matrix3` into the upper left of the identity.
        """
        return cls._from_block(matrix.to_array(), matrix.policy)

    @classmethod
    def translation_matrix(cls, offset: Vector3 | ARRAY_LIKE, policy: ScalarPolicy | None = None) -> 'Matrix4':
        """
        The translation by ``offset``, stored in the last column.
        """

        if policy is None and isinstance(offset, Vector3):
            policy = offset.policy

        data = np.eye(4)
        data[:3, 3] = _check_vector_array_and_shape(np.asarray(offset))

        return cls(data, policy=policy)

    @property
    def translation(self) -> Vector3:
        """
        The translation in the last column
        """
        return Vector3(self._data[:3, 3], policy=self.policy)

    def translate(self, offset: Vector3 | ARRAY_LIKE) -> None:
        """
        Post multiplies this matrix in place by :meth:`translation_matrix`.
        """
        self._data[...] = self._data @ self.translation_matrix(offset, policy=self.policy)._data

    def transform_point(self, point: Vector3 | ARRAY_LIKE) -> Vector3:
        """
        Transforms a point (a position, so the translation applies).  The result is divided by the homogeneous
        coordinate when it is not 1.
        """

        result = self._data @ np.append(np.asarray(point, dtype=np.float64), 1)

        return Vector3(result[:3] / result[3], policy=self.policy)

    def transform_direction(self, direction: Vector3 | ARRAY_LIKE) -> Vector3:
        """
        Transforms a direction (the translation does not apply).
        """
        return Vector3(self._block() @ np.asarray(direction, dtype=np.float64), policy=self.policy)
