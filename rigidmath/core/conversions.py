# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Core conversion routines for rotation representations

This module contains core routines for converting between euler angles, angle-axis pairs, rotation matrices, and
rotation quaternions.  All routines are implemented purely on numpy arrays (or array like objects) and operate on a
single rotation at a time.

Euler angles are always given and returned as ``(pitch, heading, bank)`` in radians, regardless of the
:class:`.RotationOrder` used to compose them.  Quaternions are ``[w, x, y, z]``.
"""

import logging

from typing import Callable

import numpy as np

from rigidmath._typing import ARRAY_LIKE, REAL_ARRAY, EULER_ANGLES
from rigidmath.core._helpers import (_check_matrix_array_and_shape, _check_quaternion_array_and_shape,
                                     _check_vector_array_and_shape, _require_unit_vector, _require_unit_quaternion)
from rigidmath.core.elementals import elemental_matrix, elemental_quaternion, skew
from rigidmath.core.orders import RotationOrder
from rigidmath.core.quaternion_math import quaternion_multiplication
from rigidmath.scalars import policy_for


__all__ = ['euler_to_rotmat', 'upright_to_object_rotmat', 'object_to_upright_rotmat', 'rotmat_to_euler',
           'euler_to_quaternion', 'upright_to_object_quaternion', 'object_to_upright_quaternion',
           'quaternion_to_euler', 'angle_axis_to_rotmat', 'angle_axis_to_quaternion', 'quaternion_to_angle_axis',
           'rotmat_to_angle_axis', 'quaternion_to_rotmat', 'rotmat_to_quaternion']


_LOGGER: logging.Logger = logging.getLogger(__name__)


def _check_angles(angles: EULER_ANGLES) -> REAL_ARRAY:
    return _check_vector_array_and_shape(angles)


def euler_to_rotmat(angles: EULER_ANGLES, order: RotationOrder | str = RotationOrder.BPH) -> REAL_ARRAY:
    r"""
    This function composes the elemental pitch, heading, and bank matrices into a single rotation matrix.

    The matrices are multiplied left to right in the order named by ``order``, so that for the default ``BPH`` order

    .. math::
        \mathbf{M}=\mathbf{B}(b)\mathbf{P}(p)\mathbf{H}(h)

    where :math:`\mathbf{P}`, :math:`\mathbf{H}`, and :math:`\mathbf{B}` are given by :func:`.pitch_matrix`,
    :func:`.heading_matrix`, and :func:`.bank_matrix`.  This performs the two matrix products explicitly.  For the
    ``BPH`` order :func:`upright_to_object_rotmat` gives the same result in closed form.

    :param angles: The ``(pitch, heading, bank)`` angles in radians
    :param order: The order to compose the elemental matrices in
    :return: The composed rotation matrix
    :raises ValueError: If the order is not one of the six :class:`.RotationOrder` values
    """

    angles = _check_angles(angles)
    order = RotationOrder.coerce(order)

    first, second, third = (elemental_matrix(axis, angles[axis]) for axis in order.axes)

    return first @ second @ third


def upright_to_object_rotmat(angles: EULER_ANGLES) -> REAL_ARRAY:
    r"""
    This function forms the upright-to-object rotation matrix :math:`\mathbf{B}(b)\mathbf{P}(p)\mathbf{H}(h)` in
    closed form, without performing any matrix products.

    .. math::
        \mathbf{M}=\left[\begin{array}{ccc}
        c_hc_b+s_hs_ps_b & s_bc_p & -s_hc_b+c_hs_ps_b \\
        -c_hs_b+s_hs_pc_b & c_bc_p & s_bs_h+c_hs_pc_b \\
        s_hc_p & -s_p & c_hc_p\end{array}\right]

    where :math:`c_\bullet` and :math:`s_\bullet` are the cosine and sine of the pitch (:math:`p`), heading
    (:math:`h`), and bank (:math:`b`) angles.

    :param angles: The ``(pitch, heading, bank)`` angles in radians
    :return: The upright-to-object rotation matrix
    """

    pitch, heading, bank = _check_angles(angles)

    cp, sp = np.cos(pitch), np.sin(pitch)
    ch, sh = np.cos(heading), np.sin(heading)
    cb, sb = np.cos(bank), np.sin(bank)

    return np.array([[ch * cb + sh * sp * sb, sb * cp, -sh * cb + ch * sp * sb],
                     [-ch * sb + sh * sp * cb, cb * cp, sb * sh + ch * sp * cb],
                     [sh * cp, -sp, ch * cp]], dtype=np.result_type(pitch))


def object_to_upright_rotmat(angles: EULER_ANGLES) -> REAL_ARRAY:
    r"""
    This function forms the object-to-upright rotation matrix in closed form.

    This is the transpose (and therefore the inverse) of :func:`upright_to_object_rotmat`:

    .. math::
        \mathbf{M}=\left[\begin{array}{ccc}
        c_hc_b+s_hs_ps_b & -c_hs_b+s_hs_pc_b & s_hc_p \\
        s_bc_p & c_bc_p & -s_p \\
        -s_hc_b+c_hs_ps_b & s_bs_h+c_hs_pc_b & c_hc_p\end{array}\right]

    :param angles: The ``(pitch, heading, bank)`` angles in radians
    :return: The object-to-upright rotation matrix
    """

    pitch, heading, bank = _check_angles(angles)

    cp, sp = np.cos(pitch), np.sin(pitch)
    ch, sh = np.cos(heading), np.sin(heading)
    cb, sb = np.cos(bank), np.sin(bank)

    return np.array([[ch * cb + sh * sp * sb, -ch * sb + sh * sp * cb, sh * cp],
                     [sb * cp, cb * cp, -sp],
                     [-sh * cb + ch * sp * sb, sb * sh + ch * sp * cb, ch * cp]], dtype=np.result_type(pitch))


def _extract_euler(element: Callable[[int, int], float], order: RotationOrder, threshold: float,
                   dtype: type[np.floating]) -> REAL_ARRAY:
    """
    Extracts ``(pitch, heading, bank)`` for any order given a function returning elements of the rotation matrix.

    The matrix is treated as a product of standard rotations by the negated angles, with ``parity`` +1 for the
    cyclic orders and -1 otherwise.
    """

    first, second, third = order.axes

    parity = 1 if order.is_cyclic else -1

    sin_middle = float(np.clip(-parity * element(first, third), -1, 1))

    middle = np.arcsin(sin_middle)

    if abs(sin_middle) > threshold:
        # gimbal lock.  Only the sum/difference of the outer angles is observable so one of them is fixed to 0
        _LOGGER.debug('gimbal lock detected for order %s (sine of middle angle %s)', order.value, sin_middle)

        if order.value[0] == 'B':
            outer_first = 0.0
            outer_third = np.arctan2(-parity * element(second, first), element(second, second))
        else:
            outer_first = np.arctan2(-parity * element(third, second), element(second, second))
            outer_third = 0.0

    else:
        outer_first = np.arctan2(parity * element(second, third), element(third, third))
        outer_third = np.arctan2(parity * element(first, second), element(first, first))

    angles = np.zeros(3, dtype=dtype)
    angles[first] = outer_first
    angles[second] = middle
    angles[third] = outer_third

    return angles


def rotmat_to_euler(matrix: ARRAY_LIKE, order: RotationOrder | str = RotationOrder.BPH,
                    gimbal_lock_threshold: float | None = None) -> REAL_ARRAY:
    r"""
    This function extracts the ``(pitch, heading, bank)`` angles from a rotation matrix composed with
    :func:`euler_to_rotmat` using the same ``order``.

    The sine of the middle angle of the order is read from a single off diagonal element of the matrix.  It is clamped
    into :math:`[-1, 1]` (rounding can push it slightly outside) before the arcsine is taken.  The outer angles are then
    found using ``arctan2`` of the element pairs which are proportional to their sine and cosine.

    When the absolute sine of the middle angle exceeds the gimbal lock threshold (0.9999 by default) the outer angles
    are no longer independent.  Bank is then fixed to 0 when it is an outer angle and the other outer angle absorbs
    the whole rotation.  For the orders with bank in the middle the last angle of the order is fixed to 0.  Gimbal lock
    is logged at the debug level and is not an error.

    For the default ``BPH`` order (the upright-to-object matrix) this gives

    .. math::
        p = \text{sin}^{-1}(-m_{21}) \\
        h = \text{atan2}(m_{20}, m_{22}) \\
        b = \text{atan2}(m_{01}, m_{11})

    :param matrix: The rotation matrix
    :param order: The order the matrix was composed with
    :param gimbal_lock_threshold: the absolute sine of the middle angle above which gimbal lock handling is used.
                                  Defaults to the threshold of the scalar policy matching the matrix's dtype
    :return: The ``(pitch, heading, bank)`` angles in radians
    """

    matrix = _check_matrix_array_and_shape(matrix)

    order = RotationOrder.coerce(order)

    if gimbal_lock_threshold is None:
        gimbal_lock_threshold = policy_for(matrix).gimbal_lock_threshold

    return _extract_euler(lambda row, column: matrix[row, column], order, gimbal_lock_threshold, matrix.dtype.type)


def euler_to_quaternion(angles: EULER_ANGLES, order: RotationOrder | str = RotationOrder.BPH) -> REAL_ARRAY:
    r"""
    This function composes the elemental pitch, heading, and bank quaternions into a single rotation quaternion.

    The quaternions are multiplied (Hamilton product) in the same order :func:`euler_to_rotmat` multiplies the
    elemental matrices, so that the two functions represent the same rotation.  Each elemental quaternion is formed
    from the half angle, for instance the pitch quaternion is

    .. math::
        \mathbf{q}_P=\left[\begin{array}{cccc}\text{cos}(\frac{p}{2}) & -\text{sin}(\frac{p}{2}) & 0 & 0
        \end{array}\right]^T

    :param angles: The ``(pitch, heading, bank)`` angles in radians
    :param order: The order to compose the elemental quaternions in
    :return: The composed rotation quaternion
    """

    angles = _check_angles(angles)
    order = RotationOrder.coerce(order)

    first, second, third = (elemental_quaternion(axis, angles[axis]) for axis in order.axes)

    return quaternion_multiplication(quaternion_multiplication(first, second), third)


def upright_to_object_quaternion(angles: EULER_ANGLES) -> REAL_ARRAY:
    r"""
    This function forms the upright-to-object rotation quaternion (the equivalent of
    :func:`upright_to_object_rotmat`) in closed form.

    .. math::
        \mathbf{q}=\left[\begin{array}{c}
        c_hc_pc_b+s_hs_ps_b \\
        -c_hs_pc_b-s_hc_ps_b \\
        c_hs_ps_b-s_hc_pc_b \\
        s_hs_pc_b-c_hc_ps_b\end{array}\right]

    where :math:`c_\bullet` and :math:`s_\bullet` are the cosine and sine of half of each angle.

    :param angles: The ``(pitch, heading, bank)`` angles in radians
    :return: The upright-to-object rotation quaternion
    """

    pitch, heading, bank = _check_angles(angles) / 2

    cp, sp = np.cos(pitch), np.sin(pitch)
    ch, sh = np.cos(heading), np.sin(heading)
    cb, sb = np.cos(bank), np.sin(bank)

    return np.array([ch * cp * cb + sh * sp * sb,
                     -ch * sp * cb - sh * cp * sb,
                     ch * sp * sb - sh * cp * cb,
                     sh * sp * cb - ch * cp * sb], dtype=np.result_type(pitch))


def object_to_upright_quaternion(angles: EULER_ANGLES) -> REAL_ARRAY:
    r"""
    This function forms the object-to-upright rotation quaternion (the equivalent of
    :func:`object_to_upright_rotmat`) in closed form.

    This is the conjugate of :func:`upright_to_object_quaternion`:

    .. math::
        \mathbf{q}=\left[\begin{array}{c}
        c_hc_pc_b+s_hs_ps_b \\
        c_hs_pc_b+s_hc_ps_b \\
        -c_hs_ps_b+s_hc_pc_b \\
        -s_hs_pc_b+c_hc_ps_b\end{array}\right]

    :param angles: The ``(pitch, heading, bank)`` angles in radians
    :return: The object-to-upright rotation quaternion
    """

    pitch, heading, bank = _check_angles(angles) / 2

    cp, sp = np.cos(pitch), np.sin(pitch)
    ch, sh = np.cos(heading), np.sin(heading)
    cb, sb = np.cos(bank), np.sin(bank)

    return np.array([ch * cp * cb + sh * sp * sb,
                     ch * sp * cb + sh * cp * sb,
                     -ch * sp * sb + sh * cp * cb,
                     -sh * sp * cb + ch * cp * sb], dtype=np.result_type(pitch))


def _quaternion_element(quaternion: REAL_ARRAY) -> Callable[[int, int], float]:
    w, vector = quaternion[0], quaternion[1:]

    def element(row: int, column: int) -> float:
        if row == column:
            others = [index for index in range(3) if index != row]
            return 1 - 2 * (vector[others[0]] ** 2 + vector[others[1]] ** 2)

        remaining = 3 - row - column
        sign = 1 if (row, column, remaining) in ((0, 1, 2), (1, 2, 0), (2, 0, 1)) else -1

        return 2 * (vector[row] * vector[column] - sign * w * vector[remaining])

    return element


def quaternion_to_euler(quaternion: ARRAY_LIKE, order: RotationOrder | str = RotationOrder.BPH,
                        gimbal_lock_threshold: float | None = None) -> REAL_ARRAY:
    """
    This function extracts the ``(pitch, heading, bank)`` angles from a unit rotation quaternion composed with
    :func:`euler_to_quaternion` using the same ``order``.

    This follows exactly the same branches as :func:`rotmat_to_euler` (including the gimbal lock handling) but only
    the five rotation matrix elements that are needed are computed, directly from the quaternion components.

    :param quaternion: The unit rotation quaternion
    :param order: The order the quaternion was composed with
    :param gimbal_lock_threshold: the absolute sine of the middle angle above which gimbal lock handling is used.
                                  Defaults to the threshold of the scalar policy matching the quaternion's dtype
    :return: The ``(pitch, heading, bank)`` angles in radians
    :raises NonUnitQuaternionError: if the quaternion is not unit length
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    _require_unit_quaternion(quaternion)

    order = RotationOrder.coerce(order)

    if gimbal_lock_threshold is None:
        gimbal_lock_threshold = policy_for(quaternion).gimbal_lock_threshold

    return _extract_euler(_quaternion_element(quaternion), order, gimbal_lock_threshold, quaternion.dtype.type)


def angle_axis_to_rotmat(axis: ARRAY_LIKE, theta: float) -> REAL_ARRAY:
    r"""
    This function forms the rotation matrix which rotates vectors by ``theta`` about a unit ``axis`` using Rodrigues'
    formula:

    .. math::
        \mathbf{M}=\text{cos}(\theta)\mathbf{I}_{3\times 3}+(1-\text{cos}(\theta))\hat{\mathbf{n}}\hat{\mathbf{n}}^T+
        \text{sin}(\theta)\left[\hat{\mathbf{n}}\times\right]

    Since the elemental matrices rotate the frame rather than the vector, ``pitch_matrix(p)`` equals
    ``angle_axis_to_rotmat([1, 0, 0], -p)``.

    :param axis: The unit rotation axis
    :param theta: The angle to rotate by in radians
    :return: The rotation matrix
    :raises NonUnitVectorError: If the axis is not unit length.  The axis is never normalized for you.
    """

    axis = _check_vector_array_and_shape(axis)

    _require_unit_vector(axis)

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    return (ctheta * np.eye(3, dtype=axis.dtype) + (1 - ctheta) * np.outer(axis, axis) +
            stheta * skew(axis)).astype(axis.dtype)


def angle_axis_to_quaternion(axis: ARRAY_LIKE, theta: float) -> REAL_ARRAY:
    r"""
    This function forms the rotation quaternion equivalent to :func:`angle_axis_to_rotmat`:

    .. math::
        \mathbf{q}=\left[\begin{array}{cc}\text{cos}(\frac{\theta}{2}) &
        \text{sin}(\frac{\theta}{2})\hat{\mathbf{n}}\end{array}\right]

    :param axis: The unit rotation axis
    :param theta: The angle to rotate by in radians
    :return: The rotation quaternion
    :raises NonUnitVectorError: If the axis is not unit length
    """

    axis = _check_vector_array_and_shape(axis)

    _require_unit_vector(axis)

    half = theta / 2

    return np.concatenate([[np.cos(half)], np.sin(half) * axis]).astype(axis.dtype)


def quaternion_to_angle_axis(quaternion: ARRAY_LIKE, small_sine: float | None = None) -> tuple[REAL_ARRAY, float]:
    r"""
    This function converts a unit rotation quaternion into its rotation axis and angle.

    .. math::
        \theta = 2\text{cos}^{-1}(w) \\
        \hat{\mathbf{n}} = \frac{\mathbf{v}}{\text{sin}(\theta/2)}

    The scalar is clamped into :math:`[-1, 1]` before the arccosine, so the angle is in :math:`[0, 2\pi]`.  When
    :math:`\text{sin}(\theta/2)` is below ``small_sine`` the division is ill conditioned, so the vector portion is
    normalized directly instead, and for the identity (where the axis is undefined) the x axis is returned.

    :param quaternion: The unit rotation quaternion
    :param small_sine: The sine of the half angle below which the fallback is used.  Defaults to the
                       ``angle_axis_small_sine`` of the scalar policy matching the quaternion's dtype
    :return: The unit axis and the angle in radians
    :raises NonUnitQuaternionError: if the quaternion is not unit length
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    _require_unit_quaternion(quaternion)

    if small_sine is None:
        small_sine = policy_for(quaternion).angle_axis_small_sine

    w = float(np.clip(quaternion[0], -1, 1))

    theta = 2 * np.arccos(w)

    sin_half = np.sqrt(max(0.0, 1 - w * w))

    vector = quaternion[1:]

    if sin_half < small_sine:
        length = np.linalg.norm(vector)

        if length == 0:
            return np.array([1, 0, 0], dtype=quaternion.dtype), theta

        return vector / length, theta

    return vector / quaternion.dtype.type(sin_half), theta


def rotmat_to_angle_axis(matrix: ARRAY_LIKE) -> tuple[REAL_ARRAY, float]:
    """
    This function converts a rotation matrix into its rotation axis and angle by way of
    :func:`rotmat_to_quaternion` and :func:`quaternion_to_angle_axis`.

    :param matrix: The rotation matrix
    :return: The unit axis and the angle in radians
    """

    return quaternion_to_angle_axis(rotmat_to_quaternion(matrix))


def quaternion_to_rotmat(quaternion: ARRAY_LIKE) -> REAL_ARRAY:
    r"""
    This function converts a unit rotation quaternion into its equivalent rotation matrix.

    Rotation quaternions are converted to rotation matrices by using:

    .. math::
        \mathbf{q}=\left[\begin{array}{cc}w & \mathbf{v}\end{array}\right] \\
        \mathbf{M} = (w^2-\mathbf{v}^T\mathbf{v})\mathbf{I}_{3\times 3}+2\mathbf{v}\mathbf{v}^T+2w
        \left[\mathbf{v}\times\right]

    where :math:`\left[\bullet\times\right]` is the skew symmetric cross product matrix (see :func:`.skew`).

    With this form the Hamilton product composes like the matrix product.

    :param quaternion: The unit rotation quaternion to be converted
    :return: The rotation matrix
    :raises NonUnitQuaternionError: if the quaternion is not unit length
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    _require_unit_quaternion(quaternion)

    qs = quaternion[0]
    qv = quaternion[1:]

    return ((qs ** 2 - qv @ qv) * np.eye(3, dtype=quaternion.dtype) + 2 * np.outer(qv, qv) +
            2 * qs * skew(qv)).astype(quaternion.dtype)


def rotmat_to_quaternion(matrix: ARRAY_LIKE) -> REAL_ARRAY:
    r"""
    This function converts a rotation matrix into a rotation quaternion using Shepperd's method.

    Four candidates, each equal to four times one squared quaternion component less one, are formed from the diagonal:

    .. math::
        4w^2-1 = m_{00}+m_{11}+m_{22} \\
        4x^2-1 = m_{00}-m_{11}-m_{22} \\
        4y^2-1 = -m_{00}+m_{11}-m_{22} \\
        4z^2-1 = -m_{00}-m_{11}+m_{22}

    The largest candidate gives the component least affected by rounding, :math:`\frac{1}{2}\sqrt{c+1}`.  The other
    three components come from sums or differences of symmetric off diagonal pairs divided by four times that
    component.  Branching on the largest component avoids the catastrophic cancellation that a trace only formula
    suffers for rotations near 180 degrees.

    The sign of the returned quaternion is arbitrary (both :math:`\mathbf{q}` and :math:`-\mathbf{q}` represent the
    same rotation).

    :param matrix: The rotation matrix to convert (a 4x4 matrix uses its upper left 3x3 block)
    :return: the rotation quaternion
    """

    matrix = _check_array_and_shape_3x3(matrix)

    (m00, m01, m02), (m10, m11, m12), (m20, m21, m22) = matrix

    candidates = (m00 + m11 + m22,
                  m00 - m11 - m22,
                  -m00 + m11 - m22,
                  -m00 - m11 + m22)

    biggest_index = int(np.argmax(candidates))

    biggest = np.sqrt(candidates[biggest_index] + 1) * 0.5
    mult = 0.25 / biggest

    if biggest_index == 0:
        quaternion = (biggest, (m21 - m12) * mult, (m02 - m20) * mult, (m10 - m01) * mult)
    elif biggest_index == 1:
        quaternion = ((m21 - m12) * mult, biggest, (m01 + m10) * mult, (m20 + m02) * mult)
    elif biggest_index == 2:
        quaternion = ((m02 - m20) * mult, (m01 + m10) * mult, biggest, (m12 + m21) * mult)
    else:
        quaternion = ((m10 - m01) * mult, (m20 + m02) * mult, (m12 + m21) * mult, biggest)

    return np.array(quaternion, dtype=matrix.dtype)


def _check_array_and_shape_3x3(matrix: ARRAY_LIKE) -> REAL_ARRAY:
    matrix = np.asarray(matrix) if not isinstance(matrix, np.ndarray) else matrix

    if matrix.shape == (4, 4):
        matrix = matrix[:3, :3]

    return _check_matrix_array_and_shape(matrix)
