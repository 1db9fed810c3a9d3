"""
Core quaternion algebra

All routines in this module operate on numpy arrays (or array like objects) holding quaternions in the scalar first
order ``[w, x, y, z]``.  Where noted the routines are vectorized over quaternions stored as the columns of a 4xn array.
"""

import logging

import numpy as np

from rigidmath._typing import ARRAY_LIKE, REAL_ARRAY, DatetimeLike
from rigidmath.core._helpers import (_check_quaternion_array_and_shape, _check_vector_array_and_shape,
                                     _require_unit_quaternion)
from rigidmath.scalars import policy_for


__all__ = ["quaternion_normalize", "quaternion_conjugate", "quaternion_inverse", "quaternion_multiplication",
           "quaternion_dot", "rotate_vector", "quaternion_power", "lerp", "slerp"]


_LOGGER: logging.Logger = logging.getLogger(__name__)


def quaternion_normalize(quaternion: ARRAY_LIKE, positive_scalar: bool = False) -> REAL_ARRAY:
    """
    Normalizes the quaternion(s) to unit length.

    Since :math:`\\mathbf{q}` and :math:`-\\mathbf{q}` represent the same rotation, the quaternion can optionally also
    be flipped so that the scalar term is non-negative.

    :param quaternion: the quaternion(s) to normalize
    :param positive_scalar: flip the sign of the quaternion(s) with a negative scalar term
    :returns: The normalized quaternions
    :raises ZeroDivisionError: if a quaternion has zero length
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion, return_copy=True)

    norm = np.linalg.norm(work_quaternion, axis=0, keepdims=True)

    if np.any(norm == 0):
        raise ZeroDivisionError('A zero length quaternion cannot be normalized')

    if positive_scalar:
        signs = np.where(work_quaternion[0] < 0, -1, 1).astype(work_quaternion.dtype)
        norm = norm / signs

    work_quaternion /= norm

    return work_quaternion


def quaternion_conjugate(quaternion: ARRAY_LIKE) -> REAL_ARRAY:
    r"""
    This function returns the conjugate of the quaternion(s), which negates the vector portion:

    .. math::
        \mathbf{q}^*=\left[\begin{array}{cc}w & -\mathbf{v}\end{array}\right]

    For a unit quaternion the conjugate is also the inverse.

    :param quaternion: The quaternion(s) to conjugate
    :return: The conjugate quaternion(s)
    """

    # ensure the value is an array and break mutability
    quaternion = _check_quaternion_array_and_shape(quaternion, return_copy=True)

    # negate the vector portion
    quaternion[1:] *= -1

    return quaternion


def quaternion_inverse(quaternion: ARRAY_LIKE) -> REAL_ARRAY:
    r"""
    This function provides the multiplicative inverse of the quaternion(s).

    The inverse is defined such that :math:`\mathbf{q}\otimes\mathbf{q}^{-1}=\mathbf{q}_I` where
    :math:`\mathbf{q}_I=\left[\begin{array}{cccc}1&0&0&0\end{array}\right]^T` is the identity quaternion.  It is the
    conjugate divided by the squared magnitude:

    .. math::
        \mathbf{q}^{-1}=\frac{\mathbf{q}^*}{\mathbf{q}^T\mathbf{q}}

    so that it is correct for quaternions of any (non-zero) length, not just rotation quaternions.

    :param quaternion: The quaternion(s) to be inverted
    :return: The inverse quaternion(s)
    :raises ZeroDivisionError: if a quaternion has zero length
    """

    conjugate = quaternion_conjugate(quaternion)

    squared_magnitude = (conjugate * conjugate).sum(axis=0)

    if np.any(squared_magnitude == 0):
        raise ZeroDivisionError('A zero length quaternion does not have an inverse')

    return conjugate / squared_magnitude


def quaternion_multiplication(quaternion_1_in: ARRAY_LIKE,
                              quaternion_2_in: ARRAY_LIKE) -> REAL_ARRAY:
    r"""
    This function performs the Hamilton quaternion product.

    Mathematically this is given by:

    .. math::
        \mathbf{q}_1\otimes\mathbf{q}_2=\left[\begin{array}{c}w_1w_2-\mathbf{v}_1^T\mathbf{v}_2\\
        w_1\mathbf{v}_2 + w_2\mathbf{v}_1 + \mathbf{v}_1\times\mathbf{v}_2\end{array}\right]

    The product composes rotations the same way the matrix product does:
    ``quaternion_to_rotmat(q1 ⊗ q2) == quaternion_to_rotmat(q1) @ quaternion_to_rotmat(q2)``.

    This function is vectorized, therefore you can input multiple quaternions as a 4xn array where each column is an
    independent quaternion.

    :param quaternion_1_in: The first (left) quaternion to multiply
    :param quaternion_2_in: The second (right) quaternion to multiply
    :return: The Hamilton product of quaternion_1 and quaternion_2
    """

    quaternion_1 = _check_quaternion_array_and_shape(quaternion_1_in)
    quaternion_2 = _check_quaternion_array_and_shape(quaternion_2_in)

    qs1 = quaternion_1[0]
    qv1 = quaternion_1[1:]

    qs2 = quaternion_2[0]
    qv2 = quaternion_2[1:]

    return np.concatenate([[qs1 * qs2 - (qv1 * qv2).sum(axis=0)],
                           qs1 * qv2 + qs2 * qv1 + np.cross(qv1, qv2, axis=0)], axis=0)


def quaternion_dot(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> float:
    """
    The four dimensional dot product of two quaternions.

    For unit quaternions this is the cosine of half the angle between the rotations they represent.

    :param quaternion_1: The first quaternion
    :param quaternion_2: The second quaternion
    :return: The dot product
    """

    return float(np.inner(_check_quaternion_array_and_shape(quaternion_1),
                          _check_quaternion_array_and_shape(quaternion_2)))


def rotate_vector(quaternion: ARRAY_LIKE, vector: ARRAY_LIKE) -> REAL_ARRAY:
    r"""
    Rotates a 3 element vector by a quaternion using the sandwich product

    .. math::
        \mathbf{y}=\mathbf{q}\otimes\left[\begin{array}{cc}0&\mathbf{x}\end{array}\right]\otimes\mathbf{q}^{-1}

    The inverse (rather than the conjugate) is used so that the result is a pure rotation even when the quaternion is
    not unit length.

    :param quaternion: The quaternion to rotate by
    :param vector: The vector to rotate
    :return: The rotated vector
    """

    vector = _check_vector_array_and_shape(vector)

    pure = np.concatenate([[0], vector]).astype(vector.dtype)

    return quaternion_multiplication(quaternion_multiplication(quaternion, pure), quaternion_inverse(quaternion))[1:]


def quaternion_power(quaternion: ARRAY_LIKE, exponent: float, threshold: float | None = None) -> REAL_ARRAY:
    r"""
    Raises a unit quaternion to a real power, which scales the rotation angle by the exponent.

    .. math::
        \alpha = \text{cos}^{-1}(w) \\
        \mathbf{q}^e = \left[\begin{array}{cc}\text{cos}(e\alpha) &
        \frac{\text{sin}(e\alpha)}{\text{sin}(\alpha)}\mathbf{v}\end{array}\right]

    When :math:`|w|` is not below the threshold the quaternion is (nearly) the identity and is returned unchanged to
    avoid dividing by a vanishing :math:`\text{sin}(\alpha)`.

    :param quaternion: The unit quaternion
    :param exponent: The exponent
    :param threshold: The identity threshold.  Defaults to the ``gimbal_lock_threshold`` of the quaternion's policy
    :return: The quaternion raised to the exponent
    :raises NonUnitQuaternionError: if the quaternion is not unit length
    """

    quaternion = _check_quaternion_array_and_shape(quaternion, return_copy=True)

    _require_unit_quaternion(quaternion)

    if threshold is None:
        threshold = policy_for(quaternion).gimbal_lock_threshold

    if abs(quaternion[0]) >= threshold:
        return quaternion

    alpha = np.arccos(quaternion[0])
    new_alpha = alpha * exponent

    quaternion[0] = np.cos(new_alpha)
    quaternion[1:] *= np.sin(new_alpha) / np.sin(alpha)

    return quaternion


def _interpolation_fraction(time: float | DatetimeLike,
                            time0: float | DatetimeLike, time1: float | DatetimeLike) -> float:
    try:
        return float((time - time0) / (time1 - time0))  # type: ignore
    except TypeError:
        raise TypeError('time, time0, and time1 must support subtraction resulting in a type that supports true division.'
                        'Typically this means they should all be floats or all be DatetimeLike objects')


def _shorter_arc(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE) -> tuple[REAL_ARRAY, REAL_ARRAY, float]:
    q0 = _check_quaternion_array_and_shape(quaternion0)
    q1 = _check_quaternion_array_and_shape(quaternion1, return_copy=True)

    _require_unit_quaternion(q0)
    _require_unit_quaternion(q1)

    cos_angle = float(np.inner(q0, q1))

    if cos_angle < 0:
        # negate the second quaternion so the interpolation takes the shorter path
        q1 *= -1
        cos_angle = -cos_angle

    return q0, q1, cos_angle


def lerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
         time: float | DatetimeLike,
         time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
         normalize: bool = True) -> REAL_ARRAY:
    r"""
    This function performs linear interpolation of rotation quaternions along the shorter arc.

    .. math::
        \mathbf{q}=\frac{\mathbf{q}_0(1-p)+\mathbf{q}_1p}
        {\left\|\mathbf{q}_0(1-p)+\mathbf{q}_1p\right\|}

    where :math:`\mathbf{q}_1` is first negated if :math:`\mathbf{q}_0^T\mathbf{q}_1<0` and :math:`p` is the fractional
    percent of the way between :math:`\mathbf{q}_0` and :math:`\mathbf{q}_1` to interpolate at.

    When using this function you can either specify the argument `time` as the fractional percent that you want to
    interpolate at, or specify the keyword arguments `time0` and `time1` to be the times corresponding to the first and
    second quaternion respectively and the function will compute the fractional percent for you.  When using this method
    it is also possible to specify all three of `time`, `time0`, and `time1` as python datetime objects.

    .. warning::
        Linear interpolation does not move at a constant angular velocity, so :func:`slerp` should be preferred for
        large angles.

    :param quaternion0: The starting unit quaternion
    :param quaternion1: The ending unit quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time corresponding to the first quaternion. Leave at 0 if you are specifying `time` as a
                  fractional percent
    :param time1: the time corresponding to the second quaternion. Leave at 1 if you are specifying `time` as a
                  fractional percent
    :param normalize: whether to normalize the blended result back to unit length
    :return: The interpolated quaternion
    :raises NonUnitQuaternionError: if either input quaternion is not unit length
    """

    dt = _interpolation_fraction(time, time0, time1)

    q0, q1, _ = _shorter_arc(quaternion0, quaternion1)

    q = q0 * (1 - dt) + q1 * dt

    if normalize:
        q /= np.linalg.norm(q)

    return q


def slerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
          threshold: float | None = None) -> REAL_ARRAY:
    r"""
    This function performs spherical linear interpolation of rotation quaternions.

    SLERP interpolates along the great circle arc connecting the two quaternions at a constant angular velocity:

    .. math::
        \text{cos}(\omega) = \mathbf{q}_0^T\mathbf{q}_1\\
        \mathbf{q}=\frac{\text{sin}((1-p)\omega)}{\text{sin}(\omega)}\mathbf{q}_0+
        \frac{\text{sin}(p\omega)}{\text{sin}(\omega)}\mathbf{q}_1

    If :math:`\text{cos}(\omega)` is negative the second quaternion is negated first so the shorter arc is taken.  If
    it is above the threshold the quaternions are nearly parallel, :math:`\text{sin}(\omega)` is vanishing, and a
    normalized linear blend is used instead.

    The `time`, `time0`, and `time1` arguments work the same as for :func:`lerp`.

    :param quaternion0: The starting unit quaternion
    :param quaternion1: The ending unit quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time corresponding to the first quaternion. Leave at 0 if you are specifying `time` as a
                  fractional percent
    :param time1: the time corresponding to the second quaternion. Leave at 1 if you are specifying `time` as a
                  fractional percent
    :param threshold: the cosine above which the linear fallback is used.  Defaults to the ``slerp_linear_threshold``
                      of the scalar policy matching the first quaternion's dtype
    :return: The interpolated quaternion
    :raises NonUnitQuaternionError: if either input quaternion is not unit length
    """

    dt = _interpolation_fraction(time, time0, time1)

    q0, q1, cos_angle = _shorter_arc(quaternion0, quaternion1)

    if threshold is None:
        threshold = policy_for(q0).slerp_linear_threshold

    if cos_angle > threshold:
        _LOGGER.debug('quaternions are nearly parallel (cos=%s), using a linear blend', cos_angle)

        q = q0 * (1 - dt) + q1 * dt

        return q / np.linalg.norm(q)

    sin_angle = np.sqrt(1 - cos_angle * cos_angle)
    angle = np.arctan2(sin_angle, cos_angle)

    k0 = np.sin((1 - dt) * angle) / sin_angle
    k1 = np.sin(dt * angle) / sin_angle

    return (q0 * k0 + q1 * k1).astype(q0.dtype)
