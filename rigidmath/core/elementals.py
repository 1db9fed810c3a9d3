import numpy as np

from rigidmath._typing import SCALAR_OR_ARRAY, ARRAY_LIKE, REAL_ARRAY
from rigidmath.core._helpers import _check_vector_array_and_shape, _real_dtype


__all__ = ["pitch_matrix", "heading_matrix", "bank_matrix", "elemental_matrix",
           "pitch_quaternion", "heading_quaternion", "bank_quaternion", "elemental_quaternion", "skew"]


def _angles(theta: SCALAR_OR_ARRAY) -> REAL_ARRAY:
    # ensure we have a flat array of theta(s) in a floating point type
    dtype = _real_dtype(theta)
    return np.atleast_1d(np.asarray(theta, dtype=dtype)).flatten()


def pitch_matrix(theta: SCALAR_OR_ARRAY) -> REAL_ARRAY:
    r"""
    This function forms the pitch elemental matrix, which rotates the frame about the x axis by angle theta.

    Mathematically this matrix is defined as:

    .. math::
        \mathbf{P}(\theta)=\left[\begin{array}{ccc} 1 & 0 & 0 \\
        0 & \text{cos}(\theta) & \text{sin}(\theta) \\
        0 & -\text{sin}(\theta) & \text{cos}(\theta) \end{array}\right]

    Since this rotates the frame, a vector expressed in the frame is rotated by :math:`-\theta` about the x axis.

    Theta should be in units of radians and can be a scalar or a vector.  If theta is a vector then each theta value
    will have a corresponding matrix down the first axis of the output.  For example::

        >>> from rigidmath.core import pitch_matrix
        >>> pitch_matrix([2, 0.5])
        array([[[ 1.        ,  0.        ,  0.        ],
                [ 0.        , -0.41614684,  0.90929743],
                [ 0.        , -0.90929743, -0.41614684]],
               [[ 1.        ,  0.        ,  0.        ],
                [ 0.        ,  0.87758256,  0.47942554],
                [ 0.        , -0.47942554,  0.87758256]]])

    :param theta: The angles to form the matrix(ces) for
    :return: The matrix(ces) corresponding to the angle(s)
    """

    theta = _angles(theta)

    ones = np.ones(theta.shape, dtype=theta.dtype)
    zeros = np.zeros(theta.shape, dtype=theta.dtype)

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    # form and return the matrix(ces)
    return np.vstack([ones, zeros, zeros, zeros, ctheta, stheta, zeros, -stheta, ctheta]).T.reshape(-1, 3, 3).squeeze()


def heading_matrix(theta: SCALAR_OR_ARRAY) -> REAL_ARRAY:
    r"""
    This function forms the heading elemental matrix, which rotates the frame about the y axis by angle theta.

    .. math::
        \mathbf{H}(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & 0 & -\text{sin}(\theta) \\
        0 & 1 & 0 \\
        \text{sin}(\theta) & 0 & \text{cos}(\theta) \end{array}\right]

    Theta should be in units of radians and can be a scalar or a vector, as for :func:`pitch_matrix`.

    :param theta: The angles to form the matrix(ces) for
    :return: The matrix(ces) corresponding to the angle(s)
    """

    theta = _angles(theta)

    ones = np.ones(theta.shape, dtype=theta.dtype)
    zeros = np.zeros(theta.shape, dtype=theta.dtype)

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    return np.vstack([ctheta, zeros, -stheta, zeros, ones, zeros, stheta, zeros, ctheta]).T.reshape(-1, 3, 3).squeeze()


def bank_matrix(theta: SCALAR_OR_ARRAY) -> REAL_ARRAY:
    r"""
    This function forms the bank elemental matrix, which rotates the frame about the z axis by angle theta.

    .. math::
        \mathbf{B}(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & \text{sin}(\theta) & 0 \\
        -\text{sin}(\theta) & \text{cos}(\theta) & 0 \\
        0 & 0 & 1 \end{array}\right]

    Theta should be in units of radians and can be a scalar or a vector, as for :func:`pitch_matrix`.

    :param theta: The angles to form the matrix(ces) for
    :return: The matrix(ces) corresponding to the angle(s)
    """

    theta = _angles(theta)

    ones = np.ones(theta.shape, dtype=theta.dtype)
    zeros = np.zeros(theta.shape, dtype=theta.dtype)

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    return np.vstack([ctheta, stheta, zeros, -stheta, ctheta, zeros, zeros, zeros, ones]).T.reshape(-1, 3, 3).squeeze()


_MATRIX_BUILDERS = (pitch_matrix, heading_matrix, bank_matrix)


def elemental_matrix(axis: int, theta: SCALAR_OR_ARRAY) -> REAL_ARRAY:
    """
    Forms the elemental matrix for an axis index (0 for pitch, 1 for heading, 2 for bank).

    :param axis: The axis index as given by :attr:`.RotationOrder.axes`
    :param theta: The angle(s) in radians
    :return: The elemental matrix(ces)
    """

    return _MATRIX_BUILDERS[axis](theta)


def _half_angle_quaternion(axis: int, theta: SCALAR_OR_ARRAY) -> REAL_ARRAY:
    half = _angles(theta) / 2

    quaternion = np.zeros((4, half.size), dtype=half.dtype)
    quaternion[0] = np.cos(half)
    # the elemental matrices rotate the frame, so the quaternion rotates by the negative angle
    quaternion[axis + 1] = -np.sin(half)

    return quaternion.squeeze()


def pitch_quaternion(theta: SCALAR_OR_ARRAY) -> REAL_ARRAY:
    r"""
    Forms the quaternion ``[w, x, y, z]`` equivalent to :func:`pitch_matrix`.

    .. math::
        \mathbf{q}_P(\theta)=\left[\begin{array}{cccc}\text{cos}(\frac{\theta}{2}) &
        -\text{sin}(\frac{\theta}{2}) & 0 & 0\end{array}\right]^T

    For multiple angles the quaternions are stored as columns (the first axis has length 4).

    :param theta: The angle(s) in radians
    :return: The quaternion(s)
    """

    return _half_angle_quaternion(0, theta)


def heading_quaternion(theta: SCALAR_OR_ARRAY) -> REAL_ARRAY:
    """
    Forms the quaternion ``[w, x, y, z]`` equivalent to :func:`heading_matrix`.

    :param theta: The angle(s) in radians
    :return: The quaternion(s)
    """

    return _half_angle_quaternion(1, theta)


def bank_quaternion(theta: SCALAR_OR_ARRAY) -> REAL_ARRAY:
    """
    Forms the quaternion ``[w, x, y, z]`` equivalent to :func:`bank_matrix`.

    :param theta: The angle(s) in radians
    :return: The quaternion(s)
    """

    return _half_angle_quaternion(2, theta)


def elemental_quaternion(axis: int, theta: SCALAR_OR_ARRAY) -> REAL_ARRAY:
    """
    Forms the elemental quaternion for an axis index (0 for pitch, 1 for heading, 2 for bank).

    :param axis: The axis index as given by :attr:`.RotationOrder.axes`
    :param theta: The angle(s) in radians
    :return: The elemental quaternion(s)
    """

    return _half_angle_quaternion(axis, theta)


def skew(vector: ARRAY_LIKE) -> REAL_ARRAY:
    r"""
    This function returns a numpy array with the skew symmetric cross product matrix for vector.

    The skew symmetric cross product matrix is defined such that:

    .. math::
        \mathbf{a}\times\mathbf{b}=\left[\mathbf{a}\times\right]\mathbf{b} \\
        \left[\mathbf{a}\times\right] = \left[\begin{array}{ccc} 0 & -a_3 & a_2 \\
        a_3 & 0 & -a_1 \\
        -a_2 & a_1 & 0 \end{array}\right]

    This function is vectorized, therefore you can input multiple vectors as a 3xn array where each column is an
    independent vector.  The resulting skew matrix output will be nx3x3 where the first axis stores each matrix

    :param vector: The vector to compute a skew symmetric matrix for
    :return: The skew symmetric cross product matrix(ces) corresponding to the vector(s)
    """

    vector = _check_vector_array_and_shape(vector)

    if vector.ndim > 1:
        zeros = np.zeros(vector.shape[-1], dtype=vector.dtype)

    else:
        zeros = vector.dtype.type(0)

    return np.array([zeros, -vector[2], vector[1],
                     vector[2], zeros, -vector[0],
                     -vector[1], vector[0], zeros], dtype=vector.dtype).T.reshape(-1, 3, 3).squeeze()
