
import numpy as np

from rigidmath._typing import ARRAY_LIKE, REAL_ARRAY
from rigidmath.exceptions import NonUnitVectorError, NonUnitQuaternionError
from rigidmath.scalars import policy_for


def _real_dtype(input: ARRAY_LIKE) -> type[np.floating]:
    """
    Single precision input stays single precision.  Everything else is computed in double precision.
    """

    if getattr(input, 'dtype', None) == np.float32:
        return np.float32
    return np.float64


def _check_array_and_shape(input: ARRAY_LIKE,
                           return_copy: bool = False,
                           first_axis_length: int | None = None,
                           second_last_axis_length: int | None = None,
                           last_axis_length: int | None = None) -> REAL_ARRAY:
    input = input if isinstance(input, np.ndarray) else np.asarray(input)

    in_shape = input.shape

    if not in_shape:
        raise ValueError('The input must be shaped')

    if first_axis_length is not None and in_shape[0] != first_axis_length:
        raise ValueError(f'The length of the first axis must be {first_axis_length}')

    if second_last_axis_length is not None:
        if len(in_shape) < 2 or in_shape[-2] != second_last_axis_length:
            raise ValueError(f'The length of the second to last axis must be {second_last_axis_length}')

    if last_axis_length is not None and in_shape[-1] != last_axis_length:
        raise ValueError(f'The length of the last axis must be {last_axis_length}')

    dtype = _real_dtype(input)

    if return_copy:
        return np.array(input, dtype=dtype)

    return np.asarray(input, dtype=dtype)


def _check_quaternion_array_and_shape(quaternion: ARRAY_LIKE, return_copy: bool = False) -> REAL_ARRAY:
    return _check_array_and_shape(quaternion, return_copy, first_axis_length=4)


def _check_vector_array_and_shape(vector: ARRAY_LIKE, return_copy: bool = False) -> REAL_ARRAY:
    return _check_array_and_shape(vector, return_copy, first_axis_length=3)


def _check_matrix_array_and_shape(matrix: ARRAY_LIKE, return_copy: bool = False) -> REAL_ARRAY:
    matrix = _check_array_and_shape(matrix, return_copy, second_last_axis_length=3, last_axis_length=3)

    if matrix.ndim != 2:
        raise ValueError(f'Only a single 3x3 rotation matrix can be converted at a time.  Got shape {matrix.shape}')

    return matrix


def _check_square_matrix(matrix: ARRAY_LIKE) -> REAL_ARRAY:
    matrix = _check_array_and_shape(matrix)

    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or matrix.shape[0] not in (2, 3, 4):
        raise ValueError(f'Only 2x2, 3x3, and 4x4 matrices are supported.  Got shape {matrix.shape}')

    return matrix


def _is_unit(values: REAL_ARRAY, epsilon: float | None = None) -> bool:
    if epsilon is None:
        epsilon = policy_for(values).epsilon

    # compare the squared length so no square root is needed
    return bool(abs(float(np.dot(values, values)) - 1.0) <= 2 * epsilon)


def _require_unit_vector(vector: REAL_ARRAY, epsilon: float | None = None) -> None:
    if not _is_unit(vector, epsilon):
        raise NonUnitVectorError(f'The axis {vector} must be unit length (length {np.linalg.norm(vector)})')


def _require_unit_quaternion(quaternion: REAL_ARRAY, epsilon: float | None = None) -> None:
    if not _is_unit(quaternion, epsilon):
        raise NonUnitQuaternionError(f'The quaternion {quaternion} must be unit length to represent a rotation '
                                     f'(magnitude {np.linalg.norm(quaternion)})')
