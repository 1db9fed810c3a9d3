"""
Determinants, adjugates, and inverses of small square matrices

This module computes the determinant, adjugate (the transposed cofactor matrix), and inverse of 2x2, 3x3, and 4x4
matrices through closed form cofactor expansions rather than a general purpose factorization.  The inverse is formed
as

.. math::
    \\mathbf{M}^{-1}=\\frac{\\text{adj}(\\mathbf{M})}{\\text{det}(\\mathbf{M})}

and a :class:`.SingularMatrixError` is raised for every size when the determinant is within epsilon of zero relative
to the lengths of the rows or columns.

The 4x4 case computes the twelve 2x2 minors of the top and bottom row pairs once (six for each pair) and builds both
the 16 cofactors and the determinant from them (the Laplace expansion by complementary minors), so that no 3x3 minor
is evaluated more than once.
"""

import numpy as np

from rigidmath._typing import ARRAY_LIKE, REAL_ARRAY
from rigidmath.core._helpers import _check_square_matrix
from rigidmath.exceptions import SingularMatrixError
from rigidmath.scalars import policy_for


__all__ = ['determinant', 'adjugate', 'inverse', 'adjugate_and_determinant', 'is_invertible']


def _determinant_2x2(m: REAL_ARRAY) -> float:
    return m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]


def _adjugate_2x2(m: REAL_ARRAY) -> REAL_ARRAY:
    return np.array([[m[1, 1], -m[0, 1]],
                     [-m[1, 0], m[0, 0]]], dtype=m.dtype)


def _adjugate_3x3(m: REAL_ARRAY) -> REAL_ARRAY:
    (a00, a01, a02), (a10, a11, a12), (a20, a21, a22) = m

    return np.array([[a11 * a22 - a12 * a21, -(a01 * a22 - a02 * a21), a01 * a12 - a02 * a11],
                     [-(a10 * a22 - a12 * a20), a00 * a22 - a02 * a20, -(a00 * a12 - a02 * a10)],
                     [a10 * a21 - a11 * a20, -(a00 * a21 - a01 * a20), a00 * a11 - a01 * a10]], dtype=m.dtype)


def _determinant_3x3(m: REAL_ARRAY) -> float:
    (a00, a01, a02), (a10, a11, a12), (a20, a21, a22) = m

    # expansion along the first row with the + - + sign pattern
    return a00 * (a11 * a22 - a12 * a21) - a01 * (a10 * a22 - a12 * a20) + a02 * (a10 * a21 - a11 * a20)


def _sub_factors_4x4(m: REAL_ARRAY) -> tuple[tuple[float, ...], tuple[float, ...]]:
    (a00, a01, a02, a03), (a10, a11, a12, a13), (a20, a21, a22, a23), (a30, a31, a32, a33) = m

    # 2x2 minors of the top two rows, one per column pair (01, 02, 03, 12, 13, 23)
    top = (a00 * a11 - a10 * a01,
           a00 * a12 - a10 * a02,
           a00 * a13 - a10 * a03,
           a01 * a12 - a11 * a02,
           a01 * a13 - a11 * a03,
           a02 * a13 - a12 * a03)

    # 2x2 minors of the bottom two rows, one per column pair (01, 02, 03, 12, 13, 23)
    bottom = (a20 * a31 - a30 * a21,
              a20 * a32 - a30 * a22,
              a20 * a33 - a30 * a23,
              a21 * a32 - a31 * a22,
              a21 * a33 - a31 * a23,
              a22 * a33 - a32 * a23)

    return top, bottom


def _determinant_from_sub_factors(top: tuple[float, ...], bottom: tuple[float, ...]) -> float:
    s0, s1, s2, s3, s4, s5 = top
    c0, c1, c2, c3, c4, c5 = bottom

    return s0 * c5 - s1 * c4 + s2 * c3 + s3 * c2 - s4 * c1 + s5 * c0


def _adjugate_from_sub_factors(m: REAL_ARRAY, top: tuple[float, ...], bottom: tuple[float, ...]) -> REAL_ARRAY:
    (a00, a01, a02, a03), (a10, a11, a12, a13), (a20, a21, a22, a23), (a30, a31, a32, a33) = m

    s0, s1, s2, s3, s4, s5 = top
    c0, c1, c2, c3, c4, c5 = bottom

    return np.array([[a11 * c5 - a12 * c4 + a13 * c3,
                      -a01 * c5 + a02 * c4 - a03 * c3,
                      a31 * s5 - a32 * s4 + a33 * s3,
                      -a21 * s5 + a22 * s4 - a23 * s3],
                     [-a10 * c5 + a12 * c2 - a13 * c1,
                      a00 * c5 - a02 * c2 + a03 * c1,
                      -a30 * s5 + a32 * s2 - a33 * s1,
                      a20 * s5 - a22 * s2 + a23 * s1],
                     [a10 * c4 - a11 * c2 + a13 * c0,
                      -a00 * c4 + a01 * c2 - a03 * c0,
                      a30 * s4 - a31 * s2 + a33 * s0,
                      -a20 * s4 + a21 * s2 - a23 * s0],
                     [-a10 * c3 + a11 * c1 - a12 * c0,
                      a00 * c3 - a01 * c1 + a02 * c0,
                      -a30 * s3 + a31 * s1 - a32 * s0,
                      a20 * s3 - a21 * s1 + a22 * s0]], dtype=m.dtype)


def determinant(matrix: ARRAY_LIKE) -> float:
    r"""
    This function computes the determinant of a 2x2, 3x3, or 4x4 matrix.

    * 2x2: :math:`ad-bc`
    * 3x3: cofactor expansion along the first row
    * 4x4: the Laplace expansion over the shared 2x2 minors of the top and bottom row pairs

    .. math::
        \text{det}(\mathbf{M})=s_0c_5-s_1c_4+s_2c_3+s_3c_2-s_4c_1+s_5c_0

    where :math:`s_i` are the minors of the top two rows and :math:`c_i` are the minors of the bottom two rows.

    :param matrix: The square matrix
    :return: The determinant
    :raises ValueError: If the matrix is not 2x2, 3x3, or 4x4
    """

    matrix = _check_square_matrix(matrix)

    size = matrix.shape[0]

    if size == 2:
        return matrix.dtype.type(_determinant_2x2(matrix))
    elif size == 3:
        return matrix.dtype.type(_determinant_3x3(matrix))

    return matrix.dtype.type(_determinant_from_sub_factors(*_sub_factors_4x4(matrix)))


def adjugate_and_determinant(matrix: ARRAY_LIKE) -> tuple[REAL_ARRAY, float]:
    """
    This function computes the adjugate and the determinant of a 2x2, 3x3, or 4x4 matrix in a single pass.

    For the 4x4 case the shared 2x2 minors are only computed once for both outputs.

    :param matrix: The square matrix
    :return: The adjugate matrix and the determinant
    :raises ValueError: If the matrix is not 2x2, 3x3, or 4x4
    """

    matrix = _check_square_matrix(matrix)

    size = matrix.shape[0]

    if size == 2:
        return _adjugate_2x2(matrix), matrix.dtype.type(_determinant_2x2(matrix))
    elif size == 3:
        return _adjugate_3x3(matrix), matrix.dtype.type(_determinant_3x3(matrix))

    top, bottom = _sub_factors_4x4(matrix)

    return _adjugate_from_sub_factors(matrix, top, bottom), matrix.dtype.type(_determinant_from_sub_factors(top, bottom))


def adjugate(matrix: ARRAY_LIKE) -> REAL_ARRAY:
    r"""
    This function computes the adjugate (classical adjoint) of a 2x2, 3x3, or 4x4 matrix.

    The adjugate is the transpose of the cofactor matrix and satisfies

    .. math::
        \mathbf{M}\,\text{adj}(\mathbf{M})=\text{det}(\mathbf{M})\mathbf{I}

    :param matrix: The square matrix
    :return: The adjugate matrix
    :raises ValueError: If the matrix is not 2x2, 3x3, or 4x4
    """

    return adjugate_and_determinant(matrix)[0]


def _is_singular(matrix: REAL_ARRAY, det: float, epsilon: float) -> bool:
    # Hadamard's inequality bounds |det| by the product of the row lengths and by the product of the column lengths
    matrix = matrix.astype(np.float64)

    bound = min(np.prod(np.linalg.norm(matrix, axis=1)), np.prod(np.linalg.norm(matrix, axis=0)))

    return abs(float(det)) <= epsilon * float(bound)


def is_invertible(matrix: ARRAY_LIKE, epsilon: float | None = None) -> bool:
    r"""
    This function checks whether a 2x2, 3x3, or 4x4 matrix can be inverted.

    A matrix is treated as singular when its determinant is small relative to the lengths of its rows or columns

    .. math::
        |\text{det}(\mathbf{M})|\leq\epsilon\,\text{min}\left(\prod_i\|\mathbf{r}_i\|, \prod_j\|\mathbf{c}_j\|\right)

    where :math:`\mathbf{r}_i` are the rows and :math:`\mathbf{c}_j` are the columns of the matrix.  Either product
    bounds the magnitude of the determinant, so uniformly scaling a matrix does not change the outcome and a small but
    well conditioned scale matrix is still invertible.  Using the columns as well keeps the translation column of an
    affine 4x4 matrix from inflating the bound.  A matrix with a zero row or column is always singular.

    :param matrix: The square matrix
    :param epsilon: The relative tolerance.  If ``None`` the epsilon of the scalar policy matching the matrix's dtype is
                    used.
    :return: ``True`` if the matrix can be inverted
    :raises ValueError: If the matrix is not 2x2, 3x3, or 4x4
    """

    matrix = _check_square_matrix(matrix)

    if epsilon is None:
        epsilon = policy_for(matrix).epsilon

    return not _is_singular(matrix, determinant(matrix), epsilon)


def inverse(matrix: ARRAY_LIKE, epsilon: float | None = None) -> REAL_ARRAY:
    """
    This function computes the inverse of a 2x2, 3x3, or 4x4 matrix as the adjugate divided by the determinant.

    The matrix is singular when its determinant is within ``epsilon`` of zero relative to the lengths of its rows or
    columns (see :func:`is_invertible`).

    :param matrix: The square matrix to invert
    :param epsilon: The relative tolerance used to detect singular matrices.  If ``None`` the epsilon of the scalar
                    policy matching the matrix's dtype is used.
    :return: The inverse matrix
    :raises SingularMatrixError: If the matrix is singular
    :raises ValueError: If the matrix is not 2x2, 3x3, or 4x4
    """

    matrix = _check_square_matrix(matrix)

    if epsilon is None:
        epsilon = policy_for(matrix).epsilon

    adjugate_matrix, det = adjugate_and_determinant(matrix)

    if _is_singular(matrix, det, epsilon):
        raise SingularMatrixError(float(det), matrix.shape[0])

    return adjugate_matrix / det
