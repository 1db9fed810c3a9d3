"""
This module defines the exceptions raised by rigidmath.

All of the exceptions derive from :class:`ValueError` so that code which already guards numeric input with a
``ValueError`` handler continues to work.  :class:`SingularMatrixError` additionally derives from
:class:`numpy.linalg.LinAlgError` so that it can be caught in the same way as a failed numpy inversion.
"""

import numpy as np


__all__ = ['PreconditionError', 'NonUnitVectorError', 'NonUnitQuaternionError', 'SingularMatrixError']


class PreconditionError(ValueError):
    """
    Raised when the input to a routine violates a documented contract.

    These checks are always performed (they are not debug only assertions) since continuing with input that violates
    the contract silently produces a non-rotation.
    """


class NonUnitVectorError(PreconditionError):
    """
    Raised when an axis that must be unit length (a rotation or scaling axis) is not unit length within the epsilon of
    the active scalar policy.

    The axis is never normalized on the caller's behalf.
    """


class NonUnitQuaternionError(PreconditionError):
    """
    Raised when a quaternion that must represent a rotation (and therefore be unit length) is not.
    """


class SingularMatrixError(np.linalg.LinAlgError):
    """
    Raised when the inverse of a matrix is requested but its determinant is within epsilon of zero, relative to the
    lengths of the matrix's rows or columns.

    This is raised consistently for the 2x2, 3x3, and 4x4 matrices.
    """

    def __init__(self, determinant: float, size: int):
        """
        :param determinant: The determinant that was found to be (nearly) zero
        :param size: The number of rows/columns in the matrix that was being inverted
        """

        super().__init__(f'The {size}x{size} matrix is singular (determinant {determinant!r}) and cannot be inverted')

        self.determinant: float = determinant
        """
        The determinant of the matrix that could not be inverted
        """

        self.size: int = size
        """
        The number of rows/columns in the matrix
        """
