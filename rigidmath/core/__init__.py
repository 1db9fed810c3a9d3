"""
This package contains the fundamental numpy routines that the rigidmath value types are built on.

It has no dependencies on the value types (:mod:`rigidmath.vectors`, :mod:`rigidmath.matrices`,
:mod:`rigidmath.quaternion`) to avoid circular imports.  All functions here are pure mathematical operations on
numpy arrays (or array like objects): quaternions are ``[w, x, y, z]`` arrays, matrices are row-major square arrays,
and euler angles are ``(pitch, heading, bank)`` in radians.
"""

import rigidmath.core.cofactors
import rigidmath.core.conversions
import rigidmath.core.elementals
import rigidmath.core.orders
import rigidmath.core.quaternion_math

from rigidmath.core.cofactors import determinant, adjugate, inverse, adjugate_and_determinant, is_invertible

from rigidmath.core.conversions import (euler_to_rotmat, upright_to_object_rotmat, object_to_upright_rotmat,
                                        rotmat_to_euler, euler_to_quaternion, upright_to_object_quaternion,
                                        object_to_upright_quaternion, quaternion_to_euler, angle_axis_to_rotmat,
                                        angle_axis_to_quaternion, quaternion_to_angle_axis, rotmat_to_angle_axis,
                                        quaternion_to_rotmat, rotmat_to_quaternion)

from rigidmath.core.elementals import (pitch_matrix, heading_matrix, bank_matrix, elemental_matrix,
                                       pitch_quaternion, heading_quaternion, bank_quaternion, elemental_quaternion,
                                       skew)

from rigidmath.core.orders import RotationOrder

from rigidmath.core.quaternion_math import (quaternion_normalize, quaternion_conjugate, quaternion_inverse,
                                            quaternion_multiplication, quaternion_dot, rotate_vector,
                                            quaternion_power, lerp, slerp)

__all__ = ['determinant', 'adjugate', 'inverse', 'adjugate_and_determinant', 'is_invertible',
           'euler_to_rotmat', 'upright_to_object_rotmat', 'object_to_upright_rotmat', 'rotmat_to_euler',
           'euler_to_quaternion', 'upright_to_object_quaternion', 'object_to_upright_quaternion',
           'quaternion_to_euler', 'angle_axis_to_rotmat', 'angle_axis_to_quaternion', 'quaternion_to_angle_axis',
           'rotmat_to_angle_axis', 'quaternion_to_rotmat', 'rotmat_to_quaternion',
           'pitch_matrix', 'heading_matrix', 'bank_matrix', 'elemental_matrix',
           'pitch_quaternion', 'heading_quaternion', 'bank_quaternion', 'elemental_quaternion', 'skew',
           'RotationOrder',
           'quaternion_normalize', 'quaternion_conjugate', 'quaternion_inverse', 'quaternion_multiplication',
           'quaternion_dot', 'rotate_vector', 'quaternion_power', 'lerp', 'slerp']
