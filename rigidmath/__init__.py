# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


import rigidmath.core
import rigidmath.scalars
import rigidmath.exceptions
import rigidmath.vectors
import rigidmath.matrices
import rigidmath.quaternion
import rigidmath.transform
import rigidmath.uniforms

from rigidmath.core import *
from rigidmath.scalars import ScalarPolicy, FLOAT32, FLOAT64, DEFAULT_POLICY, policy_for, approx_equal
from rigidmath.exceptions import PreconditionError, NonUnitVectorError, NonUnitQuaternionError, SingularMatrixError
from rigidmath.vectors import Vector, Vector2, Vector3, Vector4
from rigidmath.matrices import Matrix, Matrix2, Matrix3, Matrix4
from rigidmath.quaternion import Quaternion
from rigidmath.transform import TransformOptions, Transform, perspective_matrix, look_at_matrix
from rigidmath.uniforms import UniformValue, SupportsUniform, as_uniform_value, attribute_type, as_uniform_bytes

__all__ = rigidmath.core.__all__ + [
    'ScalarPolicy', 'FLOAT32', 'FLOAT64', 'DEFAULT_POLICY', 'policy_for', 'approx_equal',
    'PreconditionError', 'NonUnitVectorError', 'NonUnitQuaternionError', 'SingularMatrixError',
    'Vector', 'Vector2', 'Vector3', 'Vector4', 'Matrix', 'Matrix2', 'Matrix3', 'Matrix4', 'Quaternion',
    'TransformOptions', 'Transform', 'perspective_matrix', 'look_at_matrix',
    'UniformValue', 'SupportsUniform', 'as_uniform_value', 'attribute_type', 'as_uniform_bytes'
]


r"""
rigidmath is a small linear algebra toolkit for 3D graphics and rigid body simulation.

It provides fixed size value types together with the numpy routines they are built on:

.. _value-type-table:

=================  =====================================================================================================
Type               Description
=================  =====================================================================================================
vectors            :class:`.Vector2`, :class:`.Vector3`, and :class:`.Vector4` with componentwise arithmetic, the dot
                   product, the cross product (3 components only), and normalization.
matrices           :class:`.Matrix2`, :class:`.Matrix3`, and :class:`.Matrix4` stored row-major, multiplying column
                   vectors.  Determinants, adjugates, and inverses are computed by cofactor expansion and a
                   :class:`.SingularMatrixError` is raised when a matrix cannot be inverted.
quaternions        :class:`.Quaternion` stored as :math:`[w, x, y, z]`.  Unit quaternions represent rotations and
                   compose with the Hamilton product so that :math:`R(\mathbf{q}_1\otimes\mathbf{q}_2)=
                   R(\mathbf{q}_1)R(\mathbf{q}_2)`.
euler angles       Three angles ordered ``(pitch, heading, bank)`` about the x, y, and z axes respectively, composed in
                   one of the six :class:`.RotationOrder` values.  The default ``BPH`` order is the upright-to-object
                   rotation used for cameras and vehicles.
angle-axis         A unit rotation axis :math:`\hat{\mathbf{n}}` and an angle :math:`\theta` in radians.
=================  =====================================================================================================

Every value carries a :class:`.ScalarPolicy` which fixes its floating point width (:data:`.FLOAT32` or
:data:`.FLOAT64`) and the tolerances used for approximate equality and for the branch decisions of the rotation
routines.

The :class:`.Transform` class combines a translation, rotation, and scale into a model matrix and
:func:`.perspective_matrix` and :func:`.look_at_matrix` build the matching projection and view matrices.  Finally
:mod:`.uniforms` lays any value out for upload to a GPU shader.
"""
