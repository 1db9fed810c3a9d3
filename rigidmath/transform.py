"""
This module provides rigid body transform composition: the :class:`Transform` class which combines a translation, a
rotation, and a scale into a model matrix, and the :func:`perspective_matrix` and :func:`look_at_matrix` builders for
the projection and view matrices that usually accompany it.

All three matrices follow the same conventions as the rest of rigidmath: matrices multiply column vectors, the
translation is stored in the last column, and the camera looks down its +z axis with +y up and +x to the right.  A
typical model-view-projection chain is therefore::

    >>> from rigidmath import Transform, TransformOptions, perspective_matrix, look_at_matrix, Vector3
    >>> model = Transform(TransformOptions(translation=(0, 0, 5))).matrix
    >>> view = look_at_matrix(Vector3(0, 0, 0), Vector3.forward(), Vector3.up())
    >>> projection = perspective_matrix(60, 16 / 9, 0.1, 1024, degrees=True)
    >>> mvp = projection * view * model
"""

import logging

from dataclasses import dataclass

import numpy as np

from rigidmath._typing import ARRAY_LIKE, EULER_ANGLES
from rigidmath.core.orders import RotationOrder
from rigidmath.matrices import Matrix4
from rigidmath.quaternion import Quaternion
from rigidmath.scalars import ScalarPolicy, DEFAULT_POLICY
from rigidmath.utilities.mixin_classes import (UserOptionConfigured, AttributeEqualityComparison,
                                               AttributePrinting)
from rigidmath.utilities.options import UserOptions
from rigidmath.vectors import Vector3, Vector4


__all__ = ['TransformOptions', 'Transform', 'perspective_matrix', 'look_at_matrix']


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
The logger for reporting normalized rotations
"""


@dataclass
class TransformOptions(UserOptions):
    """
    :param translation: The initial translation ``(x, y, z)``
    :param rotation: The initial rotation as a quaternion ``(w, x, y, z)``
    :param scale: The initial scale along each axis ``(x, y, z)``
    :param rotation_order: The order used when rotating by euler angles
    :param policy: The scalar policy of the transform's values.  ``None`` uses :data:`.DEFAULT_POLICY`
    """

    translation: tuple[float, float, float] | Vector3 = (0., 0., 0.)
    """
    The translation of the transform
    """

    rotation: tuple[float, float, float, float] | Quaternion = (1., 0., 0., 0.)
    """
    The rotation of the transform as a ``w, x, y, z`` quaternion.  It is normalized when applied.
    """

    scale: tuple[float, float, float] | Vector3 = (1., 1., 1.)
    """
    The scale of the transform along each axis
    """

    rotation_order: RotationOrder | str = RotationOrder.BPH
    """
    The order the elemental rotations are composed in by :meth:`.Transform.rotate_by_euler_radians`
    """

    policy: ScalarPolicy | None = None
    """
    The scalar policy for the translation, rotation, and scale values
    """


class Transform(UserOptionConfigured[TransformOptions], AttributeEqualityComparison, AttributePrinting,
                TransformOptions):
    """
    A translation, rotation, and scale applied to an object, in that order from the outside in.

    The :attr:`matrix` of the transform first scales, then rotates, then translates a point:

    .. math::
        \\mathbf{M} = \\mathbf{T}\\mathbf{R}\\mathbf{S}

    The transform can be modified in place with :meth:`translate`, :meth:`rotate_by_euler_radians`,
    :meth:`rotate_around_radians`, and :meth:`scale_by` (or by assigning :attr:`translation`, :attr:`rotation`, and
    :attr:`scale` directly) and returned to the configured state with :meth:`reset_settings`::

        >>> from rigidmath import Transform, Vector3
        >>> transform = Transform()
        >>> transform.translate(Vector3(1, 2, 3))
        >>> transform.rotate_around_degrees(Vector3.up(), 90)
        >>> print(transform.transform_point(Vector3(0, 0, 1)))
        (2.00 2.00 3.00)
        >>> transform.reset_settings()
        >>> print(transform.translation)
        (0.00 0.00 0.00)

    Rotations are applied in the object's local frame, so each new rotation is post multiplied onto :attr:`rotation`.
    Translations are applied in the parent frame.
    """

    _comparison_exclusions = ('_original_options',)

    def __init__(self, options: TransformOptions | None = None):
        """
        :param options: The initial configuration of the transform.  ``None`` gives the identity transform
        """

        super().__init__(TransformOptions, options=options)

    def reset_settings(self) -> None:
        """
        Resets the transform to the translation, rotation, and scale it was configured with.
        """

        super().reset_settings()

        if self.policy is None:
            self.policy = DEFAULT_POLICY

        self.rotation_order = RotationOrder.coerce(self.rotation_order)

        self.translation = Vector3(self.translation, policy=self.policy)
        self.scale = Vector3(self.scale, policy=self.policy)

        rotation = Quaternion(self.rotation, policy=self.policy)

        if not rotation.is_unit():
            _LOGGER.debug('normalizing the configured rotation %s', rotation)
            rotation.normalize()

        self.rotation = rotation

    @property
    def matrix(self) -> Matrix4:
        """
        The model matrix :math:`\\mathbf{T}\\mathbf{R}\\mathbf{S}` mapping object coordinates to parent coordinates
        """

        return (Matrix4.translation_matrix(self.translation, policy=self.policy) *
                Matrix4.from_quaternion(self.rotation, policy=self.policy) *
                Matrix4.scale_matrix(self.scale, policy=self.policy))

    @property
    def inverse_matrix(self) -> Matrix4:
        """
        The inverse of :attr:`matrix`, mapping parent coordinates to object coordinates.

        This raises :class:`.SingularMatrixError` if any scale factor is 0 (or negligible relative to the others).
        """

        return self.matrix.inverse()

    def translate(self, offset: Vector3 | ARRAY_LIKE) -> None:
        """
        Moves the transform by ``offset`` in the parent frame.

        :param offset: The offset to add to the translation
        """

        self.translation = self.translation + Vector3(offset, policy=self.policy)

    def rotate_by_euler_radians(self, angles: EULER_ANGLES) -> None:
        """
        Rotates the transform in its local frame by ``(pitch, heading, bank)`` radians composed in
        :attr:`rotation_order`.

        :param angles: The euler angles in radians
        """

        self.rotation *= Quaternion.from_euler_radians(angles, self.rotation_order, policy=self.policy)

        # repeated products drift away from unit length
        self.rotation.normalize()

    def rotate_by_euler_degrees(self, angles: EULER_ANGLES) -> None:
        """
        :meth:`rotate_by_euler_radians` with the angles in degrees
        """

        self.rotate_by_euler_radians(np.radians(np.asarray(angles, dtype=np.float64)))

    def rotate_around_radians(self, axis: Vector3 | ARRAY_LIKE, theta: float) -> None:
        """
        Rotates the transform in its local frame by ``theta`` radians about a unit ``axis``.

        :raises NonUnitVectorError: If the axis is not unit length
        """

        self.rotation.rotate_around_radians(axis, theta)
        self.rotation.normalize()

    def rotate_around_degrees(self, axis: Vector3 | ARRAY_LIKE, theta: float) -> None:
        """
        :meth:`rotate_around_radians` with the angle in degrees
        """

        self.rotate_around_radians(axis, np.radians(theta))

    def scale_by(self, factors: float | Vector3 | ARRAY_LIKE) -> None:
        """
        Multiplies the scale by ``factors`` (a single factor scales all three axes equally).
        """

        factors = np.broadcast_to(np.asarray(factors, dtype=np.float64), (3,))

        self.scale = self.scale * Vector3(factors, policy=self.policy)

    def transform_point(self, point: Vector3 | ARRAY_LIKE) -> Vector3:
        """
        Maps a point from object coordinates to parent coordinates.
        """

        return self.matrix.transform_point(point)

    def transform_direction(self, direction: Vector3 | ARRAY_LIKE) -> Vector3:
        """
        Maps a direction from object coordinates to parent coordinates.  The translation does not apply but the scale
        does, so the result is generally not unit length.
        """

        return self.matrix.transform_direction(direction)


def perspective_matrix(fov_y: float, aspect_ratio: float, z_near: float, z_far: float,
                       degrees: bool = False, policy: ScalarPolicy | None = None) -> Matrix4:
    r"""
    Builds the perspective projection matrix for a camera looking down +z.

    .. math::
        \mathbf{P} = \left[\begin{array}{cccc} f/a & 0 & 0 & 0 \\ 0 & f & 0 & 0 \\
        0 & 0 & \frac{z_f+z_n}{z_f-z_n} & -\frac{2z_fz_n}{z_f-z_n} \\ 0 & 0 & 1 & 0\end{array}\right]

    where :math:`f=1/\text{tan}(\text{fov}_y/2)` and :math:`a` is the aspect ratio.  After the homogeneous divide
    points on the near plane map to a depth of -1 and points on the far plane to +1.

    :param fov_y: The vertical field of view
    :param aspect_ratio: The width of the view divided by its height
    :param z_near: The distance to the near clipping plane
    :param z_far: The distance to the far clipping plane
    :param degrees: Whether ``fov_y`` is in degrees instead of radians
    :param policy: The scalar policy of the result
    :return: The projection matrix
    :raises ValueError: If the field of view is not in :math:`(0, \pi)`, the aspect ratio is not positive, or the
                        clipping planes do not satisfy :math:`0<z_n<z_f`
    """

    if degrees:
        fov_y = np.radians(fov_y)

    if not 0 < fov_y < np.pi:
        raise ValueError(f'the field of view must be between 0 and pi radians.  Got {fov_y}')

    if aspect_ratio <= 0:
        raise ValueError(f'the aspect ratio must be positive.  Got {aspect_ratio}')

    if not 0 < z_near < z_far:
        raise ValueError(f'the clipping planes must satisfy 0 < z_near < z_far.  Got {z_near} and {z_far}')

    f = 1 / np.tan(fov_y / 2)
    depth = z_far - z_near

    return Matrix4([[f / aspect_ratio, 0, 0, 0],
                    [0, f, 0, 0],
                    [0, 0, (z_far + z_near) / depth, -2 * z_far * z_near / depth],
                    [0, 0, 1, 0]], policy=policy)


def look_at_matrix(position: Vector3 | ARRAY_LIKE, direction: Vector3 | ARRAY_LIKE,
                   up: Vector3 | ARRAY_LIKE, policy: ScalarPolicy | None = None) -> Matrix4:
    """
    Builds the view matrix of a camera at ``position`` looking along ``direction``.

    The rows of the rotation block are the camera's right, up, and forward axes (in that order) expressed in the
    parent frame, and the last column moves the camera position to the origin.  The camera's up axis is ``up`` made
    perpendicular to ``direction``.

    :param position: The position of the camera
    :param direction: The direction the camera looks.  It does not need to be unit length
    :param up: The approximate up direction of the camera.  It does not need to be unit length
    :param policy: The scalar policy of the result.  Defaults to the policy of ``position`` if it is a vector
    :return: The view matrix
    :raises ValueError: If ``direction`` is zero or parallel to ``up``
    """

    if policy is None:
        policy = position.policy if isinstance(position, Vector3) else DEFAULT_POLICY

    forward = Vector3(np.asarray(direction, dtype=np.float64), policy=policy).normalized()

    right = Vector3(np.asarray(up, dtype=np.float64), policy=policy).cross(forward)

    if right.length() <= policy.epsilon:
        raise ValueError('the view direction cannot be parallel to the up direction')

    right.normalize()

    camera_up = forward.cross(right)

    position = Vector3(np.asarray(position, dtype=np.float64), policy=policy)

    return Matrix4.from_rows(Vector4.from_vector3(right, -right.dot(position)),
                             Vector4.from_vector3(camera_up, -camera_up.dot(position)),
                             Vector4.from_vector3(forward, -forward.dot(position)),
                             Vector4.w_only(policy=policy),
                             policy=policy)
