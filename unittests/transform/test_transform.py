from unittest import TestCase

import numpy as np

from rigidmath import (Transform, TransformOptions, perspective_matrix, look_at_matrix, Matrix4, Quaternion,
                       Vector3, Vector4, RotationOrder, FLOAT32, FLOAT64)
from rigidmath.exceptions import SingularMatrixError


class TestTransform(TestCase):

    def test_default(self):

        transform = Transform()

        self.assertEqual(transform.translation, Vector3())
        self.assertEqual(transform.rotation, Quaternion.identity())
        self.assertEqual(transform.scale, Vector3.one())
        self.assertIs(transform.rotation_order, RotationOrder.BPH)
        self.assertEqual(transform.policy, FLOAT64)
        self.assertEqual(transform.matrix, Matrix4.identity())

    def test_options(self):

        rotation = Quaternion.from_angle_axis_degrees(Vector3.up(), 90)

        options = TransformOptions(translation=(1, 2, 3), rotation=rotation, scale=(2, 2, 2),
                                   rotation_order='hpb', policy=FLOAT32)

        transform = Transform(options)

        self.assertEqual(transform.translation, Vector3(1, 2, 3, policy=FLOAT32))
        self.assertEqual(transform.rotation, Quaternion(rotation, policy=FLOAT32))
        self.assertEqual(transform.scale, Vector3.all(2, policy=FLOAT32))
        self.assertIs(transform.rotation_order, RotationOrder.HPB)
        self.assertEqual(transform.matrix.dtype, np.float32)

    def test_rotation_normalized(self):

        with self.assertLogs('rigidmath.transform', level='DEBUG'):
            transform = Transform(TransformOptions(rotation=(2, 0, 0, 0)))

        self.assertEqual(transform.rotation, Quaternion.identity())

    def test_matrix_is_trs(self):

        transform = Transform(TransformOptions(translation=(4, -5, 6),
                                               rotation=tuple(Quaternion.from_euler_degrees([10, 20, 30])),
                                               scale=(1, 2, 3)))

        expected = (Matrix4.translation_matrix(Vector3(4, -5, 6)) *
                    Matrix4.from_euler_degrees([10, 20, 30]) *
                    Matrix4.scale_matrix(Vector3(1, 2, 3)))

        self.assertEqual(transform.matrix, expected)
        self.assertEqual(transform.matrix * transform.inverse_matrix, Matrix4.identity())
        self.assertEqual(transform.inverse_matrix, expected.inverse())

    def test_transform_point(self):

        transform = Transform()
        transform.translate(Vector3(1, 2, 3))
        transform.rotate_around_degrees(Vector3.up(), 90)

        self.assertEqual(transform.transform_point(Vector3(0, 0, 1)), Vector3(2, 2, 3))
        self.assertEqual(transform.transform_direction(Vector3(0, 0, 1)), Vector3(1, 0, 0))

    def test_scale_by(self):

        transform = Transform()
        transform.scale_by(2)
        transform.scale_by([1, 0.5, 3])

        self.assertEqual(transform.scale, Vector3(2, 1, 6))
        self.assertEqual(transform.transform_direction([1, 1, 1]), Vector3(2, 1, 6))

    def test_zero_scale(self):

        transform = Transform(TransformOptions(scale=(1, 0, 1)))

        with self.assertRaises(SingularMatrixError):
            _ = transform.inverse_matrix

    def test_small_scale_inverse(self):

        rotation = tuple(Quaternion.from_euler_degrees([10, 20, 30]))

        for policy in (FLOAT32, FLOAT64):
            transform = Transform(TransformOptions(translation=(1, 2, 3), rotation=rotation, scale=(0.02, 0.02, 0.02),
                                                   policy=policy))

            with self.subTest(policy=policy.name):
                inverse = transform.inverse_matrix

                self.assertEqual(inverse.dtype, policy.dtype)
                np.testing.assert_allclose(transform.matrix.to_array() @ inverse.to_array(), np.eye(4), atol=1e-4)

                point = Vector3(0.5, -1, 2, policy=policy)

                np.testing.assert_allclose(inverse.transform_point(transform.transform_point(point)).to_array(),
                                           point.to_array(), atol=1e-4)

    def test_repeated_rotations_stay_unit(self):

        transform = Transform(TransformOptions(policy=FLOAT32))

        for _ in range(3000):
            transform.rotate_around_degrees(Vector3(0.6, 0.8, 0), 0.7)
            transform.rotate_by_euler_degrees([0.3, 0.5, 0.1])

        self.assertTrue(transform.rotation.is_unit())
        self.assertTrue(transform.matrix.is_rotation())

    def test_rotate_by_euler(self):

        transform = Transform(TransformOptions(rotation_order=RotationOrder.PHB))
        transform.rotate_by_euler_degrees([10, 20, 30])
        transform.rotate_by_euler_radians(np.radians([-5, 0, 15]))

        expected = (Quaternion.from_euler_degrees([10, 20, 30], RotationOrder.PHB) *
                    Quaternion.from_euler_degrees([-5, 0, 15], RotationOrder.PHB))

        self.assertTrue(transform.rotation.same_rotation(expected))

    def test_rotate_around(self):

        transform = Transform()
        transform.rotate_around_radians(Vector3.right(), np.pi / 4)
        transform.rotate_around_degrees(Vector3.right(), 45)

        self.assertTrue(transform.rotation.same_rotation(Quaternion.from_angle_axis_degrees(Vector3.right(), 90)))

    def test_reset_settings(self):

        options = TransformOptions(translation=(1, 1, 1))

        transform = Transform(options)
        transform.translate([5, 5, 5])
        transform.rotate_around_degrees(Vector3.forward(), 30)
        transform.scale_by(4)

        transform.reset_settings()

        self.assertEqual(transform, Transform(options))
        self.assertEqual(transform.translation, Vector3(1, 1, 1))
        self.assertEqual(transform.rotation, Quaternion.identity())
        self.assertEqual(transform.scale, Vector3.one())

    def test_options_not_shared(self):

        options = TransformOptions(translation=(1, 1, 1))

        transform = Transform(options)
        transform.translate([1, 0, 0])

        self.assertEqual(options.translation, (1, 1, 1))
        self.assertEqual(transform.original_options.translation, (1, 1, 1))

    def test_equality(self):

        self.assertEqual(Transform(), Transform())

        moved = Transform()
        moved.translate([0, 0, 1])

        self.assertNotEqual(Transform(), moved)

    def test_printing(self):

        text = repr(Transform())

        self.assertTrue(text.startswith('Transform('))
        self.assertIn('translation=Vector3(0.0, 0.0, 0.0)', text)
        self.assertIn('rotation=Quaternion(1.0, 0.0, 0.0, 0.0)', text)


class TestPerspectiveMatrix(TestCase):

    def test_matrix(self):

        matrix = perspective_matrix(np.pi / 3, 2, 0.1, 1024)

        f = 1 / np.tan(np.pi / 6)

        np.testing.assert_allclose(matrix, [[f / 2, 0, 0, 0],
                                            [0, f, 0, 0],
                                            [0, 0, 1024.1 / 1023.9, -2 * 102.4 / 1023.9],
                                            [0, 0, 1, 0]])

        self.assertEqual(matrix, perspective_matrix(60, 2, 0.1, 1024, degrees=True))

    def test_clip_planes(self):

        matrix = perspective_matrix(np.pi / 2, 1, 1, 10)

        near = matrix * Vector4(0, 0, 1, 1)
        far = matrix * Vector4(0, 0, 10, 1)

        self.assertAlmostEqual(near.z / near.w, -1)
        self.assertAlmostEqual(far.z / far.w, 1)

    def test_invalid(self):

        with self.assertRaises(ValueError):
            perspective_matrix(0, 1, 0.1, 10)

        with self.assertRaises(ValueError):
            perspective_matrix(np.pi / 2, -1, 0.1, 10)

        with self.assertRaises(ValueError):
            perspective_matrix(np.pi / 2, 1, 10, 0.1)

        with self.assertRaises(ValueError):
            perspective_matrix(np.pi / 2, 1, 0, 10)

    def test_policy(self):

        self.assertEqual(perspective_matrix(1, 1, 1, 2, policy=FLOAT32).dtype, np.float32)


class TestLookAtMatrix(TestCase):

    def test_identity(self):

        self.assertEqual(look_at_matrix(Vector3(), Vector3.forward(), Vector3.up()), Matrix4.identity())

    def test_camera_frame(self):

        position = Vector3(1, 2, 3)

        matrix = look_at_matrix(position, Vector3(0, 0, -2), Vector3(0, 3, 0))

        self.assertEqual(matrix.row(0), Vector4(-1, 0, 0, 1))
        self.assertEqual(matrix.row(1), Vector4(0, 1, 0, -2))
        self.assertEqual(matrix.row(2), Vector4(0, 0, -1, 3))
        self.assertEqual(matrix.row(3), Vector4.w_only())

        # the camera position maps to the origin and the view direction to +z
        self.assertEqual(matrix.transform_point(position), Vector3())
        self.assertEqual(matrix.transform_point(position + Vector3(0, 0, -5)), Vector3(0, 0, 5))

    def test_up_made_perpendicular(self):

        matrix = look_at_matrix([0, 0, 0], [0, 1, 1], [0, 1, 0])

        self.assertTrue(matrix.is_rotation())
        self.assertEqual(matrix.row(0), Vector4.right())
        self.assertAlmostEqual(matrix.row(1).dot(matrix.row(2)), 0)

    def test_parallel(self):

        with self.assertRaises(ValueError):
            look_at_matrix(Vector3(), Vector3.up(), Vector3.up())

        with self.assertRaises(ValueError):
            look_at_matrix(Vector3(), Vector3(), Vector3.up())

    def test_policy(self):

        self.assertEqual(look_at_matrix(Vector3(policy=FLOAT32), [0, 0, 1], [0, 1, 0]).dtype, np.float32)
