from unittest import TestCase

import numpy as np

from rigidmath import (Matrix2, Matrix3, Matrix4, Vector2, Vector3, Vector4, Quaternion, RotationOrder, FLOAT32,
                       FLOAT64, core)
from rigidmath.exceptions import SingularMatrixError, NonUnitVectorError


class TestMatrix2(TestCase):

    def test_init(self):

        np.testing.assert_array_equal(Matrix2(), np.eye(2))
        np.testing.assert_array_equal(Matrix2([[1, 2], [3, 4]]), [[1, 2], [3, 4]])
        np.testing.assert_array_equal(Matrix2([Vector2(1, 2), Vector2(3, 4)]), [[1, 2], [3, 4]])
        np.testing.assert_array_equal(Matrix2.from_values(1, 2, 3, 4), [[1, 2], [3, 4]])
        np.testing.assert_array_equal(Matrix2.from_rows([1, 2], [3, 4]), [[1, 2], [3, 4]])
        np.testing.assert_array_equal(Matrix2.from_columns(Vector2(1, 3), Vector2(2, 4)), [[1, 2], [3, 4]])
        np.testing.assert_array_equal(Matrix2.zero(), np.zeros((2, 2)))

        with self.assertRaises(ValueError):
            Matrix2(np.eye(3))

    def test_access(self):

        matrix = Matrix2([[1, 2], [3, 4]])

        self.assertEqual(matrix[1, 0], 3)
        self.assertEqual(matrix[0], Vector2(1, 2))
        self.assertEqual(matrix.row(1), Vector2(3, 4))
        self.assertEqual(matrix.column(1), Vector2(2, 4))
        self.assertEqual(list(matrix), [Vector2(1, 2), Vector2(3, 4)])
        self.assertEqual(len(matrix), 2)

    def test_determinant(self):

        matrix = Matrix2([[10, 4], [8, 2]])

        self.assertAlmostEqual(matrix.determinant(), -12)
        self.assertEqual(matrix.adjugate(), Matrix2([[2, -4], [-8, 10]]))
        self.assertEqual(matrix.adjoint(), matrix.adjugate())
        self.assertEqual(matrix.inverse(), Matrix2([[2, -4], [-8, 10]]) / -12)
        self.assertEqual(matrix * ~matrix, Matrix2.identity())

    def test_singular(self):

        matrix = Matrix2([[1, 2], [2, 4]])

        self.assertFalse(matrix.is_invertible())

        with self.assertRaises(SingularMatrixError):
            matrix.inverse()

        with self.assertRaises(SingularMatrixError):
            Matrix2() / matrix

    def test_rotation(self):

        matrix = Matrix2.rotation_degrees(90)

        self.assertEqual(matrix, Matrix2([[0, 1], [-1, 0]]))
        self.assertEqual(matrix, Matrix2.rotation_radians(np.pi / 2))
        self.assertEqual(matrix * Vector2.right(), -Vector2.up())

    def test_display(self):

        self.assertEqual(str(Matrix2([[1, -2], [3.14159, 4]])), '⌈1.00 -2.00⌉\n⌊3.14 4.00⌋')
        self.assertEqual(repr(Matrix2()), 'Matrix2([[1.0, 0.0], [0.0, 1.0]])')


class TestMatrix3(TestCase):

    def test_arithmetic(self):

        a = Matrix3([[1, 2, 3], [0, 1, 4], [5, 6, 0]])
        b = Matrix3.from_values(2, 0, 0, 0, 3, 0, 0, 0, 4)

        np.testing.assert_array_equal(a * b, a.to_array() @ b.to_array())
        np.testing.assert_array_equal(a @ b, a.to_array() @ b.to_array())
        np.testing.assert_array_equal(a + b, a.to_array() + b.to_array())
        np.testing.assert_array_equal(a - b, a.to_array() - b.to_array())
        np.testing.assert_array_equal(-a, -a.to_array())
        np.testing.assert_array_equal(2 * a, 2 * a.to_array())
        np.testing.assert_array_equal(a / 2, a.to_array() / 2)
        self.assertEqual(a * Vector3(1, 1, 1), Vector3(6, 5, 11))
        self.assertEqual(a.transpose(), Matrix3(a.to_array().T))

        with self.assertRaises(TypeError):
            a * Vector2(1, 1)

        with self.assertRaises(TypeError):
            a + Matrix2()

    def test_division_is_inverse(self):

        a = Matrix3([[1, 2, 3], [0, 1, 4], [5, 6, 0]])

        self.assertAlmostEqual(a.determinant(), 1)
        self.assertEqual(a.inverse(), Matrix3([[-24, 18, 5], [20, -15, -4], [-5, 4, 1]]))
        self.assertEqual(a / a, Matrix3.identity())

        b = Matrix3.identity()
        b /= a

        self.assertEqual(b, a.inverse())

    def test_in_place(self):

        a = Matrix3.scale_matrix(2)
        original = a

        a *= Matrix3.scale_matrix(Vector3(1, 2, 3))
        a *= 0.5

        self.assertIs(a, original)
        self.assertEqual(a, Matrix3.scale_matrix([1, 2, 3]))

    def test_singular(self):

        with self.assertRaises(SingularMatrixError):
            Matrix3([[1, 2, 3], [4, 5, 6], [7, 8, 9]]).inverse()

    def test_euler(self):

        for order in RotationOrder:
            with self.subTest(order=order):
                matrix = Matrix3.from_euler_degrees([20, -30, 40], order)

                np.testing.assert_allclose(matrix, core.euler_to_rotmat(np.radians([20, -30, 40]), order))
                np.testing.assert_allclose(matrix.to_euler_degrees(order), [20, -30, 40])
                self.assertTrue(matrix.is_rotation())

    def test_upright_to_object(self):

        angles = np.radians([89, 89, 89])

        fused = Matrix3.upright_to_object_radians(*angles)
        naive = (Matrix3(core.bank_matrix(angles[2])) * Matrix3(core.pitch_matrix(angles[0])) *
                 Matrix3(core.heading_matrix(angles[1])))

        self.assertEqual(fused, naive)
        self.assertEqual(fused, Matrix3.upright_to_object_degrees(89, 89, 89))
        np.testing.assert_allclose(fused.to_euler_degrees(), [89, 89, 89])

    def test_object_to_upright(self):

        matrix = Matrix3.object_to_upright_degrees(15, 110, -35)

        self.assertEqual(matrix, Matrix3.upright_to_object_degrees(15, 110, -35).transpose())
        self.assertEqual(matrix, Matrix3.object_to_upright_radians(*np.radians([15, 110, -35])))
        np.testing.assert_allclose(matrix.to_object_upright_euler_degrees(), [15, 110, -35])
        np.testing.assert_allclose(matrix.to_object_upright_euler_radians(), np.radians([15, 110, -35]))

    def test_angle_axis(self):

        matrix = Matrix3.from_angle_axis_degrees(Vector3.forward(), 90)

        self.assertEqual(matrix * Vector3.right(), Vector3.up())
        self.assertEqual(matrix, Matrix3.from_angle_axis_radians([0, 0, 1], np.pi / 2))
        self.assertEqual(Matrix3.from_angle_axis_radians(Vector3.right(), -0.7), Matrix3(core.pitch_matrix(0.7)))

        with self.assertRaises(NonUnitVectorError):
            Matrix3.from_angle_axis_degrees(Vector3(0, 2, 0), 10)

    def test_quaternion(self):

        quaternion = Quaternion.from_euler_degrees([-60, 15, 170], 'PBH')

        matrix = Matrix3.from_quaternion(quaternion)

        self.assertEqual(matrix, Matrix3.from_euler_degrees([-60, 15, 170], 'PBH'))
        self.assertTrue(matrix.to_quaternion().same_rotation(quaternion))
        self.assertEqual(Matrix3.from_quaternion([1, 0, 0, 0]), Matrix3.identity())

    def test_in_place_rotations(self):

        matrix = Matrix3.from_euler_degrees([10, 20, 30])
        matrix.rotate_by_euler_degrees([5, 6, 7], 'HPB')

        self.assertEqual(matrix, Matrix3.from_euler_degrees([10, 20, 30]) * Matrix3.from_euler_degrees([5, 6, 7], 'HPB'))

        matrix = Matrix3()
        matrix.rotate_by_upright_to_object_degrees(1, 2, 3)
        matrix.rotate_by_object_to_upright_degrees(1, 2, 3)

        self.assertEqual(matrix, Matrix3.identity())

        matrix = Matrix3()
        matrix.rotate_by_euler_radians([0.1, 0.2, 0.3])
        matrix.rotate_by_upright_to_object_radians(-0.1, 0.2, 0.3)
        matrix.rotate_by_object_to_upright_radians(-0.1, 0.2, 0.3)

        self.assertEqual(matrix, Matrix3.from_euler_radians([0.1, 0.2, 0.3]))

        matrix = Matrix3()
        matrix.rotate_around_axis_degrees(Vector3.up(), 45)
        matrix.rotate_around_axis_radians(Vector3.up(), np.pi / 4)

        self.assertEqual(matrix, Matrix3.from_angle_axis_degrees(Vector3.up(), 90))

    def test_scale(self):

        matrix = Matrix3.scale_matrix(Vector3(2, 3, 4))

        self.assertEqual(matrix * Vector3(1, 1, 1), Vector3(2, 3, 4))
        self.assertFalse(matrix.is_rotation())

        matrix = Matrix3()
        matrix.scale_by(2)

        self.assertEqual(matrix, Matrix3.scale_matrix([2, 2, 2]))

    def test_axis_scale(self):

        matrix = Matrix3.axis_scale_matrix(Vector3.right(), 3)

        self.assertEqual(matrix, Matrix3.scale_matrix([3, 1, 1]))

        axis = Vector3(1, 1, 0).normalized()
        matrix = Matrix3.axis_scale_matrix(axis, 0)

        self.assertEqual(matrix * axis, Vector3())
        self.assertEqual(matrix * Vector3.forward(), Vector3.forward())

        matrix = Matrix3()
        matrix.scale_along_axis(Vector3.up(), 5)

        self.assertEqual(matrix, Matrix3.scale_matrix([1, 5, 1]))

        with self.assertRaises(NonUnitVectorError):
            Matrix3.axis_scale_matrix(Vector3(1, 1, 0), 2)

    def test_conversions(self):

        self.assertEqual(Matrix3.from_matrix2(Matrix2([[1, 2], [3, 4]])), Matrix3([[1, 2, 0], [3, 4, 0], [0, 0, 1]]))

        matrix4 = Matrix4.translation_matrix(Vector3(1, 2, 3))
        matrix4.scale_by(2)

        self.assertEqual(Matrix3.from_matrix4(matrix4), Matrix3.scale_matrix(2))

    def test_policy(self):

        matrix = Matrix3.from_euler_degrees([1, 2, 3], policy=FLOAT32)

        self.assertEqual(matrix.dtype, np.float32)
        self.assertEqual(matrix.inverse().dtype, np.float32)
        self.assertEqual(matrix.to_euler_radians().dtype, np.float32)
        self.assertEqual((matrix * Vector3(1, 2, 3, policy=FLOAT32)).dtype, np.float32)


class TestMatrix4(TestCase):

    def test_determinant(self):

        matrix = Matrix4([[4, 1, 0, 2],
                          [0, 3, 1, 0],
                          [1, 0, 2, 1],
                          [0, 2, 0, 5]])

        self.assertAlmostEqual(matrix.determinant(), np.linalg.det(matrix.to_array()))
        self.assertEqual(matrix * matrix.inverse(), Matrix4.identity())

        with self.assertRaises(SingularMatrixError):
            Matrix4(np.arange(16).reshape(4, 4)).inverse()

    def test_small_scale_inverse(self):

        for policy in (FLOAT32, FLOAT64):
            matrix = Matrix4.scale_matrix(0.001, policy=policy)

            with self.subTest(policy=policy.name):
                self.assertTrue(matrix.is_invertible())
                np.testing.assert_allclose(matrix.inverse().to_array(), np.diag([1000, 1000, 1000, 1]), rtol=1e-5)

    def test_translation(self):

        matrix = Matrix4.translation_matrix(Vector3(1, 2, 3))

        self.assertEqual(matrix.translation, Vector3(1, 2, 3))
        self.assertEqual(matrix.transform_point(Vector3(1, 1, 1)), Vector3(2, 3, 4))
        self.assertEqual(matrix.transform_direction(Vector3(1, 1, 1)), Vector3(1, 1, 1))
        self.assertEqual(matrix * Vector4(1, 1, 1, 1), Vector4(2, 3, 4, 1))
        self.assertEqual(matrix * Vector4(1, 1, 1, 0), Vector4(1, 1, 1, 0))

        matrix.translate([1, 1, 1])

        self.assertEqual(matrix.translation, Vector3(2, 3, 4))

    def test_translate_after_rotation(self):

        matrix = Matrix4.from_angle_axis_degrees(Vector3.forward(), 90)
        matrix.translate(Vector3.right())

        # post multiplication applies the translation in the rotated frame
        self.assertEqual(matrix.translation, Vector3.up())

    def test_rotation(self):

        matrix = Matrix4.from_euler_degrees([30, 60, 20], 'HBP')

        np.testing.assert_allclose(matrix.to_array()[:3, :3], Matrix3.from_euler_degrees([30, 60, 20], 'HBP'))
        np.testing.assert_allclose(matrix.to_array()[3], [0, 0, 0, 1])
        np.testing.assert_allclose(matrix.to_euler_degrees('HBP'), [30, 60, 20])
        self.assertTrue(matrix.to_quaternion().same_rotation(Quaternion.from_euler_degrees([30, 60, 20], 'HBP')))
        self.assertTrue(matrix.is_rotation())

    def test_homogeneous_divide(self):

        matrix = Matrix4()
        matrix *= 2

        self.assertEqual(matrix.transform_point(Vector3(1, 2, 3)), Vector3(1, 2, 3))

    def test_conversions(self):

        self.assertEqual(Matrix4.from_matrix3(Matrix3.scale_matrix(2)), Matrix4.scale_matrix(2))

        matrix = Matrix4.from_matrix2(Matrix2.rotation_degrees(90))

        self.assertEqual(matrix * Vector4.right(), -Vector4.up())

    def test_display(self):

        self.assertEqual(str(Matrix4()),
                         '⌈1.00 0.00 0.00 0.00⌉\n|0.00 1.00 0.00 0.00|\n|0.00 0.00 1.00 0.00|\n⌊0.00 0.00 0.00 1.00⌋')
