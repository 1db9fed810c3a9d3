from unittest import TestCase

import numpy as np

from scipy.spatial.transform import Rotation as ScipyRotation

from rigidmath import core
from rigidmath.core import RotationOrder
from rigidmath.exceptions import NonUnitVectorError, NonUnitQuaternionError


def random_angles(rng: np.random.Generator, order: RotationOrder) -> np.ndarray:
    # the middle angle of the order is kept away from +/-90 degrees so the angles are unique
    angles = rng.uniform(-np.pi, np.pi, 3)
    angles[order.axes[1]] = rng.uniform(-1.4, 1.4)
    return angles


class TestRotationOrder(TestCase):

    def test_axes(self):

        self.assertEqual(RotationOrder.BPH.axes, (2, 0, 1))
        self.assertEqual(RotationOrder.PHB.axes, (0, 1, 2))
        self.assertEqual(RotationOrder.HBP.axes, (1, 2, 0))

    def test_cyclic(self):

        self.assertTrue(RotationOrder.PHB.is_cyclic)
        self.assertTrue(RotationOrder.HBP.is_cyclic)
        self.assertTrue(RotationOrder.BPH.is_cyclic)
        self.assertFalse(RotationOrder.PBH.is_cyclic)
        self.assertFalse(RotationOrder.HPB.is_cyclic)
        self.assertFalse(RotationOrder.BHP.is_cyclic)

    def test_coerce(self):

        self.assertIs(RotationOrder.coerce('bph'), RotationOrder.BPH)
        self.assertIs(RotationOrder.coerce(RotationOrder.HPB), RotationOrder.HPB)

        with self.assertRaises(ValueError):
            RotationOrder.coerce('XYZ')


class TestElementals(TestCase):

    def test_pitch(self):

        np.testing.assert_array_almost_equal(core.pitch_matrix(np.pi / 2), [[1, 0, 0], [0, 0, 1], [0, -1, 0]])

    def test_heading(self):

        np.testing.assert_array_almost_equal(core.heading_matrix(np.pi / 2), [[0, 0, -1], [0, 1, 0], [1, 0, 0]])

    def test_bank(self):

        np.testing.assert_array_almost_equal(core.bank_matrix(np.pi / 2), [[0, 1, 0], [-1, 0, 0], [0, 0, 1]])

    def test_vectorized(self):

        matrices = core.pitch_matrix([0, np.pi / 2])

        self.assertEqual(matrices.shape, (2, 3, 3))
        np.testing.assert_array_almost_equal(matrices[0], np.eye(3))

    def test_elemental_quaternions_match_matrices(self):

        for axis, (matrix_function, quaternion_function) in enumerate([(core.pitch_matrix, core.pitch_quaternion),
                                                                       (core.heading_matrix, core.heading_quaternion),
                                                                       (core.bank_matrix, core.bank_quaternion)]):
            for theta in (-2.5, 0.3, 1.2):
                with self.subTest(axis=axis, theta=theta):
                    np.testing.assert_allclose(core.quaternion_to_rotmat(quaternion_function(theta)),
                                               matrix_function(theta), atol=1e-12)
                    np.testing.assert_allclose(core.elemental_matrix(axis, theta), matrix_function(theta))
                    np.testing.assert_allclose(core.elemental_quaternion(axis, theta), quaternion_function(theta))

    def test_skew(self):

        a = np.array([1., 2., 3.])
        b = np.array([-4., 0.5, 2.])

        np.testing.assert_allclose(core.skew(a) @ b, np.cross(a, b))


class TestEulerToRotmat(TestCase):

    def test_fused_matches_products(self):

        angles = np.radians([89, 89, 89])

        expected = core.bank_matrix(angles[2]) @ core.pitch_matrix(angles[0]) @ core.heading_matrix(angles[1])

        np.testing.assert_allclose(core.upright_to_object_rotmat(angles), expected, atol=1e-12)
        np.testing.assert_allclose(core.euler_to_rotmat(angles, RotationOrder.BPH), expected, atol=1e-12)

    def test_fused_matches_products_random(self):

        rng = np.random.default_rng(42)

        for angles in rng.uniform(-np.pi, np.pi, (25, 3)):
            with self.subTest(angles=angles):
                np.testing.assert_allclose(core.upright_to_object_rotmat(angles),
                                           core.euler_to_rotmat(angles, 'BPH'), atol=1e-12)
                np.testing.assert_allclose(core.object_to_upright_rotmat(angles),
                                           core.upright_to_object_rotmat(angles).T, atol=1e-12)

    def test_order_products(self):

        angles = np.array([0.3, -0.7, 1.1])

        pitch = core.pitch_matrix(angles[0])
        heading = core.heading_matrix(angles[1])
        bank = core.bank_matrix(angles[2])

        expected = {RotationOrder.PHB: pitch @ heading @ bank,
                    RotationOrder.PBH: pitch @ bank @ heading,
                    RotationOrder.HPB: heading @ pitch @ bank,
                    RotationOrder.HBP: heading @ bank @ pitch,
                    RotationOrder.BPH: bank @ pitch @ heading,
                    RotationOrder.BHP: bank @ heading @ pitch}

        for order, matrix in expected.items():
            with self.subTest(order=order):
                np.testing.assert_allclose(core.euler_to_rotmat(angles, order), matrix, atol=1e-12)

    def test_orthonormal(self):

        matrix = core.euler_to_rotmat([1, 2, 3], 'HBP')

        np.testing.assert_allclose(matrix @ matrix.T, np.eye(3), atol=1e-12)
        self.assertAlmostEqual(np.linalg.det(matrix), 1)

    def test_invalid_order(self):

        with self.assertRaises(ValueError):
            core.euler_to_rotmat([0, 0, 0], 'PPP')


class TestRotmatToEuler(TestCase):

    def test_round_trip_all_orders(self):

        rng = np.random.default_rng(7)

        for order in RotationOrder:
            for _ in range(20):
                angles = random_angles(rng, order)

                with self.subTest(order=order, angles=angles):
                    np.testing.assert_allclose(core.rotmat_to_euler(core.euler_to_rotmat(angles, order), order),
                                               angles, atol=1e-10)

    def test_upright_to_object_formula(self):

        angles = np.array([0.2, -1.3, 2.4])

        matrix = core.upright_to_object_rotmat(angles)

        np.testing.assert_allclose(core.rotmat_to_euler(matrix),
                                   [np.arcsin(-matrix[2, 1]), np.arctan2(matrix[2, 0], matrix[2, 2]),
                                    np.arctan2(matrix[0, 1], matrix[1, 1])])

    def test_gimbal_lock(self):

        # the angle fixed to 0 for each order when the middle angle is at +/-90 degrees
        fixed = {RotationOrder.PHB: 2, RotationOrder.PBH: 1, RotationOrder.HPB: 2,
                 RotationOrder.HBP: 0, RotationOrder.BPH: 2, RotationOrder.BHP: 2}

        for order in RotationOrder:
            for middle in (np.pi / 2, -np.pi / 2):
                angles = np.array([0.4, -0.9, 1.3])
                angles[order.axes[1]] = middle

                matrix = core.euler_to_rotmat(angles, order)

                with self.subTest(order=order, middle=middle):
                    with self.assertLogs('rigidmath.core.conversions', level='DEBUG'):
                        extracted = core.rotmat_to_euler(matrix, order)

                    self.assertEqual(extracted[fixed[order]], 0)
                    self.assertAlmostEqual(extracted[order.axes[1]], middle)
                    np.testing.assert_allclose(core.euler_to_rotmat(extracted, order), matrix, atol=1e-10)

    def test_clamps_overshoot(self):

        matrix = core.upright_to_object_rotmat([np.pi / 2, 0, 0])
        matrix[2, 1] = -1 - 1e-12

        angles = core.rotmat_to_euler(matrix)

        self.assertTrue(np.all(np.isfinite(angles)))
        self.assertAlmostEqual(angles[0], np.pi / 2)

    def test_threshold(self):

        angles = np.array([np.arcsin(0.9995), 0.3, 0.2])

        matrix = core.upright_to_object_rotmat(angles)

        np.testing.assert_allclose(core.rotmat_to_euler(matrix), angles, atol=1e-8)

        self.assertEqual(core.rotmat_to_euler(matrix, gimbal_lock_threshold=0.999)[2], 0)

    def test_rejects_stacked_matrices(self):

        stacked = np.stack([core.bank_matrix(0.2), core.pitch_matrix(-0.4)])

        with self.assertRaises(ValueError):
            core.rotmat_to_euler(stacked)

        with self.assertRaises(ValueError):
            core.rotmat_to_quaternion(stacked)


class TestEulerToQuaternion(TestCase):

    def test_matches_matrices(self):

        rng = np.random.default_rng(11)

        for order in RotationOrder:
            angles = rng.uniform(-np.pi, np.pi, 3)

            with self.subTest(order=order):
                np.testing.assert_allclose(core.quaternion_to_rotmat(core.euler_to_quaternion(angles, order)),
                                           core.euler_to_rotmat(angles, order), atol=1e-12)

    def test_fused_matches_products(self):

        rng = np.random.default_rng(12)

        for angles in np.vstack([np.radians([[89, 89, 89]]), rng.uniform(-np.pi, np.pi, (10, 3))]):
            with self.subTest(angles=angles):
                np.testing.assert_allclose(core.upright_to_object_quaternion(angles),
                                           core.euler_to_quaternion(angles, RotationOrder.BPH), atol=1e-12)
                np.testing.assert_allclose(core.object_to_upright_quaternion(angles),
                                           core.quaternion_conjugate(core.upright_to_object_quaternion(angles)),
                                           atol=1e-12)

    def test_round_trip_all_orders(self):

        rng = np.random.default_rng(13)

        for order in RotationOrder:
            for _ in range(10):
                angles = random_angles(rng, order)

                with self.subTest(order=order, angles=angles):
                    np.testing.assert_allclose(core.quaternion_to_euler(core.euler_to_quaternion(angles, order), order),
                                               angles, atol=1e-10)

    def test_gimbal_lock(self):

        # the angle fixed to 0 for each order when the middle angle is at +/-90 degrees
        fixed = {RotationOrder.PHB: 2, RotationOrder.PBH: 1, RotationOrder.HPB: 2,
                 RotationOrder.HBP: 0, RotationOrder.BPH: 2, RotationOrder.BHP: 2}

        for order in RotationOrder:
            for middle in (np.pi / 2, -np.pi / 2):
                angles = np.array([0.4, -0.9, 1.3])
                angles[order.axes[1]] = middle

                quaternion = core.euler_to_quaternion(angles, order)

                with self.subTest(order=order, middle=middle):
                    with self.assertLogs('rigidmath.core.conversions', level='DEBUG'):
                        extracted = core.quaternion_to_euler(quaternion, order)

                    self.assertEqual(extracted[fixed[order]], 0)
                    self.assertAlmostEqual(extracted[order.axes[1]], middle)
                    np.testing.assert_allclose(core.quaternion_to_rotmat(core.euler_to_quaternion(extracted, order)),
                                               core.quaternion_to_rotmat(quaternion), atol=1e-8)
                    np.testing.assert_allclose(extracted, core.rotmat_to_euler(core.quaternion_to_rotmat(quaternion),
                                                                               order), atol=1e-7)

    def test_quaternion_to_euler_requires_unit(self):

        with self.assertRaises(NonUnitQuaternionError):
            core.quaternion_to_euler([1, 1, 0, 0])


class TestAngleAxis(TestCase):

    def test_matches_elementals(self):

        for theta in (-1.2, 0.5, 2.9):
            with self.subTest(theta=theta):
                np.testing.assert_allclose(core.angle_axis_to_rotmat([1, 0, 0], -theta), core.pitch_matrix(theta),
                                           atol=1e-12)
                np.testing.assert_allclose(core.angle_axis_to_rotmat([0, 1, 0], -theta), core.heading_matrix(theta),
                                           atol=1e-12)
                np.testing.assert_allclose(core.angle_axis_to_rotmat([0, 0, 1], -theta), core.bank_matrix(theta),
                                           atol=1e-12)
                np.testing.assert_allclose(core.angle_axis_to_quaternion([1, 0, 0], -theta),
                                           core.pitch_quaternion(theta), atol=1e-12)

    def test_rotates_vector(self):

        matrix = core.angle_axis_to_rotmat([0, 0, 1], np.pi / 2)

        np.testing.assert_allclose(matrix @ [1, 0, 0], [0, 1, 0], atol=1e-12)

    def test_quaternion_matches_matrix(self):

        axis = np.array([1, 2, 2]) / 3

        np.testing.assert_allclose(core.quaternion_to_rotmat(core.angle_axis_to_quaternion(axis, 0.8)),
                                   core.angle_axis_to_rotmat(axis, 0.8), atol=1e-12)

    def test_requires_unit_axis(self):

        with self.assertRaises(NonUnitVectorError):
            core.angle_axis_to_rotmat([1, 1, 0], 0.3)

        with self.assertRaises(NonUnitVectorError):
            core.angle_axis_to_quaternion([0, 0, 2], 0.3)

    def test_quaternion_to_angle_axis(self):

        axis = np.array([2, -1, 2]) / 3

        result_axis, theta = core.quaternion_to_angle_axis(core.angle_axis_to_quaternion(axis, 1.7))

        np.testing.assert_allclose(result_axis, axis, atol=1e-12)
        self.assertAlmostEqual(theta, 1.7)

    def test_identity(self):

        axis, theta = core.quaternion_to_angle_axis([1, 0, 0, 0])

        np.testing.assert_array_equal(axis, [1, 0, 0])
        self.assertEqual(theta, 0)

    def test_small_angle(self):

        axis, theta = core.quaternion_to_angle_axis(core.angle_axis_to_quaternion([0, 1, 0], 1e-5))

        np.testing.assert_allclose(axis, [0, 1, 0], atol=1e-12)
        self.assertAlmostEqual(theta, 1e-5)

    def test_rotmat_to_angle_axis(self):

        axis, theta = core.rotmat_to_angle_axis(core.angle_axis_to_rotmat([0, 0, 1], 0.6))

        np.testing.assert_allclose(axis, [0, 0, 1], atol=1e-12)
        self.assertAlmostEqual(theta, 0.6)


class TestQuaternionToRotmat(TestCase):

    def test_against_scipy(self):

        rng = np.random.default_rng(21)

        for _ in range(10):
            quaternion = core.quaternion_normalize(rng.normal(size=4))

            with self.subTest(quaternion=quaternion):
                np.testing.assert_allclose(core.quaternion_to_rotmat(quaternion),
                                           ScipyRotation.from_quat(np.roll(quaternion, -1)).as_matrix(), atol=1e-12)

    def test_requires_unit(self):

        with self.assertRaises(NonUnitQuaternionError):
            core.quaternion_to_rotmat([2, 0, 0, 0])


class TestRotmatToQuaternion(TestCase):

    def check_rotation(self, matrix: np.ndarray):

        quaternion = core.rotmat_to_quaternion(matrix)

        self.assertAlmostEqual(np.linalg.norm(quaternion), 1)
        np.testing.assert_allclose(core.quaternion_to_rotmat(quaternion), matrix[:3, :3], atol=1e-12)

        expected = np.roll(ScipyRotation.from_matrix(matrix[:3, :3]).as_quat(), 1)

        # q and -q are the same rotation
        self.assertAlmostEqual(abs(np.dot(quaternion, expected)), 1)

    def test_shepperd_branches(self):

        # near identity (trace branch) and half turns about each axis (one branch per diagonal element)
        cases = [np.eye(3),
                 core.angle_axis_to_rotmat([0, 1, 0], 1e-4),
                 core.angle_axis_to_rotmat([1, 0, 0], np.pi),
                 core.angle_axis_to_rotmat([0, 1, 0], np.pi),
                 core.angle_axis_to_rotmat([0, 0, 1], np.pi),
                 core.angle_axis_to_rotmat(np.array([1, 1, 0]) / np.sqrt(2), np.pi)]

        for matrix in cases:
            with self.subTest(matrix=matrix):
                self.check_rotation(matrix)

    def test_random(self):

        rng = np.random.default_rng(31)

        for angles in rng.uniform(-np.pi, np.pi, (20, 3)):
            with self.subTest(angles=angles):
                self.check_rotation(core.euler_to_rotmat(angles, 'HPB'))

    def test_composition(self):

        first = core.euler_to_rotmat([0.1, 0.2, 0.3])
        second = core.euler_to_rotmat([-1.1, 2.0, 0.7], 'PHB')

        composed = core.quaternion_multiplication(core.rotmat_to_quaternion(first), core.rotmat_to_quaternion(second))

        np.testing.assert_allclose(core.quaternion_to_rotmat(composed), first @ second, atol=1e-12)

    def test_upper_left_of_4x4(self):

        matrix = np.eye(4)
        matrix[:3, :3] = core.bank_matrix(0.5)
        matrix[:3, 3] = [1, 2, 3]

        np.testing.assert_allclose(core.rotmat_to_quaternion(matrix), core.bank_quaternion(0.5), atol=1e-12)
