"""Transform composition, camera projection and orbit controls."""
import math

import numpy as np
import pyrr as rr
import pytest

from wallscene.scene.camera import PerspectiveCamera
from wallscene.scene.orbit_controls import OrbitControls
from wallscene.scene.transform import Transform, rotation_matrix


def test_identity_transform():
    np.testing.assert_array_equal(Transform().to_matrix(), np.eye(4))


def test_quarter_turn_about_x_maps_y_onto_z():
    transform = Transform(rotation=(math.pi / 2, 0.0, 0.0))
    np.testing.assert_allclose(transform.apply([(0.0, 1.0, 0.0)]), [[0.0, 0.0, 1.0]], atol=1e-12)


def test_positive_z_rotation_is_counter_clockwise():
    np.testing.assert_allclose(rotation_matrix((0.0, 0.0, math.pi / 2)) @ [1.0, 0.0, 0.0], [0.0, 1.0, 0.0], atol=1e-12)


def test_translate_rotate_scale_order():
    transform = Transform(position=(1.0, 2.0, 3.0), rotation=(0.0, 0.0, math.pi), scale=(2.0, 2.0, 2.0))
    # scale first, then rotate, then translate
    np.testing.assert_allclose(transform.apply([(1.0, 0.0, 0.0)]), [[-1.0, 2.0, 3.0]], atol=1e-12)


def test_translate_z_follows_rotation():
    transform = Transform(rotation=(math.pi / 2, 0.0, 0.0))
    transform.translate_z(2.0)
    np.testing.assert_allclose(transform.position, [0.0, -2.0, 0.0], atol=1e-12)


def test_pyrr_layout_is_transposed():
    transform = Transform(position=(4.0, 5.0, 6.0))
    matrix = transform.to_pyrr()
    assert isinstance(matrix, rr.Matrix44)
    # pyrr keeps the translation in the last row.
    np.testing.assert_array_equal(np.asarray(matrix)[3, :3], [4.0, 5.0, 6.0])


def test_transforms_are_independent():
    first = Transform()
    second = Transform()
    first.position[0] = 3.0
    first.rotation[2] = 1.0
    assert second.position.tolist() == [0.0, 0.0, 0.0]
    assert second.rotation.tolist() == [0.0, 0.0, 0.0]


def test_camera_set_viewport_only_changes_aspect():
    camera = PerspectiveCamera(fov=50.0, aspect_ratio=800 / 600, near=0.1, far=1000.0, position=(-3.0, 0.0, 30.0))
    view_before = np.array(camera.get_view_matrix())
    camera.set_viewport(width=1024, height=768)
    assert camera.aspect_ratio == 1024 / 768
    assert (camera.fov, camera.near, camera.far) == (50.0, 0.1, 1000.0)
    np.testing.assert_array_equal(np.array(camera.get_view_matrix()), view_before)
    expected = rr.Matrix44.perspective_projection(fovy=50.0, aspect=1024 / 768, near=0.1, far=1000.0)
    np.testing.assert_allclose(np.array(camera.get_projection_matrix()), np.array(expected))


def test_camera_zero_height_viewport():
    camera = PerspectiveCamera()
    camera.set_viewport(width=640, height=0)
    assert camera.aspect_ratio == 640.0


def test_orbit_without_input_leaves_camera_alone():
    camera = PerspectiveCamera(position=(-3.0, 0.0, 30.0))
    controls = OrbitControls(camera=camera)
    before = np.array(camera.look_from)
    assert controls.update() is False
    np.testing.assert_array_equal(np.array(camera.look_from), before)


def test_orbit_drag_keeps_distance_to_target():
    camera = PerspectiveCamera(position=(-3.0, 0.0, 30.0))
    controls = OrbitControls(camera=camera)
    controls.set_viewport(width=800, height=600)
    radius_before = controls.get_spherical()[0]
    controls.rotate(dx=150.0, dy=40.0)
    assert controls.update() is True
    radius_after, _, _ = controls.get_spherical()
    assert radius_after == pytest.approx(radius_before)
    assert not np.allclose(np.array(camera.look_from), [-3.0, 0.0, 30.0])
    np.testing.assert_array_equal(np.array(camera.look_at), [0.0, 0.0, 0.0])
    # buffered input is consumed
    assert controls.update() is False


def test_orbit_full_height_drag_is_one_turn():
    camera = PerspectiveCamera(position=(0.0, 0.0, 10.0))
    controls = OrbitControls(camera=camera)
    controls.set_viewport(width=800, height=600)
    controls.rotate(dx=600.0, dy=0.0)
    controls.update()
    np.testing.assert_allclose(np.array(camera.look_from), [0.0, 0.0, 10.0], atol=1e-9)


def test_orbit_clamps_at_pole():
    camera = PerspectiveCamera(position=(0.0, 0.0, 10.0))
    controls = OrbitControls(camera=camera)
    controls.rotate(dx=0.0, dy=100000.0)
    controls.update()
    _, _, polar = controls.get_spherical()
    assert 0.0 < polar < math.pi


def test_orbit_zoom():
    camera = PerspectiveCamera(position=(0.0, 0.0, 10.0))
    controls = OrbitControls(camera=camera, min_distance=9.8)
    controls.zoom(steps=1.0)
    controls.update()
    assert controls.get_spherical()[0] == pytest.approx(9.8)
    controls.zoom(steps=-1.0)
    controls.update()
    assert controls.get_spherical()[0] == pytest.approx(9.8 / 0.95)
