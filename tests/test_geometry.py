"""Geometry builder: vertex / index layout, validation, invariants."""
import math

import numpy as np
import pytest

from wallscene.core.errors import InvalidParameter
from wallscene.scene import geometry


@pytest.mark.parametrize(
    "w, l, hw, hh",
    [
        (0.05, 1.0, 0.15, math.sqrt(3) / 2 * 0.15),
        (1.0, 2.0, 1.5, 0.5),
        (0.2, 0.5, 10.0, 3.0),  # head taller than the shaft is still accepted
    ],
)
def test_arrow_has_seven_vertices_and_three_triangles(w, l, hw, hh):
    mesh = geometry.build_arrow(shaft_width=w, shaft_length=l, head_width=hw, head_height=hh)
    assert mesh.vertex_count == 7
    assert mesh.triangle_count == 3
    assert mesh.indices.min() >= 0
    assert mesh.indices.max() <= 6


def test_arrow_vertex_positions_and_indices():
    w, l, hw, hh = geometry.reference_arrow_dimensions(shaft_width=0.05, shaft_length=1.0)
    mesh = geometry.build_arrow(shaft_width=w, shaft_length=l, head_width=hw, head_height=hh)
    expected = np.array(
        [
            [-w / 2, 0, 0],
            [w / 2, 0, 0],
            [w / 2, l - hh, 0],
            [hw / 2, l - hh, 0],
            [0, l, 0],
            [-hw / 2, l - hh, 0],
            [-w / 2, l - hh, 0],
        ],
        dtype=np.float32,
    )
    np.testing.assert_allclose(mesh.vertices, expected)
    assert mesh.indices.tolist() == [0, 1, 2, 0, 2, 6, 3, 4, 5]
    assert np.all(mesh.vertices[:, 2] == 0.0)


def test_reference_arrow_dimensions():
    w, l, hw, hh = geometry.reference_arrow_dimensions(shaft_width=0.05, shaft_length=1.0)
    assert (w, l) == (0.05, 1.0)
    assert hw == pytest.approx(0.15)
    assert hh == pytest.approx(math.sqrt(3) / 2 * 0.15)


@pytest.mark.parametrize(
    "w, l, hw, hh",
    [
        (0.0, 1.0, 0.15, 0.1),
        (-0.05, 1.0, 0.15, 0.1),
        (0.05, 0.0, 0.15, 0.1),
        (0.05, -1.0, 0.15, 0.1),
        (0.05, 1.0, 0.05, 0.1),  # head not wider than shaft
        (0.05, 1.0, 0.01, 0.1),
        (0.05, 1.0, 0.15, 0.0),
        (float("nan"), 1.0, 0.15, 0.1),
    ],
)
def test_arrow_rejects_invalid_dimensions(w, l, hw, hh):
    with pytest.raises(InvalidParameter):
        geometry.build_arrow(shaft_width=w, shaft_length=l, head_width=hw, head_height=hh)


def test_invalid_parameter_is_a_value_error():
    with pytest.raises(ValueError):
        geometry.build_box(width=-1.0, height=1.0, depth=1.0)


def test_box_counts_and_extents():
    mesh = geometry.build_box(width=3, height=2, depth=0.5)
    assert mesh.vertex_count == 8
    assert mesh.triangle_count == 12
    lo, hi = mesh.bounds()
    np.testing.assert_array_equal(lo, [-1.5, -1.0, -0.25])
    np.testing.assert_array_equal(hi, [1.5, 1.0, 0.25])


def test_box_faces_point_outwards():
    mesh = geometry.build_box(width=3, height=2, depth=0.5)
    normals = geometry.flat_normals(mesh)
    centroids = mesh.vertices[mesh.triangles()].mean(axis=1)
    # For a box centred at the origin every face normal points away from the centre.
    assert np.all(np.einsum("ij,ij->i", normals, centroids) > 0)


@pytest.mark.parametrize("dims", [(0, 1, 1), (1, 0, 1), (1, 1, 0), (1, -2, 1)])
def test_box_rejects_non_positive_dimensions(dims):
    with pytest.raises(InvalidParameter):
        geometry.build_box(*dims)


def test_box_uvs_span_unit_square():
    mesh = geometry.build_box(width=3, height=2, depth=0.5)
    assert mesh.uvs.shape == (8, 2)
    assert mesh.uvs.min() == pytest.approx(0.0)
    assert mesh.uvs.max() == pytest.approx(1.0)


@pytest.mark.parametrize("segments", [3, 16, 64])
def test_cylinder_counts(segments):
    mesh = geometry.build_cylinder(radius_top=0.0125, radius_bottom=0.0125, height=20.0, radial_segments=segments)
    assert mesh.vertex_count == 2 * segments + 2
    assert mesh.triangle_count == 4 * segments
    lo, hi = mesh.bounds()
    assert lo[1] == pytest.approx(-10.0)
    assert hi[1] == pytest.approx(10.0)


def test_cylinder_is_closed():
    mesh = geometry.build_cylinder(radius_top=1.0, radius_bottom=1.0, height=2.0, radial_segments=8)
    # Every edge of a closed surface is shared by exactly two triangles.
    edges = {}
    for a, b, c in mesh.triangles().tolist():
        for edge in ((a, b), (b, c), (c, a)):
            key = tuple(sorted(edge))
            edges[key] = edges.get(key, 0) + 1
    assert set(edges.values()) == {2}


def test_cylinder_faces_point_outwards():
    mesh = geometry.build_cylinder(radius_top=1.0, radius_bottom=1.0, height=2.0, radial_segments=12)
    normals = geometry.flat_normals(mesh)
    centroids = mesh.vertices[mesh.triangles()].mean(axis=1)
    assert np.all(np.einsum("ij,ij->i", normals, centroids) > 0)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(radius_top=1.0, radius_bottom=1.0, height=1.0, radial_segments=2),
        dict(radius_top=1.0, radius_bottom=1.0, height=1.0, radial_segments=0),
        dict(radius_top=1.0, radius_bottom=1.0, height=1.0, radial_segments=3.5),
        dict(radius_top=0.0, radius_bottom=0.0, height=1.0, radial_segments=8),
        dict(radius_top=-1.0, radius_bottom=1.0, height=1.0, radial_segments=8),
        dict(radius_top=1.0, radius_bottom=1.0, height=0.0, radial_segments=8),
    ],
)
def test_cylinder_rejects_invalid_parameters(kwargs):
    with pytest.raises(InvalidParameter):
        geometry.build_cylinder(**kwargs)


def test_cone_is_allowed():
    mesh = geometry.build_cylinder(radius_top=0.0, radius_bottom=1.0, height=1.0, radial_segments=4)
    assert mesh.triangle_count == 16


def test_grid_lines():
    mesh = geometry.build_grid(size=200, divisions=50)
    assert mesh.mode == geometry.LINES
    assert mesh.primitive_count == 2 * 51
    assert mesh.triangle_count == 0
    lo, hi = mesh.bounds()
    np.testing.assert_array_equal(lo, [-100, 0, -100])
    np.testing.assert_array_equal(hi, [100, 0, 100])


def test_grid_rejects_zero_divisions():
    with pytest.raises(InvalidParameter):
        geometry.build_grid(size=10, divisions=0)


def test_octahedron():
    mesh = geometry.build_octahedron(radius=1.0)
    assert mesh.vertex_count == 6
    assert mesh.triangle_count == 8
    normals = geometry.flat_normals(mesh)
    centroids = mesh.vertices[mesh.triangles()].mean(axis=1)
    assert np.all(np.einsum("ij,ij->i", normals, centroids) > 0)


def test_mesh_rejects_out_of_range_index():
    with pytest.raises(InvalidParameter):
        geometry.Mesh(vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0)], indices=[0, 1, 3])


def test_mesh_rejects_partial_triangle():
    with pytest.raises(InvalidParameter):
        geometry.Mesh(vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0)], indices=[0, 1])


@pytest.mark.parametrize("indices", [[0, 1, 2.5], np.array([0.0, 1.0, 2.0]), [True, False, True]])
def test_mesh_rejects_non_integer_indices(indices):
    with pytest.raises(InvalidParameter, match="integers"):
        geometry.Mesh(vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0)], indices=indices)


def test_mesh_accepts_unsigned_indices():
    mesh = geometry.Mesh(vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0)], indices=np.array([0, 1, 2], dtype=np.uint16))
    assert mesh.indices.dtype == np.uint32
    assert mesh.indices.tolist() == [0, 1, 2]


def test_mesh_rejects_uv_count_mismatch():
    with pytest.raises(InvalidParameter):
        geometry.Mesh(vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0)], indices=[0, 1, 2], uvs=[(0, 0)])


def test_mesh_buffers_are_read_only():
    mesh = geometry.build_box(width=1, height=1, depth=1)
    with pytest.raises(ValueError):
        mesh.vertices[0, 0] = 5.0
    with pytest.raises(ValueError):
        mesh.indices[0] = 1
    assert mesh.vertices.dtype == np.float32
    assert mesh.indices.dtype == np.uint32
