import math
import typing
import numpy as np
import numpy.typing as npt
from wallscene.core.common_types import vec2f32, vec3f32
from wallscene.core.errors import InvalidParameter

TRIANGLES: str = "triangles"
LINES: str = "lines"

class Mesh:
    # Vertex buffer + index buffer, independent of any GL state.
    # vertices: (N, 3) float32 positions in the mesh's local frame.
    # indices: flat uint32 array; triplets for TRIANGLES, pairs for LINES.
    # uvs: optional (N, 2) float32 texture coordinates.
    # Buffers are frozen after construction, so a Mesh can be shared by several instances.
    def __init__(self, vertices: npt.ArrayLike, indices: npt.ArrayLike, uvs: npt.ArrayLike | None = None, mode: str = TRIANGLES, name: str = "") -> None:
        self.vertices: npt.NDArray[np.float32] = np.ascontiguousarray(np.asarray(vertices, dtype=np.float32).reshape((-1, 3)))
        raw_indices: npt.NDArray[typing.Any] = np.asarray(indices)
        if raw_indices.size > 0 and raw_indices.dtype.kind not in "iu":
            raise InvalidParameter(f"indices must be integers, got dtype {raw_indices.dtype}")
        self.indices: npt.NDArray[np.uint32] = np.ascontiguousarray(raw_indices.astype(dtype=np.int64).reshape(-1))
        self.uvs: npt.NDArray[np.float32] | None = None
        if uvs is not None:
            self.uvs = np.ascontiguousarray(np.asarray(uvs, dtype=np.float32).reshape((-1, 2)))
        self.mode: str = mode
        self.name: str = name
        self.validate()
        self.indices = self.indices.astype(dtype=np.uint32)
        self.vertices.setflags(write=False)
        self.indices.setflags(write=False)
        if self.uvs is not None:
            self.uvs.setflags(write=False)
        pass

    @property
    def primitive_size(self) -> int:
        return 3 if self.mode == TRIANGLES else 2

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def primitive_count(self) -> int:
        return int(self.indices.shape[0]) // self.primitive_size

    @property
    def triangle_count(self) -> int:
        return self.primitive_count if self.mode == TRIANGLES else 0

    def validate(self) -> None:
        if self.mode not in (TRIANGLES, LINES):
            raise InvalidParameter(f"unknown primitive mode: {self.mode!r}")
        if self.indices.shape[0] % self.primitive_size != 0:
            raise InvalidParameter(f"index count {self.indices.shape[0]} is not a multiple of {self.primitive_size}")
        if self.indices.size > 0:
            # Every index must name an existing vertex.
            if int(self.indices.min()) < 0 or int(self.indices.max()) >= self.vertex_count:
                raise InvalidParameter(f"index out of range for {self.vertex_count} vertices")
        if self.uvs is not None and self.uvs.shape[0] != self.vertex_count:
            raise InvalidParameter(f"{self.uvs.shape[0]} uvs for {self.vertex_count} vertices")

    def triangles(self) -> npt.NDArray[np.uint32]:
        return self.indices.reshape((-1, self.primitive_size))

    def bounds(self) -> tuple[npt.NDArray[np.float32], npt.NDArray[np.float32]]:
        if self.vertex_count == 0:
            zero: npt.NDArray[np.float32] = np.zeros(3, dtype=np.float32)
            return zero, zero.copy()
        return self.vertices.min(axis=0), self.vertices.max(axis=0)

    def __repr__(self) -> str:
        return f"Mesh(name={self.name!r}, mode={self.mode!r}, vertices={self.vertex_count}, primitives={self.primitive_count})"

def _require_positive(**values: float) -> None:
    for key, value in values.items():
        # "not value > 0" also rejects NaN
        if not value > 0.0:
            raise InvalidParameter(f"{key} must be > 0, got {value}")

def build_box(width: float, height: float, depth: float) -> Mesh:
    """
    Rectangular prism centred at the origin: 8 shared corners, 12 triangles (2 per face),
    counter-clockwise when seen from outside.
    """
    _require_positive(width=width, height=height, depth=depth)
    hx: float = 0.5 * width
    hy: float = 0.5 * height
    hz: float = 0.5 * depth

    box_point0: vec3f32 = (-hx, -hy, hz)
    box_point1: vec3f32 = (hx, -hy, hz)
    box_point2: vec3f32 = (hx, hy, hz)
    box_point3: vec3f32 = (-hx, hy, hz)
    box_point4: vec3f32 = (-hx, -hy, -hz)
    box_point5: vec3f32 = (hx, -hy, -hz)
    box_point6: vec3f32 = (hx, hy, -hz)
    box_point7: vec3f32 = (-hx, hy, -hz)
    vertices: list[vec3f32] = [box_point0, box_point1, box_point2, box_point3, box_point4, box_point5, box_point6, box_point7]

    indices: list[int] = [
        0, 1, 2,  0, 2, 3,  # front  (+Z)
        5, 4, 7,  5, 7, 6,  # back   (-Z)
        4, 0, 3,  4, 3, 7,  # left   (-X)
        1, 5, 6,  1, 6, 2,  # right  (+X)
        3, 2, 6,  3, 6, 7,  # top    (+Y)
        4, 5, 1,  4, 1, 0,  # bottom (-Y)
    ]

    # Planar projection onto XY: the front face gets the full texture and the back face a
    # mirrored copy. With 8 shared corners the side, top and bottom faces have no extent in
    # UV along their depth, so each shows a single stretched texel column or row.
    uvs: list[vec2f32] = [(x / width + 0.5, y / height + 0.5) for x, y, _ in vertices]
    return Mesh(vertices=vertices, indices=indices, uvs=uvs, name="box")

def build_cylinder(radius_top: float, radius_bottom: float, height: float, radial_segments: int) -> Mesh:
    """
    Closed tube along local +Y, centred at the origin.
    Layout: top ring [0, n), bottom ring [n, 2n), top cap centre 2n, bottom cap centre 2n + 1.
    """
    if isinstance(radial_segments, bool) or not isinstance(radial_segments, (int, np.integer)):
        raise InvalidParameter(f"radial_segments must be an integer, got {radial_segments!r}")
    if radial_segments < 3:
        raise InvalidParameter(f"radial_segments must be >= 3, got {radial_segments}")
    if not radius_top >= 0.0 or not radius_bottom >= 0.0:
        raise InvalidParameter(f"radii must be >= 0, got {radius_top}, {radius_bottom}")
    if radius_top == 0.0 and radius_bottom == 0.0:
        raise InvalidParameter("radius_top and radius_bottom cannot both be 0")
    _require_positive(height=height)

    n: int = int(radial_segments)
    half_height: float = 0.5 * height
    theta: npt.NDArray[np.float64] = np.arange(n, dtype=np.float64) * (2.0 * math.pi / n)
    sin_theta: npt.NDArray[np.float64] = np.sin(theta)
    cos_theta: npt.NDArray[np.float64] = np.cos(theta)

    top_ring: npt.NDArray[np.float64] = np.stack([radius_top * sin_theta, np.full(n, half_height), radius_top * cos_theta], axis=1)
    bottom_ring: npt.NDArray[np.float64] = np.stack([radius_bottom * sin_theta, np.full(n, -half_height), radius_bottom * cos_theta], axis=1)
    centres: npt.NDArray[np.float64] = np.array([[0.0, half_height, 0.0], [0.0, -half_height, 0.0]])
    vertices: npt.NDArray[np.float64] = np.concatenate([top_ring, bottom_ring, centres], axis=0)

    top_centre: int = 2 * n
    bottom_centre: int = 2 * n + 1
    indices: list[int] = []
    for i in range(n):
        j: int = (i + 1) % n
        a: int = i
        b: int = i + n
        c: int = j + n
        d: int = j
        indices += [a, b, d, b, c, d]
    for i in range(n):
        j = (i + 1) % n
        indices += [top_centre, i, j]
        indices += [bottom_centre, j + n, i + n]

    u: npt.NDArray[np.float64] = np.arange(n, dtype=np.float64) / n
    uvs: npt.NDArray[np.float64] = np.concatenate([
        np.stack([u, np.ones(n)], axis=1),
        np.stack([u, np.zeros(n)], axis=1),
        np.array([[0.5, 1.0], [0.5, 0.0]]),
    ], axis=0)
    return Mesh(vertices=vertices, indices=indices, uvs=uvs, name="cylinder")

def reference_arrow_dimensions(shaft_width: float, shaft_length: float) -> tuple[float, float, float, float]:
    # Head three times wider than the shaft, head height of an equilateral triangle on that base.
    head_width: float = 3.0 * shaft_width
    head_height: float = math.sqrt(3.0) / 2.0 * head_width
    return shaft_width, shaft_length, head_width, head_height

def build_arrow(shaft_width: float, shaft_length: float, head_width: float, head_height: float) -> Mesh:
    """
    Flat arrow in the local XY plane (Z = 0), base at the origin, tip at (0, shaft_length).

        V4 = (0, l)                    apex
        V5 ---- V6  V2 ---- V3          y = l - hh (head base / shaft top)
                |    |
                V0  V1                  y = 0

    Faces: shaft {V0, V1, V2} + {V0, V2, V6}, head {V3, V4, V5}.
    """
    w: float = shaft_width
    l: float = shaft_length
    hw: float = head_width
    hh: float = head_height
    _require_positive(shaft_width=w, shaft_length=l, head_height=hh)
    if not hw > w:
        raise InvalidParameter(f"head_width must be > shaft_width, got {hw} <= {w}")

    vertices: list[vec3f32] = [
        (-w / 2.0, 0.0, 0.0),      # 0
        (w / 2.0, 0.0, 0.0),       # 1
        (w / 2.0, l - hh, 0.0),    # 2
        (hw / 2.0, l - hh, 0.0),   # 3
        (0.0, l, 0.0),             # 4
        (-hw / 2.0, l - hh, 0.0),  # 5
        (-w / 2.0, l - hh, 0.0),   # 6
    ]
    # The head triangle shares no vertex with the shaft; kept as in the reference drawing.
    indices: list[int] = [
        0, 1, 2,
        0, 2, 6,
        3, 4, 5,
    ]
    return Mesh(vertices=vertices, indices=indices, name="arrow")

def build_octahedron(radius: float) -> Mesh:
    # Coarsest sphere (4 x 2 segments); used as the point-light marker.
    _require_positive(radius=radius)
    r: float = radius
    vertices: list[vec3f32] = [
        (0.0, r, 0.0),   # 0 top
        (r, 0.0, 0.0),   # 1
        (0.0, 0.0, -r),  # 2
        (-r, 0.0, 0.0),  # 3
        (0.0, 0.0, r),   # 4
        (0.0, -r, 0.0),  # 5 bottom
    ]
    indices: list[int] = [
        0, 4, 1,  0, 1, 2,  0, 2, 3,  0, 3, 4,
        5, 1, 4,  5, 2, 1,  5, 3, 2,  5, 4, 3,
    ]
    return Mesh(vertices=vertices, indices=indices, name="octahedron")

def build_grid(size: float, divisions: int) -> Mesh:
    """
    Square grid of line segments on the XZ plane, centred at the origin:
    divisions + 1 lines parallel to X and divisions + 1 lines parallel to Z.
    """
    _require_positive(size=size)
    if isinstance(divisions, bool) or not isinstance(divisions, (int, np.integer)) or divisions < 1:
        raise InvalidParameter(f"divisions must be an integer >= 1, got {divisions!r}")

    half_size: float = 0.5 * size
    steps: npt.NDArray[np.float64] = np.linspace(-half_size, half_size, int(divisions) + 1)
    points: list[vec3f32] = []
    for k in steps:
        points.append((-half_size, 0.0, float(k)))
        points.append((half_size, 0.0, float(k)))
        points.append((float(k), 0.0, -half_size))
        points.append((float(k), 0.0, half_size))
    indices: npt.NDArray[np.int64] = np.arange(len(points), dtype=np.int64)
    return Mesh(vertices=points, indices=indices, mode=LINES, name="grid")

def flat_normals(mesh: Mesh) -> npt.NDArray[np.float32]:
    # Per-triangle unit normals, (T, 3). Degenerate triangles get a zero normal.
    if mesh.mode != TRIANGLES:
        return np.zeros((0, 3), dtype=np.float32)
    corners: npt.NDArray[np.float32] = mesh.vertices[mesh.triangles()]
    normals: npt.NDArray[np.float32] = np.cross(corners[:, 1] - corners[:, 0], corners[:, 2] - corners[:, 0])
    lengths: npt.NDArray[np.float32] = np.linalg.norm(normals, axis=1, keepdims=True)
    valid: npt.NDArray[np.bool_] = lengths[:, 0] > 1e-12
    normals[valid] /= lengths[valid]
    return typing.cast(npt.NDArray[np.float32], normals.astype(dtype=np.float32))
