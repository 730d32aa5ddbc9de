import numpy as np
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
from wallscene.core.common_types import vec3f32

def rotation_matrix(rotation: npt.ArrayLike) -> npt.NDArray[np.float64]:
    # Euler angles (radians), applied X then Y then Z in the object's frame: R = Rx * Ry * Rz.
    # Column-vector convention; a positive angle turns counter-clockwise looking down the axis.
    rx, ry, rz = (float(a) for a in np.asarray(rotation, dtype=np.float64).reshape(3))
    cx, sx = np.cos(rx), np.sin(rx)
    cy, sy = np.cos(ry), np.sin(ry)
    cz, sz = np.cos(rz), np.sin(rz)
    matrix_x: npt.NDArray[np.float64] = np.array([[1.0, 0.0, 0.0], [0.0, cx, -sx], [0.0, sx, cx]])
    matrix_y: npt.NDArray[np.float64] = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]])
    matrix_z: npt.NDArray[np.float64] = np.array([[cz, -sz, 0.0], [sz, cz, 0.0], [0.0, 0.0, 1.0]])
    return matrix_x @ matrix_y @ matrix_z

class Transform:
    # Position / rotation / scale of one object. Each instance owns its own arrays,
    # so objects built from the same geometry never share transform state.
    def __init__(self, position: vec3f32 = (0.0, 0.0, 0.0), rotation: vec3f32 = (0.0, 0.0, 0.0), scale: vec3f32 = (1.0, 1.0, 1.0)) -> None:
        self.position: npt.NDArray[np.float64] = np.array(position, dtype=np.float64).reshape(3)
        self.rotation: npt.NDArray[np.float64] = np.array(rotation, dtype=np.float64).reshape(3)
        self.scale: npt.NDArray[np.float64] = np.array(scale, dtype=np.float64).reshape(3)
        pass

    def translate_on_axis(self, axis: vec3f32, distance: float) -> None:
        # Move along a direction expressed in the object's own (rotated) frame.
        direction: npt.NDArray[np.float64] = rotation_matrix(self.rotation) @ np.asarray(axis, dtype=np.float64)
        self.position += direction * distance

    def translate_z(self, distance: float) -> None:
        self.translate_on_axis(axis=(0.0, 0.0, 1.0), distance=distance)

    def to_matrix(self) -> npt.NDArray[np.float64]:
        # 4x4 model matrix T * R * S (column vectors).
        matrix: npt.NDArray[np.float64] = np.eye(4, dtype=np.float64)
        matrix[:3, :3] = rotation_matrix(self.rotation) * self.scale[np.newaxis, :]
        matrix[:3, 3] = self.position
        return matrix

    def to_pyrr(self) -> rr.Matrix44:
        # pyrr stores matrices row-vector style (translation in the last row), which is the
        # byte layout GLSL expects for a column-major mat4.
        return rr.Matrix44(self.to_matrix().T)

    def apply(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        # Transform local (N, 3) points into the parent frame.
        local: npt.NDArray[np.float64] = np.asarray(points, dtype=np.float64).reshape((-1, 3))
        ones: npt.NDArray[np.float64] = np.ones((local.shape[0], 1), dtype=np.float64)
        points_h: npt.NDArray[np.float64] = np.hstack([local, ones])
        return (self.to_matrix() @ points_h.T).T[:, :3]

    def __repr__(self) -> str:
        return f"Transform(position={self.position.tolist()}, rotation={self.rotation.tolist()}, scale={self.scale.tolist()})"
