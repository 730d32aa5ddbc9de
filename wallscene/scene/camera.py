import numpy as np
import pyrr as rr # type: ignore[import-untyped]
from wallscene.core.common_types import vec3f32

class PerspectiveCamera:
    # Perspective camera looking from look_from towards look_at.
    # Uses a Right-Handed Coordinate System (Y-Up, -Z Forward) typical for OpenGL.
    # The projection matrix is cached; anything that changes fov / aspect / near / far
    # must be followed by update_projection_matrix().
    def __init__(self, fov: float = 50.0, aspect_ratio: float = 1.0, near: float = 0.1, far: float = 1000.0, position: vec3f32 = (0.0, 0.0, 0.0), look_at: vec3f32 = (0.0, 0.0, 0.0), up: vec3f32 = (0.0, 1.0, 0.0)) -> None:
        self.fov: float = fov
        self.aspect_ratio: float = aspect_ratio
        self.near: float = near
        self.far: float = far
        self.look_from: rr.Vector3 = rr.Vector3(position, dtype=np.float64)
        self.look_at: rr.Vector3 = rr.Vector3(look_at, dtype=np.float64)
        self.view_up: rr.Vector3 = rr.Vector3(up, dtype=np.float64)
        self.projection: rr.Matrix44 = rr.Matrix44.identity()
        self.update_projection_matrix()
        pass

    def update_projection_matrix(self) -> None:
        self.projection = rr.Matrix44.perspective_projection(
            fovy=self.fov,
            aspect=self.aspect_ratio,
            near=self.near,
            far=self.far,
        )

    def set_viewport(self, width: int, height: int) -> None:
        # Aspect follows the viewport; a minimised window reports 0 height.
        self.aspect_ratio = width / max(height, 1)
        self.update_projection_matrix()

    def get_view_matrix(self) -> rr.Matrix44:
        return rr.Matrix44.look_at(
            eye=self.look_from,
            target=self.look_at,
            up=self.view_up,
        )

    def get_projection_matrix(self) -> rr.Matrix44:
        return self.projection
