import math
import numpy as np
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
from wallscene.scene.camera import PerspectiveCamera
from wallscene.core.common_types import vec3f32

class OrbitControls:
    # Orbits a camera around a target point.
    # Pointer input is only buffered by the event handlers (rotate / zoom); update() consumes
    # the buffered deltas once per frame and rewrites the camera position, so the camera is
    # never touched outside the render loop.
    # Spherical coordinates around the target: radius, azimuth (about +Y, 0 = +Z) and
    # polar angle (from +Y).
    def __init__(self, camera: PerspectiveCamera, target: vec3f32 = (0.0, 0.0, 0.0), rotate_speed: float = 1.0, zoom_speed: float = 1.0, min_distance: float = 0.0, max_distance: float = math.inf) -> None:
        self.camera: PerspectiveCamera = camera
        self.target: npt.NDArray[np.float64] = np.array(target, dtype=np.float64)
        self.rotate_speed: float = rotate_speed
        self.zoom_speed: float = zoom_speed
        self.min_distance: float = min_distance
        self.max_distance: float = max_distance
        self.viewport_height: int = 600

        self.polar_epsilon: float = 1.0e-6
        self.pending_azimuth: float = 0.0
        self.pending_polar: float = 0.0
        self.pending_scale: float = 1.0
        self.camera.look_at = rr.Vector3(self.target, dtype=np.float64)
        pass

    def set_viewport(self, width: int, height: int) -> None:
        self.viewport_height = max(height, 1)

    def rotate(self, dx: float, dy: float) -> None:
        # A drag across the full viewport height turns the camera once around the target.
        full_turn: float = 2.0 * math.pi / self.viewport_height
        self.pending_azimuth -= full_turn * dx * self.rotate_speed
        self.pending_polar -= full_turn * dy * self.rotate_speed

    def zoom(self, steps: float) -> None:
        # Positive steps (scroll up) move the camera closer.
        self.pending_scale *= math.pow(0.95, self.zoom_speed * steps)

    def has_pending_input(self) -> bool:
        return self.pending_azimuth != 0.0 or self.pending_polar != 0.0 or self.pending_scale != 1.0

    def get_spherical(self) -> tuple[float, float, float]:
        offset: npt.NDArray[np.float64] = np.asarray(self.camera.look_from, dtype=np.float64) - self.target
        radius: float = float(np.linalg.norm(offset))
        if radius == 0.0:
            return 0.0, 0.0, 0.0
        azimuth: float = math.atan2(offset[0], offset[2])
        polar: float = math.acos(max(-1.0, min(1.0, offset[1] / radius)))
        return radius, azimuth, polar

    def update(self) -> bool:
        # Returns True when the camera moved.
        if not self.has_pending_input():
            return False

        radius, azimuth, polar = self.get_spherical()
        azimuth += self.pending_azimuth
        # Keep away from the poles, where look_at with a +Y up vector degenerates.
        polar = max(self.polar_epsilon, min(math.pi - self.polar_epsilon, polar + self.pending_polar))
        radius = max(self.min_distance, min(self.max_distance, radius * self.pending_scale))

        offset: npt.NDArray[np.float64] = np.array([
            radius * math.sin(polar) * math.sin(azimuth),
            radius * math.cos(polar),
            radius * math.sin(polar) * math.cos(azimuth),
        ])
        self.camera.look_from = rr.Vector3(self.target + offset, dtype=np.float64)
        self.camera.look_at = rr.Vector3(self.target, dtype=np.float64)

        self.pending_azimuth = 0.0
        self.pending_polar = 0.0
        self.pending_scale = 1.0
        return True
