import math
import os
import pathlib as pl
from wallscene.core.common_types import vec3f32

PROJECT_ROOT: pl.Path = pl.Path(__file__).parent.parent.parent.resolve(strict=False)
DEFAULT_WALL_TEXTURE: pl.Path = PROJECT_ROOT / "assets" / "textures" / "brick_wall_512x512.jpg"

class SceneSettings:
    # Constants of the demo scene. Defaults reproduce the reference layout:
    # two 3 x 2 x 0.5 walls facing each other across a 2 * wall_z gap along Z,
    # a thin red arrow at the origin and a green cylinder marking the Z axis.
    def __init__(
        self,
        wall_z: float = 10.0,
        wall_width: float = 3.0,
        wall_height: float = 2.0,
        wall_depth: float = 0.5,
        wall_color: int = 0xC0C0C0,
        wall_opacity: float = 0.8,
        wall_texture: pl.Path | str | None = None,
        arrow_shaft_width: float = 0.05,
        arrow_shaft_length: float = 1.0,
        arrow_color: int = 0xEE0000,
        arrow_rotation_step: float = 0.01,
        axis_radius: float = 0.0125,
        axis_radial_segments: int = 16,
        axis_color: int = 0x008000,
        point_light_color: int = 0xFF0000,
        point_light_intensity: float = 500.0,
        point_light_position: vec3f32 = (5.0, 5.0, 5.0),
        ambient_light_color: int = 0xFFFFFF,
        ambient_light_intensity: float = 0.25,
        camera_fov: float = 50.0,
        camera_near: float = 0.1,
        camera_far: float = 1000.0,
        camera_position: vec3f32 = (-3.0, 0.0, 30.0),
        grid_size: float = 200.0,
        grid_divisions: int = 50,
        show_helpers: bool = True,
    ) -> None:
        self.wall_z: float = wall_z
        self.wall_width: float = wall_width
        self.wall_height: float = wall_height
        self.wall_depth: float = wall_depth
        self.wall_color: int = wall_color
        self.wall_opacity: float = wall_opacity
        if wall_texture is None:
            wall_texture = os.environ.get("WALLSCENE_WALL_TEXTURE", str(DEFAULT_WALL_TEXTURE))
        self.wall_texture: pl.Path | None = pl.Path(wall_texture) if wall_texture else None
        self.arrow_shaft_width: float = arrow_shaft_width
        self.arrow_shaft_length: float = arrow_shaft_length
        self.arrow_color: int = arrow_color
        self.arrow_rotation_step: float = arrow_rotation_step
        self.axis_radius: float = axis_radius
        self.axis_radial_segments: int = axis_radial_segments
        self.axis_color: int = axis_color
        self.point_light_color: int = point_light_color
        self.point_light_intensity: float = point_light_intensity
        self.point_light_position: vec3f32 = point_light_position
        self.ambient_light_color: int = ambient_light_color
        self.ambient_light_intensity: float = ambient_light_intensity
        self.camera_fov: float = camera_fov
        self.camera_near: float = camera_near
        self.camera_far: float = camera_far
        self.camera_position: vec3f32 = camera_position
        self.grid_size: float = grid_size
        self.grid_divisions: int = grid_divisions
        self.show_helpers: bool = show_helpers
        pass

    @property
    def axis_length(self) -> float:
        # The axis spans exactly the gap between the two walls.
        return 2.0 * self.wall_z

    @property
    def wall_offset(self) -> float:
        # Inner faces of the walls sit at +/- wall_z.
        return self.wall_z + 0.5 * self.wall_depth

    @property
    def arrow_head_width(self) -> float:
        return 3.0 * self.arrow_shaft_width

    @property
    def arrow_head_height(self) -> float:
        return math.sqrt(3.0) / 2.0 * self.arrow_head_width
