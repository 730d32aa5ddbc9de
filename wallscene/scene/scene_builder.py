import math
import pathlib as pl
import typing
from wallscene.core.common_types import Material, make_material
from wallscene.core.settings import SceneSettings
from wallscene.scene import geometry
from wallscene.scene.scene import Scene, MeshInstance, PointLight, AmbientLight
from wallscene.scene.transform import Transform

class TextureSource(typing.Protocol):
    def load(self, path: pl.Path) -> typing.Any: ...

class SceneHandles:
    # The assembled scene plus direct references to the objects the render loop and tests touch.
    def __init__(self, scene: Scene, arrow: MeshInstance, walls: tuple[MeshInstance, MeshInstance], axis: MeshInstance, point_light: PointLight, ambient_light: AmbientLight) -> None:
        self.scene: Scene = scene
        self.arrow: MeshInstance = arrow
        self.walls: tuple[MeshInstance, MeshInstance] = walls
        self.axis: MeshInstance = axis
        self.point_light: PointLight = point_light
        self.ambient_light: AmbientLight = ambient_light
        pass

class SceneBuilder:
    # Assembles the demo scene: lights, optional helpers, two walls, the arrow and the Z axis.
    # Every mesh is built (and validated) before anything is added to the Scene, so an
    # InvalidParameter from the geometry builder leaves no partially populated scene behind.
    def __init__(self, settings: SceneSettings | None = None, texture_loader: TextureSource | None = None) -> None:
        self.settings: SceneSettings = settings if settings is not None else SceneSettings()
        self.texture_loader: TextureSource | None = texture_loader
        pass

    def load_wall_texture(self) -> typing.Any:
        if self.texture_loader is None or self.settings.wall_texture is None:
            return None
        return self.texture_loader.load(self.settings.wall_texture)

    def build(self) -> SceneHandles:
        s: SceneSettings = self.settings

        # Geometry first: any out-of-range dimension fails here.
        wall_geometry: geometry.Mesh = geometry.build_box(width=s.wall_width, height=s.wall_height, depth=s.wall_depth)
        arrow_geometry: geometry.Mesh = geometry.build_arrow(
            shaft_width=s.arrow_shaft_width,
            shaft_length=s.arrow_shaft_length,
            head_width=s.arrow_head_width,
            head_height=s.arrow_head_height,
        )
        axis_geometry: geometry.Mesh = geometry.build_cylinder(
            radius_top=s.axis_radius,
            radius_bottom=s.axis_radius,
            height=s.axis_length,
            radial_segments=s.axis_radial_segments,
        )
        helper_geometries: list[geometry.Mesh] = []
        if s.show_helpers:
            helper_geometries.append(geometry.build_octahedron(radius=1.0))
            helper_geometries.append(geometry.build_grid(size=s.grid_size, divisions=s.grid_divisions))

        scene: Scene = Scene()

        # Lights
        point_light: PointLight = PointLight(color=s.point_light_color, intensity=s.point_light_intensity, position=s.point_light_position, name="point_light")
        ambient_light: AmbientLight = AmbientLight(color=s.ambient_light_color, intensity=s.ambient_light_intensity, name="ambient_light")
        scene.add(point_light, ambient_light)

        # Helpers: a wireframe marker at the point light and a floor grid.
        if helper_geometries:
            light_marker: MeshInstance = MeshInstance(
                mesh=helper_geometries[0],
                material=make_material(color=s.point_light_color, wireframe=True),
                transform=Transform(position=s.point_light_position),
                name="point_light_helper",
            )
            grid: MeshInstance = MeshInstance(
                mesh=helper_geometries[1],
                material=make_material(color=0x888888),
                name="grid_helper",
            )
            scene.add(light_marker, grid)

        # Two walls from the same geometry and material, mirrored across the XY plane.
        wall_material: Material = make_material(
            color=s.wall_color,
            texture=self.load_wall_texture(),
            opacity=s.wall_opacity,
            transparent=True,  # opacity is only honoured for transparent materials
            wireframe=False,
        )
        wall1: MeshInstance = MeshInstance(mesh=wall_geometry, material=wall_material, name="wall1")
        wall1.transform.translate_z(s.wall_offset)
        wall2: MeshInstance = MeshInstance(mesh=wall_geometry, material=wall_material, name="wall2")
        wall2.transform.translate_z(-s.wall_offset)
        scene.add(wall1)
        scene.add(wall2)

        arrow: MeshInstance = MeshInstance(mesh=arrow_geometry, material=make_material(color=s.arrow_color), name="arrow")
        scene.add(arrow)

        # The cylinder is built along +Y; a quarter turn about X lays it on the Z axis.
        axis: MeshInstance = MeshInstance(
            mesh=axis_geometry,
            material=make_material(color=s.axis_color),
            transform=Transform(rotation=(math.pi / 2.0, 0.0, 0.0)),
            name="z_axis",
        )
        scene.add(axis)

        return SceneHandles(scene=scene, arrow=arrow, walls=(wall1, wall2), axis=axis, point_light=point_light, ambient_light=ambient_light)

def build_scene(settings: SceneSettings | None = None, texture_loader: TextureSource | None = None) -> SceneHandles:
    return SceneBuilder(settings=settings, texture_loader=texture_loader).build()
