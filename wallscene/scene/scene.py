import typing
from wallscene.core.common_types import vec3f32, Material, hex_to_rgb
from wallscene.scene.geometry import Mesh
from wallscene.scene.transform import Transform

class MeshInstance:
    # One placement of a Mesh. Geometry and material may be shared; the transform never is.
    def __init__(self, mesh: Mesh, material: Material, transform: Transform | None = None, name: str = "") -> None:
        self.mesh: Mesh = mesh
        self.material: Material = material
        self.transform: Transform = transform if transform is not None else Transform()
        self.name: str = name
        pass

    @property
    def is_transparent(self) -> bool:
        return self.material["transparent"]

    def __repr__(self) -> str:
        return f"MeshInstance(name={self.name!r}, mesh={self.mesh!r})"

class PointLight:
    def __init__(self, color: int, intensity: float, position: vec3f32 = (0.0, 0.0, 0.0), name: str = "") -> None:
        self.color: vec3f32 = hex_to_rgb(value=color)
        self.intensity: float = intensity
        self.transform: Transform = Transform(position=position)
        self.name: str = name
        pass

class AmbientLight:
    def __init__(self, color: int, intensity: float, name: str = "") -> None:
        self.color: vec3f32 = hex_to_rgb(value=color)
        self.intensity: float = intensity
        self.name: str = name
        pass

type SceneObject = MeshInstance | PointLight | AmbientLight

class Scene:
    """
    Insertion-ordered, flat collection of everything drawn or lighting a frame.
    The scene is the sole owner of its objects; objects keep no reference to it.
    """
    def __init__(self) -> None:
        self.objects: list[SceneObject] = []
        pass

    def add(self, *objects: SceneObject) -> None:
        for scene_object in objects:
            if not isinstance(scene_object, (MeshInstance, PointLight, AmbientLight)):
                raise TypeError(f"cannot add {type(scene_object).__name__} to a Scene")
            if any(scene_object is existing for existing in self.objects):
                continue
            self.objects.append(scene_object)

    def __iter__(self) -> typing.Iterator[SceneObject]:
        return iter(self.objects)

    def __len__(self) -> int:
        return len(self.objects)

    def mesh_instances(self) -> list[MeshInstance]:
        return [o for o in self.objects if isinstance(o, MeshInstance)]

    def point_lights(self) -> list[PointLight]:
        return [o for o in self.objects if isinstance(o, PointLight)]

    def ambient_lights(self) -> list[AmbientLight]:
        return [o for o in self.objects if isinstance(o, AmbientLight)]

    def find(self, name: str) -> SceneObject | None:
        for scene_object in self.objects:
            if scene_object.name == name:
                return scene_object
        return None
