import sys
import numpy as np

from wallscene.core.errors import InvalidParameter
from wallscene.core.settings import SceneSettings
from wallscene.scene import geometry
from wallscene.scene.scene import MeshInstance, PointLight, AmbientLight
from wallscene.scene.scene_builder import build_scene

def inspect(settings: SceneSettings) -> None:
    # Print every object of the assembled scene in insertion order, without opening a window.
    try:
        handles = build_scene(settings=settings)
    except InvalidParameter as e:
        print(f"Error: Scene could not be built: {e}")
        sys.exit(1)

    print(f"Scene objects ({len(handles.scene)}):")
    for i, scene_object in enumerate(handles.scene):
        if isinstance(scene_object, MeshInstance):
            mesh: geometry.Mesh = scene_object.mesh
            lo, hi = mesh.bounds()
            print(f"  [{i}] {scene_object.name}: {mesh.mode}, {mesh.vertex_count} vertices, {mesh.primitive_count} primitives")
            print(f"      local bounds: {np.round(lo, 4).tolist()} .. {np.round(hi, 4).tolist()}")
            print(f"      position: {np.round(scene_object.transform.position, 4).tolist()}, rotation: {np.round(scene_object.transform.rotation, 4).tolist()}")
            if mesh.mode == geometry.TRIANGLES:
                normals = geometry.flat_normals(mesh)
                distinct = np.unique(np.round(normals, 4), axis=0)
                print(f"      distinct face normals: {len(distinct)}")
        elif isinstance(scene_object, PointLight):
            print(f"  [{i}] {scene_object.name}: point light, color {scene_object.color}, intensity {scene_object.intensity}, position {scene_object.transform.position.tolist()}")
        elif isinstance(scene_object, AmbientLight):
            print(f"  [{i}] {scene_object.name}: ambient light, color {scene_object.color}, intensity {scene_object.intensity}")

if __name__ == "__main__":
    inspect(SceneSettings(show_helpers="--no-helpers" not in sys.argv[1:]))
