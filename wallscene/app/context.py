import typing
from wallscene.core.common_types import vec2i32
from wallscene.core.settings import SceneSettings
from wallscene.scene.camera import PerspectiveCamera
from wallscene.scene.orbit_controls import OrbitControls
from wallscene.scene.scene import Scene, MeshInstance
from wallscene.scene.scene_builder import SceneHandles, TextureSource, build_scene

class Rasterizer(typing.Protocol):
    def render(self, scene: Scene, camera: PerspectiveCamera) -> None: ...

class Stats(typing.Protocol):
    def update(self, frame_time: float) -> None: ...

class AnimationState(typing.NamedTuple):
    arrow_rotation: float = 0.0
    frame: int = 0

class AppContext:
    # Everything the render loop and the event handlers operate on. Owned by the window
    # adapter and passed explicitly; nothing here is module-global.
    def __init__(self, handles: SceneHandles, camera: PerspectiveCamera, controls: OrbitControls, rasterizer: Rasterizer, stats: Stats, viewport: vec2i32, settings: SceneSettings) -> None:
        self.handles: SceneHandles = handles
        self.camera: PerspectiveCamera = camera
        self.controls: OrbitControls = controls
        self.rasterizer: Rasterizer = rasterizer
        self.stats: Stats = stats
        self.viewport: vec2i32 = viewport
        self.settings: SceneSettings = settings
        self.animation: AnimationState = AnimationState()
        pass

    @property
    def scene(self) -> Scene:
        return self.handles.scene

    @property
    def arrow(self) -> MeshInstance:
        return self.handles.arrow

def create_context(rasterizer: Rasterizer, stats: Stats, viewport: vec2i32 = (800, 600), settings: SceneSettings | None = None, texture_loader: TextureSource | None = None) -> AppContext:
    """
    Build the scene, camera and orbit controls for a viewport of the given pixel size.
    Geometry errors (InvalidParameter) propagate from here, before any frame is rendered.
    """
    settings = settings if settings is not None else SceneSettings()
    handles: SceneHandles = build_scene(settings=settings, texture_loader=texture_loader)

    width, height = viewport
    camera: PerspectiveCamera = PerspectiveCamera(
        fov=settings.camera_fov,
        aspect_ratio=width / max(height, 1),
        near=settings.camera_near,
        far=settings.camera_far,
        position=settings.camera_position,
    )
    controls: OrbitControls = OrbitControls(camera=camera)
    controls.set_viewport(width=width, height=height)

    return AppContext(
        handles=handles,
        camera=camera,
        controls=controls,
        rasterizer=rasterizer,
        stats=stats,
        viewport=(width, height),
        settings=settings,
    )
