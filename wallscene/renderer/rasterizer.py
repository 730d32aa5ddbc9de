import pathlib as pl
import typing
import moderngl as mgl
import numpy as np
import numpy.typing as npt
from wallscene.core.common_types import vec3f32
from wallscene.renderer.shader_compiler import load_shader_source
from wallscene.scene import geometry
from wallscene.scene.camera import PerspectiveCamera
from wallscene.scene.scene import Scene, MeshInstance

MAX_POINT_LIGHTS: int = 4
SHADER_DIR: pl.Path = pl.Path(__file__).parent.parent.resolve(strict=False) / "shaders"

class GpuMesh:
    def __init__(self, vao: mgl.VertexArray, buffers: list[mgl.Buffer], mode: int) -> None:
        self.vao: mgl.VertexArray = vao
        self.buffers: list[mgl.Buffer] = buffers
        self.mode: int = mode
        pass

    def release(self) -> None:
        self.vao.release()
        for buffer in self.buffers:
            buffer.release()

def draw_order(instances: typing.Sequence[MeshInstance], camera_position: vec3f32) -> list[MeshInstance]:
    """
    Opaque instances first, in scene order; then transparent ones back to front so that
    alpha blending composites correctly. Equal distances keep scene order.
    """
    eye: npt.NDArray[np.float64] = np.asarray(camera_position, dtype=np.float64)
    opaque: list[MeshInstance] = [i for i in instances if not i.is_transparent]
    transparent: list[MeshInstance] = [i for i in instances if i.is_transparent]
    transparent.sort(key=lambda i: -float(np.linalg.norm(i.transform.position - eye)))
    return opaque + transparent

class MeshRasterizer:
    # Draws a Scene through a PerspectiveCamera with a single unlit / Lambert program.
    # Meshes are uploaded on first use and cached by identity, so two instances of the same
    # geometry share one vertex array.
    def __init__(self, ctx: mgl.Context, shader_dir: pl.Path = SHADER_DIR, clear_color: vec3f32 = (0.0, 0.0, 0.0)) -> None:
        self.ctx: mgl.Context = ctx
        self.clear_color: vec3f32 = clear_color
        self.program: mgl.Program = self.ctx.program(
            vertex_shader=load_shader_source(shader_dir=shader_dir, filename="mesh_vs.glsl"),
            fragment_shader=load_shader_source(shader_dir=shader_dir, filename="mesh_fs.glsl"),
        )
        self.gpu_meshes: dict[int, GpuMesh] = {}
        pass

    def set_uniform(self, name: str, value: typing.Any) -> None:
        # The GLSL compiler drops unused uniforms; skip those instead of failing.
        if name in self.program:
            self.program[name].value = value

    def write_uniform(self, name: str, data: bytes) -> None:
        if name in self.program:
            self.program[name].write(data)

    def upload(self, mesh: geometry.Mesh) -> GpuMesh:
        key: int = id(mesh)
        if key in self.gpu_meshes:
            return self.gpu_meshes[key]

        uvs: npt.NDArray[np.float32] = mesh.uvs if mesh.uvs is not None else np.zeros((mesh.vertex_count, 2), dtype=np.float32)
        vbo_positions: mgl.Buffer = self.ctx.buffer(data=mesh.vertices.tobytes())
        vbo_uvs: mgl.Buffer = self.ctx.buffer(data=uvs.tobytes())
        ibo: mgl.Buffer = self.ctx.buffer(data=mesh.indices.tobytes())

        content: list[tuple[typing.Any, ...]] = [(vbo_positions, "3f", "inVertexLocalPosition")]
        if "inVertexLocalUV" in self.program:
            content.append((vbo_uvs, "2f", "inVertexLocalUV"))
        vao: mgl.VertexArray = self.ctx.vertex_array(
            self.program,
            content,
            index_buffer=ibo,
            index_element_size=4,
        )
        mode: int = mgl.TRIANGLES if mesh.mode == geometry.TRIANGLES else mgl.LINES
        gpu_mesh: GpuMesh = GpuMesh(vao=vao, buffers=[vbo_positions, vbo_uvs, ibo], mode=mode)
        self.gpu_meshes[key] = gpu_mesh
        return gpu_mesh

    def set_viewport(self, width: int, height: int) -> None:
        self.ctx.viewport = (0, 0, max(width, 1), max(height, 1))

    def write_lights(self, scene: Scene) -> None:
        ambient: npt.NDArray[np.float32] = np.zeros(3, dtype=np.float32)
        for ambient_light in scene.ambient_lights():
            ambient += np.asarray(ambient_light.color, dtype=np.float32) * ambient_light.intensity
        self.set_uniform("uAmbientLight", tuple(float(c) for c in ambient))

        point_lights = scene.point_lights()[:MAX_POINT_LIGHTS]
        positions: npt.NDArray[np.float32] = np.zeros((MAX_POINT_LIGHTS, 3), dtype=np.float32)
        radiance: npt.NDArray[np.float32] = np.zeros((MAX_POINT_LIGHTS, 3), dtype=np.float32)
        for i, point_light in enumerate(point_lights):
            positions[i] = point_light.transform.position
            radiance[i] = np.asarray(point_light.color, dtype=np.float32) * point_light.intensity
        self.set_uniform("uPointLightCount", len(point_lights))
        self.write_uniform("uPointLightGlobalPosition", positions.tobytes())
        self.write_uniform("uPointLightRadiance", radiance.tobytes())

    def draw_instance(self, instance: MeshInstance) -> None:
        material = instance.material
        gpu_mesh: GpuMesh = self.upload(instance.mesh)

        self.write_uniform("uTransformModel", instance.transform.to_pyrr().astype("f4").tobytes())
        self.set_uniform("uMaterialColor", material["color"])
        # three.js semantics: opacity is ignored unless the material is transparent.
        self.set_uniform("uMaterialOpacity", material["opacity"] if material["transparent"] else 1.0)
        self.set_uniform("uMaterialLit", material["lit"])

        texture: mgl.Texture | None = None
        if material["texture"] is not None:
            texture = material["texture"].resolve(self.ctx)
        self.set_uniform("uUseTexture", texture is not None)
        if texture is not None:
            texture.use(location=0)
            self.set_uniform("uTexture", 0)

        # Wireframe edges are drawn from both sides, so back faces must not be culled.
        wireframe: bool = material["wireframe"]
        if wireframe:
            self.ctx.disable(mgl.CULL_FACE)
        self.ctx.wireframe = wireframe
        gpu_mesh.vao.render(mode=gpu_mesh.mode)
        self.ctx.wireframe = False
        if wireframe:
            self.ctx.enable(mgl.CULL_FACE)

    def render(self, scene: Scene, camera: PerspectiveCamera) -> None:
        self.ctx.clear(*self.clear_color, depth=1.0)
        self.ctx.enable(mgl.DEPTH_TEST | mgl.CULL_FACE)
        self.ctx.disable(mgl.BLEND)

        self.write_uniform("uTransformView", camera.get_view_matrix().astype("f4").tobytes())
        self.write_uniform("uTransformProjection", camera.get_projection_matrix().astype("f4").tobytes())
        self.write_lights(scene=scene)

        blending: bool = False
        for instance in draw_order(instances=scene.mesh_instances(), camera_position=tuple(camera.look_from)):
            if instance.is_transparent and not blending:
                # Transparent surfaces blend over what is already drawn and do not occlude each other.
                self.ctx.enable(mgl.BLEND)
                self.ctx.blend_func = mgl.SRC_ALPHA, mgl.ONE_MINUS_SRC_ALPHA
                self.ctx.fbo.depth_mask = False
                blending = True
            self.draw_instance(instance=instance)

        if blending:
            self.ctx.fbo.depth_mask = True
            self.ctx.disable(mgl.BLEND)

    def release(self) -> None:
        for gpu_mesh in self.gpu_meshes.values():
            gpu_mesh.release()
        self.gpu_meshes.clear()
        self.program.release()
