import moderngl_window as mglw
from moderngl_window.context.base import BaseKeys, KeyModifiers
import pathlib as pl
import typing
from wallscene.app.context import AppContext, create_context
from wallscene.app.events import dispatch, ResizeEvent, KeyDownEvent, PointerDragEvent, PointerScrollEvent
from wallscene.app.render_loop import tick
from wallscene.core.common_types import vec2i32
from wallscene.core.settings import SceneSettings
from wallscene.renderer.rasterizer import MeshRasterizer
from wallscene.renderer.stats import FrameStats
from wallscene.renderer.texture_loader import TextureLoader

class SceneViewer(mglw.WindowConfig): # type: ignore[name-defined, misc]
    gl_version: vec2i32 = (3, 3)
    title: str = "wallscene"
    window_size: vec2i32 = (1280, 720)
    aspect_ratio: float | None = None  # follow the window instead of letterboxing
    resizable: bool = True
    samples: int = 4
    resource_dir: pl.Path = (pl.Path(__file__).parent / "wallscene").resolve(strict=False)

    def __init__(self, **kwargs: typing.Any) -> None:
        super().__init__(**kwargs)

        self.texture_loader: TextureLoader = TextureLoader()
        self.rasterizer: MeshRasterizer = MeshRasterizer(ctx=self.ctx, shader_dir=self.resource_dir / "shaders")
        self.stats: FrameStats = FrameStats(report=self.show_fps)

        width, height = self.wnd.buffer_size
        self.context: AppContext = create_context(
            rasterizer=self.rasterizer,
            stats=self.stats,
            viewport=(width, height),
            settings=SceneSettings(),
            texture_loader=self.texture_loader,
        )
        self.rasterizer.set_viewport(width=width, height=height)

        # Map window-backend key codes to the names the event dispatcher understands.
        keys: BaseKeys = self.wnd.keys
        self.key_names: dict[typing.Any, str] = {
            keys.O: "O",
            keys.P: "P",
        }
        pass

    def show_fps(self, fps: float) -> None:
        self.wnd.title = f"{self.title} | {fps:.1f} fps"

    def on_render(self, time: float, frame_time: float) -> None:
        tick(context=self.context, frame_time=frame_time)
        pass

    def on_resize(self, width: int, height: int) -> None:
        # on_resize reports the window size; the viewport needs framebuffer pixels (HiDPI).
        buffer_width, buffer_height = self.wnd.buffer_size
        print(f"[RESIZE] {width}x{height} (buffer {buffer_width}x{buffer_height})")
        dispatch(context=self.context, event=ResizeEvent(width=buffer_width, height=buffer_height))
        pass

    def on_key_event(self, key: typing.Any, action: typing.Any, modifiers: KeyModifiers) -> None:
        if action == self.wnd.keys.ACTION_PRESS:
            dispatch(context=self.context, event=KeyDownEvent(key=self.key_names.get(key, str(key))))
        pass

    def on_mouse_drag_event(self, x: int, y: int, dx: int, dy: int) -> None:
        dispatch(context=self.context, event=PointerDragEvent(dx=dx, dy=dy))

    def on_mouse_scroll_event(self, x_offset: float, y_offset: float) -> None:
        dispatch(context=self.context, event=PointerScrollEvent(dy=y_offset))

    def on_close(self) -> None:
        print(f"[CLOSE] frames rendered: {self.stats.total_frames}")
        self.texture_loader.close()
        self.rasterizer.release()
        pass

if __name__ == "__main__":
    mglw.run_window_config(SceneViewer)
    pass
