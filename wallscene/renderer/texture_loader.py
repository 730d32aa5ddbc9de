import concurrent.futures as cf
import pathlib as pl
import moderngl as mgl
import numpy as np
import numpy.typing as npt
import cv2

def decode_image(path: pl.Path) -> npt.NDArray[np.uint8] | None:
    """
    Read an image file into a bottom-up RGBA uint8 array ready for glTexImage2D.
    Returns None (after printing a warning) when the file is missing or unreadable.
    """
    if not path.exists():
        print(f"Warning: Texture not found: {path}")
        return None

    loaded_data = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if loaded_data is None:
        print(f"Warning: Failed to load texture: {path}")
        return None

    if len(loaded_data.shape) == 2:
        loaded_data = cv2.cvtColor(loaded_data, cv2.COLOR_GRAY2RGBA)
    elif loaded_data.shape[2] == 3:
        loaded_data = cv2.cvtColor(loaded_data, cv2.COLOR_BGR2RGBA)
    elif loaded_data.shape[2] == 4:
        loaded_data = cv2.cvtColor(loaded_data, cv2.COLOR_BGRA2RGBA)

    if loaded_data.dtype == np.uint16:
        loaded_data = (loaded_data // 257).astype(dtype=np.uint8)
    elif loaded_data.dtype != np.uint8:
        loaded_data = np.clip(loaded_data.astype(dtype=np.float32) * 255.0, 0.0, 255.0).astype(dtype=np.uint8)

    # OpenGL expects the first row to be the bottom of the image.
    return np.ascontiguousarray(np.flipud(loaded_data))

class TextureHandle:
    # Stands in for a texture while it is decoded on the loader's worker thread.
    # resolve() must be called from the render thread: it uploads the decoded pixels on the
    # first call after decoding finished and returns None until then (or forever, if the
    # image could not be read), so materials simply render untextured in the meantime.
    def __init__(self, path: pl.Path, future: "cf.Future[npt.NDArray[np.uint8] | None]") -> None:
        self.path: pl.Path = path
        self.future: cf.Future[npt.NDArray[np.uint8] | None] = future
        self.texture: mgl.Texture | None = None
        self.failed: bool = False
        pass

    @property
    def is_ready(self) -> bool:
        return self.texture is not None

    def resolve(self, ctx: mgl.Context) -> mgl.Texture | None:
        if self.texture is not None or self.failed:
            return self.texture
        if not self.future.done():
            return None

        # Re-raises anything unexpected from the worker; a missing file is reported as None.
        image: npt.NDArray[np.uint8] | None = self.future.result()
        if image is None:
            self.failed = True
            return None

        h, w = image.shape[:2]
        self.texture = ctx.texture(size=(w, h), components=4, data=image.tobytes())
        self.texture.filter = (mgl.LINEAR_MIPMAP_LINEAR, mgl.LINEAR)
        self.texture.build_mipmaps()
        print(f"path: {self.path} uploaded: {w}x{h}")
        return self.texture

class TextureLoader:
    # Fire-and-forget image loading: no retry, no cancellation of in-flight decodes.
    def __init__(self, max_workers: int = 1) -> None:
        self.executor: cf.ThreadPoolExecutor = cf.ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="texture-loader")
        self.texture_cache: dict[str, TextureHandle] = {}
        pass

    def load(self, path: pl.Path | str) -> TextureHandle:
        path = pl.Path(path)
        path_str: str = str(path.resolve(strict=False))
        if path_str in self.texture_cache:
            return self.texture_cache[path_str]
        handle: TextureHandle = TextureHandle(path=path, future=self.executor.submit(decode_image, path))
        self.texture_cache[path_str] = handle
        return handle

    def close(self) -> None:
        self.executor.shutdown(wait=False)
        for handle in self.texture_cache.values():
            if handle.texture is not None:
                handle.texture.release()
                handle.texture = None
        self.texture_cache.clear()
