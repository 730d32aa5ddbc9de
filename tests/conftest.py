"""
Shared fixtures. Nothing here opens a window or a GL context: the rasterizer and the
frame-rate display are replaced by recorders.
"""
import pytest

from wallscene.app.context import create_context
from wallscene.core.settings import SceneSettings


class RecordingRasterizer:
    """Stands in for MeshRasterizer; remembers what it was asked to draw."""

    def __init__(self):
        self.calls = []
        self.viewports = []

    def render(self, scene, camera):
        self.calls.append((scene, camera))

    def set_viewport(self, width, height):
        self.viewports.append((width, height))


class RecordingStats:
    def __init__(self):
        self.frame_times = []

    def update(self, frame_time):
        self.frame_times.append(frame_time)


class RecordingTextureLoader:
    def __init__(self):
        self.paths = []

    def load(self, path):
        self.paths.append(path)
        return ("texture", path)


@pytest.fixture
def settings():
    return SceneSettings(wall_texture="")


@pytest.fixture
def rasterizer():
    return RecordingRasterizer()


@pytest.fixture
def stats():
    return RecordingStats()


@pytest.fixture
def texture_loader():
    return RecordingTextureLoader()


@pytest.fixture
def context(rasterizer, stats, settings):
    return create_context(rasterizer=rasterizer, stats=stats, viewport=(800, 600), settings=settings)
