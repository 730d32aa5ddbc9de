import typing

type vec2i32 = tuple[
    int,
    int,
]

type vec2f32 = tuple[
    float,
    float,
]

type vec3f32 = tuple[
    float,
    float,
    float,
]

class Material(typing.TypedDict):
    # CPU-side description of a surface, shared by every MeshInstance that references it.
    # "texture" is a TextureHandle (or None); the rasterizer resolves it lazily so that a
    # texture still being decoded simply renders untextured.
    color: vec3f32
    texture: typing.Any
    opacity: float
    transparent: bool
    wireframe: bool
    lit: bool

def hex_to_rgb(value: int) -> vec3f32:
    # 0xRRGGBB -> (r, g, b) in [0, 1]
    r: float = ((value >> 16) & 0xFF) / 255.0
    g: float = ((value >> 8) & 0xFF) / 255.0
    b: float = (value & 0xFF) / 255.0
    return (r, g, b)

def make_material(color: int | vec3f32, texture: typing.Any = None, opacity: float = 1.0, transparent: bool = False, wireframe: bool = False, lit: bool = False) -> Material:
    rgb: vec3f32 = hex_to_rgb(value=color) if isinstance(color, int) else (float(color[0]), float(color[1]), float(color[2]))
    return Material(
        color=rgb,
        texture=texture,
        opacity=float(opacity),
        transparent=bool(transparent),
        wireframe=bool(wireframe),
        lit=bool(lit),
    )
