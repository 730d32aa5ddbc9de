import typing
from wallscene.app.context import AppContext

class ResizeEvent(typing.NamedTuple):
    width: int
    height: int

class KeyDownEvent(typing.NamedTuple):
    key: str

class PointerDragEvent(typing.NamedTuple):
    dx: float
    dy: float

class PointerScrollEvent(typing.NamedTuple):
    dy: float

type Event = ResizeEvent | KeyDownEvent | PointerDragEvent | PointerScrollEvent

# Keys with reserved behaviour. Both are currently no-ops.
RESERVED_KEYS: tuple[str, ...] = ("O", "P")

def on_resize(context: AppContext, event: ResizeEvent) -> None:
    width: int = max(int(event.width), 1)
    height: int = max(int(event.height), 1)
    context.viewport = (width, height)
    context.camera.set_viewport(width=width, height=height)
    context.controls.set_viewport(width=width, height=height)
    set_viewport: typing.Callable[[int, int], None] | None = getattr(context.rasterizer, "set_viewport", None)
    if set_viewport is not None:
        set_viewport(width, height)

def on_key_down(context: AppContext, event: KeyDownEvent) -> None:
    if event.key == "O":
        pass
    elif event.key == "P":
        pass

def dispatch(context: AppContext, event: Event) -> None:
    # Handlers run synchronously on the event-loop thread, between two render ticks.
    if isinstance(event, ResizeEvent):
        on_resize(context=context, event=event)
    elif isinstance(event, KeyDownEvent):
        on_key_down(context=context, event=event)
    elif isinstance(event, PointerDragEvent):
        context.controls.rotate(dx=event.dx, dy=event.dy)
    elif isinstance(event, PointerScrollEvent):
        context.controls.zoom(steps=event.dy)
    else:
        raise TypeError(f"unsupported event: {event!r}")
