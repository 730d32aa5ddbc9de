from wallscene.app.context import AppContext, AnimationState

ARROW_ROTATION_STEP: float = 0.01

def step(state: AnimationState, dt: float, increment: float = ARROW_ROTATION_STEP) -> AnimationState:
    # Fixed increment per frame, independent of dt. The angle is never wrapped.
    return AnimationState(arrow_rotation=state.arrow_rotation + increment, frame=state.frame + 1)

def tick(context: AppContext, frame_time: float) -> None:
    """
    One frame: advance the arrow, apply buffered orbit input, draw, count the frame.
    Errors from the rasterizer are not caught; they end the loop.
    """
    context.animation = step(state=context.animation, dt=frame_time, increment=context.settings.arrow_rotation_step)
    # The arrow lies in its local XY plane, so it spins about its local Z axis.
    context.arrow.transform.rotation[2] = context.animation.arrow_rotation
    context.controls.update()
    context.rasterizer.render(context.scene, context.camera)
    context.stats.update(frame_time)
