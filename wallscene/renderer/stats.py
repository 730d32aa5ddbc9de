import typing

class FrameStats:
    # Frames-per-second counter. update() is called once per rendered frame with the frame time
    # reported by the window; every `interval` seconds the average rate is handed to `report`.
    def __init__(self, report: typing.Callable[[float], None] | None = None, interval: float = 1.0) -> None:
        self.report: typing.Callable[[float], None] | None = report
        self.interval: float = interval
        self.frame_count: int = 0
        self.total_frames: int = 0
        self.elapsed: float = 0.0
        self.fps: float = 0.0
        pass

    def update(self, frame_time: float) -> None:
        self.frame_count += 1
        self.total_frames += 1
        self.elapsed += max(frame_time, 0.0)
        if self.elapsed >= self.interval:
            self.fps = self.frame_count / self.elapsed
            self.frame_count = 0
            self.elapsed = 0.0
            if self.report is not None:
                self.report(self.fps)
