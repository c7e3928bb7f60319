from audiovis.frame_scheduler import FrameScheduler
from audiovis.surface import OpenCVSurface


class VisualiserRenderer:
    """
    Produces video frames for MoviePy.

    Pulls sample frames from the analyser at each timestamp and hands them to
    a `FrameScheduler` drawing onto an OpenCV surface.
    """

    def __init__(self, analyser, width, height, fps, config):
        self.analyser = analyser
        self.fps = fps
        self.config = config
        self.surface = OpenCVSurface(width, height)
        self.scheduler = FrameScheduler()
        self.last_time = None

    def make_frame(self, t):
        """
        The callback function for MoviePy.
        Generates a single RGB video frame at time t.
        """
        if self.last_time is None:
            elapsed_ms = 1000 / self.fps
        else:
            # MoviePy may seek backwards; the scheduler treats that as no time passing
            elapsed_ms = (t - self.last_time) * 1000
        self.last_time = t

        spectrum = self.analyser.get_spectrum_at_time(t)
        waveform = self.analyser.get_waveform_at_time(t)
        self.scheduler.tick(self.surface, spectrum, waveform, self.config, elapsed_ms)
        return self.surface.to_rgb()
