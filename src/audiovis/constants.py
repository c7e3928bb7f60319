# --- Output settings ---
DEFAULT_FPS = 30
DEFAULT_RESOLUTION = (1920, 1080)
BACKGROUND_COLOR = (0, 0, 0)  # BGR

# --- Analyser settings (mirrors a Web Audio AnalyserNode) ---
FFT_SIZE = 2048
FREQUENCY_BIN_COUNT = FFT_SIZE // 2
SMOOTHING_TIME_CONSTANT = 0.85
MIN_DECIBELS = -100.0
MAX_DECIBELS = -30.0
ZERO_CROSSING = 128  # byte value of a silent waveform sample
HOP_LENGTH = 512

# --- Frequency binning ---
SPECTRUM_CAP = 512  # only the low/mid range is ever displayed
LOW_ELEMENT_SHARE = 0.2  # first 20% of the bars...
LOW_SPECTRUM_SHARE = 0.1  # ...cover the first 10% of the spectrum
FILLER_BAND = (0.40, 0.45)  # radial seam filler, as fractions of the cap

# --- User-tunable defaults ---
DEFAULT_ELEMENT_COUNT = 64
DEFAULT_PEAK_DECAY_MS = 1000
DEFAULT_INNER_RADIUS_FACTOR = 3.0
DEFAULT_MAX_BAR_LENGTH_PERCENT = 100
MAX_ELEMENT_COUNT = 1024

# --- Drawing ---
PEAK_DOT_COLOR = (255, 255, 255)  # RGB
BASELINE_COLOR = (255, 255, 255, 0.2)  # RGBA
RADIAL_LINE_WIDTH = 2
RADIAL_PEAK_DOT_RADIUS = 3
WAVEFORM_LINE_WIDTH = 2
WAVEFORM_PEAK_STRIDE = 50  # one peak dot every N samples
WAVEFORM_PEAK_DOT_RADIUS = 3
CURVE_SEGMENTS = 6  # points used to flatten a quadratic curve
