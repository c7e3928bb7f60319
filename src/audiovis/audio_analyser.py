import logging
import sys

import librosa
import numpy as np

from audiovis.constants import (
    FFT_SIZE,
    FREQUENCY_BIN_COUNT,
    HOP_LENGTH,
    MAX_DECIBELS,
    MIN_DECIBELS,
    SMOOTHING_TIME_CONSTANT,
    ZERO_CROSSING,
)

logger = logging.getLogger(__name__)


class AudioAnalyser:
    """
    Loads an audio file and serves byte sample frames for the visualisers.

    Frames follow the conventions of a browser analyser node: the spectrum is
    `FREQUENCY_BIN_COUNT` magnitudes scaled from [MIN_DECIBELS, MAX_DECIBELS]
    onto 0-255, and the waveform is the same number of samples with 128 as
    the zero crossing.
    """

    def __init__(self, filepath):
        logger.info(f"[+] Loading audio: {filepath}...")
        try:
            # Load audio with original sampling rate, mixed down to mono
            self.y, self.sr = librosa.load(filepath, sr=None, mono=True)
            self.duration = librosa.get_duration(y=self.y, sr=self.sr)
        except Exception as e:
            sys.exit(f"[!] Error loading audio file: {e}")

        logger.info("[+] Analysing audio frequencies...")
        self._calculate_spectrum()

    def _calculate_spectrum(self):
        """
        Compute the byte spectrum for every hop.

        Magnitudes are smoothed over time before the decibel conversion, as
        an analyser node does between successive reads.
        """
        stft = librosa.stft(
            self.y, n_fft=FFT_SIZE, hop_length=HOP_LENGTH, window="blackman"
        )
        magnitudes = np.abs(stft[:FREQUENCY_BIN_COUNT]) / FFT_SIZE

        smoothed = np.empty_like(magnitudes)
        previous = np.zeros(FREQUENCY_BIN_COUNT, dtype=magnitudes.dtype)
        for frame_index in range(magnitudes.shape[1]):
            previous = (
                SMOOTHING_TIME_CONSTANT * previous
                + (1 - SMOOTHING_TIME_CONSTANT) * magnitudes[:, frame_index]
            )
            smoothed[:, frame_index] = previous

        decibels = librosa.amplitude_to_db(smoothed, ref=1.0, amin=1e-10, top_db=None)
        scaled = (decibels - MIN_DECIBELS) * 255 / (MAX_DECIBELS - MIN_DECIBELS)
        self.spectrum = np.clip(scaled, 0, 255).astype(np.uint8)
        logger.debug(f"Spectrum: {self.spectrum.shape[1]} frames of {FREQUENCY_BIN_COUNT} bins")

    def get_spectrum_at_time(self, t):
        """
        Returns the byte spectrum frame for a specific timestamp `t`.
        """
        frame_index = librosa.time_to_frames(t, sr=self.sr, hop_length=HOP_LENGTH)
        frame_index = min(max(int(frame_index), 0), self.spectrum.shape[1] - 1)
        return self.spectrum[:, frame_index]

    def get_waveform_at_time(self, t):
        """
        Returns the byte waveform frame centred on time `t`.
        """
        sample_index = int(t * self.sr)

        half_window = FREQUENCY_BIN_COUNT // 2
        start = max(0, sample_index - half_window)
        end = min(len(self.y), start + FREQUENCY_BIN_COUNT)
        waveform_slice = self.y[start:end]

        # Pad with silence past the end of the file
        if len(waveform_slice) < FREQUENCY_BIN_COUNT:
            waveform_slice = np.pad(waveform_slice, (0, FREQUENCY_BIN_COUNT - len(waveform_slice)))

        scaled = ZERO_CROSSING + waveform_slice * ZERO_CROSSING
        return np.clip(scaled, 0, 255).astype(np.uint8)
