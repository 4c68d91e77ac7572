from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import numpy as np

from cwtcore.errors import InvalidParameters, InvalidSamplingRate, MissingSamplingRate
from cwtcore.grid import as_axis, frozen


@dataclass(frozen=True)
class FrequencyAxis:
    frequencies: np.ndarray  # strictly monotonic, position i <-> transform row i
    voices_per_octave: int
    c0: float

    def __post_init__(self):
        f = np.array(as_axis(self.frequencies, "frequencies"), dtype=np.float64)
        if f.size == 0:
            raise InvalidParameters("frequency axis is empty", param="len(frequencies)", value=0)
        if not self.voices_per_octave > 0:
            raise InvalidParameters("voices per octave must be positive",
                                    param="voices_per_octave", value=self.voices_per_octave)
        step = np.diff(f)
        if not (np.all(step > 0) or np.all(step < 0)):
            bad = int(np.argmax(~(step > 0) if step.size and step[0] > 0 else ~(step < 0)))
            raise InvalidParameters(f"frequency axis must be strictly monotonic; breaks at position {bad + 1}",
                                    param=f"frequencies[{bad + 1}]", value=float(f[bad + 1]))
        object.__setattr__(self, "frequencies", frozen(f))

    def __len__(self) -> int:
        return int(self.frequencies.size)

    def __getitem__(self, idx):
        return self.frequencies[idx]

    @property
    def ascending(self) -> bool:
        return self.frequencies.size < 2 or bool(self.frequencies[1] > self.frequencies[0])

    @property
    def delta_a(self) -> float:
        """Spacing between neighbouring rows, in octaves."""
        return 1.0 / float(self.voices_per_octave)

    @property
    def min(self) -> float:
        return float(self.frequencies[0] if self.ascending else self.frequencies[-1])

    @property
    def max(self) -> float:
        return float(self.frequencies[-1] if self.ascending else self.frequencies[0])


def frequency_axis(start_octave: int, end_octave: int, voices_per_octave: int, c0: float) -> FrequencyAxis:
    """
    Centre frequencies of the analysing wavelets, one per transform row.

    f(i) = c0 / 2^(1 + (i+1)/v) for i = 1..n, stored at position n - i, so
    position 0 holds the lowest frequency and matches row 0 of the output.
    """
    if voices_per_octave <= 0:
        raise InvalidParameters("voices per octave must be positive",
                                param="voices_per_octave", value=voices_per_octave)
    if end_octave < start_octave:
        raise InvalidParameters(f"end octave must not precede start octave {start_octave}",
                                param="end_octave", value=end_octave)
    if not c0 > 0:
        raise InvalidParameters("central frequency must be positive", param="c0", value=c0)

    octave_count = end_octave - start_octave + 1
    n = octave_count * voices_per_octave
    delta_a = 1.0 / float(voices_per_octave)

    i = np.arange(1, n + 1, dtype=np.float64)
    f = float(c0) / np.power(2.0, 1.0 + (i + 1.0) * delta_a)

    return FrequencyAxis(
        frequencies=f[::-1],
        voices_per_octave=int(voices_per_octave),
        c0=float(c0),
    )


def time_axis(sampling_rate: Optional[float], n_samples: int) -> np.ndarray:
    """Sample timestamps k / sampling_rate for k = 0..n_samples-1 (seconds)."""
    if sampling_rate is None:
        raise MissingSamplingRate("a sampling rate is required to build a time axis",
                                  param="sampling_rate", value=None)
    if sampling_rate <= 0:
        raise InvalidSamplingRate("sampling rate must be positive",
                                  param="sampling_rate", value=sampling_rate)

    return frozen(np.arange(int(n_samples), dtype=np.float64) / float(sampling_rate))
