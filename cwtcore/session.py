from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from cwtcore.axes import FrequencyAxis, frequency_axis, time_axis
from cwtcore.cwt_result import Scalogram, TransformResult
from cwtcore.deinterleave import deinterleave, expected_buffer_size
from cwtcore.errors import AxisNotReady, InvalidLayout, InvalidParameters, NotComputed, ResultNotReady
from cwtcore.features import Component, Feature, compute_feature, modulus, phase, select_component
from cwtcore.freq_range import indices_for_frequency_range, sample_band_indices
from cwtcore.params import TransformParams
from cwtcore.resample import compress_axis, compress_matrix, time_window
from cwtbackends.base import ITransformBackend

log = logging.getLogger("CWTSession")


class CWTSession:
    """
    One signal, its transform parameters and everything derived from them.

    Artifacts start absent and are filled by perform_transform /
    calculate_*_axis. Reading one that is still absent raises a
    MissingPrerequisite subclass. Every derived matrix is a fresh array.
    """

    def __init__(self, signal: Any, params: TransformParams,
                 backend: Optional[ITransformBackend] = None,
                 backend_params: Optional[Dict[str, Any]] = None):
        x = np.asarray(signal, dtype=np.float64)
        if x.ndim != 1 or x.size == 0:
            raise InvalidParameters("signal must be a non-empty 1D sequence", param="signal.shape", value=x.shape)
        self.signal = x
        self.params = params
        self.backend = backend
        self.backend_params = dict(backend_params or {})

        self._result: Optional[TransformResult] = None
        self._frequency_axis: Optional[FrequencyAxis] = None
        self._time_axis: Optional[np.ndarray] = None

    @classmethod
    def from_model(cls, signal: Any, model, backend: Optional[ITransformBackend] = None) -> "CWTSession":
        """Snapshot a ParamsModel (or any object with .snapshot()) into a new session."""
        snap = model.snapshot()
        return cls(signal, TransformParams.from_dict(snap), backend=backend, backend_params=snap)

    # ---------------- transform ----------------

    def perform_transform(self) -> TransformResult:
        if self.backend is None:
            from cwtbackends.builtins import PywtMorletBackend
            self.backend = PywtMorletBackend()

        p = self.params
        call_params = dict(self.backend_params)
        call_params.update(p.to_dict())
        log.info("Running %s on %d samples (octaves %d..%d, %d voices, %d threads)",
                 self.backend.BACKEND_META.get("id"), self.signal.size,
                 p.start_octave, p.end_octave, p.voices_per_octave, p.nthreads)

        buf = np.asarray(self.backend.compute(self.signal, call_params))
        expected = expected_buffer_size(self.signal.size, p.octave_count, p.voices_per_octave)
        if buf.size != expected:
            raise InvalidLayout(f"backend returned {buf.size} values, expected {expected}",
                                param="buffer.size", value=buf.size)

        real, imag = deinterleave(buf, self.signal.size)
        self._result = TransformResult(real=real, imag=imag)
        log.debug("Transform result shape: %s", self._result.shape)
        return self._result

    @property
    def result(self) -> TransformResult:
        if self._result is None:
            raise ResultNotReady("the transform has not been performed yet", param="result", value=None)
        return self._result

    @property
    def has_result(self) -> bool:
        return self._result is not None

    def _require_result(self, what: str) -> TransformResult:
        if self._result is None:
            raise NotComputed(f"transform must be performed before computing the {what}", param="result", value=None)
        return self._result

    # ---------------- features ----------------

    def modulus(self) -> np.ndarray:
        r = self._require_result("modulus")
        return modulus(r.real, r.imag)

    def phase(self) -> np.ndarray:
        r = self._require_result("phase")
        return phase(r.real, r.imag)

    def component(self, component: Union[Component, str] = Component.BOTH):
        r = self._require_result("component")
        return select_component(r.real, r.imag, component)

    def feature(self, feature: Union[Feature, str]) -> np.ndarray:
        r = self._require_result(Feature(feature).value)
        return compute_feature(r.real, r.imag, feature)

    # ---------------- axes ----------------

    def calculate_frequency_axis(self) -> FrequencyAxis:
        p = self.params
        self._frequency_axis = frequency_axis(p.start_octave, p.end_octave, p.voices_per_octave, p.c0)
        log.debug("Frequency axis: %d rows, %.6g .. %.6g",
                  len(self._frequency_axis), self._frequency_axis.min, self._frequency_axis.max)
        return self._frequency_axis

    def calculate_time_axis(self) -> np.ndarray:
        rate = self.params.sampling_rate
        if self._result is None:
            # rate problems are reported first: they cannot be fixed by running the transform
            time_axis(rate, 0)
            raise ResultNotReady("transform must be performed before building a time axis",
                                 param="result", value=None)
        self._time_axis = time_axis(rate, self._result.cols)
        return self._time_axis

    @property
    def frequency_axis(self) -> FrequencyAxis:
        if self._frequency_axis is None:
            raise AxisNotReady("frequency axis has not been calculated", param="frequency_axis", value=None)
        return self._frequency_axis

    @property
    def time_axis(self) -> np.ndarray:
        if self._time_axis is None:
            raise AxisNotReady("time axis has not been calculated", param="time_axis", value=None)
        return self._time_axis

    # ---------------- frequency lookups ----------------

    def indices_for_frequency_range(self, start_frequency: float, end_frequency: float) -> Tuple[int, int]:
        return indices_for_frequency_range(self.frequency_axis, start_frequency, end_frequency)

    def band_indices(self, start_frequency: float, end_frequency: float, sample_count: int) -> List[int]:
        """Rows to trace individually when plotting a band of the scalogram."""
        i0, i1 = self.indices_for_frequency_range(start_frequency, end_frequency)
        return sample_band_indices(i0, i1, sample_count)

    # ---------------- hand-off ----------------

    def scalogram(self, feature: Union[Feature, str] = Feature.MODULUS,
                  window: Optional[Tuple[float, float]] = None,
                  width: Optional[int] = None) -> Scalogram:
        """
        Feature matrix plus matching axes, optionally windowed in time and
        then compressed to `width` columns.
        """
        feature = Feature(feature)
        faxis = self.frequency_axis
        taxis = self.time_axis
        image = self.feature(feature)

        if window is not None:
            taxis, image = time_window(window[0], window[1], taxis, image)
        if width is not None:
            image = compress_matrix(image, width)
            taxis = compress_axis(taxis, width)

        return Scalogram(
            image=image,
            y_axis=np.array(faxis.frequencies),
            x_axis=np.asarray(taxis, dtype=np.float64),
            label_y="frequency",
            meta={
                "feature": feature.value,
                "backend": self.backend.BACKEND_META.get("id") if self.backend is not None else None,
                "voices_per_octave": faxis.voices_per_octave,
                "c0": faxis.c0,
                "window": tuple(window) if window is not None else None,
                "width": width,
            },
        )
