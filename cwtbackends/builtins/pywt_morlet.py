from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pywt

from cwtcore.axes import frequency_axis
from cwtcore.params import TransformParams
from cwtcore.schema import ParamSpec
from cwtbackends.base import ITransformBackend

BACKEND_META = {
    "id": "builtin:pywt_morlet",
    "name": "CWT: complex Morlet (PyWavelets)",
    "type": "CWT",
    "version": "1.0",
    "description": "Complex continuous wavelet transform via pywt.cwt, laid out as an interleaved re/im buffer.",
}


def _scales_from_angular_freqs(wavelet_name: str, omegas: np.ndarray) -> np.ndarray:
    """
    Axis values are angular frequencies (rad/sample). PyWavelets maps
    scale -> frequency as central_frequency / scale in cycles/sample, so
    scale = central_frequency * 2*pi / omega.
    """
    w = pywt.ContinuousWavelet(wavelet_name)
    cf = float(pywt.central_frequency(w))
    omegas = np.asarray(omegas, dtype=np.float64)
    scales = (cf * 2.0 * np.pi) / np.maximum(omegas, 1e-12)
    return np.maximum(scales, 1e-6)


class TransformBackend(ITransformBackend):
    BACKEND_META = BACKEND_META

    def get_parameters_schema(self):
        return [
            ParamSpec(
                key="wavelet",
                label="Wavelet",
                type="enum",
                default="cmor1.5-1.0",
                choices=["cmor1.5-1.0", "cmor1.0-1.5", "shan1.5-1.0", "fbsp1-1.5-1.0", "cgau1"],
                description="Complex continuous wavelet used by pywt.cwt.",
                examples=["cmor1.5-1.0 - Morlet, bandwidth 1.5", "shan1.5-1.0 - Shannon"],
            ),
        ]

    def compute(self, x: np.ndarray, params: dict) -> np.ndarray:
        x = np.require(np.asarray(x, dtype=np.float32), requirements="C")
        p = TransformParams.from_dict(params)
        wname = str(params.get("wavelet", "cmor1.5-1.0"))

        axis = frequency_axis(p.start_octave, p.end_octave, p.voices_per_octave, p.c0)
        # row i of the output <-> axis position i (ascending frequency, descending scale)
        scales = _scales_from_angular_freqs(wname, axis.frequencies)
        method = "fft" if p.use_optimization_schemes else "conv"

        def _run(chunk: np.ndarray) -> np.ndarray:
            coefs, _ = pywt.cwt(x, chunk, wname, method=method)
            return coefs

        n_workers = max(1, min(int(p.nthreads), scales.size))
        chunks = np.array_split(scales, n_workers)
        if n_workers == 1:
            coefs = _run(scales)
        else:
            with ThreadPoolExecutor(max_workers=n_workers) as pool:
                coefs = np.vstack(list(pool.map(_run, chunks)))

        out = np.empty(coefs.size * 2, dtype=np.float32)
        out[0::2] = coefs.real.ravel()
        out[1::2] = coefs.imag.ravel()
        return out
