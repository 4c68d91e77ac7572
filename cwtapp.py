"""Command-line front end: run a transform on a signal file and report the assembled result.

Usage:
    cwt-scalogram signal.npy --voices 16 --end-octave 8 --sampling-rate 2000
    cwt-scalogram signal.txt --sampling-rate 2000 --window 0.1 0.4 --width 64 --band 0.05 0.2
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

import numpy as np

from cwtcore.backend_manager import BackendManager
from cwtcore.errors import CWTError
from cwtcore.logger import setup_logging
from cwtcore.params import TransformParams
from cwtcore.session import CWTSession

log = logging.getLogger("cwtapp")


def load_signal(path: str) -> np.ndarray:
    if path.endswith(".npy"):
        return np.load(path).astype(np.float64).ravel()
    return np.loadtxt(path, dtype=np.float64).ravel()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cwt-scalogram", description=__doc__.splitlines()[0])
    p.add_argument("signal", help="signal file (.npy or whitespace separated text)")
    p.add_argument("--start-octave", type=int, default=1)
    p.add_argument("--end-octave", type=int, default=6)
    p.add_argument("--voices", type=int, default=8, help="voices per octave")
    p.add_argument("--c0", type=float, default=2 * np.pi, help="wavelet central frequency")
    p.add_argument("--threads", type=int, default=1)
    p.add_argument("--optimize", action="store_true", help="enable backend optimization schemes")
    p.add_argument("--sampling-rate", type=int, default=None)
    p.add_argument("--backend", default="builtin:pywt_morlet")
    p.add_argument("--plugins-root", default=os.getcwd(), help="folder holding plugins/backends/")
    p.add_argument("--feature", default="modulus", choices=["real", "imaginary", "modulus", "phase"])
    p.add_argument("--window", type=float, nargs=2, metavar=("START", "END"))
    p.add_argument("--width", type=int, help="compress the time dimension to this many columns")
    p.add_argument("--band", type=float, nargs=2, metavar=("FMIN", "FMAX"),
                   help="resolve a frequency range to row indices")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def run_app(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    manager = BackendManager(args.plugins_root)
    manager.reload_all()
    info = manager.get_backend(args.backend)
    if info is None:
        log.error("Unknown backend %s (available: %s)", args.backend,
                  ", ".join(b.id for b in manager.list_backends()))
        return 2

    try:
        params = TransformParams.from_dict({
            "start_octave": args.start_octave,
            "end_octave": args.end_octave,
            "voices_per_octave": args.voices,
            "c0": args.c0,
            "nthreads": args.threads,
            "use_optimization_schemes": args.optimize,
            "sampling_rate": args.sampling_rate,
        })
        session = CWTSession(load_signal(args.signal), params, backend=info.backend_obj)
        result = session.perform_transform()
        faxis = session.calculate_frequency_axis()

        summary = {
            "backend": info.id,
            "rows": result.rows,
            "cols": result.cols,
            "frequency_min": faxis.min,
            "frequency_max": faxis.max,
        }
        if args.band is not None:
            summary["band_indices"] = list(session.indices_for_frequency_range(*args.band))

        if params.sampling_rate is not None:
            session.calculate_time_axis()
            scal = session.scalogram(args.feature, window=args.window, width=args.width)
            summary["feature"] = args.feature
            summary["image_shape"] = list(scal.image.shape)
            summary["time_span"] = [float(scal.x_axis[0]), float(scal.x_axis[-1])]
        elif args.window is not None or args.width is not None:
            log.warning("--window/--width need --sampling-rate; skipped")
    except CWTError as e:
        log.error("%s: %s", type(e).__name__, e)
        return 2

    print(json.dumps(summary, indent=2))
    return 0


def main():
    sys.exit(run_app())


if __name__ == "__main__":
    main()
