from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from cwtcore.errors import InvalidParameters
from cwtcore.schema import ParamSpec, Schema, apply_schema

TRANSFORM_SCHEMA: Schema = [
    ParamSpec(
        key="start_octave",
        label="Start octave",
        type="int",
        default=1,
        min=0,
        max=30,
        step=1,
        description="First octave (power of two of the wavelet scale) to analyse.",
        examples=["1 - finest scales", "3 - skip the highest frequencies"],
    ),
    ParamSpec(
        key="end_octave",
        label="End octave",
        type="int",
        default=6,
        min=0,
        max=30,
        step=1,
        description="Last octave to analyse, inclusive. Must not be below the start octave.",
        examples=["6 - 6 octaves when starting at 1"],
    ),
    ParamSpec(
        key="voices_per_octave",
        label="Voices per octave",
        type="int",
        default=8,
        min=1,
        max=256,
        step=1,
        description="Number of sub-bands per octave. Rows of the output = octaves x voices.",
        examples=["8 - coarse", "32 - fine frequency resolution"],
    ),
    ParamSpec(
        key="c0",
        label="Central frequency",
        type="float",
        default=6.283185307179586,
        min=1e-9,
        step=0.1,
        description="Central frequency constant of the Morlet wavelet; scales the whole frequency axis.",
        examples=["2*pi - common default"],
    ),
    ParamSpec(
        key="nthreads",
        label="Threads",
        type="int",
        default=1,
        min=1,
        max=256,
        step=1,
        description="Worker threads handed to the transform backend.",
    ),
    ParamSpec(
        key="use_optimization_schemes",
        label="Optimization schemes",
        type="bool",
        default=False,
        description="Let the backend use its faster (FFT based) evaluation path.",
    ),
    ParamSpec(
        key="sampling_rate",
        label="Sampling rate (Hz)",
        type="int",
        default=None,
        min=1,
        optional=True,
        description="Needed only for the time axis. Leave empty when unknown.",
        examples=["44100", "2000"],
    ),
]


@dataclass(frozen=True)
class TransformParams:
    start_octave: int = 1
    end_octave: int = 6
    voices_per_octave: int = 8
    c0: float = 6.283185307179586
    nthreads: int = 1
    use_optimization_schemes: bool = False
    sampling_rate: Optional[int] = None

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "TransformParams":
        data = apply_schema(TRANSFORM_SCHEMA, params)
        out = cls(**{s.key: data[s.key] for s in TRANSFORM_SCHEMA})
        if out.end_octave < out.start_octave:
            raise InvalidParameters(f"end octave must not precede start octave {out.start_octave}",
                                    param="end_octave", value=out.end_octave)
        return out

    @property
    def octave_count(self) -> int:
        return self.end_octave - self.start_octave + 1

    @property
    def row_count(self) -> int:
        return self.octave_count * self.voices_per_octave

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
