import numpy as np
import pytest

from cwtcore.errors import InvalidParameters
from cwtcore.params import TRANSFORM_SCHEMA, TransformParams
from cwtcore.schema import ParamSpec, coerce_value, schema_to_dict

QtCore = pytest.importorskip("PySide6.QtCore")

from cwtcore.params_model import ParamsModel  # noqa: E402
from cwtcore.session import CWTSession  # noqa: E402


class TestSchema:
    def test_every_spec_serialises(self):
        rows = schema_to_dict(TRANSFORM_SCHEMA)
        assert [r["key"] for r in rows] == [s.key for s in TRANSFORM_SCHEMA]
        assert all("description" in r for r in rows)

    def test_int_coercion(self):
        spec = ParamSpec(key="n", label="N", type="int", default=1, min=1)
        assert coerce_value(spec, "4") == 4
        assert coerce_value(spec, 4.0) == 4

    def test_int_rejects_fraction(self):
        spec = ParamSpec(key="n", label="N", type="int", default=1)
        with pytest.raises(InvalidParameters):
            coerce_value(spec, 2.5)

    def test_bounds(self):
        spec = ParamSpec(key="n", label="N", type="int", default=1, min=1, max=8)
        with pytest.raises(InvalidParameters) as exc:
            coerce_value(spec, 0)
        assert exc.value.param == "n"
        with pytest.raises(InvalidParameters):
            coerce_value(spec, 9)

    def test_bool_from_string(self):
        spec = ParamSpec(key="b", label="B", type="bool", default=False)
        assert coerce_value(spec, "true") is True
        assert coerce_value(spec, "0") is False

    def test_enum(self):
        spec = ParamSpec(key="w", label="W", type="enum", default="a", choices=["a", "b"])
        with pytest.raises(InvalidParameters):
            coerce_value(spec, "c")

    def test_required_value(self):
        spec = ParamSpec(key="x", label="X", type="float", default=None)
        with pytest.raises(InvalidParameters):
            coerce_value(spec, None)

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            ParamSpec(key="x", label="X", type="complex", default=0)


class TestTransformParams:
    def test_defaults(self):
        p = TransformParams.from_dict({})
        assert p.voices_per_octave == 8
        assert p.sampling_rate is None
        assert p.row_count == p.octave_count * 8

    def test_from_dict(self):
        p = TransformParams.from_dict({"start_octave": 2, "end_octave": 4, "voices_per_octave": "12",
                                       "sampling_rate": 2000, "extra": "ignored"})
        assert p.octave_count == 3
        assert p.row_count == 36
        assert p.sampling_rate == 2000

    def test_inverted_octaves(self):
        with pytest.raises(InvalidParameters) as exc:
            TransformParams.from_dict({"start_octave": 5, "end_octave": 2})
        assert exc.value.param == "end_octave"

    @pytest.mark.parametrize("key,value", [
        ("voices_per_octave", 0),
        ("nthreads", 0),
        ("sampling_rate", -1),
        ("c0", 0.0),
    ])
    def test_rejects(self, key, value):
        with pytest.raises(InvalidParameters) as exc:
            TransformParams.from_dict({key: value})
        assert exc.value.param == key
        assert exc.value.value == value

    def test_to_dict_round_trip(self):
        p = TransformParams(start_octave=2, end_octave=3, sampling_rate=100)
        assert TransformParams.from_dict(p.to_dict()) == p


class TestParamsModel:
    def test_changed_signal(self):
        model = ParamsModel()
        seen = []
        model.changed.connect(lambda key: seen.append(key))
        model.set("voices_per_octave", 16)
        assert seen == ["voices_per_octave"]
        assert model.get("voices_per_octave") == 16

    def test_set_validates(self):
        model = ParamsModel()
        with pytest.raises(InvalidParameters):
            model.set("voices_per_octave", 0)
        assert model.get("voices_per_octave") == 8

    def test_snapshot_is_a_copy(self):
        model = ParamsModel({"sampling_rate": 500})
        snap = model.snapshot()
        snap["sampling_rate"] = 1
        assert model.get("sampling_rate") == 500

    def test_session_from_model(self):
        model = ParamsModel({"start_octave": 1, "end_octave": 2, "voices_per_octave": 3,
                             "sampling_rate": 100})
        model.set("wavelet", "cmor1.0-1.5")
        s = CWTSession.from_model(np.zeros(16), model)
        assert s.params.row_count == 6
        assert s.backend_params["wavelet"] == "cmor1.0-1.5"
        assert model.transform_params() == s.params
