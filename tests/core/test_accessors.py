import gc
import weakref

import pytest

from settingsbinder.core.accessors import PropertyRef, resolve_property_name, schema_names
from settingsbinder.core.errors import UnsupportedAccessorKind
from support import SampleSettings


class TestResolve:

    def test_string(self):
        assert resolve_property_name("text_box") == "text_box"

    def test_lambda(self):
        assert resolve_property_name(lambda s: s.check_box) == "check_box"

    def test_getattr_lambda(self):
        assert resolve_property_name(lambda s: getattr(s, "count")) == "count"

    def test_named_function(self):
        def ratio(settings):
            return settings.ratio

        assert resolve_property_name(ratio) == "ratio"

    def test_property_ref(self):
        assert resolve_property_name(SampleSettings.ref("theme")) == "theme"
        assert str(SampleSettings.ref("theme")) == "theme"

    def test_stable(self):
        accessor = lambda s: s.text_box
        first = resolve_property_name(accessor, SampleSettings)
        second = resolve_property_name(accessor, SampleSettings)
        assert first == second == "text_box"

    def test_unhashable_callable(self):
        class Accessor:
            __hash__ = None

            def __call__(self, settings):
                return settings.count

        assert resolve_property_name(Accessor()) == "count"

    def test_keeps_no_reference(self):
        def make():
            return lambda s: s.count

        accessor = make()
        ref = weakref.ref(accessor)
        assert resolve_property_name(accessor, SampleSettings) == "count"

        del accessor
        gc.collect()
        assert ref() is None

    def test_schema_check(self):
        assert resolve_property_name("count", SampleSettings) == "count"
        with pytest.raises(UnsupportedAccessorKind):
            resolve_property_name("nope", SampleSettings)
        with pytest.raises(UnsupportedAccessorKind):
            resolve_property_name(lambda s: s.nope, SampleSettings)

    def test_no_schema_skips_check(self):
        class Plain:
            pass

        assert schema_names(Plain) is None
        assert resolve_property_name("anything", Plain) == "anything"


class TestUnsupported:

    @pytest.mark.parametrize("accessor", [
        lambda s: s.text_box.upper(),
        lambda s: s.text_box.strip,
        lambda s: s.count + 1,
        lambda s: s.count == 1,
        lambda s: s.check_box and s.count,
        lambda s: s.text_box[0],
        lambda s: (s.count, s.ratio),
        lambda s: s(),
        lambda s: s["count"],
        lambda s: 42,
        lambda s: None,
        lambda s: s._private,
        lambda s: s,
    ])
    def test_rejected_callables(self, accessor):
        with pytest.raises(UnsupportedAccessorKind):
            resolve_property_name(accessor)

    def test_accessor_raising(self):
        def broken(settings):
            raise RuntimeError("nope")

        with pytest.raises(UnsupportedAccessorKind) as excinfo:
            resolve_property_name(broken)
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    @pytest.mark.parametrize("accessor", ["", "not a name", "1abc", "_hidden", 42, None])
    def test_rejected_values(self, accessor):
        with pytest.raises(UnsupportedAccessorKind):
            resolve_property_name(accessor)

    def test_is_type_error(self):
        with pytest.raises(TypeError):
            resolve_property_name(3.5)

    def test_ref_unknown_name(self):
        with pytest.raises(KeyError):
            SampleSettings.ref("missing")

    def test_manual_ref_checked_against_schema(self):
        with pytest.raises(UnsupportedAccessorKind):
            resolve_property_name(PropertyRef(SampleSettings, "missing"), SampleSettings)
