"""Tests for the region identifier interner."""
from regiongraph.interner import RegionIdInterner


class TestRegionIdInterner:
    def test_sequential_ids_from_zero(self):
        interner = RegionIdInterner()
        assert interner.intern("a string") == 0
        assert interner.intern("another string") == 1
        assert interner.intern("third") == 2

    def test_intern_twice_reuses_id(self):
        interner = RegionIdInterner()
        assert interner.intern("a string") == 0
        assert interner.intern("a string") == 0
        assert interner.intern("another string") == 1
        assert len(interner) == 2

    def test_idempotent_many_times(self):
        interner = RegionIdInterner()
        ids = {interner.intern("181570052001013") for _ in range(50)}
        assert ids == {0}
        assert len(interner) == 1

    def test_count_equals_distinct_strings(self):
        interner = RegionIdInterner()
        values = ["b", "a", "b", "c", "a", "a", "d"]
        for value in values:
            interner.intern(value)
        assert len(interner) == len(set(values))
        assert list(interner.strings()) == ["b", "a", "c", "d"]

    def test_resolve_roundtrip(self):
        interner = RegionIdInterner()
        for value in ["x", "y", "x", "z"]:
            assert interner.resolve(interner.intern(value)) == value

    def test_resolve_unknown(self):
        interner = RegionIdInterner()
        assert interner.resolve(0) is None
        assert interner.resolve(1657) is None
        interner.intern("only")
        assert interner.resolve(1) is None
        assert interner.resolve(-1) is None

    def test_get_does_not_intern(self):
        interner = RegionIdInterner()
        assert interner.get("missing") is None
        assert len(interner) == 0
        interner.intern("present")
        assert interner.get("present") == 0
        assert "present" in interner
        assert "missing" not in interner

    def test_instances_are_independent(self):
        first = RegionIdInterner()
        second = RegionIdInterner()
        first.intern("a")
        first.intern("b")
        assert second.intern("b") == 0
        assert first.get("b") == 1
