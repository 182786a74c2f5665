"""Tests for flag declaration, handles and registry bookkeeping."""

import logging
import pytest
import sys
import threading
from pathlib import Path

# Add parent directory to path to import argflags
sys.path.insert(0, str(Path(__file__).parent.parent))

from argflags.errors import CapacityExceeded
from argflags.kinds import FlagKind
from argflags.registry import FLAG_CAPACITY, FlagRegistry
from argflags.values import LongValue, StringValue


@pytest.fixture
def registry():
    return FlagRegistry()


def test_alias_defaults_to_first_character(registry):
    handle = registry.declare_long("count", 0)
    assert handle.name() == "count"
    assert handle.short_alias() == "c"


def test_explicit_alias(registry):
    handle = registry.declare_string_short("label", "lbl", "x")
    assert handle.short_alias() == "lbl"
    assert handle.kind == FlagKind.STRING


def test_every_kind_can_be_declared(registry):
    handles = [
        registry.declare_bool("a", True),
        registry.declare_long("b", -1),
        registry.declare_ulong("c", 1),
        registry.declare_float("d", 0.5),
        registry.declare_double("e", 0.25),
        registry.declare_string("f", "s"),
        registry.declare_bool_short("g", "G", False),
        registry.declare_long_short("h", "H", 2),
        registry.declare_ulong_short("i", "I", 3),
        registry.declare_float_short("j", "J", 1.5),
        registry.declare_double_short("k", "K", 2.5),
        registry.declare_string_short("l", "L", "t"),
    ]
    assert [h.kind for h in handles] == [
        FlagKind.BOOL, FlagKind.LONG, FlagKind.ULONG, FlagKind.FLOAT,
        FlagKind.DOUBLE, FlagKind.STRING,
    ] * 2
    assert [h.index for h in handles] == list(range(12))
    assert len(registry) == 12


def test_value_is_a_snapshot(registry):
    handle = registry.declare_long("count", 1)
    snapshot = handle.value()
    snapshot.parse("99")
    assert handle.value() == LongValue(1)


def test_handle_sees_parsed_value(registry):
    handle = registry.declare_string("label", "")
    registry.parse(["--label", "hello"])
    assert handle.value() == StringValue("hello")
    assert "label" in repr(handle)


def test_empty_name_is_rejected(registry):
    with pytest.raises(ValueError):
        registry.declare_bool("", False)
    assert len(registry) == 0


def test_bad_default_does_not_register(registry):
    with pytest.raises(TypeError):
        registry.declare_long("count", "zero")
    with pytest.raises(ValueError):
        registry.declare_ulong("size", -1)
    assert len(registry) == 0


def test_capacity_is_256():
    registry = FlagRegistry()
    assert registry.capacity == FLAG_CAPACITY == 256
    for i in range(FLAG_CAPACITY):
        registry.declare_bool(f"flag{i}", False)

    with pytest.raises(CapacityExceeded) as excinfo:
        registry.declare_bool("one_too_many", False)
    assert excinfo.value.capacity == 256
    assert len(registry) == 256


def test_custom_capacity():
    registry = FlagRegistry(capacity=1)
    registry.declare_bool("only", False)
    with pytest.raises(CapacityExceeded):
        registry.declare_bool("second", False)


def test_handles_stay_valid_as_registry_grows(registry):
    first = registry.declare_long("first", 7)
    for i in range(100):
        registry.declare_bool(f"filler{i}", False)
    registry.parse(["--first", "8"])
    assert first.name() == "first"
    assert first.value() == LongValue(8)


def test_records_are_ordered_copies(registry):
    registry.declare_bool("verbose", False)
    registry.declare_long("count", 3)
    records = registry.records()
    assert [r.name for r in records] == ["verbose", "count"]

    records[1].value.parse("4")
    assert registry.records()[1].value == LongValue(3)
    assert [r.name for r in registry] == ["verbose", "count"]


def test_find_by_name_or_alias(registry):
    registry.declare_bool("verbose", False)
    count = registry.declare_long("count", 0)
    assert registry.find("count").index == count.index
    assert registry.find("c").index == count.index
    assert registry.find("missing") is None


def test_duplicate_name_is_warned(registry, caplog):
    registry.declare_long("count", 0)
    with caplog.at_level(logging.WARNING, logger="argflags.registry"):
        registry.declare_long("count", 1)
    assert "already matches earlier flag 'count'" in caplog.text
    assert len(registry) == 2


def test_alias_collision_is_warned(registry, caplog):
    registry.declare_long("count", 0)
    with caplog.at_level(logging.WARNING, logger="argflags.registry"):
        registry.declare_string("color", "red")
    assert "'c' already matches" in caplog.text


def test_ignore_mode_defaults_on(registry):
    assert registry.ignore_prefix_enabled
    registry.set_ignore_mode(False)
    assert not registry.ignore_prefix_enabled
    assert not FlagRegistry(ignore_prefix_enabled=False).ignore_prefix_enabled


def test_concurrent_declarations():
    registry = FlagRegistry()
    handles = []

    def declare_batch(prefix):
        for i in range(20):
            handles.append(registry.declare_bool(f"{prefix}{i}", False))

    threads = [threading.Thread(target=declare_batch, args=(f"t{n}_",)) for n in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry) == 100
    assert sorted(h.index for h in handles) == list(range(100))
