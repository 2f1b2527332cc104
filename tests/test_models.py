"""Tests for destinations, options and bindings (core/models.py)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

import pytest

from envbind.core.kinds import Int16
from envbind.core.models import UNSET, AttrRef, Binding, Options, Var
from envbind.exceptions import EnvbindError, UnsupportedTypeError


@dataclass
class ServerConfig:
    host: str = "localhost"
    port: Int16 = 8080
    timeout: timedelta = timedelta(seconds=30)
    tags: list[str] = field(default_factory=list)


class Untyped:
    def __init__(self) -> None:
        self.anything = None


# ---------------------------------------------------------------------------
# Var
# ---------------------------------------------------------------------------

class TestVar:
    def test_initial_value_defaults_to_none(self) -> None:
        cell = Var(int)
        assert cell.value is None
        assert cell.get() is None

    def test_set_and_get(self) -> None:
        cell = Var(int, 1)
        cell.set(2)
        assert cell.get() == 2
        assert cell.value == 2

    def test_target_type(self) -> None:
        assert Var(list[int]).target_type == list[int]

    def test_repr(self) -> None:
        assert repr(Var(int, 3)) == "Var(<class 'int'>, 3)"


# ---------------------------------------------------------------------------
# AttrRef
# ---------------------------------------------------------------------------

class TestAttrRef:
    def test_type_from_annotations(self) -> None:
        ref = AttrRef(ServerConfig(), "port")
        assert ref.target_type == Int16

    def test_get_and_set(self) -> None:
        config = ServerConfig()
        ref = AttrRef(config, "host")
        assert ref.get() == "localhost"
        ref.set("example.org")
        assert config.host == "example.org"

    def test_explicit_type(self) -> None:
        obj = Untyped()
        ref = AttrRef(obj, "anything", int)
        assert ref.target_type is int

    def test_missing_annotation_raises(self) -> None:
        with pytest.raises(EnvbindError, match="has no type annotation"):
            AttrRef(Untyped(), "anything")


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

class TestOptions:
    def test_defaults(self) -> None:
        opts: Options[int] = Options()
        assert opts.required is False
        assert opts.default is UNSET

    def test_unset_is_falsy_singleton(self) -> None:
        assert not UNSET
        assert type(UNSET)() is UNSET

    @pytest.mark.parametrize(
        ("hint", "zero"),
        [(int, 0), (str, ""), (list[str], []), (timedelta, timedelta(0))],
    )
    def test_fallback_is_zero_value_when_unset(self, hint: object, zero: object) -> None:
        assert Options().fallback_for(hint) == zero

    def test_fallback_uses_default(self) -> None:
        assert Options(default=8080).fallback_for(int) == 8080

    def test_fallback_for_unsupported_type_raises(self) -> None:
        with pytest.raises(UnsupportedTypeError, match="unsupported destination type: object"):
            Options().fallback_for(object)

    def test_fallback_copies_mutable_default(self) -> None:
        default = ["a"]
        fallback = Options(default=default).fallback_for(list[str])
        assert fallback == ["a"]
        assert fallback is not default

    def test_frozen(self) -> None:
        opts = Options(required=True)
        with pytest.raises(AttributeError):
            opts.required = False  # type: ignore[misc]


class TestBinding:
    def test_fields(self) -> None:
        cell = Var(int)
        binding = Binding("PORT", cell, Options(required=True))
        assert binding.name == "PORT"
        assert binding.destination is cell
        assert binding.options.required is True
