"""Tests for pioide.core.result module."""

from __future__ import annotations

import pytest

from pioide.core.result import Err, Ok, Result, is_err, is_ok


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"{n} is odd")
    return Ok(n // 2)


class TestOk:
    def test_accessors(self) -> None:
        result = Ok(3)
        assert result.is_ok() and not result.is_err()
        assert result.unwrap() == 3
        assert result.unwrap_or(0) == 3

    def test_map(self) -> None:
        assert Ok(2).map(lambda v: v * 10) == Ok(20)


class TestErr:
    def test_accessors(self) -> None:
        result: Err[str] = Err("boom")
        assert result.is_err() and not result.is_ok()
        assert result.unwrap_or(7) == 7

    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="boom"):
            Err("boom").unwrap()

    def test_map_is_noop(self) -> None:
        err: Err[str] = Err("boom")
        assert err.map(lambda v: v) is err


class TestTypeGuards:
    def test_is_ok_is_err(self) -> None:
        assert is_ok(_half(4))
        assert is_err(_half(3))

    def test_pattern_matching(self) -> None:
        match _half(3):
            case Ok(value):
                pytest.fail(f"unexpected value {value}")
            case Err(error):
                assert error == "3 is odd"
