"""Tests for the built-in scalar table."""

from datetime import datetime
from uuid import UUID

import pytest

from gql_provider.core.scalars import BUILTIN_SCALARS, extend_known_types


class TestBuiltinScalars:
    """Tests for BUILTIN_SCALARS."""

    def test_standard_scalars(self):
        assert dict(BUILTIN_SCALARS) == {
            "Int": int,
            "Float": float,
            "String": str,
            "Boolean": bool,
            "ID": str,
        }

    def test_read_only(self):
        with pytest.raises(TypeError):
            BUILTIN_SCALARS["DateTime"] = datetime


class TestExtendKnownTypes:
    """Tests for extend_known_types."""

    def test_adds_types(self):
        known = extend_known_types(BUILTIN_SCALARS, {"DateTime": datetime, "UUID": UUID})
        assert known["DateTime"] is datetime
        assert known["UUID"] is UUID
        assert known["Int"] is int

    def test_overrides_base(self):
        known = extend_known_types(BUILTIN_SCALARS, {"ID": int})
        assert known["ID"] is int
        assert BUILTIN_SCALARS["ID"] is str

    def test_result_is_read_only(self):
        known = extend_known_types(BUILTIN_SCALARS, {})
        with pytest.raises(TypeError):
            known["X"] = str
