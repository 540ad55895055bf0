"""Shared pytest fixtures for RailDriver tests."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from libraildriver import Context
from libraildriver.native import RailDriverLibrary


class FakeSurface:
    """Lightweight stand-in for the RailDriver DLL.

    Implements :class:`~libraildriver.native.NativeSurface` and records
    every native call in :attr:`calls` as a tuple, e.g.
    ``("activate", True)``, ``("read", 30, 0)`` or ``("write", 1, 50)``.

    Reads return :attr:`reading` unless a per-code value has been staged
    with :meth:`set_reading`.
    """

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.reading: float = 0.0
        self._readings: dict[tuple[int, int], float] = {}

    # -- Helpers for tests --------------------------------------------------

    def set_reading(self, channel_code: int, kind_code: int, value: float) -> None:
        """Stage the value returned for one ``(channel, kind)`` pair."""
        self._readings[(channel_code, kind_code)] = value

    def native_calls(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]

    # -- NativeSurface interface --------------------------------------------

    def activate(self, on: bool) -> None:
        self.calls.append(("activate", on))

    def read(self, channel_code: int, kind_code: int) -> float:
        self.calls.append(("read", channel_code, kind_code))
        return self._readings.get((channel_code, kind_code), self.reading)

    def write(self, channel_code: int, value: int) -> None:
        self.calls.append(("write", channel_code, value))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_surface() -> FakeSurface:
    """Return a fresh ``FakeSurface`` instance."""
    return FakeSurface()


@pytest.fixture()
def context(fake_surface: FakeSurface):
    """Return an active ``Context`` wired to a fake surface."""
    ctx = Context(fake_surface)
    # Reset so tests don't see the activation
    fake_surface.calls.clear()
    yield ctx
    ctx.close()


@pytest.fixture()
def fake_dll() -> MagicMock:
    """Return a mock standing in for a loaded ``ctypes.CDLL``."""
    dll = MagicMock()
    dll.GetRailSimValue.return_value = 0.0
    return dll


@pytest.fixture()
def library(fake_dll: MagicMock, tmp_path) -> RailDriverLibrary:
    """Return a ``RailDriverLibrary`` opened against a mock DLL."""
    with patch("libraildriver.native.ctypes.CDLL", return_value=fake_dll):
        lib = RailDriverLibrary(tmp_path / "RailDriver64.dll")
        lib.open()
        return lib
