"""
ctypes binding for the RailDriver DLL shipped with Train Simulator.

Handles locating the DLL that matches the interpreter's architecture,
loading it, and declaring the three exported functions.  Knows nothing
about channel names or activation bookkeeping; that's
:mod:`~libraildriver.catalog` and :mod:`~libraildriver.context`'s job.

Typical usage (via :class:`~libraildriver.context.Context`)::

    library = RailDriverLibrary(locate_library(plugins_dir))
    library.open()
    library.activate(True)
    speed = library.read(30, 0)
"""

from __future__ import annotations

import ctypes
import logging
import struct
import threading
from pathlib import Path
from typing import Protocol

from .constants import (
    DLL_NAME_32,
    DLL_NAME_64,
    SYM_GET_VALUE,
    SYM_SET_CONNECTED,
    SYM_SET_VALUE,
)
from .exceptions import LibraryError

logger = logging.getLogger(__name__)


class NativeSurface(Protocol):
    """The three calls the control surface offers.

    :class:`RailDriverLibrary` implements this over the real DLL; tests
    substitute a recording double.
    """

    def activate(self, on: bool) -> None: ...

    def read(self, channel_code: int, kind_code: int) -> float: ...

    def write(self, channel_code: int, value: int) -> None: ...


# ---------------------------------------------------------------------------
# Locating the DLL
# ---------------------------------------------------------------------------


def _process_is_64bit() -> bool:
    return struct.calcsize("P") * 8 == 64


def locate_library(plugins_dir: str | Path) -> Path:
    """Return the RailDriver DLL in *plugins_dir* matching this interpreter.

    A 64-bit Python needs ``RailDriver64.dll``; a 32-bit one needs
    ``RailDriver.dll``.

    Raises:
        LibraryError: If the matching DLL is missing.  The message names
            the other architecture's DLL when only that one is present.
    """
    base = Path(plugins_dir)
    is_64 = _process_is_64bit()
    want = base / (DLL_NAME_64 if is_64 else DLL_NAME_32)
    if want.exists():
        return want

    other = base / (DLL_NAME_32 if is_64 else DLL_NAME_64)
    if other.exists():
        arch = "64" if is_64 else "32"
        raise LibraryError(
            f"Found {other.name} in {base} but this Python is {arch}-bit; "
            f"{want.name} is required"
        )
    raise LibraryError(f"{want.name} not found in {base}")


# ---------------------------------------------------------------------------
# Binding
# ---------------------------------------------------------------------------


class RailDriverLibrary:
    """The RailDriver DLL loaded through ctypes.

    Args:
        path: Path to ``RailDriver.dll`` or ``RailDriver64.dll``.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._dll: ctypes.CDLL | None = None

    # -- Lifecycle ----------------------------------------------------------

    def open(self) -> None:
        """Load the DLL and declare the exported function signatures.

        Raises:
            LibraryError: If the DLL cannot be loaded or lacks a symbol.
        """
        logger.info("Loading RailDriver library %s", self.path)
        try:
            dll = ctypes.CDLL(str(self.path))
            set_connected = getattr(dll, SYM_SET_CONNECTED)
            get_value = getattr(dll, SYM_GET_VALUE)
            set_value = getattr(dll, SYM_SET_VALUE)
        except (OSError, AttributeError) as exc:
            raise LibraryError(f"Cannot load {self.path}: {exc}") from exc

        set_connected.argtypes = [ctypes.c_bool]
        set_connected.restype = None
        get_value.argtypes = [ctypes.c_int, ctypes.c_int]
        get_value.restype = ctypes.c_float
        set_value.argtypes = [ctypes.c_int, ctypes.c_int]
        set_value.restype = None
        self._dll = dll

    @property
    def is_open(self) -> bool:
        """Return ``True`` once the DLL has been loaded."""
        return self._dll is not None

    # -- Native calls -------------------------------------------------------

    def activate(self, on: bool) -> None:
        getattr(self._require_open(), SYM_SET_CONNECTED)(bool(on))

    def read(self, channel_code: int, kind_code: int) -> float:
        return float(getattr(self._require_open(), SYM_GET_VALUE)(channel_code, kind_code))

    def write(self, channel_code: int, value: int) -> None:
        getattr(self._require_open(), SYM_SET_VALUE)(channel_code, value)

    # -- Internal -----------------------------------------------------------

    def _require_open(self) -> ctypes.CDLL:
        if self._dll is None:
            raise LibraryError(f"{self.path.name} not loaded; call open() first.")
        return self._dll


_loaded: dict[Path, RailDriverLibrary] = {}
_loaded_lock = threading.Lock()


def load_library(path: str | Path) -> RailDriverLibrary:
    """Return the opened library at *path*, loading it on first use.

    Every caller asking for the same file gets the same object, so all
    contexts in the process share one activation count.
    """
    key = Path(path).resolve()
    with _loaded_lock:
        library = _loaded.get(key)
        if library is None:
            library = RailDriverLibrary(key)
            library.open()
            _loaded[key] = library
        return library
