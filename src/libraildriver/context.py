"""
Connection context for the RailDriver control surface.

A :class:`Context` activates the surface when it is created and
deactivates it when it is closed, leaves a ``with`` block, or is garbage
collected.  Every channel access goes through an activation guard::

    with Context() as ctx:
        ctx.set(Channel.THROTTLE, 50)
        speed = ctx.get(Channel.SPEEDOMETER)

The surface's connected flag is process-wide, so activation is counted
per surface: the first context on a surface switches it on and the last
one released switches it off.
"""

from __future__ import annotations

import logging
import operator
import threading
import weakref
from enum import Enum

from .catalog import Channel, Kind, channel_code, kind_code
from .config import RailDriverConfig
from .constants import ACTIVATE, DEACTIVATE, MAX_VALUE, MIN_VALUE
from .exceptions import NotConnectedError
from .native import NativeSurface, load_library

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Activation state of a :class:`Context`."""

    INACTIVE = "inactive"
    ACTIVE = "active"


# ---------------------------------------------------------------------------
# Shared activation
# ---------------------------------------------------------------------------


class _ActivationRegistry:
    """Reference-counts contexts per surface.

    Keyed by object identity; the registry keeps each active surface alive
    until its last holder is released.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._holders: dict[int, tuple[NativeSurface, int]] = {}

    def acquire(self, surface: NativeSurface) -> None:
        with self._lock:
            _, count = self._holders.get(id(surface), (surface, 0))
            if count == 0:
                logger.info("Activating RailDriver surface")
                surface.activate(ACTIVATE)
            self._holders[id(surface)] = (surface, count + 1)

    def release(self, surface: NativeSurface) -> None:
        with self._lock:
            _, count = self._holders.pop(id(surface), (surface, 0))
            if count > 1:
                self._holders[id(surface)] = (surface, count - 1)
                return
            logger.info("Deactivating RailDriver surface")
            surface.activate(DEACTIVATE)

    def holders(self, surface: NativeSurface) -> int:
        """Number of live contexts currently holding *surface* active."""
        with self._lock:
            return self._holders.get(id(surface), (surface, 0))[1]


_activations = _ActivationRegistry()


def active_holders(surface: NativeSurface) -> int:
    """Return how many open contexts are keeping *surface* activated."""
    return _activations.holders(surface)


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


class Context:
    """Activated access to the RailDriver control surface.

    Args:
        surface: The native surface to drive.  Defaults to the DLL found
            through :meth:`RailDriverConfig.from_env`.

    Raises:
        LibraryError: If no surface is given and the DLL cannot be loaded.
    """

    def __init__(self, surface: NativeSurface | None = None) -> None:
        if surface is None:
            surface = load_library(RailDriverConfig.from_env().resolve_library())
        self._surface = surface
        self._state = ConnectionState.INACTIVE

        _activations.acquire(surface)
        self._state = ConnectionState.ACTIVE
        # Does not reference self, so it also fires on garbage collection.
        self._release = weakref.finalize(self, _activations.release, surface)

    # -- Context manager ----------------------------------------------------

    def __enter__(self) -> Context:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # -- Lifecycle ----------------------------------------------------------

    def close(self) -> None:
        """Release this context's activation (safe to call multiple times)."""
        self._release()
        self._state = ConnectionState.INACTIVE

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        """Return ``True`` while this context holds the surface active."""
        return self._state is ConnectionState.ACTIVE

    # -- Channel access -----------------------------------------------------

    def get(self, channel: Channel, kind: Kind = Kind.CURRENT) -> float:
        """Return the *kind* reading of *channel*.

        The native value is returned as-is; a zero may be a real reading
        or the surface's answer for an unsupported channel.

        Raises:
            NotConnectedError: If the context has been closed.
            TypeError: If *channel* is not a :class:`Channel` or *kind* not a
                :class:`Kind`.
        """
        self._require_active()
        ch_code = channel_code(channel)
        k_code = kind_code(kind)
        value = self._surface.read(ch_code, k_code)
        logger.debug("GET %s/%s (%d, %d) -> %r", channel.name, kind.name, ch_code, k_code, value)
        return value

    def set(self, channel: Channel, value: int) -> None:
        """Write the integer *value* to *channel*.

        Raises:
            NotConnectedError: If the context has been closed.
            TypeError: If *channel* is not a :class:`Channel` or *value* is
                not an integer.
            ValueError: If *value* does not fit in a 32-bit signed int.
        """
        self._require_active()
        ch_code = channel_code(channel)
        value = operator.index(value)
        if not (MIN_VALUE <= value <= MAX_VALUE):
            raise ValueError(f"Value must be {MIN_VALUE}..{MAX_VALUE}, got {value}")
        logger.debug("SET %s (%d) <- %d", channel.name, ch_code, value)
        self._surface.write(ch_code, value)

    def limits(self, channel: Channel) -> tuple[float, float]:
        """Return ``(min, max)`` for *channel*."""
        return self.get(channel, Kind.MIN), self.get(channel, Kind.MAX)

    # -- Internal -----------------------------------------------------------

    def _require_active(self) -> None:
        if self._state is not ConnectionState.ACTIVE:
            raise NotConnectedError("RailDriver context is not connected.")

    def __repr__(self) -> str:
        return f"<Context state={self._state.value}>"


# ---------------------------------------------------------------------------
# Convenience factory
# ---------------------------------------------------------------------------


def get_context(config: RailDriverConfig | None = None) -> Context:
    """Return a context on the DLL described by *config* (use as a context manager).

    Example::

        with get_context(load_config("config/raildriver.yaml")) as ctx:
            ctx.set(Channel.THROTTLE, 50)
    """
    if config is None:
        config = RailDriverConfig.from_env()
    return Context(load_library(config.resolve_library()))
