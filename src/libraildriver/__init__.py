"""Typed access to the Train Simulator RailDriver control surface"""

from .catalog import Channel, ChannelGroup, Kind, channel_code, kind_code, wire_code_of
from .config import RailDriverConfig, load_config
from .context import ConnectionState, Context, active_holders, get_context
from .exceptions import (
    ConfigError,
    LibraryError,
    NotConnectedError,
    RailDriverError,
)
from .native import NativeSurface, RailDriverLibrary, locate_library

__all__ = [
    "Channel",
    "ChannelGroup",
    "ConfigError",
    "ConnectionState",
    "Context",
    "Kind",
    "LibraryError",
    "NativeSurface",
    "NotConnectedError",
    "RailDriverConfig",
    "RailDriverError",
    "RailDriverLibrary",
    "active_holders",
    "channel_code",
    "get_context",
    "kind_code",
    "load_config",
    "locate_library",
    "wire_code_of",
]
__version__ = "0.1.0"
