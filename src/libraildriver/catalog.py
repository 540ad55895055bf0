"""
Channel catalog: symbolic names for every value exposed by the RailDriver
control surface, and the mapping to the integer codes the DLL expects.

Wire codes are written out explicitly on each member.  They are fixed by
the native surface, so inserting or reordering members here must never
change another member's code.  ``@unique`` rejects duplicated codes at
import time.

Only the functions at the bottom of this module turn a symbol into a raw
code; the context uses the typed :func:`channel_code` and :func:`kind_code`,
so a :class:`Kind` can never be sent as a channel.  The rest of the package
passes :class:`Channel` and :class:`Kind` values around.
"""

from __future__ import annotations

from enum import Enum, unique

from .exceptions import ConfigError

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ChannelGroup(Enum):
    """Descriptive grouping of channels."""

    CONTROL = "control"
    EVENT = "event"
    CAMERA = "camera"


@unique
class Channel(Enum):
    """A train control, simulator event, or camera switch."""

    # Cab controls
    REVERSER = 0  # usually 1 = F, 0 = N, -1 = R
    THROTTLE = 1
    COMBINED_THROTTLE = 2  # -100 (brake) .. 100 (power)
    GEAR_LEVER = 3
    TRAIN_BRAKE = 4
    LOCOMOTIVE_BRAKE = 5
    DYNAMIC_BRAKE = 6
    EMERGENCY_BRAKE = 7
    HAND_BRAKE = 8
    WARNING_SYSTEM_RESET = 9
    START_STOP_ENGINE = 10
    HORN = 11
    WIPERS = 12
    SANDER = 13
    HEADLIGHTS = 14
    PANTOGRAPH = 15
    FIREBOX_DOOR = 16
    EXHAUST_INJECTOR_STEAM = 17
    EXHAUST_INJECTOR_WATER = 18
    LIVE_INJECTOR_STEAM = 19
    LIVE_INJECTOR_WATER = 20
    DAMPER = 21
    BLOWER = 22
    STOKING = 23
    CYLINDER_COCK = 24
    WATERSCOOP = 25
    SMALL_COMPRESSOR = 26
    AWS = 27  # read only
    AWS_RESET = 28  # write only
    STARTUP = 29
    SPEEDOMETER = 30  # read only

    # Simulator events, triggered by writing 1
    PROMPT_SAVE = 31
    TOGGLE_LABELS = 32
    TOGGLE_2D_MAP = 33
    TOGGLE_HUD = 34
    TOGGLE_QUT = 35
    PAUSE = 36
    DRIVER_GUIDE = 37
    TOGGLE_RV_NUMBER = 38
    DIALOG_ASSIGNMENT = 39
    SWITCH_JUNCTION_AHEAD = 40
    SWITCH_JUNCTION_BEHIND = 41
    LOAD_CARGO = 42
    UNLOAD_CARGO = 43
    PASS_AT_DANGER_AHEAD = 44
    PASS_AT_DANGER_BEHIND = 45
    MANUAL_COUPLE = 46

    # Cameras, switched to by writing 1
    CAB_CAMERA = 47
    FOLLOW_CAMERA = 48
    HEAD_OUT_CAMERA = 49
    REAR_CAMERA = 50
    TRACK_SIDE_CAMERA = 51
    CARRIAGE_CAMERA = 52
    COUPLING_CAMERA = 53
    YARD_CAMERA = 54
    SWITCH_TO_NEXT_FRONT_CAB = 55
    SWITCH_TO_NEXT_REAR_CAB = 56
    FREE_CAMERA = 57

    @property
    def group(self) -> ChannelGroup:
        """The :class:`ChannelGroup` this channel belongs to."""
        if self in _EVENT_CHANNELS:
            return ChannelGroup.EVENT
        if self in _CAMERA_CHANNELS:
            return ChannelGroup.CAMERA
        return ChannelGroup.CONTROL

    @classmethod
    def from_name(cls, name: str) -> Channel:
        """Look up a channel by name, ignoring case and underscores.

        ``"TrainBrake"``, ``"train_brake"`` and ``"TRAIN_BRAKE"`` all
        resolve to :attr:`Channel.TRAIN_BRAKE`.

        Raises:
            ConfigError: If no channel has that name.
        """
        key = _normalise(name)
        try:
            return _CHANNELS_BY_KEY[key]
        except KeyError:
            raise ConfigError(f"Unknown channel name {name!r}") from None


@unique
class Kind(Enum):
    """Which reading of a channel a ``get`` returns."""

    CURRENT = 0
    MIN = 1
    MAX = 2


# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

_EVENT_CHANNELS = frozenset(
    {
        Channel.PROMPT_SAVE,
        Channel.TOGGLE_LABELS,
        Channel.TOGGLE_2D_MAP,
        Channel.TOGGLE_HUD,
        Channel.TOGGLE_QUT,
        Channel.PAUSE,
        Channel.DRIVER_GUIDE,
        Channel.TOGGLE_RV_NUMBER,
        Channel.DIALOG_ASSIGNMENT,
        Channel.SWITCH_JUNCTION_AHEAD,
        Channel.SWITCH_JUNCTION_BEHIND,
        Channel.LOAD_CARGO,
        Channel.UNLOAD_CARGO,
        Channel.PASS_AT_DANGER_AHEAD,
        Channel.PASS_AT_DANGER_BEHIND,
        Channel.MANUAL_COUPLE,
    }
)

_CAMERA_CHANNELS = frozenset(
    {
        Channel.CAB_CAMERA,
        Channel.FOLLOW_CAMERA,
        Channel.HEAD_OUT_CAMERA,
        Channel.REAR_CAMERA,
        Channel.TRACK_SIDE_CAMERA,
        Channel.CARRIAGE_CAMERA,
        Channel.COUPLING_CAMERA,
        Channel.YARD_CAMERA,
        Channel.SWITCH_TO_NEXT_FRONT_CAB,
        Channel.SWITCH_TO_NEXT_REAR_CAB,
        Channel.FREE_CAMERA,
    }
)


def _normalise(name: str) -> str:
    return name.replace("_", "").replace("-", "").strip().lower()


_CHANNELS_BY_KEY = {_normalise(ch.name): ch for ch in Channel}


# ---------------------------------------------------------------------------
# Marshalling
# ---------------------------------------------------------------------------


def wire_code_of(member: Channel | Kind) -> int:
    """Return the integer code the native surface expects for *member*.

    Raises:
        TypeError: If *member* is not a :class:`Channel` or :class:`Kind`.
    """
    if not isinstance(member, (Channel, Kind)):
        raise TypeError(f"Expected Channel or Kind, got {type(member).__name__}")
    return member.value


def channel_code(channel: Channel) -> int:
    """Return the wire code for *channel*, rejecting anything else.

    Raises:
        TypeError: If *channel* is not a :class:`Channel` (e.g. a :class:`Kind`).
    """
    if not isinstance(channel, Channel):
        raise TypeError(f"Expected Channel, got {type(channel).__name__}")
    return channel.value


def kind_code(kind: Kind) -> int:
    """Return the wire code for *kind*, rejecting anything else.

    Raises:
        TypeError: If *kind* is not a :class:`Kind` (e.g. a :class:`Channel`).
    """
    if not isinstance(kind, Kind):
        raise TypeError(f"Expected Kind, got {type(kind).__name__}")
    return kind.value
