"""Shared runtime constants for the RailDriver control surface.

This is the canonical source of truth for DLL names, exported symbols and
environment variables.  Other modules should import from here rather than
defining their own copies.
"""

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Native library
# ---------------------------------------------------------------------------

DLL_NAME_32 = "RailDriver.dll"
DLL_NAME_64 = "RailDriver64.dll"

SYM_SET_CONNECTED = "SetRailDriverConnected"
SYM_GET_VALUE = "GetRailSimValue"
SYM_SET_VALUE = "SetRailSimValue"

ACTIVATE = True
DEACTIVATE = False

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------

ENV_DLL_PATH = "RAILDRIVER_DLL"
ENV_PLUGINS_DIR = "RAILWORKS_PLUGINS"
ENV_LOG_LEVEL = "RAILDRIVER_LOG_LEVEL"

DEFAULT_PLUGINS_DIR = (
    Path(os.environ.get("PROGRAMFILES(X86)", r"C:\Program Files (x86)"))
    / "Steam"
    / "steamapps"
    / "common"
    / "RailWorks"
    / "plugins"
)
DEFAULT_LOG_LEVEL = "INFO"

# ---------------------------------------------------------------------------
# Value limits
# ---------------------------------------------------------------------------

# SetRailSimValue takes a 32-bit C int
MIN_VALUE = -(2**31)
MAX_VALUE = 2**31 - 1
