"""Controller limits, register strides and command values.

Addresses follow the controller's Modbus map. Several offsets were found
empirically against real hardware and disagree with the vendor document;
those are marked where they are defined.
"""

from __future__ import annotations

# =============================================================================
# TOPOLOGY LIMITS
# =============================================================================

MAX_PANELS = 8
MAX_BUSES = 16
MAX_BREAKERS_ON_BUS = 21
MAX_BREAKERS_ON_PANEL = 42

# =============================================================================
# ADDRESS CORRECTIONS
# =============================================================================

# 1-based breaker/zone position -> 0-based offset, plus one more: the
# controller answers one address below the documented base.
BREAKER_ADDRESS_CORRECTION = 2

# Buses only get the 0-basing correction. Not verified against hardware.
BUS_ADDRESS_CORRECTION = 1

# =============================================================================
# PER-BUS STRIDES (registers reserved per bus in each area)
# =============================================================================

DISCRETE_INPUT_STRIDE = 32
INPUT_REGISTER_STRIDE = 24
CONFIGURATION_REGISTER_STRIDE = 48
FILE_RECORD_STRIDE = 24

# =============================================================================
# FILE RECORDS (FC 20/21)
# =============================================================================

BREAKER_NAME_FILE = 5
BUS_NAME_FILE = 6
NAME_TAG_LENGTH = 16
# Sub-requests per Read/Write File Record PDU
FILE_RECORDS_PER_REQUEST = 8

# =============================================================================
# WRITE SESSION (vendor command interface)
# =============================================================================

COMMAND_ENABLE_REGISTER = 8200
CONFIG_MODE_REGISTER = 8020

COMMAND_ENABLE = 0x2222
CONFIG_ENABLE = 0xEA60
CONFIG_VERIFY_SAVE = 0xEAC4
COMMAND_DISABLE = 0x0000

# =============================================================================
# CONNECTION DEFAULTS
# =============================================================================

DEFAULT_PORT = 502
DEFAULT_UNIT_ID = 1
DEFAULT_TIMEOUT = 3.0
DEFAULT_CONNECT_TIMEOUT = 0.5
