"""Shared library settings read from environment variables."""

import os

_FALSE_VALUES = ('0', 'false', 'no', 'off')

# When true, a fixedTiles object missing some resource keys is accepted and the
# missing keys are treated as empty lists (reported as a warning).
ALLOW_PARTIAL_FIXED_TILES: bool = (
    os.environ.get('CATANMAP_ALLOW_PARTIAL_FIXED_TILES', 'true').lower()
    not in _FALSE_VALUES
)

# Default hex size (center to corner) used for screen geometry.
HEX_SIZE: float = float(os.environ.get('CATANMAP_HEX_SIZE', '40'))

LOG_LEVEL: str = os.environ.get('CATANMAP_LOG_LEVEL', 'INFO').upper()
