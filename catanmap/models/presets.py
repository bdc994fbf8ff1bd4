"""Bundled map documents.

``STANDARD_MAP`` is the standard 19-tile board laid out on a 7x7
offset-square grid.  Row 0 is shifted toward +x, so the five land rows
(``y = 1..5``) hold 3, 4, 5, 4 and 3 tiles.  The nine harbours sit on the
surrounding ocean cells with their side facing a land tile::

    y=0      .  .  H0 .  H1 .  .
    y=1    .  .  T0 T1 T2 .  .
    y=2      H8 T3 T4 T5 T6 H2 .
    y=3    .  T7 T8 T9 T10 T11 H3
    y=4      H7 T12 T13 T14 T15 H4 .
    y=5    .  .  T16 T17 T18 .  .
    y=6      .  .  H6 .  H5 .  .
"""

from __future__ import annotations

import typing

from .map_document import MapDocument
from .serializers import decode_map_document

STANDARD_MAP: dict[str, typing.Any] = {
    'tileBank': {
        'field': 4,
        'pasture': 4,
        'forest': 4,
        'mesa': 3,
        'mountains': 3,
        'desert': 1,
    },
    'mapSize': [7, 7],
    'tilePlacement': [
        # y = 1
        [2, 1],
        [3, 1],
        [4, 1],
        # y = 2
        [1, 2],
        [2, 2],
        [3, 2],
        [4, 2],
        # y = 3
        [1, 3],
        [2, 3],
        [3, 3],
        [4, 3],
        [5, 3],
        # y = 4
        [1, 4],
        [2, 4],
        [3, 4],
        [4, 4],
        # y = 5
        [2, 5],
        [3, 5],
        [4, 5],
    ],
    'defaultTiles': [
        'mountains',
        'pasture',
        'forest',
        'field',
        'mesa',
        'pasture',
        'mesa',
        'field',
        'forest',
        'desert',
        'forest',
        'mountains',
        'forest',
        'mountains',
        'field',
        'pasture',
        'mesa',
        'field',
        'pasture',
    ],
    'fixedTiles': {
        'field': [],
        'pasture': [],
        'forest': [],
        'mesa': [],
        'mountains': [],
        'desert': [9],
    },
    'harbourPlacement': [
        {'position': [2, 0], 'side': 'se'},
        {'position': [4, 0], 'side': 'sw'},
        {'position': [5, 2], 'side': 'w'},
        {'position': [6, 3], 'side': 'w'},
        {'position': [5, 4], 'side': 'w'},
        {'position': [4, 6], 'side': 'nw'},
        {'position': [2, 6], 'side': 'ne'},
        {'position': [0, 4], 'side': 'e'},
        {'position': [0, 2], 'side': 'e'},
    ],
    'defaultHarbours': [
        'universal',
        'sheep',
        'universal',
        'ore',
        'universal',
        'wheat',
        'brick',
        'wood',
        'universal',
    ],
}


def standard_map_document() -> MapDocument:
    """Decode and return a fresh copy of the standard map."""
    return decode_map_document(STANDARD_MAP)
