"""Offset-square <-> axial hex coordinate conversion and screen geometry.

Offset convention
-----------------
Hexes are pointy-top and laid out in horizontal rows; ``y`` grows downward.
Row 0, and every other even row, is shifted half a hex toward +x relative to
the odd rows.  In the terminology of
https://www.redblobgames.com/grids/hexagons/#coordinates-offset this is the
"even-r" layout::

    y=0     (0,0) (1,0) (2,0)
    y=1  (0,1) (1,1) (2,1)
    y=2     (0,2) (1,2) (2,2)

Axial coordinates
-----------------
``r = y`` and ``q = x - (y + (y & 1)) // 2``.  The six neighbour directions
in axial space, keyed by hex side::

    e  (+1,  0)    w  (-1,  0)
    ne (+1, -1)    sw (-1, +1)
    nw ( 0, -1)    se ( 0, +1)

Everything outside this module reasons in axial space; the offset encoding
is only ever converted here.
"""

from __future__ import annotations

import logging
import math

import pydantic

from ..common import settings
from ..models.issues import InvalidCoordinate
from ..models.map_document import (
    AxialCoord,
    GridCoord,
    HexSide,
    HexVertex,
    MapDocument,
    MapSize,
)

logger = logging.getLogger(__name__)

# Sides in counter-clockwise order (on screen) starting from east.  Vertex i
# of a hex sits between side i and side i + 1.
SIDE_ORDER: list[HexSide] = [
    HexSide.EAST,
    HexSide.NORTH_EAST,
    HexSide.NORTH_WEST,
    HexSide.WEST,
    HexSide.SOUTH_WEST,
    HexSide.SOUTH_EAST,
]

VERTEX_ORDER: list[HexVertex] = [
    HexVertex.NORTH_EAST,
    HexVertex.NORTH,
    HexVertex.NORTH_WEST,
    HexVertex.SOUTH_WEST,
    HexVertex.SOUTH,
    HexVertex.SOUTH_EAST,
]

AXIAL_DIRECTIONS: dict[HexSide, tuple[int, int]] = {
    HexSide.EAST: (1, 0),
    HexSide.NORTH_EAST: (1, -1),
    HexSide.NORTH_WEST: (0, -1),
    HexSide.WEST: (-1, 0),
    HexSide.SOUTH_WEST: (-1, 1),
    HexSide.SOUTH_EAST: (0, 1),
}

OPPOSITE_SIDE: dict[HexSide, HexSide] = {
    side: SIDE_ORDER[(i + 3) % 6] for i, side in enumerate(SIDE_ORDER)
}

# Screen angles in degrees (y down, so negative angles point up).
_SIDE_ANGLES: dict[HexSide, float] = {
    side: -60.0 * i for i, side in enumerate(SIDE_ORDER)
}
_VERTEX_ANGLES: dict[HexVertex, float] = {
    vertex: -30.0 - 60.0 * i for i, vertex in enumerate(VERTEX_ORDER)
}

_SQRT3 = math.sqrt(3)

# ---------------------------------------------------------------------------
# Offset <-> axial
# ---------------------------------------------------------------------------


def offset_to_axial(coord: GridCoord) -> AxialCoord:
    """Convert an offset-square grid cell to its axial hex coordinate."""
    return AxialCoord(q=coord.x - (coord.y + (coord.y & 1)) // 2, r=coord.y)


def axial_to_offset(axial: AxialCoord) -> GridCoord:
    """Convert an axial hex coordinate back to its offset-square cell."""
    return GridCoord(x=axial.q + (axial.r + (axial.r & 1)) // 2, y=axial.r)


def axial_neighbour(axial: AxialCoord, side: HexSide) -> AxialCoord:
    dq, dr = AXIAL_DIRECTIONS[side]
    return AxialCoord(q=axial.q + dq, r=axial.r + dr)


def offset_neighbour(coord: GridCoord, side: HexSide) -> GridCoord:
    """Return the cell across *side* of *coord*; may lie outside the map."""
    return axial_to_offset(axial_neighbour(offset_to_axial(coord), side))


def axial_distance(a: AxialCoord, b: AxialCoord) -> int:
    """Number of hex steps between two axial coordinates."""
    return max(abs(a.q - b.q), abs(a.r - b.r), abs(a.s - b.s))


def in_bounds(coord: GridCoord, map_size: MapSize) -> bool:
    return 0 <= coord.x < map_size.width and 0 <= coord.y < map_size.height


def require_in_bounds(coord: GridCoord, map_size: MapSize) -> None:
    """Raise :class:`InvalidCoordinate` unless *coord* lies on the grid."""
    if not in_bounds(coord, map_size):
        raise InvalidCoordinate(coord.x, coord.y, map_size.width, map_size.height)


# ---------------------------------------------------------------------------
# Resolved geometry models
# ---------------------------------------------------------------------------


class Neighbour(pydantic.BaseModel):
    """An in-bounds neighbouring cell and the side it lies across."""

    model_config = pydantic.ConfigDict(frozen=True)

    side: HexSide
    position: GridCoord
    tile_id: int | None = None  # None for an ocean cell


class ResolvedCoordinate(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    position: GridCoord
    axial: AxialCoord
    neighbours: list[Neighbour]


class ResolvedTile(pydantic.BaseModel):
    """Geometry of one tile, keyed by its tile ID."""

    model_config = pydantic.ConfigDict(frozen=True)

    tile_id: int
    position: GridCoord
    axial: AxialCoord
    center: tuple[float, float]
    neighbours: list[Neighbour]

    def neighbour_tile_ids(self) -> list[int]:
        return [n.tile_id for n in self.neighbours if n.tile_id is not None]


class ResolvedHarbour(pydantic.BaseModel):
    """Geometry of one harbour, keyed by its harbour ID."""

    model_config = pydantic.ConfigDict(frozen=True)

    harbour_id: int
    position: GridCoord
    side: HexSide
    axial: AxialCoord
    on_tile_id: int | None  # tile at the harbour's own cell (None = ocean)
    facing: GridCoord  # cell across the harbour side, possibly off the map
    facing_tile_id: int | None
    anchor: tuple[float, float]  # midpoint of the harbour side on screen


def resolve_coordinate(
    coord: GridCoord,
    map_size: MapSize,
    occupancy: dict[GridCoord, int] | None = None,
) -> ResolvedCoordinate:
    """Resolve *coord* to axial form plus its in-bounds neighbours.

    Args:
        coord: Offset-square cell; must lie on the grid.
        map_size: Grid dimensions.
        occupancy: Optional cell -> tile ID lookup used to annotate neighbours.

    Raises:
        InvalidCoordinate: *coord* is outside the grid. Never clamped.
    """
    require_in_bounds(coord, map_size)
    occupancy = occupancy or {}
    neighbours = []
    for side in SIDE_ORDER:
        other = offset_neighbour(coord, side)
        if in_bounds(other, map_size):
            neighbours.append(
                Neighbour(side=side, position=other, tile_id=occupancy.get(other))
            )
    return ResolvedCoordinate(
        position=coord, axial=offset_to_axial(coord), neighbours=neighbours
    )


def tile_occupancy(document: MapDocument) -> dict[GridCoord, int]:
    """Return cell -> tile ID; the first tile wins on a duplicate cell."""
    occupancy: dict[GridCoord, int] = {}
    for tile in document.tiles:
        occupancy.setdefault(tile.position, tile.tile_id)
    return occupancy


def resolve_tiles(
    document: MapDocument, layout: HexLayout | None = None
) -> list[ResolvedTile]:
    """Resolve every tile of *document*, in tile ID order."""
    layout = layout or HexLayout.padded()
    occupancy = tile_occupancy(document)
    resolved = []
    for tile in document.tiles:
        rc = resolve_coordinate(tile.position, document.map_size, occupancy)
        resolved.append(
            ResolvedTile(
                tile_id=tile.tile_id,
                position=tile.position,
                axial=rc.axial,
                center=layout.center(tile.position),
                neighbours=rc.neighbours,
            )
        )
    logger.debug('Resolved %d tiles', len(resolved))
    return resolved


def resolve_harbours(
    document: MapDocument, layout: HexLayout | None = None
) -> list[ResolvedHarbour]:
    """Resolve every harbour of *document*, in harbour ID order."""
    layout = layout or HexLayout.padded()
    occupancy = tile_occupancy(document)
    resolved = []
    for harbour in document.harbours:
        require_in_bounds(harbour.position, document.map_size)
        facing = offset_neighbour(harbour.position, harbour.side)
        resolved.append(
            ResolvedHarbour(
                harbour_id=harbour.harbour_id,
                position=harbour.position,
                side=harbour.side,
                axial=offset_to_axial(harbour.position),
                on_tile_id=occupancy.get(harbour.position),
                facing=facing,
                facing_tile_id=occupancy.get(facing),
                anchor=layout.side_midpoint(harbour.position, harbour.side),
            )
        )
    return resolved


# ---------------------------------------------------------------------------
# Screen geometry
# ---------------------------------------------------------------------------


class HexLayout(pydantic.BaseModel):
    """Pointy-top screen layout.

    Attributes:
        size: Distance from a hex center to any of its corners, in pixels.
        origin_x: Screen x of the center of cell (0, 0).
        origin_y: Screen y of the center of cell (0, 0).
    """

    model_config = pydantic.ConfigDict(frozen=True)

    size: float = pydantic.Field(default_factory=lambda: settings.HEX_SIZE, gt=0)
    origin_x: float = 0.0
    origin_y: float = 0.0

    @classmethod
    def padded(cls, size: float | None = None) -> HexLayout:
        """Layout that keeps every hex of the grid on non-negative screen space.

        Odd rows sit half a hex left of cell (0, 0), so the origin is padded
        by one full hex width horizontally and one corner radius vertically.
        """
        size = size if size is not None else settings.HEX_SIZE
        return cls(size=size, origin_x=_SQRT3 * size, origin_y=size)

    @property
    def hex_width(self) -> float:
        """Width of a hex (flat side to flat side)."""
        return _SQRT3 * self.size

    @property
    def row_spacing(self) -> float:
        return 1.5 * self.size

    def axial_center(self, axial: AxialCoord) -> tuple[float, float]:
        x = self.origin_x + self.hex_width * (axial.q + axial.r / 2)
        y = self.origin_y + self.row_spacing * axial.r
        return (x, y)

    def center(self, coord: GridCoord) -> tuple[float, float]:
        """Screen center of an offset-square cell."""
        return self.axial_center(offset_to_axial(coord))

    def corners(self, coord: GridCoord) -> dict[HexVertex, tuple[float, float]]:
        """Screen position of each corner of the hex at *coord*."""
        cx, cy = self.center(coord)
        return {
            vertex: _polar(cx, cy, self.size, angle)
            for vertex, angle in _VERTEX_ANGLES.items()
        }

    def side_midpoint(self, coord: GridCoord, side: HexSide) -> tuple[float, float]:
        """Screen midpoint of one side of the hex at *coord*."""
        cx, cy = self.center(coord)
        return _polar(cx, cy, self.hex_width / 2, _SIDE_ANGLES[side])

    def canvas_size(self, map_size: MapSize) -> tuple[float, float]:
        """Screen extent needed to draw the whole grid with this layout."""
        width = self.origin_x + self.hex_width * (map_size.width - 0.5)
        height = self.origin_y + self.row_spacing * (map_size.height - 1) + self.size
        return (width, height)


def _polar(cx: float, cy: float, radius: float, degrees: float) -> tuple[float, float]:
    angle = math.radians(degrees)
    return (cx + radius * math.cos(angle), cy + radius * math.sin(angle))
