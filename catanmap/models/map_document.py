"""Catan map document models.

Two layers live here:

* ``RawMapDocument`` mirrors the wire format exactly (camelCase keys, tile and
  harbour identity implied by array position).
* ``MapDocument`` is the decoded aggregate handed to validators, the
  coordinate resolver and the resource assigner.  Every tile and harbour
  carries an explicit integer ID attached once at decode time.

Grid coordinates are *offset-square* coordinates: ``(x, y)`` indexes a square
array whose rows are visually shifted to form a hex grid.  Conversion to
axial hex coordinates lives in :mod:`catanmap.geometry.coordinates`.
"""

from __future__ import annotations

import enum

import pydantic


class ResourceType(enum.StrEnum):
    """Terrain resource type of a tile."""

    FIELD = 'field'  # produces wheat
    PASTURE = 'pasture'  # produces sheep
    FOREST = 'forest'  # produces wood
    MESA = 'mesa'  # produces brick
    MOUNTAINS = 'mountains'  # produces ore
    DESERT = 'desert'  # produces nothing


class HarbourType(enum.StrEnum):
    """Harbour types: universal 3:1 or specific resource 2:1."""

    UNIVERSAL = 'universal'
    WHEAT = 'wheat'
    SHEEP = 'sheep'
    WOOD = 'wood'
    ORE = 'ore'
    BRICK = 'brick'


class HexSide(enum.StrEnum):
    """The six sides of a pointy-top hex."""

    NORTH_WEST = 'nw'
    NORTH_EAST = 'ne'
    WEST = 'w'
    EAST = 'e'
    SOUTH_WEST = 'sw'
    SOUTH_EAST = 'se'


class HexVertex(enum.StrEnum):
    """The six corners of a pointy-top hex."""

    NORTH = 'n'
    NORTH_WEST = 'nw'
    NORTH_EAST = 'ne'
    SOUTH_WEST = 'sw'
    SOUTH_EAST = 'se'
    SOUTH = 's'


# Harbour type that trades each resource at 2:1 (desert has none).
RESOURCE_HARBOUR: dict[ResourceType, HarbourType] = {
    ResourceType.FIELD: HarbourType.WHEAT,
    ResourceType.PASTURE: HarbourType.SHEEP,
    ResourceType.FOREST: HarbourType.WOOD,
    ResourceType.MESA: HarbourType.BRICK,
    ResourceType.MOUNTAINS: HarbourType.ORE,
}


class GridCoord(pydantic.BaseModel):
    """A cell on the offset-square grid.

    Bounds are not enforced here; the placement validator reports
    out-of-bounds cells and the coordinate resolver refuses them.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    x: int
    y: int

    @classmethod
    def of(cls, pair: tuple[int, int] | list[int]) -> GridCoord:
        """Build a coordinate from an ``[x, y]`` pair."""
        x, y = pair
        return cls(x=x, y=y)

    def as_pair(self) -> tuple[int, int]:
        return (self.x, self.y)


class AxialCoord(pydantic.BaseModel):
    """Axial hex coordinate. The implied cube coordinate is ``(q, r, -q - r)``."""

    model_config = pydantic.ConfigDict(frozen=True)

    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r

    def as_cube(self) -> tuple[int, int, int]:
        return (self.q, self.r, self.s)


class MapSize(pydantic.BaseModel):
    """Grid dimensions; valid cells are ``[0, width) x [0, height)``."""

    model_config = pydantic.ConfigDict(frozen=True)

    width: int
    height: int


class Tile(pydantic.BaseModel):
    """A playable hex cell. ``tile_id`` is its index in ``tilePlacement``."""

    model_config = pydantic.ConfigDict(frozen=True)

    tile_id: int
    position: GridCoord


class Harbour(pydantic.BaseModel):
    """A harbour attached to one side of a cell (land or ocean)."""

    model_config = pydantic.ConfigDict(frozen=True)

    harbour_id: int
    position: GridCoord
    side: HexSide


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------


class RawHarbourPlacement(pydantic.BaseModel):
    """One ``harbourPlacement`` entry as it appears on the wire."""

    model_config = pydantic.ConfigDict(extra='forbid')

    position: tuple[int, int]
    side: HexSide


class RawFixedTiles(pydantic.BaseModel):
    """The ``fixedTiles`` object.

    Keys are optional on the wire so that an incomplete object can be reported
    by the placement validator rather than rejected during decoding.
    """

    model_config = pydantic.ConfigDict(extra='forbid')

    field: list[int] | None = None
    pasture: list[int] | None = None
    forest: list[int] | None = None
    mesa: list[int] | None = None
    mountains: list[int] | None = None
    desert: list[int] | None = None


class RawMapDocument(pydantic.BaseModel):
    """The serialized map document exactly as authored."""

    model_config = pydantic.ConfigDict(populate_by_name=True, extra='forbid')

    tile_bank: dict[ResourceType, int] = pydantic.Field(alias='tileBank')
    map_size: tuple[int, int] = pydantic.Field(alias='mapSize')
    tile_placement: list[tuple[int, int]] = pydantic.Field(alias='tilePlacement')
    default_tiles: list[ResourceType] = pydantic.Field(alias='defaultTiles')
    fixed_tiles: RawFixedTiles | None = pydantic.Field(
        default=None, alias='fixedTiles'
    )
    harbour_placement: list[RawHarbourPlacement] = pydantic.Field(
        alias='harbourPlacement'
    )
    default_harbours: list[HarbourType] = pydantic.Field(alias='defaultHarbours')


# ---------------------------------------------------------------------------
# Decoded aggregate
# ---------------------------------------------------------------------------


class MapDocument(pydantic.BaseModel):
    """The decoded map document.

    Immutable for the whole validation/resolution pass.  ``tile_bank`` always
    holds all six resource keys; ``fixed_tiles`` holds only the keys present in
    the source (``None`` when the source had no ``fixedTiles`` object).
    """

    model_config = pydantic.ConfigDict(frozen=True)

    tile_bank: dict[ResourceType, int]
    map_size: MapSize
    tiles: list[Tile]
    default_tiles: list[ResourceType]
    fixed_tiles: dict[ResourceType, list[int]] | None = None
    harbours: list[Harbour]
    default_harbours: list[HarbourType]

    @classmethod
    def from_raw(cls, raw: RawMapDocument) -> MapDocument:
        """Attach explicit IDs and normalise the bank of a raw document."""
        bank = {resource: raw.tile_bank.get(resource, 0) for resource in ResourceType}
        fixed: dict[ResourceType, list[int]] | None = None
        if raw.fixed_tiles is not None:
            fixed = {
                ResourceType(key): list(ids)
                for key, ids in raw.fixed_tiles.model_dump().items()
                if ids is not None
            }
        return cls(
            tile_bank=bank,
            map_size=MapSize(width=raw.map_size[0], height=raw.map_size[1]),
            tiles=[
                Tile(tile_id=i, position=GridCoord.of(pair))
                for i, pair in enumerate(raw.tile_placement)
            ],
            default_tiles=list(raw.default_tiles),
            fixed_tiles=fixed,
            harbours=[
                Harbour(
                    harbour_id=i,
                    position=GridCoord.of(h.position),
                    side=h.side,
                )
                for i, h in enumerate(raw.harbour_placement)
            ],
            default_harbours=list(raw.default_harbours),
        )

    @property
    def tile_count(self) -> int:
        return len(self.tiles)

    @property
    def total_bank_count(self) -> int:
        return sum(self.tile_bank.values())

    def tile_at(self, coord: GridCoord) -> Tile | None:
        """Return the first tile placed at *coord*, or None for an ocean cell."""
        for tile in self.tiles:
            if tile.position == coord:
                return tile
        return None

    def fixed_tiles_or_empty(self) -> dict[ResourceType, list[int]]:
        """Return fixed tile IDs for all six resources, missing keys as empty."""
        fixed = self.fixed_tiles or {}
        return {resource: list(fixed.get(resource, [])) for resource in ResourceType}

    def to_raw(self) -> RawMapDocument:
        """Rebuild the wire model; IDs become array positions again."""
        fixed = None
        if self.fixed_tiles is not None:
            fixed = RawFixedTiles(
                **{str(key): list(ids) for key, ids in self.fixed_tiles.items()}
            )
        tiles = sorted(self.tiles, key=lambda t: t.tile_id)
        harbours = sorted(self.harbours, key=lambda h: h.harbour_id)
        return RawMapDocument(
            tile_bank=dict(self.tile_bank),
            map_size=(self.map_size.width, self.map_size.height),
            tile_placement=[t.position.as_pair() for t in tiles],
            default_tiles=list(self.default_tiles),
            fixed_tiles=fixed,
            harbour_placement=[
                RawHarbourPlacement(position=h.position.as_pair(), side=h.side)
                for h in harbours
            ],
            default_harbours=list(self.default_harbours),
        )
