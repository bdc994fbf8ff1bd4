"""Resource assigner.

Produces the final tile -> resource and harbour -> harbour type mapping of a
map document, either straight from ``defaultTiles``/``defaultHarbours`` or by
shuffling the bank's non-fixed tiles with a caller-supplied random source.

This is a pure function of its inputs: the document is never modified, and on
any constraint violation no mapping is returned at all.
"""

from __future__ import annotations

import collections
import enum
import logging
import random

import pydantic

from .models.issues import ErrorKind, MapError, MapIssue
from .models.map_document import HarbourType, MapDocument, ResourceType

logger = logging.getLogger(__name__)


class AssignmentMode(enum.StrEnum):
    DETERMINISTIC = 'deterministic'  # use defaultTiles / defaultHarbours as-is
    RANDOMIZED = 'randomized'  # pin fixedTiles, shuffle the rest of the bank


class ResourceAssignment(pydantic.BaseModel):
    """Final resource per tile ID and harbour type per harbour ID."""

    model_config = pydantic.ConfigDict(frozen=True)

    mode: AssignmentMode
    tiles: dict[int, ResourceType]
    harbours: dict[int, HarbourType]

    def resource_counts(self) -> dict[ResourceType, int]:
        """Number of tiles assigned each resource (all six keys present)."""
        counts = collections.Counter(self.tiles.values())
        return {resource: counts.get(resource, 0) for resource in ResourceType}

    def tiles_of(self, resource: ResourceType) -> list[int]:
        return sorted(tid for tid, res in self.tiles.items() if res == resource)


class AssignmentResult(pydantic.BaseModel):
    """Outcome of :func:`assign_resources`.

    ``assignment`` is None whenever ``success`` is False.
    """

    success: bool
    error_message: str | None = None
    issues: list[MapIssue] = pydantic.Field(default_factory=list)
    assignment: ResourceAssignment | None = None


class AssignmentError(MapError):
    """The document's constraints make the requested assignment impossible."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def assign_resources(
    document: MapDocument,
    mode: AssignmentMode = AssignmentMode.DETERMINISTIC,
    *,
    rng: random.Random | None = None,
    randomize_harbours: bool = False,
) -> AssignmentResult:
    """Assign a resource to every tile and a type to every harbour.

    Args:
        document: The decoded map document; normally validated beforehand,
            but every constraint the assignment relies on is re-checked.
        mode: Deterministic (defaults) or randomized (bank shuffle).
        rng: Random source for randomized mode.  Owned by this call; pass a
            seeded ``random.Random`` for reproducible output.
        randomize_harbours: In randomized mode, also permute the default
            harbour types across harbour IDs.

    Raises:
        ValueError: randomized mode was requested without a random source.
    """
    if mode == AssignmentMode.RANDOMIZED and rng is None:
        raise ValueError('Randomized assignment requires an explicit random source.')

    try:
        if rng is not None and mode == AssignmentMode.RANDOMIZED:
            assignment = _assign_randomized(document, rng, randomize_harbours)
        else:
            assignment = _assign_deterministic(document)
        _check_postconditions(document, assignment)
    except MapError as exc:
        logger.warning('Resource assignment failed: %s', exc)
        return AssignmentResult(
            success=False, error_message=str(exc), issues=exc.issues
        )

    logger.info(
        'Assigned %d tiles and %d harbours (%s)',
        len(assignment.tiles),
        len(assignment.harbours),
        mode,
    )
    return AssignmentResult(success=True, assignment=assignment)


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------


def _assign_deterministic(document: MapDocument) -> ResourceAssignment:
    _check_shapes(document)
    return ResourceAssignment(
        mode=AssignmentMode.DETERMINISTIC,
        tiles={t.tile_id: document.default_tiles[t.tile_id] for t in document.tiles},
        harbours={
            h.harbour_id: document.default_harbours[h.harbour_id]
            for h in document.harbours
        },
    )


def _assign_randomized(
    document: MapDocument, rng: random.Random, randomize_harbours: bool
) -> ResourceAssignment:
    _check_harbour_shape(document)
    _check_bank(document)
    fixed = document.fixed_tiles_or_empty()
    pinned = _pinned_tiles(document, fixed)

    # Remaining quantities, in enum order so a given seed is reproducible.
    pool: list[ResourceType] = []
    for resource in ResourceType:
        pool.extend([resource] * (document.tile_bank[resource] - len(fixed[resource])))
    free_ids = [t.tile_id for t in document.tiles if t.tile_id not in pinned]
    rng.shuffle(pool)

    tiles = dict(pinned)
    tiles.update(zip(free_ids, pool, strict=True))

    harbour_types = list(document.default_harbours)
    if randomize_harbours:
        rng.shuffle(harbour_types)

    return ResourceAssignment(
        mode=AssignmentMode.RANDOMIZED,
        tiles=dict(sorted(tiles.items())),
        harbours={
            h.harbour_id: harbour_types[h.harbour_id] for h in document.harbours
        },
    )


# ---------------------------------------------------------------------------
# Pre- and post-conditions
# ---------------------------------------------------------------------------


def _check_shapes(document: MapDocument) -> None:
    if len(document.default_tiles) != document.tile_count:
        raise AssignmentError(
            [
                MapIssue(
                    kind=ErrorKind.SHAPE_MISMATCH,
                    field='defaultTiles',
                    message=(
                        f'defaultTiles has {len(document.default_tiles)} entries '
                        f'for {document.tile_count} tiles'
                    ),
                    details={
                        'expected': document.tile_count,
                        'actual': len(document.default_tiles),
                    },
                )
            ]
        )
    _check_harbour_shape(document)


def _check_harbour_shape(document: MapDocument) -> None:
    if len(document.default_harbours) != len(document.harbours):
        raise AssignmentError(
            [
                MapIssue(
                    kind=ErrorKind.SHAPE_MISMATCH,
                    field='defaultHarbours',
                    message=(
                        f'defaultHarbours has {len(document.default_harbours)} '
                        f'entries for {len(document.harbours)} harbours'
                    ),
                    details={
                        'expected': len(document.harbours),
                        'actual': len(document.default_harbours),
                    },
                )
            ]
        )


def _check_bank(document: MapDocument) -> None:
    negative = [str(r) for r, count in document.tile_bank.items() if count < 0]
    total = document.total_bank_count
    if not negative and total == document.tile_count:
        return
    raise AssignmentError(
        [
            MapIssue(
                kind=ErrorKind.BANK_MISMATCH,
                field='tileBank',
                message=(
                    f'tile bank holds {total} tiles for {document.tile_count} '
                    'placed tiles'
                    + (f'; negative counts for {negative}' if negative else '')
                ),
                details={'expected': document.tile_count, 'actual': total},
            )
        ]
    )


def _pinned_tiles(
    document: MapDocument, fixed: dict[ResourceType, list[int]]
) -> dict[int, ResourceType]:
    """Return tile ID -> pinned resource, raising on any broken constraint."""
    issues: list[MapIssue] = []
    pinned: dict[int, ResourceType] = {}
    for resource, tile_ids in fixed.items():
        if len(tile_ids) > document.tile_bank[resource]:
            issues.append(
                MapIssue(
                    kind=ErrorKind.OVERCONSTRAINED_FIXED_TILES,
                    field=f'fixedTiles.{resource}',
                    message=(
                        f'{len(tile_ids)} tiles are fixed as {resource} but the '
                        f'bank holds only {document.tile_bank[resource]}'
                    ),
                    details={
                        'resource': str(resource),
                        'fixed': len(tile_ids),
                        'available': document.tile_bank[resource],
                    },
                )
            )
        for tile_id in tile_ids:
            if not 0 <= tile_id < document.tile_count:
                issues.append(
                    MapIssue(
                        kind=ErrorKind.OUT_OF_BOUNDS,
                        field=f'fixedTiles.{resource}',
                        index=tile_id,
                        message=f'fixed tile ID {tile_id} is not a tile',
                    )
                )
            if tile_id in pinned:
                issues.append(
                    MapIssue(
                        kind=ErrorKind.CONFLICTING_FIXED_TILE,
                        field='fixedTiles',
                        index=tile_id,
                        message=(
                            f'tile {tile_id} is fixed as both '
                            f'{pinned[tile_id]} and {resource}'
                        ),
                        details={'resources': [str(pinned[tile_id]), str(resource)]},
                    )
                )
            else:
                pinned[tile_id] = resource
    if issues:
        raise AssignmentError(issues)
    return pinned


def _check_postconditions(
    document: MapDocument, assignment: ResourceAssignment
) -> None:
    """The assigned multiset must equal the bank and pinned tiles must hold."""
    issues: list[MapIssue] = []
    counts = assignment.resource_counts()
    if counts != document.tile_bank:
        issues.append(
            MapIssue(
                kind=ErrorKind.BANK_MISMATCH,
                message='assigned resources do not match the tile bank',
                details={
                    'expected': {str(k): v for k, v in document.tile_bank.items()},
                    'actual': {str(k): v for k, v in counts.items()},
                },
            )
        )
    for resource, tile_ids in (document.fixed_tiles or {}).items():
        for tile_id in tile_ids:
            if assignment.tiles.get(tile_id) != resource:
                issues.append(
                    MapIssue(
                        kind=ErrorKind.CONFLICTING_FIXED_TILE,
                        field='fixedTiles',
                        index=tile_id,
                        message=(
                            f'tile {tile_id} is fixed as {resource} but was '
                            f'assigned {assignment.tiles.get(tile_id)}'
                        ),
                    )
                )
    if issues:
        raise AssignmentError(issues)
