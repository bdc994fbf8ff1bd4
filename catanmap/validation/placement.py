"""Placement validator.

Checks the shape of the placement data: grid size, bounds, tile collisions,
array-length alignment and the tile IDs referenced by ``fixedTiles``.
Independent checks always run; checks that need an earlier invariant emit a
``skipped_due_to_prior_error`` marker instead of running.
"""

from __future__ import annotations

import logging

from ..geometry.coordinates import in_bounds
from ..models.issues import ErrorKind, MapIssue, Severity, skipped
from ..models.map_document import MapDocument, ResourceType

logger = logging.getLogger(__name__)


def validate_placement(
    document: MapDocument,
    *,
    require_fixed_tiles: bool = False,
    allow_partial_fixed_tiles: bool = True,
) -> list[MapIssue]:
    """Return every placement problem found in *document*.

    Args:
        document: The decoded map document.
        require_fixed_tiles: Report a missing ``fixedTiles`` object (set when
            the caller intends randomized assignment).
        allow_partial_fixed_tiles: Treat missing ``fixedTiles`` keys as empty
            lists and report them as warnings rather than errors.
    """
    issues: list[MapIssue] = []

    size_ok = _check_map_size(document, issues)
    if size_ok:
        _check_bounds(document, issues)
    else:
        issues.append(
            skipped(
                'bounds check',
                'mapSize is not two positive integers',
                'tilePlacement',
            )
        )
    _check_duplicate_positions(document, issues)
    defaults_ok = _check_lengths(document, issues)
    ids_ok = _check_fixed_ids(document, issues)
    _check_fixed_keys(
        document,
        issues,
        require_fixed_tiles=require_fixed_tiles,
        allow_partial=allow_partial_fixed_tiles,
    )
    if defaults_ok and ids_ok:
        _check_fixed_against_defaults(document, issues)
    elif document.fixed_tiles:
        issues.append(
            skipped(
                'fixed tile default check',
                'defaultTiles or fixedTiles IDs are invalid',
                'fixedTiles',
            )
        )

    for issue in issues:
        if issue.kind == ErrorKind.SKIPPED_DUE_TO_PRIOR_ERROR:
            logger.debug('%s', issue.message)
    return issues


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def _check_map_size(document: MapDocument, issues: list[MapIssue]) -> bool:
    size = document.map_size
    if size.width > 0 and size.height > 0:
        return True
    issues.append(
        MapIssue(
            kind=ErrorKind.SHAPE_MISMATCH,
            field='mapSize',
            message=(
                'mapSize must be two positive integers, '
                f'got [{size.width}, {size.height}]'
            ),
            details={'map_size': [size.width, size.height]},
        )
    )
    return False


def _check_bounds(document: MapDocument, issues: list[MapIssue]) -> None:
    size = document.map_size
    for tile in document.tiles:
        if not in_bounds(tile.position, size):
            issues.append(
                MapIssue(
                    kind=ErrorKind.OUT_OF_BOUNDS,
                    field='tilePlacement',
                    index=tile.tile_id,
                    message=(
                        f'tile {tile.tile_id} at {list(tile.position.as_pair())} '
                        f'is outside the {size.width}x{size.height} grid'
                    ),
                    details={'position': list(tile.position.as_pair())},
                )
            )
    # Harbours may sit on ocean cells, but still have to be on the grid.
    for harbour in document.harbours:
        if not in_bounds(harbour.position, size):
            issues.append(
                MapIssue(
                    kind=ErrorKind.OUT_OF_BOUNDS,
                    field='harbourPlacement',
                    index=harbour.harbour_id,
                    message=(
                        f'harbour {harbour.harbour_id} at '
                        f'{list(harbour.position.as_pair())} is outside the '
                        f'{size.width}x{size.height} grid'
                    ),
                    details={'position': list(harbour.position.as_pair())},
                )
            )


def _check_duplicate_positions(document: MapDocument, issues: list[MapIssue]) -> None:
    first_at: dict[tuple[int, int], int] = {}
    for tile in document.tiles:
        pos = tile.position.as_pair()
        if pos in first_at:
            first = first_at[pos]
            issues.append(
                MapIssue(
                    kind=ErrorKind.DUPLICATE_TILE_POSITION,
                    field='tilePlacement',
                    index=tile.tile_id,
                    message=(
                        f'tiles {first} and {tile.tile_id} share position {list(pos)}'
                    ),
                    details={'tile_ids': [first, tile.tile_id], 'position': list(pos)},
                )
            )
        else:
            first_at[pos] = tile.tile_id


def _check_lengths(document: MapDocument, issues: list[MapIssue]) -> bool:
    """Check array alignment; return True when defaultTiles is usable."""
    defaults_ok = True
    if len(document.default_tiles) != document.tile_count:
        defaults_ok = False
        issues.append(
            MapIssue(
                kind=ErrorKind.SHAPE_MISMATCH,
                field='defaultTiles',
                message=(
                    f'defaultTiles has {len(document.default_tiles)} entries, '
                    f'tilePlacement has {document.tile_count}'
                ),
                details={
                    'expected': document.tile_count,
                    'actual': len(document.default_tiles),
                },
            )
        )
    if len(document.default_harbours) != len(document.harbours):
        issues.append(
            MapIssue(
                kind=ErrorKind.SHAPE_MISMATCH,
                field='defaultHarbours',
                message=(
                    f'defaultHarbours has {len(document.default_harbours)} entries, '
                    f'harbourPlacement has {len(document.harbours)}'
                ),
                details={
                    'expected': len(document.harbours),
                    'actual': len(document.default_harbours),
                },
            )
        )
    return defaults_ok


def _check_fixed_ids(document: MapDocument, issues: list[MapIssue]) -> bool:
    """Check fixed tile IDs are in range and pinned once; return True if clean."""
    if not document.fixed_tiles:
        return True
    clean = True
    owner: dict[int, ResourceType] = {}
    for resource in ResourceType:
        for tile_id in document.fixed_tiles.get(resource, []):
            if not 0 <= tile_id < document.tile_count:
                clean = False
                issues.append(
                    MapIssue(
                        kind=ErrorKind.OUT_OF_BOUNDS,
                        field=f'fixedTiles.{resource}',
                        index=tile_id,
                        message=(
                            f'fixed tile ID {tile_id} under {resource} is not a '
                            f'tile (there are {document.tile_count})'
                        ),
                        details={'resource': str(resource)},
                    )
                )
            if tile_id in owner:
                clean = False
                other = owner[tile_id]
                issues.append(
                    MapIssue(
                        kind=ErrorKind.CONFLICTING_FIXED_TILE,
                        field='fixedTiles',
                        index=tile_id,
                        message=(
                            f'tile {tile_id} is fixed as both {other} and {resource}'
                        ),
                        details={'resources': [str(other), str(resource)]},
                    )
                )
            else:
                owner[tile_id] = resource
    return clean


def _check_fixed_keys(
    document: MapDocument,
    issues: list[MapIssue],
    *,
    require_fixed_tiles: bool,
    allow_partial: bool,
) -> None:
    severity = Severity.WARNING if allow_partial else Severity.ERROR
    if document.fixed_tiles is None:
        if require_fixed_tiles:
            issues.append(
                MapIssue(
                    kind=ErrorKind.INCOMPLETE_FIXED_TILES,
                    severity=severity,
                    field='fixedTiles',
                    message='fixedTiles is required for randomized assignment',
                    details={'missing': [str(r) for r in ResourceType]},
                )
            )
        return
    missing = [r for r in ResourceType if r not in document.fixed_tiles]
    if missing:
        issues.append(
            MapIssue(
                kind=ErrorKind.INCOMPLETE_FIXED_TILES,
                severity=severity,
                field='fixedTiles',
                message=f'fixedTiles is missing keys: {", ".join(missing)}',
                details={'missing': [str(r) for r in missing]},
            )
        )


def _check_fixed_against_defaults(
    document: MapDocument, issues: list[MapIssue]
) -> None:
    """Pinned tiles must carry the same resource in defaultTiles."""
    for resource, tile_ids in (document.fixed_tiles or {}).items():
        for tile_id in tile_ids:
            default = document.default_tiles[tile_id]
            if default != resource:
                issues.append(
                    MapIssue(
                        kind=ErrorKind.CONFLICTING_FIXED_TILE,
                        field='defaultTiles',
                        index=tile_id,
                        message=(
                            f'tile {tile_id} is fixed as {resource} but '
                            f'defaultTiles says {default}'
                        ),
                        details={'resources': [str(resource), str(default)]},
                    )
                )
