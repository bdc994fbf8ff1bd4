"""Tile bank validator.

Pure checks of the per-resource tile counts against the placement data.
"""

from __future__ import annotations

import collections

from ..models.issues import ErrorKind, MapIssue, skipped
from ..models.map_document import MapDocument, ResourceType


def validate_bank(document: MapDocument) -> list[MapIssue]:
    """Return every tile bank problem found in *document*.

    Every grid-placed tile must have a resource source, so the six counts must
    sum to the number of placed tiles exactly.
    """
    issues: list[MapIssue] = []

    for resource, count in document.tile_bank.items():
        if count < 0:
            issues.append(
                MapIssue(
                    kind=ErrorKind.BANK_MISMATCH,
                    field=f'tileBank.{resource}',
                    message=f'tile bank count for {resource} is negative ({count})',
                    details={'resource': str(resource), 'actual': count},
                )
            )

    total = document.total_bank_count
    if total != document.tile_count:
        issues.append(
            MapIssue(
                kind=ErrorKind.BANK_MISMATCH,
                field='tileBank',
                message=(
                    f'tile bank holds {total} tiles but tilePlacement '
                    f'places {document.tile_count}'
                ),
                details={'expected': document.tile_count, 'actual': total},
            )
        )

    if len(document.default_tiles) == document.tile_count:
        issues.extend(_check_default_counts(document))
    else:
        issues.append(
            skipped(
                'default tile count check',
                'defaultTiles does not align with tilePlacement',
                'defaultTiles',
            )
        )

    issues.extend(_check_fixed_counts(document))
    return issues


def _check_default_counts(document: MapDocument) -> list[MapIssue]:
    """defaultTiles must use exactly the bank's quantities."""
    counts = collections.Counter(document.default_tiles)
    issues = []
    for resource in ResourceType:
        expected = document.tile_bank[resource]
        actual = counts.get(resource, 0)
        if actual != expected:
            issues.append(
                MapIssue(
                    kind=ErrorKind.BANK_MISMATCH,
                    field='defaultTiles',
                    message=(
                        f'defaultTiles assigns {actual} {resource} tiles, '
                        f'the bank holds {expected}'
                    ),
                    details={
                        'resource': str(resource),
                        'expected': expected,
                        'actual': actual,
                    },
                )
            )
    return issues


def _check_fixed_counts(document: MapDocument) -> list[MapIssue]:
    issues = []
    for resource, tile_ids in (document.fixed_tiles or {}).items():
        available = document.tile_bank[resource]
        pinned = len(set(tile_ids))
        if pinned > available:
            issues.append(
                MapIssue(
                    kind=ErrorKind.OVERCONSTRAINED_FIXED_TILES,
                    field=f'fixedTiles.{resource}',
                    message=(
                        f'{pinned} tiles are fixed as {resource} but the bank '
                        f'holds only {available}'
                    ),
                    details={
                        'resource': str(resource),
                        'fixed': pinned,
                        'available': available,
                    },
                )
            )
    return issues
