"""Map resolution pipeline.

Runs the stages in order: validation -> geometry (tiles, harbours, board
graph) -> resource assignment.  Any validation error aborts the downstream
stages; the caller always gets a :class:`MapResolution` back, never a partial
result.
"""

from __future__ import annotations

import logging
import random
import typing

import pydantic

from .assigner import AssignmentMode, ResourceAssignment, assign_resources
from .geometry.board_graph import BoardGraph, build_board_graph
from .geometry.coordinates import (
    HexLayout,
    ResolvedHarbour,
    ResolvedTile,
    resolve_harbours,
    resolve_tiles,
)
from .models.issues import MalformedDocument, ValidationReport
from .models.map_document import MapDocument
from .models.serializers import decode_map_document
from .validation.document import validate_document

logger = logging.getLogger(__name__)


class MapResolution(pydantic.BaseModel):
    """Everything collaborators need from one resolved map document."""

    success: bool
    report: ValidationReport
    tiles: list[ResolvedTile] | None = None
    harbours: list[ResolvedHarbour] | None = None
    graph: BoardGraph | None = None
    assignment: ResourceAssignment | None = None


def resolve_map(
    document: MapDocument,
    mode: AssignmentMode = AssignmentMode.DETERMINISTIC,
    *,
    rng: random.Random | None = None,
    randomize_harbours: bool = False,
    layout: HexLayout | None = None,
    allow_partial_fixed_tiles: bool | None = None,
) -> MapResolution:
    """Validate, resolve and assign *document*.

    Args:
        document: The decoded map document.
        mode: Assignment mode passed to the resource assigner.
        rng: Random source, required in randomized mode.
        randomize_harbours: Permute harbour types (randomized mode only).
        layout: Screen layout for tile centers and harbour anchors.
        allow_partial_fixed_tiles: Override the partial ``fixedTiles`` policy.
    """
    report = validate_document(
        document,
        randomized=mode == AssignmentMode.RANDOMIZED,
        allow_partial_fixed_tiles=allow_partial_fixed_tiles,
    )
    if not report.ok:
        return MapResolution(success=False, report=report)

    layout = layout or HexLayout.padded()
    tiles = resolve_tiles(document, layout)
    harbours = resolve_harbours(document, layout)
    graph = build_board_graph(document)

    result = assign_resources(
        document, mode, rng=rng, randomize_harbours=randomize_harbours
    )
    if not result.success:
        report.extend(result.issues)
        return MapResolution(success=False, report=report)

    return MapResolution(
        success=True,
        report=report,
        tiles=tiles,
        harbours=harbours,
        graph=graph,
        assignment=result.assignment,
    )


def resolve_raw_map(
    data: typing.Any,
    mode: AssignmentMode = AssignmentMode.DETERMINISTIC,
    **kwargs: typing.Any,
) -> MapResolution:
    """Decode a raw mapping and resolve it; decode failures become a report."""
    try:
        document = decode_map_document(data)
    except MalformedDocument as exc:
        logger.warning('Map document could not be decoded: %s', exc)
        return MapResolution(success=False, report=ValidationReport(issues=exc.issues))
    return resolve_map(document, mode, **kwargs)
