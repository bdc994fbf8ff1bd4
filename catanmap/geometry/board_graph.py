"""Settle places (hex corners) and roads (hex sides) of a resolved map.

Vertex identification
---------------------
A vertex is the point shared by (up to) three hexes.  It is uniquely
identified by the *frozenset* of the three axial coordinates that surround
it.  For hex H with neighbour N[i] across side ``SIDE_ORDER[i]``, the six
vertex keys are::

    v[i] = frozenset({ H, N[i], N[(i+1) % 6] })

and ``v[i]`` is the corner ``VERTEX_ORDER[i]`` of H.  Some hexes in the set
may be ocean or lie off the grid; the frozenset still uniquely locates the
vertex.

Edge identification
-------------------
An edge is the side shared by (up to) two hexes.  Its key is::

    e[i] = frozenset({ H, N[i] })

Edge e[i] of H connects vertex v[(i-1) % 6] to vertex v[i].

Only vertices and edges touching at least one tile exist.  A standard
19-tile board has 54 vertices and 72 edges.
"""

from __future__ import annotations

import collections
import logging

import pydantic

from ..models.map_document import AxialCoord, HexSide, HexVertex, MapDocument
from .coordinates import SIDE_ORDER, VERTEX_ORDER, axial_neighbour, offset_to_axial

logger = logging.getLogger(__name__)

_Key = frozenset[tuple[int, int]]


class Vertex(pydantic.BaseModel):
    """An intersection where settlements and towns can be placed."""

    vertex_id: int
    adjacent_vertex_ids: list[int]  # vertices connected by an edge
    adjacent_edge_ids: list[int]
    adjacent_tile_ids: list[int]


class Edge(pydantic.BaseModel):
    """A side of a tile where roads can be placed."""

    edge_id: int
    vertex_ids: tuple[int, int]
    adjacent_tile_ids: list[int]


class BoardGraph(pydantic.BaseModel):
    """Vertex/edge adjacency of the tiles of one map document."""

    vertices: list[Vertex]
    edges: list[Edge]
    tile_edges: dict[int, dict[HexSide, int]]  # tile ID -> side -> edge ID
    tile_vertices: dict[int, dict[HexVertex, int]]  # tile ID -> corner -> vertex ID
    harbour_edges: dict[int, int | None]  # harbour ID -> edge ID (None = detached)

    def harbour_vertices(self, harbour_id: int) -> tuple[int, int] | None:
        """Return the two vertices a harbour can be used from, if attached."""
        edge_id = self.harbour_edges.get(harbour_id)
        if edge_id is None:
            return None
        return self.edges[edge_id].vertex_ids

    def coastal_edges(self) -> list[Edge]:
        """Edges bordering exactly one tile."""
        return [e for e in self.edges if len(e.adjacent_tile_ids) == 1]


def _pair(axial: AxialCoord) -> tuple[int, int]:
    return (axial.q, axial.r)


def _vertex_keys(axial: AxialCoord) -> list[_Key]:
    """Return the six vertex keys of a hex in ``VERTEX_ORDER``."""
    neighbours = [_pair(axial_neighbour(axial, side)) for side in SIDE_ORDER]
    return [
        frozenset({_pair(axial), neighbours[i], neighbours[(i + 1) % 6]})
        for i in range(6)
    ]


def _edge_keys(axial: AxialCoord) -> list[_Key]:
    """Return the six edge keys of a hex in ``SIDE_ORDER``."""
    return [
        frozenset({_pair(axial), _pair(axial_neighbour(axial, side))})
        for side in SIDE_ORDER
    ]


def build_board_graph(document: MapDocument) -> BoardGraph:
    """Compute all vertices and edges of *document* with their adjacency.

    Iteration follows tile ID order, so vertex and edge IDs are reproducible
    for the same tile placement.  Tiles sharing a cell are only counted once.
    """
    tiles: list[tuple[int, AxialCoord]] = []
    seen: set[tuple[int, int]] = set()
    for tile in document.tiles:
        axial = offset_to_axial(tile.position)
        if _pair(axial) in seen:
            continue
        seen.add(_pair(axial))
        tiles.append((tile.tile_id, axial))

    # ------------------------------------------------------------------
    # First pass: assign stable integer IDs to every unique vertex/edge.
    # ------------------------------------------------------------------
    vertex_key_to_id: dict[_Key, int] = {}
    edge_key_to_id: dict[_Key, int] = {}

    for _, axial in tiles:
        for vk in _vertex_keys(axial):
            if vk not in vertex_key_to_id:
                vertex_key_to_id[vk] = len(vertex_key_to_id)
        for ek in _edge_keys(axial):
            if ek not in edge_key_to_id:
                edge_key_to_id[ek] = len(edge_key_to_id)

    # ------------------------------------------------------------------
    # Second pass: populate adjacency structures.
    # ------------------------------------------------------------------
    v_adj_vertices: dict[int, list[int]] = collections.defaultdict(list)
    v_adj_edges: dict[int, list[int]] = collections.defaultdict(list)
    v_adj_tiles: dict[int, list[int]] = collections.defaultdict(list)
    e_vertex_ids: dict[int, tuple[int, int]] = {}
    e_adj_tiles: dict[int, list[int]] = collections.defaultdict(list)
    tile_edges: dict[int, dict[HexSide, int]] = {}
    tile_vertices: dict[int, dict[HexVertex, int]] = {}

    for tile_id, axial in tiles:
        vids = [vertex_key_to_id[vk] for vk in _vertex_keys(axial)]
        eids = [edge_key_to_id[ek] for ek in _edge_keys(axial)]
        tile_vertices[tile_id] = dict(zip(VERTEX_ORDER, vids, strict=True))
        tile_edges[tile_id] = dict(zip(SIDE_ORDER, eids, strict=True))

        for i, eid in enumerate(eids):
            # Edge i of the hex connects v[i-1] and v[i].
            vid0 = vids[(i - 1) % 6]
            vid1 = vids[i]
            e_vertex_ids.setdefault(eid, (vid0, vid1))

            if vid1 not in v_adj_vertices[vid0]:
                v_adj_vertices[vid0].append(vid1)
            if vid0 not in v_adj_vertices[vid1]:
                v_adj_vertices[vid1].append(vid0)
            if eid not in v_adj_edges[vid0]:
                v_adj_edges[vid0].append(eid)
            if eid not in v_adj_edges[vid1]:
                v_adj_edges[vid1].append(eid)
            if tile_id not in e_adj_tiles[eid]:
                e_adj_tiles[eid].append(tile_id)

        for vid in vids:
            if tile_id not in v_adj_tiles[vid]:
                v_adj_tiles[vid].append(tile_id)

    # ------------------------------------------------------------------
    # Harbours attach to the edge between their cell and the facing cell.
    # ------------------------------------------------------------------
    harbour_edges: dict[int, int | None] = {}
    for harbour in document.harbours:
        axial = offset_to_axial(harbour.position)
        key = frozenset({_pair(axial), _pair(axial_neighbour(axial, harbour.side))})
        harbour_edges[harbour.harbour_id] = edge_key_to_id.get(key)
        if harbour_edges[harbour.harbour_id] is None:
            logger.info(
                'Harbour %d at (%d, %d) side %s touches no tile',
                harbour.harbour_id,
                harbour.position.x,
                harbour.position.y,
                harbour.side,
            )

    vertices = [
        Vertex(
            vertex_id=vid,
            adjacent_vertex_ids=v_adj_vertices[vid],
            adjacent_edge_ids=v_adj_edges[vid],
            adjacent_tile_ids=v_adj_tiles[vid],
        )
        for vid in range(len(vertex_key_to_id))
    ]
    edges = [
        Edge(
            edge_id=eid,
            vertex_ids=e_vertex_ids[eid],
            adjacent_tile_ids=e_adj_tiles[eid],
        )
        for eid in range(len(edge_key_to_id))
    ]
    logger.debug(
        'Board graph: %d tiles, %d vertices, %d edges',
        len(tiles),
        len(vertices),
        len(edges),
    )
    return BoardGraph(
        vertices=vertices,
        edges=edges,
        tile_edges=tile_edges,
        tile_vertices=tile_vertices,
        harbour_edges=harbour_edges,
    )
