"""Unit tests for the settle place / road graph."""

from __future__ import annotations

import unittest

from catanmap.geometry.board_graph import build_board_graph
from catanmap.models.map_document import HexSide, HexVertex, MapDocument
from catanmap.models.presets import standard_map_document
from catanmap.models.serializers import decode_map_document


def _single_tile_doc(harbour_side: str = 'e') -> MapDocument:
    return decode_map_document(
        {
            'tileBank': {'desert': 1},
            'mapSize': [3, 3],
            'tilePlacement': [[1, 1]],
            'defaultTiles': ['desert'],
            'harbourPlacement': [
                {'position': [0, 1], 'side': harbour_side},
            ],
            'defaultHarbours': ['universal'],
        }
    )


class TestStandardBoardGraph(unittest.TestCase):
    """Graph of the standard 19-tile board."""

    def setUp(self) -> None:
        self.graph = build_board_graph(standard_map_document())

    def test_vertex_count(self) -> None:
        """A standard Catan board has 54 vertices."""
        self.assertEqual(len(self.graph.vertices), 54)

    def test_edge_count(self) -> None:
        """A standard Catan board has 72 edges."""
        self.assertEqual(len(self.graph.edges), 72)

    def test_ids_match_positions(self) -> None:
        for i, v in enumerate(self.graph.vertices):
            self.assertEqual(v.vertex_id, i)
        for i, e in enumerate(self.graph.edges):
            self.assertEqual(e.edge_id, i)

    def test_vertex_degree(self) -> None:
        """Every vertex touches 2 or 3 edges and 1 to 3 tiles."""
        for v in self.graph.vertices:
            self.assertIn(len(v.adjacent_edge_ids), (2, 3))
            self.assertIn(len(v.adjacent_tile_ids), (1, 2, 3))
            self.assertEqual(len(v.adjacent_vertex_ids), len(v.adjacent_edge_ids))

    def test_edges_border_one_or_two_tiles(self) -> None:
        for e in self.graph.edges:
            self.assertIn(len(e.adjacent_tile_ids), (1, 2))
        self.assertEqual(len(self.graph.coastal_edges()), 30)

    def test_centre_tile_vertices_are_inland(self) -> None:
        for vid in self.graph.tile_vertices[9].values():
            self.assertEqual(len(self.graph.vertices[vid].adjacent_tile_ids), 3)

    def test_neighbouring_tiles_share_an_edge(self) -> None:
        # Tile 9 (3, 3) lies east of tile 8 (2, 3).
        shared = self.graph.tile_edges[9][HexSide.WEST]
        self.assertEqual(self.graph.tile_edges[8][HexSide.EAST], shared)
        self.assertEqual(sorted(self.graph.edges[shared].adjacent_tile_ids), [8, 9])

    def test_tile_edge_connects_its_corners(self) -> None:
        edges = self.graph.tile_edges[9]
        corners = self.graph.tile_vertices[9]
        east = self.graph.edges[edges[HexSide.EAST]]
        self.assertEqual(
            set(east.vertex_ids),
            {corners[HexVertex.NORTH_EAST], corners[HexVertex.SOUTH_EAST]},
        )

    def test_every_harbour_attached_to_coastal_edge(self) -> None:
        coastal = {e.edge_id for e in self.graph.coastal_edges()}
        for harbour_id, edge_id in self.graph.harbour_edges.items():
            self.assertIn(edge_id, coastal, harbour_id)
            self.assertIsNotNone(self.graph.harbour_vertices(harbour_id))

    def test_deterministic(self) -> None:
        again = build_board_graph(standard_map_document())
        self.assertEqual(again, self.graph)


class TestSingleTileGraph(unittest.TestCase):
    """Graph of a one-tile map."""

    def test_six_vertices_and_edges(self) -> None:
        graph = build_board_graph(_single_tile_doc())
        self.assertEqual(len(graph.vertices), 6)
        self.assertEqual(len(graph.edges), 6)
        self.assertEqual(set(graph.tile_vertices[0]), set(HexVertex))

    def test_harbour_facing_tile_attaches_to_its_west_edge(self) -> None:
        graph = build_board_graph(_single_tile_doc('e'))
        self.assertEqual(graph.harbour_edges[0], graph.tile_edges[0][HexSide.WEST])

    def test_harbour_facing_away_is_detached(self) -> None:
        graph = build_board_graph(_single_tile_doc('w'))
        self.assertIsNone(graph.harbour_edges[0])
        self.assertIsNone(graph.harbour_vertices(0))


if __name__ == '__main__':
    unittest.main()
