"""Tests for pushing terrain onto a board."""

import pytest

from tileworld.applier import HeadlessBoard, TerrainApplier
from tileworld.chunks import ChunkStreamer
from tileworld.config import Config, StreamingConfig


class TestHeadlessBoard:
    """Tests for the in-memory board."""

    def test_layout(self) -> None:
        board = HeadlessBoard(0, 0, 1, square_size=2.0)
        tiles = list(board.primitives())

        assert len(tiles) == 9
        assert tiles[0].position == (-2.0, -2.0)
        assert tiles[-1].position == (2.0, 2.0)
        assert tiles[0].vertex_offsets[-1] == (2.0, 2.0)


class TestTerrainApplier:
    """Tests for the board update pass."""

    def test_apply_updates_every_square(self, streamer: ChunkStreamer) -> None:
        board = HeadlessBoard(0, 0, 3)
        updated = TerrainApplier(streamer, board).apply(0.5, 0.5)

        assert updated == 49
        for tile in board.tiles:
            stored = streamer.store.get(int(tile.position[0]), int(tile.position[1]))
            assert tile.tint == stored.tint
            assert len(tile.vertex_heights) == 4

    def test_first_vertex_matches_tile_height(self, streamer: ChunkStreamer) -> None:
        board = HeadlessBoard(2, 2, 2)
        TerrainApplier(streamer, board).apply(2.0, 2.0)

        for tile in board.tiles:
            x, z = int(tile.position[0]), int(tile.position[1])
            assert tile.vertex_heights[0] == pytest.approx(streamer.store.height_at(x, z))
            assert tile.vertex_heights[3] == pytest.approx(
                streamer.store.height_at(x + 1, z + 1)
            )

    def test_models_set_for_trees_and_buildings(self, streamer: ChunkStreamer) -> None:
        board = HeadlessBoard(0, 0, 7)
        TerrainApplier(streamer, board).apply(0.0, 0.0)

        for tile in board.tiles:
            stored = streamer.store.get(int(tile.position[0]), int(tile.position[1]))
            model = stored.category.model
            if model is None:
                assert tile.model is None
            else:
                assert tile.model == (model, pytest.approx(stored.height))

    def test_reapply_keeps_one_model(self, streamer: ChunkStreamer) -> None:
        board = HeadlessBoard(0, 0, 7)
        applier = TerrainApplier(streamer, board)
        applier.apply(0.0, 0.0)
        first = [tile.model for tile in board.tiles]

        applier.apply(0.0, 0.0)
        applier.apply_to_board()

        assert [tile.model for tile in board.tiles] == first

    def test_stale_model_removed(self, streamer: ChunkStreamer) -> None:
        board = HeadlessBoard(0, 0, 7)
        for tile in board.tiles:
            tile.set_model("tree", 1.0)

        TerrainApplier(streamer, board).apply(0.0, 0.0)

        bare = 0
        for tile in board.tiles:
            stored = streamer.store.get(int(tile.position[0]), int(tile.position[1]))
            if stored.category.model is None:
                assert tile.model is None
                bare += 1
        assert bare > 0

    def test_absent_tiles_skipped(self, streamer: ChunkStreamer) -> None:
        streamer.update_terrain(0.0, 0.0)
        board = HeadlessBoard(500, 500, 1)

        assert TerrainApplier(streamer, board).apply_to_board() == 0
        for tile in board.tiles:
            assert tile.tint is None
            assert tile.vertex_heights == []

    def test_scaled_board(self) -> None:
        config = Config(seed=9, streaming=StreamingConfig(square_size=2.0))
        streamer = ChunkStreamer(config)
        board = HeadlessBoard(0, 0, 2, square_size=2.0)

        assert TerrainApplier(streamer, board).apply(0.0, 0.0) == 25
        for tile in board.tiles:
            x, z = int(tile.position[0] / 2), int(tile.position[1] / 2)
            assert tile.tint == streamer.store.get(x, z).tint
            assert tile.vertex_heights[0] == pytest.approx(
                streamer.store.height_at(x, z) * 2.0
            )
            if tile.model is not None:
                assert tile.model[1] == pytest.approx(streamer.store.height_at(x, z) * 2.0)
