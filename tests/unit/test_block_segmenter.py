"""
Block Segmenter Tests

Tests for block spans and position → block resolution.
"""

from codegraph_tiers.compiler.segmenter import BlockResolver, segment_blocks
from codegraph_tiers.models import Tier, TierMarker
from tests.helpers.syntax_builders import ident


def _marker(start: int, end: int, *tiers: Tier) -> TierMarker:
    return TierMarker(tiers=tiers, start=start, end=end)


class TestSegmentBlocks:
    """Test block construction."""

    def test_one_block_per_marker(self):
        """Test spans run from marker end to next marker start."""
        markers = [
            _marker(0, 10, Tier.CLIENT),
            _marker(21, 31, Tier.SERVER),
            _marker(40, 50, Tier.SERVER, Tier.CLIENT),
        ]

        blocks = segment_blocks(markers, 64)

        assert [block.span for block in blocks] == [(10, 21), (31, 40), (50, 64)]
        assert [block.id for block in blocks] == [0, 1, 2]
        assert blocks[2].tiers == frozenset([Tier.SERVER, Tier.CLIENT])

    def test_blocks_start_empty(self):
        """Test fresh blocks carry no classification state."""
        (block,) = segment_blocks([_marker(0, 10, Tier.SERVER)], 20)

        assert block.session_required is False
        assert block.input_names == set()
        assert block.output_names == set()
        assert block.frozen is False

    def test_blocks_cover_source_between_markers(self):
        """Test blocks and marker statements tile the module without overlap."""
        markers = [_marker(0, 10, Tier.CLIENT), _marker(15, 25, Tier.SERVER), _marker(25, 35, Tier.CLIENT)]

        blocks = segment_blocks(markers, 50)

        assert blocks[0].start == markers[0].end
        assert blocks[-1].end == 50
        for block, next_marker, next_block in zip(blocks, markers[1:], blocks[1:]):
            assert block.end == next_marker.start
            assert next_block.start == next_marker.end
            assert block.end <= next_block.start


class TestBlockResolver:
    """Test position → block lookup."""

    def setup_method(self):
        self.blocks = segment_blocks([_marker(0, 10, Tier.CLIENT), _marker(21, 31, Tier.SERVER)], 47)
        self.resolver = BlockResolver(self.blocks)

    def test_node_inside_block(self):
        """Test nodes resolve to the block containing them."""
        assert self.resolver.block_for(ident("x", 15)) is self.blocks[0]
        assert self.resolver.block_for(ident("x", 40)) is self.blocks[1]

    def test_boundary_is_inclusive(self):
        """Test a node ending exactly at a block end belongs to that block."""
        node = ident("abc", 18)  # ends at 21

        assert self.resolver.block_for(node) is self.blocks[0]

    def test_marker_text_resolves_forward(self):
        """Test nodes inside a marker statement resolve to the following block."""
        node = ident("server", 25)  # inside second marker

        assert self.resolver.block_for(node) is self.blocks[1]

    def test_offset_past_source_end(self):
        """Test offsets beyond the last block resolve to nothing."""
        assert self.resolver.block_at(48) is None
