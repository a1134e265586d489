"""
Block segmenter.

Turns the ordered marker list into contiguous tier blocks and resolves
source positions to the block that owns them.
"""

from bisect import bisect_left

from codegraph_tiers.models import TierBlock, TierMarker
from codegraph_tiers.syntax.nodes import SyntaxNode


def segment_blocks(markers: list[TierMarker], source_length: int) -> list[TierBlock]:
    """
    One block per marker.

    Block ``i`` owns ``[markers[i].end, markers[i + 1].start)``; the last
    block runs to ``source_length``. Ids are indices into the returned list.
    """
    blocks = []
    for index, marker in enumerate(markers):
        end = markers[index + 1].start if index + 1 < len(markers) else source_length
        blocks.append(
            TierBlock(
                id=index,
                tiers=frozenset(marker.tiers),
                start=marker.end,
                end=end,
            )
        )
    return blocks


class BlockResolver:
    """
    Position → block lookup.

    A node belongs to the first block (in source order) whose end offset is
    at or after the node's end offset. A node ending exactly on a block
    boundary belongs to the earlier block.
    """

    def __init__(self, blocks: list[TierBlock]):
        self._blocks = blocks
        self._ends = [block.end for block in blocks]

    def block_at(self, offset: int) -> TierBlock | None:
        index = bisect_left(self._ends, offset)
        if index >= len(self._blocks):
            return None
        return self._blocks[index]

    def block_for(self, node: SyntaxNode) -> TierBlock | None:
        return self.block_at(node.end)


__all__ = ["segment_blocks", "BlockResolver"]
