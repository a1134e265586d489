"""
Fragment generator.

Renders each server-tagged block as a self-contained statement list:

    ;const { a, b } = __tierIn;
    <original block source>
    ;__tierOut = { c };

Client-only blocks are not emitted here.
"""

from codegraph_tiers.config import ChannelConfig
from codegraph_tiers.models import Fragment, TierBlock
from codegraph_tiers.syntax.source_file import SourceFile


def render_block(block: TierBlock, source: SourceFile, channels: ChannelConfig) -> str:
    inputs = sorted(block.input_names)
    outputs = sorted(block.output_names)

    lines = []
    if inputs:
        lines.append(f";const {{ {', '.join(inputs)} }} = {channels.input_channel};")
    lines.append(source.slice(block.start, block.end))
    if outputs:
        lines.append(f";{channels.output_channel} = {{ {', '.join(outputs)} }};")
    else:
        lines.append(f";{channels.output_channel} = {{}};")
    return "\n".join(lines)


def generate_fragments(
    blocks: list[TierBlock],
    source: SourceFile,
    channels: ChannelConfig | None = None,
) -> list[Fragment]:
    """
    Emit one fragment per server-tagged block, in block order.

    Raises:
        RuntimeError: A block has not been frozen
    """
    channels = channels or ChannelConfig()
    fragments = []

    for block in blocks:
        if not block.is_server:
            continue
        if not block.frozen:
            raise RuntimeError(f"Tier block {block.id} must be frozen before generation")

        fragments.append(
            Fragment(
                id=block.id,
                session_required=block.session_required,
                code=render_block(block, source, channels),
                input_names=sorted(block.input_names),
                output_names=sorted(block.output_names),
            )
        )

    return fragments


__all__ = ["generate_fragments", "render_block"]
