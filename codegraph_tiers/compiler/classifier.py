"""
Dependency classifier.

Decides, for every resolved reference, whether the binding crosses a tier
boundary:

- same block: local, nothing to do
- both blocks run on the server: the using block needs session state
  (two server blocks may run as separate stateless invocations)
- both blocks run on the client: nothing (client blocks share one live scope)
- otherwise: the name travels from the declaring block's output channel to
  the using block's input channel

The outcome only depends on the set of references, not their order.
"""

from collections.abc import Iterable

from codegraph_tiers.compiler.segmenter import BlockResolver
from codegraph_tiers.models import Tier, TierBlock
from codegraph_tiers.syntax.nodes import Identifier
from codegraph_tiers.syntax.scope import Reference


def classify_reference(use_block: TierBlock, decl_block: TierBlock, name: str) -> None:
    if use_block is decl_block:
        return

    if use_block.has_tier(Tier.SERVER) and decl_block.has_tier(Tier.SERVER):
        use_block.mark_session_required()
        return

    if use_block.has_tier(Tier.CLIENT) and decl_block.has_tier(Tier.CLIENT):
        return

    decl_block.add_output(name)
    use_block.add_input(name)


def classify(
    references: Iterable[Reference],
    resolver: BlockResolver,
    excluded: Iterable[Identifier] = (),
) -> int:
    """
    Apply every resolved reference to its blocks.

    Args:
        references: References from the scope graph
        resolver: Block lookup for the module
        excluded: Identifier nodes to ignore (the tier tokens of markers)

    Returns:
        Number of references that were classified
    """
    skip = set(excluded)
    classified = 0

    for reference in references:
        if reference.resolved is None or reference.identifier in skip:
            continue

        use_block = resolver.block_for(reference.identifier)
        decl_block = resolver.block_for(reference.resolved)
        if use_block is None or decl_block is None:
            continue

        classify_reference(use_block, decl_block, reference.name)
        classified += 1

    return classified


__all__ = ["classify", "classify_reference"]
