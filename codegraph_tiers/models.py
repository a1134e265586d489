"""
Tier compiler models.

Internal pipeline state (markers, blocks) uses dataclasses; the emitted
result uses pydantic models so it serializes with the wire field names.
"""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from codegraph_tiers.syntax.nodes import FunctionLike, Identifier, LabeledStatement


class Tier(str, Enum):
    """Execution context of a block."""

    SERVER = "server"
    CLIENT = "client"


TIER_NAMES = frozenset(tier.value for tier in Tier)


@dataclass(frozen=True)
class TierMarker:
    """
    One ``on: ...`` annotation statement.

    Attributes:
        tiers: Tier tokens in source order (non-empty)
        start: Offset where the marker statement begins
        end: Offset where its governed region begins
        function: Enclosing async function, None at module top level
        node: The labeled statement itself
        identifiers: Identifier nodes spelling the tier tokens
    """

    tiers: tuple[Tier, ...]
    start: int
    end: int
    function: FunctionLike | None = None
    node: LabeledStatement | None = field(default=None, repr=False, compare=False)
    identifiers: tuple[Identifier, ...] = field(default=(), repr=False, compare=False)


@dataclass
class TierBlock:
    """
    A marker plus the source region it governs.

    Mutated only through ``mark_session_required``, ``add_input`` and
    ``add_output``; ``freeze`` locks the block before fragment generation.
    """

    id: int
    tiers: frozenset[Tier]
    start: int
    end: int
    session_required: bool = False
    input_names: set[str] | frozenset[str] = field(default_factory=set)
    output_names: set[str] | frozenset[str] = field(default_factory=set)
    frozen: bool = False

    def has_tier(self, tier: Tier) -> bool:
        return tier in self.tiers

    @property
    def is_server(self) -> bool:
        return Tier.SERVER in self.tiers

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)

    def _check_mutable(self) -> None:
        if self.frozen:
            raise RuntimeError(f"Tier block {self.id} is frozen")

    def mark_session_required(self) -> None:
        self._check_mutable()
        self.session_required = True

    def add_input(self, name: str) -> None:
        self._check_mutable()
        self.input_names.add(name)  # type: ignore[union-attr]

    def add_output(self, name: str) -> None:
        self._check_mutable()
        self.output_names.add(name)  # type: ignore[union-attr]

    def freeze(self) -> None:
        self.input_names = frozenset(self.input_names)
        self.output_names = frozenset(self.output_names)
        self.frozen = True


# ============================================================
# Output
# ============================================================


class Fragment(BaseModel):
    """Executable code for one server-tagged block."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    session_required: bool = Field(alias="sessionRequired")
    code: str
    input_names: list[str] = Field(default_factory=list, alias="inputNames")
    output_names: list[str] = Field(default_factory=list, alias="outputNames")

    @field_serializer("id")
    def serialize_id(self, value: int) -> str:
        # Opaque on the wire; unique only within one compilation
        return str(value)


class BlockSummary(BaseModel):
    """Read-only view of a classified block (client blocks included)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    tiers: list[Tier]
    start: int
    end: int
    session_required: bool = Field(alias="sessionRequired")
    input_names: list[str] = Field(default_factory=list, alias="inputNames")
    output_names: list[str] = Field(default_factory=list, alias="outputNames")

    @classmethod
    def from_block(cls, block: TierBlock) -> "BlockSummary":
        return cls(
            id=block.id,
            tiers=sorted(block.tiers, key=lambda tier: tier.value),
            start=block.start,
            end=block.end,
            session_required=block.session_required,
            input_names=sorted(block.input_names),
            output_names=sorted(block.output_names),
        )


class CompilationResult(BaseModel):
    """Compiler output for one module."""

    model_config = ConfigDict(frozen=True)

    server: list[Fragment] = Field(default_factory=list)
    blocks: list[BlockSummary] = Field(default_factory=list)

    def to_output(self) -> dict:
        """Wire shape: ``{"server": [{"id", "sessionRequired", "code"}, ...]}``"""
        return {
            "server": [
                fragment.model_dump(by_alias=True, include={"id", "session_required", "code"})
                for fragment in self.server
            ]
        }


__all__ = [
    "Tier",
    "TIER_NAMES",
    "TierMarker",
    "TierBlock",
    "Fragment",
    "BlockSummary",
    "CompilationResult",
]
