from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field

from ..core.errors import InvalidInputError


class SplitStrategy(str, Enum):
    """Mutually exclusive splitting modes; the value is the file-name label."""

    BY_BYTE_SIZE = "size"
    BY_PART_COUNT = "part"
    BY_CHARACTER_COUNT = "char"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_byte_oriented(self) -> bool:
        return self is not SplitStrategy.BY_CHARACTER_COUNT


class SourceFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path
    size_bytes: int
    encoding: str | None = None  # character mode only


class SplitPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    strategy: SplitStrategy
    value: int = Field(gt=0)

    @classmethod
    def from_options(
        cls,
        chunk_size: int | None = None,
        part_count: int | None = None,
        char_count: int | None = None,
    ) -> "SplitPlan":
        """Build a plan from the three mutually exclusive CLI/library options.

        Exactly one option must be given and it must be positive.
        """
        given = [
            (strategy, value)
            for strategy, value in (
                (SplitStrategy.BY_BYTE_SIZE, chunk_size),
                (SplitStrategy.BY_PART_COUNT, part_count),
                (SplitStrategy.BY_CHARACTER_COUNT, char_count),
            )
            if value is not None
        ]
        if not given:
            raise InvalidInputError(
                "One of chunk size, part count or character count is required"
            )
        if len(given) > 1:
            raise InvalidInputError(
                "Chunk size, part count and character count are mutually exclusive"
            )

        strategy, value = given[0]
        if value <= 0:
            raise InvalidInputError(
                f"{_OPTION_NAMES[strategy]} must be greater than zero (got {value})"
            )
        return cls.build(strategy, value)

    @classmethod
    def build(cls, strategy: SplitStrategy, value: int) -> "SplitPlan":
        """Validate a strategy/value pair, raising InvalidInputError on failure."""
        try:
            return cls(strategy=strategy, value=value)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid split plan: {e.errors()[0]['msg']}") from e


_OPTION_NAMES = {
    SplitStrategy.BY_BYTE_SIZE: "Chunk size",
    SplitStrategy.BY_PART_COUNT: "Part count",
    SplitStrategy.BY_CHARACTER_COUNT: "Character count",
}


class ChunkDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path
    index: int  # 1-based
    size: int  # in ``unit``
    unit: str  # bytes|chars
    bytes_written: int


class ChunkingResult(BaseModel):
    source: SourceFile
    destination: Path
    strategy: SplitStrategy
    chunks: list[ChunkDescriptor] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def count(self) -> int:
        return len(self.chunks)

    def summary(self) -> str:
        return f"Split {self.source.path.name} into {self.count} parts -> {self.destination}"


class JoinResult(BaseModel):
    output: Path
    parts: int
    size_bytes: int
