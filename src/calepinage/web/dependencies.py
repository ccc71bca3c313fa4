"""FastAPI dependency injection for layout services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from calepinage.application.commands import GenerateLayoutCommand
from calepinage.domain.layout import TileLayoutEngine


@lru_cache(maxsize=1)
def get_layout_engine() -> TileLayoutEngine:
    """Get cached TileLayoutEngine instance."""
    return TileLayoutEngine()


def get_generate_command(
    engine: Annotated[TileLayoutEngine, Depends(get_layout_engine)],
) -> GenerateLayoutCommand:
    """Dependency for GenerateLayoutCommand."""
    return GenerateLayoutCommand(engine)


# Type aliases for cleaner endpoint signatures
GenerateCommandDep = Annotated[GenerateLayoutCommand, Depends(get_generate_command)]
