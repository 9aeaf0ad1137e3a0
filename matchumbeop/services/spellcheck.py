"""
Spell-check service factory.
"""
from typing import Dict, Optional, Union

from matchumbeop.config import settings
from matchumbeop.schemas.spellcheck import SpellCheckEngine
from matchumbeop.services.spellcheck_base import SpellCheckService
from matchumbeop.services.spellcheck_daum import DaumSpellCheckService
from matchumbeop.services.spellcheck_naver import NaverSpellCheckService
from matchumbeop.utils.logger import get_logger

logger = get_logger("services.spellcheck_factory")


def resolve_engine(engine: Union[str, SpellCheckEngine, None] = None) -> SpellCheckEngine:
    """
    Resolve an engine name, falling back to settings.SPELLCHECK_ENGINE.

    Raises:
        ValueError: If the engine is not supported
    """
    if engine is None:
        engine = settings.SPELLCHECK_ENGINE

    if isinstance(engine, SpellCheckEngine):
        return engine

    try:
        return SpellCheckEngine(engine.lower())
    except ValueError as e:
        supported = ", ".join(item.value for item in SpellCheckEngine)
        raise ValueError(
            f"Unsupported spell-check engine: {engine}. "
            f"Supported engines: {supported}"
        ) from e


def create_spellcheck_service(engine: Union[str, SpellCheckEngine, None] = None) -> SpellCheckService:
    """
    Factory function to create the spell-check service for an engine.

    Args:
        engine: Engine name ("naver", "daum"). If None, uses settings.SPELLCHECK_ENGINE

    Returns:
        SpellCheckService instance for the engine

    Raises:
        ValueError: If engine is not supported
    """
    engine = resolve_engine(engine)

    if engine == SpellCheckEngine.NAVER:
        logger.info("Creating Naver spell-check service")
        return NaverSpellCheckService()
    elif engine == SpellCheckEngine.DAUM:
        logger.info("Creating Daum spell-check service")
        return DaumSpellCheckService()

    raise ValueError(f"Unsupported spell-check engine: {engine}")


def create_spellcheck_services(
    engines: Optional[list[SpellCheckEngine]] = None,
) -> Dict[SpellCheckEngine, SpellCheckService]:
    """Create one service per engine (all engines by default)."""
    return {
        engine: create_spellcheck_service(engine)
        for engine in (engines or list(SpellCheckEngine))
    }
