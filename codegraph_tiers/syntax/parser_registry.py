"""
Parser Registry for Tree-sitter

Manages the grammars the compiler needs and hands out parsers.
"""

from tree_sitter import Parser
from tree_sitter_language_pack import get_language

from codegraph_tiers.logging import get_logger

logger = get_logger(__name__)


class ParserRegistry:
    """
    Registry for language parsers.

    Supports:
    - JavaScript (module source)
    - HTML (component documents, for <script> extraction)

    Languages are loaded once and shared. Parsers are created per call so
    that concurrent compilations never share a parser.
    """

    def __init__(self):
        self._languages: dict[str, object] = {}
        self._setup_languages()

    def _register_language(self, name: str, aliases: list[str] | None = None) -> None:
        """
        Register a language and its aliases.

        Args:
            name: Language name (e.g., "javascript")
            aliases: Optional list of aliases (e.g., ["js"])
        """
        try:
            lang = get_language(name)
            self._languages[name] = lang

            if aliases:
                for alias in aliases:
                    self._languages[alias] = lang

            logger.debug("grammar_loaded", language=name, aliases=aliases or [])
        except Exception as e:
            logger.warning("grammar_load_failed", language=name, error=str(e))

    def _setup_languages(self):
        self._register_language("javascript", ["js"])
        self._register_language("html", ["vue"])

    def get_parser(self, language: str) -> Parser | None:
        """
        Create a parser for the specified language.

        Returns:
            Parser instance or None if language not supported
        """
        lang = self._languages.get(language.lower())
        if lang is None:
            return None
        return Parser(lang)


# Global registry instance (grammars only; immutable after setup)
_registry: ParserRegistry | None = None


def get_registry() -> ParserRegistry:
    """Get global parser registry instance"""
    global _registry
    if _registry is None:
        _registry = ParserRegistry()
    return _registry
