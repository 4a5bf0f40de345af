"""Lookup of generators by (spec kind, platform)."""

from cuppa_cli.errors import UnsupportedPlatformError

from .api_client import KotlinAPIClientGenerator, SwiftAPIClientGenerator, TypeScriptAPIClientGenerator
from .base import Generator
from .component import SwiftComponentGenerator
from .model import KotlinModelGenerator, SwiftModelGenerator, TypeScriptModelGenerator
from .plugin import SwiftPluginGenerator
from .theme import KotlinThemeGenerator, SwiftThemeGenerator, TypeScriptThemeGenerator

BUILTIN_GENERATORS = (
    SwiftModelGenerator,
    KotlinModelGenerator,
    TypeScriptModelGenerator,
    SwiftAPIClientGenerator,
    KotlinAPIClientGenerator,
    TypeScriptAPIClientGenerator,
    SwiftThemeGenerator,
    KotlinThemeGenerator,
    TypeScriptThemeGenerator,
    SwiftComponentGenerator,
    SwiftPluginGenerator,
)


class GeneratorRegistry:
    """Maps ``(kind, platform)`` pairs to generator classes."""

    def __init__(self):
        self._generators: dict[tuple[str, str], type[Generator]] = {}

    def register(self, generator_class: type[Generator], replace: bool = False):
        key = (generator_class.kind, generator_class.platform)
        if key in self._generators and not replace:
            raise ValueError(f"Generator already registered for {key[0]} on {key[1]}")
        self._generators[key] = generator_class

    def get(self, kind: str, platform: str) -> Generator:
        """Return a fresh generator instance.

        Raises:
            UnsupportedPlatformError: No generator handles ``kind`` for ``platform``.
        """
        generator_class = self._generators.get((kind, platform.lower()))
        if generator_class is None:
            raise UnsupportedPlatformError(kind, platform)
        return generator_class()

    def supports(self, kind: str, platform: str) -> bool:
        return (kind, platform.lower()) in self._generators

    def platforms(self, kind: str) -> list[str]:
        return [platform for (k, platform) in self._generators if k == kind]


def default_registry() -> GeneratorRegistry:
    registry = GeneratorRegistry()
    for generator_class in BUILTIN_GENERATORS:
        registry.register(generator_class)
    return registry


registry = default_registry()


def get_generator(kind: str, platform: str) -> Generator:
    return registry.get(kind, platform)
