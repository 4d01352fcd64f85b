"""schemakit - JSON Schema validation and documentation for content records."""

from importlib.metadata import version

__version__ = version("schemakit-cli")
