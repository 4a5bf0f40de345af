"""cuppa-cli: code generation from declarative specifications."""

__version__ = "0.1.0"
