"""Read and write INI files without losing their comments."""

from .document import Document, dump, dumps, load, loads
from .exceptions import ConversionError, InidocError, MissingPathError
from .model import Section, Setting

__all__ = [
    "Document",
    "Section",
    "Setting",
    "load",
    "loads",
    "dump",
    "dumps",
    "InidocError",
    "MissingPathError",
    "ConversionError",
]
