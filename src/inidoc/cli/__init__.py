"""Command line interface for reading and editing INI files."""

from .main import app
