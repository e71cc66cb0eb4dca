"""Reading, parsing and committing dotenv configuration."""

from .loader import commit_entries
from .parser import parse_entries
from .repository import EnvironmentSink, OsEnvironmentSink, Repository, StoreSink
from .sources import FileSource, Source, StringSource

__all__ = [
    "EnvironmentSink",
    "FileSource",
    "OsEnvironmentSink",
    "Repository",
    "Source",
    "StoreSink",
    "StringSource",
    "commit_entries",
    "parse_entries",
]
