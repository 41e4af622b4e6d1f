"""
epub2code
Read a book while it looks like you are reading code.
"""

from .book import BookLoadError, Chapter, EpubBookSource
from .config import CodeifierSettings, load_lexicon
from .engine import Codeifier, OutputLine
from .renderers import StructureKind
from .selector import EngineState
from .store import BookRecord, BookStore

__version__ = "0.2.0"

__all__ = [
    "BookLoadError",
    "BookRecord",
    "BookStore",
    "Chapter",
    "Codeifier",
    "CodeifierSettings",
    "EngineState",
    "EpubBookSource",
    "OutputLine",
    "StructureKind",
    "load_lexicon",
]
