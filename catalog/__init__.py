"""
Loading, searching and checking the pattern documents.
"""
from .document import (
    CATEGORIES,
    CodeBlock,
    PatternDocument,
    parse_document,
    load_document
)
from .loader import Catalog
from .verify import (
    CheckStatus,
    TranscriptCheck,
    VerificationReport,
    normalize_transcript,
    verify_document,
    verify_catalog
)

__all__ = [
    'CATEGORIES',
    'CodeBlock',
    'PatternDocument',
    'parse_document',
    'load_document',
    'Catalog',
    'CheckStatus',
    'TranscriptCheck',
    'VerificationReport',
    'normalize_transcript',
    'verify_document',
    'verify_catalog',
]
