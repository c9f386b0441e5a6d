"""
The catalog: every pattern document in a directory, keyed by slug.
"""
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from utils.logging_config import get_logger
from utils.exceptions import CatalogError, DocumentError, DocumentNotFoundError
from .document import CATEGORIES, PatternDocument, load_document

logger = get_logger(__name__)

DOCUMENT_GLOB = '*.md'


class Catalog:
    """Read-only collection of pattern documents."""

    def __init__(self, documents: Iterable[PatternDocument] = (), strict: bool = False):
        self.strict = strict
        self._documents: Dict[str, PatternDocument] = {}
        for document in documents:
            self.add(document)

    @classmethod
    def from_directory(cls, directory, strict: bool = False) -> 'Catalog':
        """Load every markdown document in ``directory``."""
        directory = Path(directory)
        if not directory.is_dir():
            raise CatalogError(
                f"Pattern directory not found: {directory}",
                details={'directory': str(directory)}
            )

        paths = sorted(directory.glob(DOCUMENT_GLOB), key=lambda p: p.stem)
        catalog = cls((load_document(path) for path in paths), strict=strict)
        logger.info(f"Loaded {len(catalog)} pattern documents from {directory}")
        return catalog

    def add(self, document: PatternDocument):
        if document.slug in self._documents:
            raise CatalogError(
                f"Duplicate pattern document: {document.slug}",
                details={'slug': document.slug}
            )

        if document.category not in CATEGORIES:
            if self.strict:
                raise DocumentError(
                    f"Document {document.slug} has unknown category {document.category!r}",
                    details={'slug': document.slug, 'allowed': list(CATEGORIES)}
                )
            logger.warning(f"Document {document.slug} has unknown category {document.category!r}")

        self._documents[document.slug] = document

    def get(self, slug: str) -> PatternDocument:
        try:
            return self._documents[slug]
        except KeyError:
            raise DocumentNotFoundError(
                f"No pattern document named {slug}",
                details={'slug': slug, 'available': self.slugs()}
            ) from None

    def slugs(self) -> List[str]:
        return sorted(self._documents)

    def list(self, category: Optional[str] = None) -> List[PatternDocument]:
        """Documents sorted by slug, optionally of one category."""
        documents = [self._documents[slug] for slug in self.slugs()]
        if category is not None:
            wanted = category.lower()
            documents = [d for d in documents if d.category == wanted]
        return documents

    def search(self, term: str) -> List[PatternDocument]:
        """Case-insensitive search over title, summary and intent."""
        needle = term.strip().lower()
        if not needle:
            return self.list()
        return [
            d for d in self.list()
            if needle in d.title.lower()
            or needle in d.summary.lower()
            or needle in d.intent.lower()
        ]

    def categories(self) -> List[str]:
        return sorted({d.category for d in self._documents.values() if d.category})

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[PatternDocument]:
        return iter(self.list())

    def __contains__(self, slug: str) -> bool:
        return slug in self._documents
