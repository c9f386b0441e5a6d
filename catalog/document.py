"""
Parsing of pattern documents.

A pattern document is a markdown file with optional YAML front matter::

    ---
    category: behavioral
    example: chain_of_responsibility
    summary: Pass a request along a chain of handlers.
    ---
    # Chain of Responsibility

    ## Intent
    ...

    ## Sample Output
    ```text
    Manager approved expense of $500.00
    ```

The first ``#`` heading is the title, every ``##`` heading opens a section,
and fenced code blocks are collected together with the section they sit in.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from utils.logging_config import get_logger
from utils.exceptions import DocumentError

logger = get_logger(__name__)

FRONT_MATTER_DELIMITER = '---'
FENCE_MARKERS = ('```', '~~~')
CATEGORIES = ('creational', 'structural', 'behavioral')
SAMPLE_OUTPUT_SECTION = 'sample output'
INTENT_SECTION = 'intent'


@dataclass(frozen=True)
class CodeBlock:
    language: str
    code: str
    section: Optional[str] = None

    @property
    def lines(self) -> List[str]:
        return self.code.split('\n') if self.code else []


@dataclass
class PatternDocument:
    """One parsed pattern document."""
    slug: str
    title: str
    category: Optional[str] = None
    example: Optional[str] = None
    summary: str = ''
    sections: Dict[str, str] = field(default_factory=dict)
    code_blocks: List[CodeBlock] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    path: Optional[Path] = None
    text: str = ''
    body: str = ''

    def section(self, name: str) -> Optional[str]:
        """Body of a section, matched case-insensitively."""
        wanted = name.strip().lower()
        for heading, body in self.sections.items():
            if heading.lower() == wanted:
                return body
        return None

    def blocks_in(self, name: str) -> List[CodeBlock]:
        wanted = name.strip().lower()
        return [b for b in self.code_blocks if b.section and b.section.lower() == wanted]

    @property
    def intent(self) -> str:
        return self.section(INTENT_SECTION) or ''

    @property
    def expected_output(self) -> Optional[List[str]]:
        """Lines of the first code block under "Sample Output", if any."""
        blocks = self.blocks_in(SAMPLE_OUTPUT_SECTION)
        if not blocks:
            return None
        return blocks[0].lines

    @property
    def snippets(self) -> List[CodeBlock]:
        """Illustrative code, i.e. every block outside the sample output."""
        return [
            b for b in self.code_blocks
            if not (b.section and b.section.lower() == SAMPLE_OUTPUT_SECTION)
        ]


def _split_front_matter(lines: List[str], slug: str) -> Tuple[Dict[str, Any], int]:
    """Return the front matter mapping and the index of the first body line."""
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return {}, 0

    for index in range(1, len(lines)):
        if lines[index].strip() == FRONT_MATTER_DELIMITER:
            raw = '\n'.join(lines[1:index])
            try:
                metadata = yaml.safe_load(raw)
            except yaml.YAMLError as e:
                raise DocumentError(
                    f"Invalid front matter in {slug}: {e}",
                    details={'slug': slug}
                ) from e
            if metadata is None:
                metadata = {}
            if not isinstance(metadata, dict):
                raise DocumentError(
                    f"Front matter of {slug} must be a mapping",
                    details={'slug': slug, 'actual_type': type(metadata).__name__}
                )
            return metadata, index + 1

    raise DocumentError(f"Unterminated front matter in {slug}", details={'slug': slug})


def _opening_fence(stripped: str) -> Optional[Tuple[str, str]]:
    """Return the full fence run (e.g. four backticks) and the info language."""
    for marker in FENCE_MARKERS:
        if stripped.startswith(marker):
            run = stripped[:len(stripped) - len(stripped.lstrip(marker[0]))]
            info = stripped[len(run):].strip()
            language = info.split()[0].lower() if info else ''
            return run, language
    return None


def _is_closing_fence(stripped: str, fence: str) -> bool:
    # Only a bare run of the same character, at least as long as the opener
    return stripped.startswith(fence) and not stripped.strip(fence[0])


def _front_matter_text(metadata: Dict[str, Any], key: str, slug: str) -> Optional[str]:
    value = metadata.get(key)
    if value is not None and not isinstance(value, str):
        raise DocumentError(
            f"Front matter field '{key}' of {slug} must be a string",
            details={'slug': slug, 'field': key, 'actual_type': type(value).__name__}
        )
    return value


def parse_document(text: str, slug: str, path: Optional[Path] = None) -> PatternDocument:
    """Parse the markdown text of one pattern document."""
    lines = text.splitlines()
    metadata, start = _split_front_matter(lines, slug)

    title: Optional[str] = None
    current: Optional[str] = None
    section_lines: Dict[str, List[str]] = {}
    code_blocks: List[CodeBlock] = []

    fence: Optional[Tuple[str, str, int]] = None
    buffer: List[str] = []

    for lineno, line in enumerate(lines[start:], start=start + 1):
        stripped = line.strip()

        if fence is not None:
            marker, language, _ = fence
            if _is_closing_fence(stripped, marker):
                code_blocks.append(CodeBlock(language, '\n'.join(buffer), current))
                fence = None
                buffer = []
            else:
                buffer.append(line)
            if current is not None:
                section_lines[current].append(line)
            continue

        opening = _opening_fence(stripped)
        if opening is not None:
            fence = (opening[0], opening[1], lineno)
        elif line.startswith('# ') and title is None:
            title = line[2:].strip()
            continue
        elif line.startswith('## '):
            current = line[3:].strip()
            section_lines.setdefault(current, [])
            continue

        if current is not None:
            section_lines[current].append(line)

    if fence is not None:
        raise DocumentError(
            f"Unterminated code block in {slug} starting at line {fence[2]}",
            details={'slug': slug, 'line': fence[2]}
        )

    if not title:
        raise DocumentError(f"Document {slug} has no title", details={'slug': slug})

    category = _front_matter_text(metadata, 'category', slug)
    example = _front_matter_text(metadata, 'example', slug)
    summary = _front_matter_text(metadata, 'summary', slug)
    document = PatternDocument(
        slug=slug,
        title=title,
        category=category.strip().lower() if category else None,
        example=example.strip() if example else None,
        summary=(summary or '').strip(),
        sections={name: '\n'.join(body).strip() for name, body in section_lines.items()},
        code_blocks=code_blocks,
        metadata=metadata,
        path=path,
        text=text,
        body='\n'.join(lines[start:]).strip()
    )
    logger.debug(
        f"Parsed {slug}: {len(document.sections)} sections, {len(code_blocks)} code blocks"
    )
    return document


def load_document(path) -> PatternDocument:
    """Read and parse a pattern document; the file stem becomes the slug."""
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as e:
        raise DocumentError(
            f"Cannot read {path}: {e}",
            details={'path': str(path)}
        ) from e
    return parse_document(text, slug=path.stem, path=path)
