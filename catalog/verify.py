"""
Documentation-accuracy checks: does each document's sample output match what
its runnable example actually prints?
"""
import difflib
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from patterns.factory import ExampleFactory, run_example
from utils.logging_config import LogContext, get_logger
from utils.exceptions import ExampleError
from .document import PatternDocument
from .loader import Catalog

logger = get_logger(__name__)


class CheckStatus(str, Enum):
    PASSED = 'passed'
    FAILED = 'failed'
    SKIPPED = 'skipped'
    ERROR = 'error'


@dataclass
class TranscriptCheck:
    slug: str
    status: CheckStatus
    expected: List[str] = field(default_factory=list)
    actual: List[str] = field(default_factory=list)
    diff: str = ''
    message: str = ''

    @property
    def passed(self) -> bool:
        return self.status is CheckStatus.PASSED


@dataclass
class VerificationReport:
    checks: List[TranscriptCheck] = field(default_factory=list)

    def counts(self) -> Dict[str, int]:
        totals = {status.value: 0 for status in CheckStatus}
        for check in self.checks:
            totals[check.status.value] += 1
        return totals

    @property
    def problems(self) -> List[TranscriptCheck]:
        return [c for c in self.checks if c.status in (CheckStatus.FAILED, CheckStatus.ERROR)]

    @property
    def ok(self) -> bool:
        return not self.problems


def normalize_transcript(lines: Iterable[str]) -> List[str]:
    """Drop trailing whitespace on each line and trailing blank lines."""
    normalized = [line.rstrip() for line in lines]
    while normalized and not normalized[-1]:
        normalized.pop()
    return normalized


def verify_document(document: PatternDocument) -> TranscriptCheck:
    """Run the document's example and compare it with its sample output."""
    slug = document.slug

    if not document.example:
        return TranscriptCheck(slug, CheckStatus.SKIPPED, message='No runnable example')

    expected_raw = document.expected_output
    if expected_raw is None:
        return TranscriptCheck(slug, CheckStatus.SKIPPED, message='No sample output')
    expected = normalize_transcript(expected_raw)

    if not ExampleFactory.is_registered(document.example):
        return TranscriptCheck(
            slug,
            CheckStatus.ERROR,
            expected=expected,
            message=f"Unknown example: {document.example}"
        )

    try:
        actual = normalize_transcript(run_example(document.example))
    except ExampleError as e:
        logger.error(f"Example for {slug} failed: {e.message}")
        return TranscriptCheck(slug, CheckStatus.ERROR, expected=expected, message=e.message)

    if actual == expected:
        return TranscriptCheck(slug, CheckStatus.PASSED, expected, actual, message='Transcript matches')

    diff = '\n'.join(difflib.unified_diff(
        expected,
        actual,
        fromfile=f"{slug} (documented)",
        tofile=f"{slug} (actual)",
        lineterm=''
    ))
    logger.warning(f"Transcript mismatch in {slug}")
    return TranscriptCheck(
        slug, CheckStatus.FAILED, expected, actual, diff=diff, message='Transcript differs'
    )


def verify_catalog(catalog: Catalog, slugs: Optional[Iterable[str]] = None) -> VerificationReport:
    """Verify some or all documents of a catalog, in slug order."""
    documents = catalog.list() if slugs is None else [catalog.get(slug) for slug in slugs]
    report = VerificationReport()
    for document in documents:
        with LogContext(logger, slug=document.slug):
            report.checks.append(verify_document(document))
    logger.info(f"Verified {len(report.checks)} documents: {report.counts()}")
    return report
