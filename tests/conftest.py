"""Shared fixtures."""
from pathlib import Path

import pytest

from config import DEFAULT_DOCS_DIR

SAMPLE_DOCUMENT = """---
category: behavioral
example: chain_of_responsibility
summary: A tiny chain.
---
# Tiny Chain

## Intent

Hand a request along.

## Example

```python
chain.handle(request)
```

## Sample Output

```text
first line
second line
```
"""


@pytest.fixture
def docs_dir() -> Path:
    """The shipped pattern documents."""
    return DEFAULT_DOCS_DIR


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_DOCUMENT


@pytest.fixture
def write_doc(tmp_path):
    """Write a markdown document into a temporary docs directory."""
    def _write(slug: str, text: str) -> Path:
        path = tmp_path / f"{slug}.md"
        path.write_text(text, encoding='utf-8')
        return path
    return _write
