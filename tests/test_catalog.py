"""Tests for document parsing, the catalog and transcript verification."""
import pytest
from catalog import (
    Catalog,
    CheckStatus,
    load_document,
    normalize_transcript,
    parse_document,
    verify_catalog,
    verify_document,
)
from utils.exceptions import CatalogError, DocumentError, DocumentNotFoundError


class TestParseDocument:
    """Tests for markdown parsing."""

    def test_front_matter_and_title(self, sample_text):
        """Test reading front matter fields and the title."""
        document = parse_document(sample_text, 'tiny')
        assert document.slug == 'tiny'
        assert document.title == 'Tiny Chain'
        assert document.category == 'behavioral'
        assert document.example == 'chain_of_responsibility'
        assert document.summary == 'A tiny chain.'

    def test_sections(self, sample_text):
        """Test that second-level headings open sections in order."""
        document = parse_document(sample_text, 'tiny')
        assert list(document.sections) == ['Intent', 'Example', 'Sample Output']
        assert document.intent == 'Hand a request along.'
        assert document.section('sample output').startswith('```text')

    def test_code_blocks(self, sample_text):
        """Test collecting fenced blocks with their language and section."""
        document = parse_document(sample_text, 'tiny')
        assert [(b.language, b.section) for b in document.code_blocks] == [
            ('python', 'Example'),
            ('text', 'Sample Output'),
        ]
        assert document.expected_output == ['first line', 'second line']
        assert [b.code for b in document.snippets] == ['chain.handle(request)']

    def test_body_excludes_front_matter(self, sample_text):
        """Test that the body starts at the title."""
        document = parse_document(sample_text, 'tiny')
        assert document.body.startswith('# Tiny Chain')

    def test_no_front_matter(self):
        """Test a document without front matter."""
        document = parse_document('# Plain\n\nJust prose.\n', 'plain')
        assert document.title == 'Plain'
        assert document.category is None
        assert document.example is None
        assert document.expected_output is None

    def test_headings_inside_code_are_ignored(self):
        """Test that headings inside a code block stay code."""
        text = '# Title\n\n## Example\n\n```python\n# a comment\n## not a heading\n```\n'
        document = parse_document(text, 'code')
        assert list(document.sections) == ['Example']
        assert document.code_blocks[0].code == '# a comment\n## not a heading'

    def test_blank_lines_preserved_in_blocks(self):
        """Test that blank lines inside a block are kept."""
        text = '# T\n\n## Sample Output\n\n~~~\na\n\nb\n~~~\n'
        assert parse_document(text, 't').expected_output == ['a', '', 'b']

    def test_missing_title(self):
        """Test that a document needs a title."""
        with pytest.raises(DocumentError):
            parse_document('## Only a section\n', 'untitled')

    def test_unterminated_code_block(self):
        """Test that an open fence reports its starting line."""
        with pytest.raises(DocumentError) as excinfo:
            parse_document('# T\n\n```python\nprint(1)\n', 'open')
        assert excinfo.value.details['line'] == 3

    def test_unterminated_front_matter(self):
        """Test front matter without a closing delimiter."""
        with pytest.raises(DocumentError):
            parse_document('---\ncategory: creational\n# T\n', 'fm')

    def test_front_matter_must_be_mapping(self):
        """Test that list front matter is rejected."""
        with pytest.raises(DocumentError):
            parse_document('---\n- a\n- b\n---\n# T\n', 'fm')

    def test_invalid_yaml(self):
        """Test that broken YAML becomes a document error."""
        with pytest.raises(DocumentError):
            parse_document('---\ncategory: [unclosed\n---\n# T\n', 'fm')

    def test_front_matter_values_must_be_strings(self):
        """Test that non-string example, category or summary values are rejected."""
        for front_matter in ('example: [a, b]', 'example: 42', 'category: 7', 'summary: {a: 1}'):
            with pytest.raises(DocumentError) as excinfo:
                parse_document(f'---\n{front_matter}\n---\n# T\n', 'typed')
            assert excinfo.value.details['field'] == front_matter.split(':')[0]

    def test_longer_fence_holds_shorter_fences(self):
        """Test that a four-backtick block keeps the triple-backtick lines inside it."""
        text = '# T\n\n## Sample Output\n\n````text\n```\ninner\n```\n````\n'
        document = parse_document(text, 'nested')
        assert document.expected_output == ['```', 'inner', '```']
        assert document.code_blocks[0].language == 'text'

    def test_fence_closes_on_same_character_only(self):
        """Test that a tilde line does not close a backtick block."""
        text = '# T\n\n## Example\n\n```\n~~~\n```\n'
        assert parse_document(text, 'mixed').code_blocks[0].code == '~~~'

    def test_load_document_uses_stem(self, write_doc, sample_text):
        """Test that the file stem becomes the slug."""
        path = write_doc('my_pattern', sample_text)
        document = load_document(path)
        assert document.slug == 'my_pattern'
        assert document.path == path

    def test_load_missing_file(self, tmp_path):
        """Test loading a file that does not exist."""
        with pytest.raises(DocumentError):
            load_document(tmp_path / 'missing.md')


class TestCatalog:
    """Tests for the shipped corpus and catalog queries."""

    def test_shipped_documents(self, docs_dir):
        """Test loading the shipped corpus in strict mode."""
        catalog = Catalog.from_directory(docs_dir, strict=True)
        assert catalog.slugs() == [
            'adapter',
            'builder',
            'chain_of_responsibility',
            'factory',
            'observer',
            'singleton',
            'strategy',
        ]
        assert 'factory' in catalog
        assert len(catalog) == 7

    def test_every_document_has_intent(self, docs_dir):
        """Test that each shipped document states its intent."""
        for document in Catalog.from_directory(docs_dir):
            assert document.intent, document.slug
            assert document.category in ('creational', 'structural', 'behavioral')

    def test_list_by_category(self, docs_dir):
        """Test filtering documents by category."""
        catalog = Catalog.from_directory(docs_dir)
        creational = [d.slug for d in catalog.list(category='Creational')]
        assert creational == ['builder', 'factory', 'singleton']
        assert catalog.categories() == ['behavioral', 'creational', 'structural']

    def test_search(self, docs_dir):
        """Test case-insensitive search."""
        catalog = Catalog.from_directory(docs_dir)
        assert [d.slug for d in catalog.search('HANDLER')] == ['chain_of_responsibility']
        assert len(catalog.search('')) == len(catalog)

    def test_get_unknown(self, docs_dir):
        """Test that an unknown slug lists the available ones."""
        with pytest.raises(DocumentNotFoundError) as excinfo:
            Catalog.from_directory(docs_dir).get('visitor')
        assert 'factory' in excinfo.value.details['available']

    def test_missing_directory(self, tmp_path):
        """Test loading a directory that does not exist."""
        with pytest.raises(CatalogError):
            Catalog.from_directory(tmp_path / 'nope')

    def test_strict_rejects_unknown_category(self, tmp_path, write_doc):
        """Test that strict mode rejects unknown categories."""
        write_doc('odd', '---\ncategory: culinary\n---\n# Odd\n')
        assert len(Catalog.from_directory(tmp_path)) == 1
        with pytest.raises(DocumentError):
            Catalog.from_directory(tmp_path, strict=True)

    def test_duplicate_slug(self, sample_text):
        """Test that two documents cannot share a slug."""
        document = parse_document(sample_text, 'tiny')
        with pytest.raises(CatalogError):
            Catalog([document, document])


class TestVerification:
    """Tests for documentation-accuracy checks."""

    def test_shipped_corpus_verifies(self, docs_dir):
        """Test that every shipped transcript matches its example."""
        report = verify_catalog(Catalog.from_directory(docs_dir))
        assert report.ok, [c.diff or c.message for c in report.problems]
        assert report.counts() == {'passed': 6, 'failed': 0, 'skipped': 1, 'error': 0}

    def test_mismatch_produces_diff(self, sample_text):
        """Test that a stale transcript fails with a diff."""
        check = verify_document(parse_document(sample_text, 'tiny'))
        assert check.status is CheckStatus.FAILED
        assert '-first line' in check.diff
        assert '+Manager approved expense of $500.00' in check.diff

    def test_skipped_without_example(self):
        """Test skipping prose-only documents."""
        check = verify_document(parse_document('# Prose\n', 'prose'))
        assert check.status is CheckStatus.SKIPPED

    def test_skipped_without_sample_output(self):
        """Test skipping documents without a sample output."""
        check = verify_document(parse_document('---\nexample: factory\n---\n# F\n', 'f'))
        assert check.status is CheckStatus.SKIPPED

    def test_unknown_example_is_error(self):
        """Test that an unregistered example is an error."""
        text = '---\nexample: visitor\n---\n# V\n\n## Sample Output\n\n```\nx\n```\n'
        check = verify_document(parse_document(text, 'v'))
        assert check.status is CheckStatus.ERROR
        assert 'visitor' in check.message

    def test_list_valued_example_rejected(self):
        """Test that a list-valued example is reported as a document error."""
        text = '---\nexample: [a, b]\n---\n# T\n\n## Sample Output\n\n```text\nx\n```\n'
        with pytest.raises(DocumentError):
            verify_document(parse_document(text, 't'))

    def test_verify_selected_slugs(self, docs_dir):
        """Test verifying selected documents only."""
        report = verify_catalog(Catalog.from_directory(docs_dir), slugs=['factory'])
        assert [c.slug for c in report.checks] == ['factory']
        assert report.checks[0].passed

    def test_normalize_transcript(self):
        """Test trimming trailing whitespace and blank lines."""
        assert normalize_transcript(['a  ', '', 'b', '', '']) == ['a', '', 'b']
