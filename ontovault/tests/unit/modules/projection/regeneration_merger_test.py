from ontovault.modules.projection.RegenerationMerger import merge

HEADER = "---\ntags:\n- p/A\nx:\n---\n"


def test_new_file_gets_default_body():
    assert merge(HEADER, None) == HEADER + "# Tags\n`= this.tags`\n"


def test_existing_header_is_replaced_and_body_kept():
    existing = "---\ntags:\n- p/A\nold: 1\n---\n# Tags\n- custom note\n"

    assert merge(HEADER, existing) == HEADER + "# Tags\n- custom note\n"


def test_merge_is_idempotent():
    once = merge(HEADER, "---\nold: 1\n---\nbody\n")

    assert merge(HEADER, once) == once


def test_only_first_block_is_replaced():
    existing = "---\na: 1\n---\ntext\n---\nnot front matter\n---\n"

    assert merge(HEADER, existing) == HEADER + "text\n---\nnot front matter\n---\n"


def test_delimiters_may_carry_trailing_blanks():
    existing = "--- \na: 1\n---\t\nbody"

    assert merge(HEADER, existing) == HEADER + "body"


def test_empty_front_matter_block():
    assert merge(HEADER, "---\n---\nbody\n") == HEADER + "body\n"


def test_closing_delimiter_at_end_of_file():
    assert merge(HEADER, "---\na: 1\n---") == HEADER


def test_content_without_front_matter_becomes_body():
    existing = "just notes\n----\nmore\n"

    assert merge(HEADER, existing) == HEADER + existing


def test_text_before_front_matter_is_kept():
    existing = "preamble\n---\na: 1\n---\nbody\n"

    assert merge(HEADER, existing) == "preamble\n" + HEADER + "body\n"


def test_windows_line_endings_in_body_are_kept():
    existing = "---\r\na: 1\r\n---\r\nline one\r\nline two\r\n"

    assert merge(HEADER, existing) == HEADER + "line one\r\nline two\r\n"
