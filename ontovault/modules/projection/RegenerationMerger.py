"""
ontovault Regeneration Merger

Splices a freshly generated front matter header into a previously generated
file. Everything the user wrote outside the first front matter block is kept
verbatim.
"""

import re
from typing import Optional

from ontovault.modules.projection.constants import DEFAULT_TEMPLATE_BODY

# First block opened and closed by a line holding only "---" (trailing blanks allowed)
FRONT_MATTER_PATTERN = re.compile(
    r"^---[ \t]*\r?\n(?:.*?\r?\n)??---[ \t]*(?:\r?\n|\Z)",
    re.MULTILINE | re.DOTALL,
)


def merge(generated_header: str, existing: Optional[str]) -> str:
    """
    Merge a regenerated header with the current contents of a file.

    Args:
        generated_header: New front matter, delimiters included
        existing: Current file contents, or None when the file does not exist

    Returns:
        - no existing file: the header followed by the default body
        - a front matter block found: any text before it, the header, then
          everything after the block's closing line
        - no block found: the header followed by the whole existing content
    """
    if existing is None:
        return generated_header + DEFAULT_TEMPLATE_BODY

    match = FRONT_MATTER_PATTERN.search(existing)
    if match is None:
        return generated_header + existing
    return existing[:match.start()] + generated_header + existing[match.end():]
