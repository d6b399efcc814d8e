"""Section placeholder expansion.

`{{#name}}` anywhere in the composed page is replaced by the content of
section `name`, or by nothing when the section does not exist. Sections may
reference other sections, so expansion repeats until a pass changes nothing.
"""

import logging
import re

from pagestack.errors import CyclicSectionReference

logger = logging.getLogger(__name__)

SECTION_PLACEHOLDER = re.compile(r"\{\{#([^}]+)\}\}")


class SectionResolver:
    """Expands section placeholders to a fixed point.

    Without a cycle, every pass resolves at least one more level of nesting,
    and nesting can go no deeper than the number of sections. Needing more
    passes than that means some section references itself, directly or
    through others.
    """

    def resolve(self, text: str, sections: dict[str, str]) -> str:
        """Replace every section placeholder in text.

        Args:
            text: Composed page text
            sections: Section name to content

        Returns:
            Text without section placeholders

        Raises:
            CyclicSectionReference: If section content keeps re-expanding
        """
        max_passes = len(sections) + 1
        passes = 0

        while True:
            expanded: list[str] = []

            def substitute(match: re.Match[str]) -> str:
                name = match.group(1)
                if name in sections:
                    expanded.append(name)
                    return sections[name]
                return ""

            text = SECTION_PLACEHOLDER.sub(substitute, text)
            passes += 1
            if not expanded:
                logger.debug("Resolved sections in %d pass(es)", passes)
                return text
            if passes >= max_passes:
                raise CyclicSectionReference(expanded)
