"""Per-render composition state.

One RenderContext lives for exactly one top-level page render. Section
sub-loads share its variables and sections but run with the page's template
stack set aside, so a section never inherits the page's wrappers.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from pagestack.errors import CyclicSectionReference


class TemplateStack:
    """LIFO stack of template names.

    Names are pushed in directive order and popped last-first, so the
    last-declared template wraps the content first (innermost wrapper).
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: list[str] = list(names)

    def push(self, name: str) -> None:
        self._names.append(name)

    def extend(self, names: Iterable[str]) -> None:
        """Push several names in order."""
        self._names.extend(names)

    def pop(self) -> str:
        """Remove and return the most recently pushed name.

        Raises:
            IndexError: If the stack is empty
        """
        if not self._names:
            raise IndexError("pop from empty template stack")
        return self._names.pop()

    def snapshot(self) -> tuple[str, ...]:
        """Return the current names, bottom first."""
        return tuple(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __bool__(self) -> bool:
        return bool(self._names)

    def __repr__(self) -> str:
        return f"TemplateStack({self._names!r})"


@dataclass
class RenderContext:
    """Mutable state shared by every file loaded for one page.

    Attributes:
        template_stack: Pending wrapper templates for the current load
        variables: Values for the final render (first write wins)
        sections: Named section content (accumulated by @append)
        loading_sections: Section sources currently being loaded, outermost first
    """

    template_stack: TemplateStack = field(default_factory=TemplateStack)
    variables: dict[str, str] = field(default_factory=dict)
    sections: dict[str, str] = field(default_factory=dict)
    loading_sections: list[str] = field(default_factory=list)

    def set_variable(self, key: str, value: str) -> bool:
        """Assign a variable unless it is already set.

        Returns:
            True if the value was stored, False if an earlier value won
        """
        if key in self.variables:
            return False
        self.variables[key] = value
        return True

    def has_section(self, name: str) -> bool:
        return name in self.sections

    def add_section(self, name: str, content: str) -> None:
        """Append content to a section, creating it if absent."""
        self.sections[name] = self.sections.get(name, "") + content

    @contextmanager
    def isolated_stack(self) -> Iterator[TemplateStack]:
        """Run a nested load with an empty template stack.

        The outer stack is set aside and restored on exit, including when
        the nested load raises.
        """
        outer = self.template_stack
        self.template_stack = TemplateStack()
        try:
            yield self.template_stack
        finally:
            self.template_stack = outer

    @contextmanager
    def loading_section(self, source: str) -> Iterator[None]:
        """Load a section source with the page's template stack set aside.

        Raises:
            CyclicSectionReference: If source is already being loaded further
                up, which would otherwise recurse forever
        """
        if source in self.loading_sections:
            raise CyclicSectionReference([*self.loading_sections, source])
        self.loading_sections.append(source)
        try:
            with self.isolated_stack():
                yield
        finally:
            self.loading_sections.pop()
