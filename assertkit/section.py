"""Section bookkeeping: deciding which section of a test case runs on each pass."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Optional

from assertkit.events import (
    AssertionLocation,
    LocationType,
    Registry,
    Section,
    TestId,
)

MAX_NESTED_SECTIONS = 8


@dataclass
class SectionLevel:
    """Progress through the sibling sections at one nesting depth."""

    current_section_id: int = 0
    previous_section_id: int = 0
    max_section_id: int = 0


@dataclass
class SectionState:
    """Sections entered so far and the per-depth progress of a test case."""

    levels: list[SectionLevel] = field(default_factory=list)
    current_section: list[Section] = field(default_factory=list)
    depth: int = 0
    leaf_executed: bool = False


@dataclass
class TestState:
    """State of the test case being run."""

    __test__ = False

    registry: Registry = field(default_factory=Registry)
    test_id: TestId = field(default_factory=TestId)
    sections: SectionState = field(default_factory=SectionState)
    locations: list[AssertionLocation] = field(default_factory=list)
    held_info: Optional[tuple[SectionState, tuple[AssertionLocation, ...]]] = None

    def push_location(self, location: AssertionLocation) -> None:
        self.locations.append(location)

    def pop_location(self) -> AssertionLocation:
        return self.locations.pop()


@dataclass
class SectionEntryChecker:
    """Decides whether a section is entered on this pass and tidies up when it is left.

    Usable as a context manager: ``with SectionEntryChecker(section, state) as entered:``.
    """

    data: Section
    state: TestState
    entered: bool = False

    def enter(self) -> bool:
        """Register the section and tell whether its body should run now."""
        self.state.held_info = None
        sections = self.state.sections

        if sections.depth >= len(sections.levels):
            if sections.depth >= MAX_NESTED_SECTIONS:
                registry = self.state.registry
                registry.print(
                    "error:",
                    " max number of nested sections reached; "
                    "please increase the maximum (currently ",
                    MAX_NESTED_SECTIONS,
                    ")\n.",
                )
                raise RuntimeError("max number of nested sections reached")
            sections.levels.append(SectionLevel())

        sections.depth += 1
        level = sections.levels[sections.depth - 1]

        level.current_section_id += 1
        level.max_section_id = max(level.max_section_id, level.current_section_id)

        if sections.leaf_executed:
            return False

        if level.current_section_id == level.previous_section_id + 1 or (
            level.current_section_id == level.previous_section_id
            and sections.depth < len(sections.levels)
        ):
            level.previous_section_id = level.current_section_id
            sections.current_section.append(self.data)
            self.state.push_location(
                AssertionLocation(
                    self.data.location.file,
                    self.data.location.line,
                    LocationType.SECTION_SCOPE,
                )
            )
            self.entered = True
            return True

        return False

    def leave(self, unwinding: bool = False) -> None:
        """Close the section; ``unwinding`` means an exception is passing through."""
        sections = self.state.sections

        if self.entered:
            if unwinding and self.state.held_info is None:
                self.state.held_info = (
                    copy.deepcopy(sections),
                    tuple(self.state.locations),
                )

            self.state.pop_location()

            if sections.depth == len(sections.levels):
                # A leaf: no other leaf runs on this pass. The level stays until the
                # parent is left, since siblings may still be unknown.
                sections.leaf_executed = True
            else:
                no_child_left = all(
                    child.previous_section_id == child.max_section_id
                    for child in sections.levels[sections.depth:]
                )
                if no_child_left:
                    sections.levels.pop()

            sections.current_section.pop()

        sections.depth -= 1

    def __enter__(self) -> bool:
        return self.enter()

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.leave(exc_type is not None)
        return False