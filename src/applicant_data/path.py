"""
Path - the addressing type for applicant data.

A Path is an immutable sequence of segments, each either a field name
("name") or an array-indexed field name ("children[3]"). Its string form is
the dotted accessor expression, e.g. "applicant.children[3].name".

Examples:
    Path.create("applicant.children[3].name").parent_path()
        -> "applicant.children[3]"
    Path.create("applicant.children[3]").without_array_reference()
        -> "applicant.children"
    Path.create("applicant.children").at_index(0).join("entity_name")
        -> "applicant.children[0].entity_name"
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from applicant_data.exceptions import InvalidPathError

JSON_PATH_ROOT = "$"

# A field name, optionally followed by a non-negative array index: "children[3]"
_SEGMENT_RE = re.compile(r"([^.\[\]\s]+)(?:\[([0-9]+)\])?")


@dataclass(frozen=True)
class PathSegment:
    """One segment of a Path: a field name and an optional array index."""

    key: str
    index: Optional[int] = None

    @classmethod
    def parse(cls, text: str) -> "PathSegment":
        match = _SEGMENT_RE.fullmatch(text)
        if not match:
            raise InvalidPathError(f"Invalid path segment: '{text}'")
        index = match.group(2)
        return cls(key=match.group(1), index=int(index) if index is not None else None)

    @property
    def is_array_element(self) -> bool:
        return self.index is not None

    def __str__(self) -> str:
        if self.index is None:
            return self.key
        return f"{self.key}[{self.index}]"


class Path:
    """Immutable address into an applicant data document.

    Two Paths are equal iff their string forms are equal, regardless of how
    they were constructed.
    """

    __slots__ = ("_segments", "_text")

    def __init__(self, segments: Tuple[PathSegment, ...] = ()):
        self._segments = tuple(segments)
        self._text = ".".join(str(s) for s in self._segments)

    @classmethod
    def create(cls, path: str) -> "Path":
        """Parse a dotted/bracketed path string.

        A leading "$." (JSON path root) is accepted and dropped; "$" and ""
        both denote the empty (root) path.

        Raises:
            InvalidPathError: If any segment is malformed.
        """
        text = path.strip()
        if text == JSON_PATH_ROOT:
            text = ""
        elif text.startswith(JSON_PATH_ROOT + "."):
            text = text[len(JSON_PATH_ROOT) + 1:]

        if not text:
            return cls.empty()

        return cls(tuple(PathSegment.parse(part) for part in text.split(".")))

    @classmethod
    def empty(cls) -> "Path":
        return cls(())

    def is_empty(self) -> bool:
        return not self._segments

    def segments(self) -> List[PathSegment]:
        return list(self._segments)

    def join(self, segment) -> "Path":
        """Append one segment (a string such as "name" or "jobs[0]", or a Scalar).

        Raises:
            InvalidPathError: If the segment is empty or contains a ".".
        """
        text = str(getattr(segment, "value", segment))
        return self.append_segment(PathSegment.parse(text))

    def append_segment(self, segment: PathSegment) -> "Path":
        """Append an already-built segment without parsing it.

        Document keys copied verbatim (e.g. "a[0]" or "first name") go through
        here so they stay plain field names.
        """
        return Path(self._segments + (segment,))

    def at_index(self, index: int) -> "Path":
        """Return this path with its last segment addressing array element `index`.

        Any existing array reference on the last segment is replaced.
        """
        if self.is_empty():
            raise InvalidPathError("Cannot index the root path")
        if index < 0:
            raise InvalidPathError(f"Array index must be non-negative, got {index}")
        last = self._segments[-1]
        return Path(self._segments[:-1] + (PathSegment(last.key, index),))

    def parent_path(self) -> "Path":
        """Return the path one level up.

        Raises:
            InvalidPathError: For the root path, which has no parent.
        """
        if self.is_empty():
            raise InvalidPathError("The root path has no parent")
        return Path(self._segments[:-1])

    def is_array_element(self) -> bool:
        return bool(self._segments) and self._segments[-1].is_array_element

    def without_array_reference(self) -> "Path":
        """Drop the array index from the last segment, if it has one."""
        if not self.is_array_element():
            return self
        last = self._segments[-1]
        return Path(self._segments[:-1] + (PathSegment(last.key),))

    def array_index(self) -> int:
        """Return the array index of the last segment.

        Raises:
            InvalidPathError: If this path does not address an array element.
        """
        if not self.is_array_element():
            raise InvalidPathError(f"Path '{self}' is not an array element")
        return self._segments[-1].index

    def key_name(self) -> str:
        """Return the field name of the last segment, without any array index."""
        if self.is_empty():
            raise InvalidPathError("The root path has no key name")
        return self._segments[-1].key

    def starts_with(self, other: "Path") -> bool:
        n = len(other._segments)
        return self._segments[:n] == other._segments

    def to_json_path(self) -> str:
        """Return the JSON path form, e.g. "$.applicant.name"."""
        if self.is_empty():
            return JSON_PATH_ROOT
        return f"{JSON_PATH_ROOT}.{self._text}"

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Path({self._text!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, Path):
            return self._text == other._text
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._text)

    def __len__(self) -> int:
        return len(self._segments)
