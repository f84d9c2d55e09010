# app/core/types.py

"""
Custom type definitions shared by the hours engine.

Holds the tagged results returned by the rules workbook field parsers:
Parsed(value) when a cell parsed, SKIP when the default should be kept.
"""

import enum
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Final, Generic, TypeVar, Union

#: Reads a document by store-relative path; None means "not found".
ConfigLoader = Callable[[str], Awaitable[bytes | None]]

T = TypeVar("T")


@dataclass(frozen=True)
class Parsed(Generic[T]):
    """A configuration field that parsed successfully."""

    value: T


class Skip(enum.Enum):
    """A configuration field that was blank or malformed; keep the default."""

    SKIP = "skip"


SKIP: Final = Skip.SKIP

FieldResult = Union[Parsed[T], Skip]
