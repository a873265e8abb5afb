"""Task identifiers: generation, validation and reference formatting.

An identifier looks like ``word_word_ccc``: an adjective, a noun and a
three character base-32 suffix, e.g. ``quiet_gecko_7hx``.

Usage:
    from tasktree.task_id import TaskIdGenerator, validate

    generator = TaskIdGenerator()
    task_id = generator.generate()
    assert validate(task_id).valid
"""

from __future__ import annotations

import random
import re
import time
from typing import NamedTuple

from tasktree.wordlists import FIRST_WORDS, SECOND_WORDS

# Crockford-style alphabet: no i, l, o or u
BASE32_ALPHABET = "0123456789abcdefghjkmnpqrstvwxyz"
SUFFIX_LENGTH = 3

_REFERENCE_PATTERN = re.compile(r'^"\[\[([^\[\]"]*)\]\]"$')


class IdCheck(NamedTuple):
    """Outcome of structural id validation."""

    valid: bool
    reason: str = ""


class TaskIdGenerator:
    """Generates task identifiers from 32 random bits per call.

    The generator owns its random state. It is seeded once at construction
    and folds a fresh monotonic clock sample into that state before every
    draw, so identifiers created in quick succession still differ.
    """

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def _draw(self) -> int:
        mixed = self._random.getrandbits(64) ^ time.monotonic_ns()
        self._random.seed(mixed)
        return self._random.getrandbits(32)

    def generate(self) -> str:
        """Return a new identifier.

        Bits 0-9 select the first word, bits 10-16 the second word and the
        remaining 15 bits become the suffix, least significant symbol first.
        """
        bits = self._draw()
        first = FIRST_WORDS[bits & 0x3FF]
        second = SECOND_WORDS[(bits >> 10) & 0x7F]
        data = bits >> 17
        suffix = []
        for _ in range(SUFFIX_LENGTH):
            suffix.append(BASE32_ALPHABET[data & 31])
            data >>= 5
        return f"{first}_{second}_{''.join(suffix)}"


def validate(candidate: object) -> IdCheck:
    """Check the structure of a candidate identifier. Never raises.

    Word membership in the pools is not checked, only the shape.
    """
    if not isinstance(candidate, str):
        return IdCheck(False, "not a string")
    if candidate.count("_") != 2:
        return IdCheck(False, "expected exactly two underscores")
    if candidate.rfind("_") != len(candidate) - SUFFIX_LENGTH - 1:
        return IdCheck(False, f"suffix must be {SUFFIX_LENGTH} characters")
    for ch in candidate[-SUFFIX_LENGTH:]:
        if ch not in BASE32_ALPHABET:
            return IdCheck(False, f"invalid suffix character {ch!r}")
    for ch in candidate[: -SUFFIX_LENGTH - 1]:
        if not (ch.isascii() and (ch.isalpha() or ch == "_")):
            return IdCheck(False, f"invalid word character {ch!r}")
    return IdCheck(True)


def is_valid(candidate: object) -> bool:
    return validate(candidate).valid


def format_link(task_id: str) -> str:
    """Inline link form, ``[[taskid]]``."""
    return f"[[{task_id}]]"


def format_reference(task_id: str) -> str:
    """Quoted link form used inside waiting_on, ``"[[taskid]]"``."""
    return f'"{format_link(task_id)}"'


def parse_reference(item: str) -> str | None:
    """Extract the id from a quoted waiting_on reference.

    Returns:
        The bare id, or None when ``item`` is not a quoted reference to a
        structurally valid id.
    """
    match = _REFERENCE_PATTERN.match(item)
    if match is None or not is_valid(match.group(1)):
        return None
    return match.group(1)
