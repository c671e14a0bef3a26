# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Stable identifier assignment for generated BPMN elements.

Identifiers are ``<base>_<n>``: *base* is a human-readable name restricted to
``[A-Za-z0-9_]`` and *n* counts up from 1 separately for every base. An
entity asked for its identifier twice gets the same answer; the memo is keyed
by entity identity, so equally named entities still get distinct ids.
"""

from __future__ import annotations

import re
from collections import Counter

# ###############
# Public Interface
# ###############


def sanitize(base: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_]`` with ``_``."""
    return _UNSAFE_CHARS.sub("_", base)


class IdentifierTable:
    """Per-invocation identifier counters and memo.

    A table must not be shared between generator runs; create one per
    document to keep output reproducible.
    """

    def __init__(self) -> None:
        self._counters: Counter[str] = Counter()
        self._assigned: dict[object, str] = {}

    def fresh(self, base: str) -> str:
        """Return a new identifier for *base*, never handed out before."""
        safe = sanitize(base)
        self._counters[safe] += 1
        return f"{safe}_{self._counters[safe]}"

    def of(self, entity: object, base: str) -> str:
        """Return the identifier of *entity*, allocating one from *base* on first use."""
        if entity not in self._assigned:
            self._assigned[entity] = self.fresh(base)
        return self._assigned[entity]


# ################
# Implementation
# ################

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_]")
