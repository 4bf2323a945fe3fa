"""Compact, renumbered form of the Aho-Corasick automaton used for matching.

States are numbered in breadth-first order, siblings in ascending order of
their input byte, so the kids of a state always carry consecutive ids.  A
state therefore only stores the id of its first kid and a sorted byte string
of its valid inputs; a transition is found by binary search over that string.
The root is id 0 and uses a 256-entry table instead.
"""

from __future__ import annotations

import enum
from bisect import bisect_left
from dataclasses import dataclass

from acmatch.slow import MatchResult, PatternLike, SlowAutomaton, SlowState, _as_bytes


class MatchVariant(enum.Enum):
    """Which match a scan reports."""

    # The first match found, e.g. patterns {"ab", "abc", "def"} in
    # "ababcdef" give "ab" at the beginning.
    FIRST_MATCH = "first"
    # The longest match, the left-most of several equally long ones; in the
    # example above that is "abc".
    LEFT_LONGEST = "left_longest"


@dataclass(frozen=True)
class _FastState:
    first_kid: int
    depth: int
    pattern_idx: int | None
    inputs: bytes
    fail_link: int

    def kid_for(self, byte: int) -> int | None:
        pos = bisect_left(self.inputs, byte)
        if pos < len(self.inputs) and self.inputs[pos] == byte:
            return self.first_kid + pos
        return None


class FastAutomaton:
    """Matcher built from a :class:`SlowAutomaton`."""

    def __init__(self, slow: SlowAutomaton) -> None:
        self.patterns: tuple[bytes, ...] = slow.patterns
        root = slow.root
        root_gotos = root.sorted_gotos()

        self.id_map: dict[int, int] = {root.id: 0}
        order: list[SlowState] = []
        for new_id, (_, kid) in enumerate(root_gotos, start=1):
            self.id_map[kid.id] = new_id
            order.append(kid)

        self._root_goto: list[int] = [0] * 256
        for byte, kid in root_gotos:
            self._root_goto[byte] = self.id_map[kid.id]
        self.root_fanout: int = len(root_gotos)

        # Breadth-first walk; the list grows while it is walked.
        layout: list[tuple[SlowState, int, bytes]] = []
        for slow_state in order:
            first_kid = len(order) + 1
            gotos = slow_state.sorted_gotos()
            for offset, (_, kid) in enumerate(gotos):
                self.id_map[kid.id] = first_kid + offset
            order.extend(kid for _, kid in gotos)
            layout.append((slow_state, first_kid, bytes(b for b, _ in gotos)))

        root_state = _FastState(
            first_kid=1,
            depth=0,
            pattern_idx=None,
            inputs=bytes(b for b, _ in root_gotos),
            fail_link=0,
        )
        self._states: list[_FastState] = [root_state]
        for slow_state, first_kid, inputs in layout:
            fail = slow_state.fail_link
            self._states.append(
                _FastState(
                    first_kid=first_kid,
                    depth=slow_state.depth,
                    pattern_idx=slow_state.pattern_idx if slow_state.terminal else None,
                    inputs=inputs,
                    fail_link=self.id_map[fail.id] if fail is not None else 0,
                )
            )

    @property
    def state_count(self) -> int:
        """Number of states, the root included."""
        return len(self._states)

    def _enter_from_root(self, data: bytes, start: int) -> tuple[_FastState | None, int]:
        """Skip bytes that the root has no transition on."""
        for idx in range(start, len(data)):
            kid_id = self._root_goto[data[idx]]
            if kid_id:
                return self._states[kid_id], idx + 1
        return None, len(data)

    def _scan(self, subject: PatternLike, variant: MatchVariant) -> MatchResult | None:
        data = _as_bytes(subject)
        size = len(data)
        states = self._states

        state, idx = self._enter_from_root(data, 0)
        if state is None:
            return None

        best: MatchResult | None = None
        if state.pattern_idx is not None:
            # A pattern may be a single byte.
            best = MatchResult(idx - state.depth, idx - 1, state.pattern_idx)
            if variant is MatchVariant.FIRST_MATCH:
                return best

        while idx < size:
            kid = state.kid_for(data[idx])
            if kid is not None:
                state = states[kid]
                idx += 1
            elif state.fail_link == 0:
                found, idx = self._enter_from_root(data, idx)
                if found is not None:
                    state = found
            else:
                state = states[state.fail_link]

            if state.pattern_idx is None:
                continue
            candidate = MatchResult(idx - state.depth, idx - 1, state.pattern_idx)
            if variant is MatchVariant.FIRST_MATCH:
                return candidate
            if best is None or (
                candidate.end - candidate.begin > best.end - best.begin
            ):
                best = candidate

        return best

    def match(self, subject: PatternLike) -> MatchResult | None:
        """Return the first match in *subject*, or None."""
        return self._scan(subject, MatchVariant.FIRST_MATCH)

    def match_longest(self, subject: PatternLike) -> MatchResult | None:
        """Return the left-most longest match in *subject*, or None."""
        return self._scan(subject, MatchVariant.LEFT_LONGEST)

    def dump(self) -> str:
        """Return a textual description of the renumbered automaton."""
        out = ["Id maps between old/slow and new/fast graphs\n"]
        out.extend(
            f"{old_id} -> {new_id}, "
            for old_id, new_id in sorted(self.id_map.items())
            if new_id != 0
        )
        out.append("\n")

        out.append(f"root, fanout:{self.root_fanout} goto {{")
        out.extend(
            f"{chr(byte)}->S:{kid_id}, "
            for byte, kid_id in enumerate(self._root_goto)
            if kid_id
        )
        out.append("}\n")

        for state_id, state in enumerate(self._states[1:], start=1):
            out.append(f"S:{state_id}, goto={{")
            out.extend(
                f"{chr(byte)}->S:{kid}, "
                for kid, byte in enumerate(state.inputs, start=state.first_kid)
            )
            term = "terminal" if state.pattern_idx is not None else ""
            out.append(f"}}, fail-link = S:{state.fail_link}, {term}\n")
        return "".join(out)