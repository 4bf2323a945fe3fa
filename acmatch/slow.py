"""Trie-based Aho-Corasick automaton built directly from byte patterns.

This is the straightforward form of the automaton: every state keeps a
dictionary of transitions and a reference to its fail-link state.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Union

PatternLike = Union[bytes, bytearray, memoryview, str]


def _as_bytes(value: PatternLike) -> bytes:
    """Return *value* as bytes; text is encoded as UTF-8."""
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"expected bytes or str, got {type(value).__name__}")


def _c_hex(byte: int) -> str:
    # Mirrors the "%#x" conversion, which prints zero without a prefix.
    return "0" if byte == 0 else f"{byte:#x}"


def _is_print(byte: int) -> bool:
    return 0x20 <= byte <= 0x7E


def _is_alnum(byte: int) -> bool:
    return chr(byte).isascii() and chr(byte).isalnum()


@dataclass(frozen=True)
class MatchResult:
    """A match of pattern ``pattern_idx`` at ``subject[begin:end + 1]``."""

    begin: int
    end: int
    pattern_idx: int


@dataclass(eq=False, repr=False)
class SlowState:
    """One node of the trie."""

    id: int
    depth: int = 0
    terminal: bool = False
    pattern_idx: int | None = None
    fail_link: SlowState | None = None
    transitions: dict[int, SlowState] = field(default_factory=dict)

    def goto(self, byte: int) -> SlowState | None:
        """Return the state reached on *byte*, or None if there is none."""
        return self.transitions.get(byte)

    def sorted_gotos(self) -> list[tuple[int, SlowState]]:
        """Return all transitions in ascending order of their input byte."""
        return sorted(self.transitions.items(), key=lambda item: item[0])

    def __repr__(self) -> str:
        fail = self.fail_link.id if self.fail_link is not None else None
        return (
            f"SlowState(id={self.id}, depth={self.depth}, "
            f"terminal={self.terminal}, pattern_idx={self.pattern_idx}, "
            f"fail_link={fail}, inputs={sorted(self.transitions)})"
        )


class SlowAutomaton:
    """Aho-Corasick automaton over a sequence of non-empty byte patterns.

    States are numbered from 1 (the root) in order of creation.  When the
    same pattern is given more than once, the last index wins.
    """

    def __init__(self, patterns: Iterable[PatternLike]) -> None:
        self.patterns: tuple[bytes, ...] = tuple(_as_bytes(p) for p in patterns)
        self.states: list[SlowState] = []
        self.root: SlowState = self._new_state()
        for idx, pattern in enumerate(self.patterns):
            self._add_pattern(pattern, idx)
        self._propagate_fail_links()
        self.root_bytes: frozenset[int] = frozenset(self.root.transitions)

    @property
    def next_node_id(self) -> int:
        """The id the next created state would receive."""
        return len(self.states) + 1

    @property
    def state_count(self) -> int:
        """Number of states, the root included."""
        return len(self.states)

    def _new_state(self) -> SlowState:
        state = SlowState(id=self.next_node_id)
        self.states.append(state)
        return state

    def _add_pattern(self, pattern: bytes, idx: int) -> None:
        if not pattern:
            raise ValueError(f"pattern {idx} is empty")
        state = self.root
        for byte in pattern:
            nxt = state.goto(byte)
            if nxt is None:
                nxt = self._new_state()
                nxt.depth = state.depth + 1
                state.transitions[byte] = nxt
            state = nxt
        state.terminal = True
        state.pattern_idx = idx

    def _propagate_fail_links(self) -> None:
        root = self.root
        worklist: deque[SlowState] = deque()
        for _, kid in root.sorted_gotos():
            kid.fail_link = root
            worklist.append(kid)

        while worklist:
            state = worklist.popleft()
            for byte, target in state.sorted_gotos():
                walk = state.fail_link
                while True:
                    found = walk.goto(byte)
                    if found is not None:
                        break
                    if walk is root:
                        # The root behaves as if it looped back on every byte.
                        found = root
                        break
                    walk = walk.fail_link
                target.fail_link = found
                worklist.append(target)

    @staticmethod
    def _result(end: int, state: SlowState) -> MatchResult:
        return MatchResult(end - state.depth + 1, end, state.pattern_idx)

    def match(self, subject: PatternLike) -> MatchResult | None:
        """Return the first match found in *subject*, or None."""
        root = self.root
        state = root
        for pos, byte in enumerate(_as_bytes(subject)):
            while True:
                if state is root:
                    kid = root.goto(byte)
                    if kid is None:
                        break
                    state = kid
                    if state.terminal:
                        return self._result(pos, state)
                    break
                nxt = state.goto(byte)
                if nxt is not None:
                    state = nxt
                    if state.terminal:
                        return self._result(pos, state)
                    break
                fail = state.fail_link
                if fail is root:
                    state = root
                    continue
                state = fail
                if state.terminal:
                    return self._result(pos - 1, state)
        return None

    def dump_text(self) -> str:
        """Return a line-per-state textual description of the automaton."""
        lines = []
        for state in self.states:
            parts = [f"S{state.id} goto:{{"]
            for byte, target in state.transitions.items():
                label = f"'{chr(byte)}'" if _is_print(byte) else _c_hex(byte)
                parts.append(f"{label} -> S:{target.id},")
            parts.append("} ")
            if state.fail_link is not None:
                parts.append(f", fail=S:{state.fail_link.id}")
            if state.terminal:
                parts.append(", terminal")
            lines.append("".join(parts) + "\n")
        return "".join(lines)

    def dump_dot(self) -> str:
        """Return the automaton as a Graphviz digraph."""
        indent = "  "
        out = ["digraph G {\n", f"{indent}{self.root.id} [style=filled];\n"]
        out.extend(
            f"{indent}{state.id} [shape=doublecircle];\n"
            for state in self.states
            if state.terminal
        )
        out.append("\n")
        for state in self.states:
            for byte, target in state.transitions.items():
                if _is_alnum(byte):
                    out.append(f"{indent}{state.id} -> {target.id} [label={chr(byte)}];\n")
                else:
                    out.append(
                        f'{indent}{state.id} -> {target.id} [label="{_c_hex(byte)}"];\n'
                    )
            fail = state.fail_link
            if fail is not None and fail is not self.root:
                out.append(
                    f"{indent}{state.id} -> {fail.id} [style=dotted, color=red]; \n"
                )
        out.append("}\n")
        return "".join(out)