"""Game states and a stack-based state machine that switches between them."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections import deque

from britannia.log import log


class StateMachineError(Exception):
    """Raised for invalid state registrations or transitions."""


class State(ABC):
    """A game state driven by the state machine."""

    is_dead: bool = False

    @abstractmethod
    def init(self, config_file: str = "") -> None:
        """Prepare the state."""

    @abstractmethod
    def shutdown(self) -> None:
        """Release the state's resources."""

    @abstractmethod
    def update(self) -> None:
        """Advance the state by one frame."""

    @abstractmethod
    def draw(self) -> None:
        """Render the state."""

    @abstractmethod
    def on_enter(self) -> None:
        """Called when the state becomes active."""

    @abstractmethod
    def on_exit(self) -> None:
        """Called when the state stops being active."""


class _Transition(enum.Enum):
    STATE = 0
    PUSH = 1
    POP = 2


class _Kind(enum.Enum):
    STATE = 0
    PUSHED = 1


class StateMachine:
    """Holds registered states and a stack of active ones.

    Transitions are queued and carried out at the start of the next update.
    """

    def __init__(self) -> None:
        self._states: dict[int, State] = {}
        self._names: dict[int, str] = {}
        self._stack: deque[tuple[int, _Kind]] = deque()
        self._transitions: deque[tuple[_Transition, int]] = deque()
        self._current = -1
        self._previous = -1

    def register_state(self, state_id: int, state: State, name: str = "NO NAME") -> None:
        """Register a state under an identifier."""
        if state_id in self._states:
            raise StateMachineError(
                f"attempt to register state using duplicate state identifier {state_id}"
            )
        self._states[state_id] = state
        self._names[state_id] = name
        log(f"Created state {name} with ID {state_id}")

    def make_state_transition(self, new_state: int) -> None:
        """Queue a replacement of the top state."""
        self._transitions.append((_Transition.STATE, new_state))
        log(
            f"StateMachine: Transitioning to state "
            f"{self._names.get(new_state, '')}, ID {new_state}"
        )

    def push_state(self, new_state: int) -> None:
        """Queue pushing a state on top of the current one."""
        self._transitions.append((_Transition.PUSH, new_state))

    def pop_state(self) -> None:
        """Queue popping the top pushed state."""
        self._transitions.append((_Transition.POP, -1))

    def _do_transition(self, new_state: int) -> None:
        if self._stack and self._stack[0][1] is not _Kind.STATE:
            raise StateMachineError(
                "attempting to transition from a pushed state! Current state ID: "
                f"{self._stack[0][0]} Incoming state ID: {new_state}"
            )
        if new_state not in self._states:
            raise StateMachineError(f"bad state identifier: {new_state}")
        self._previous = self._current
        self._current = new_state
        if self._stack:
            top_id, _ = self._stack.popleft()
            self._states[top_id].on_exit()
        self._stack.appendleft((new_state, _Kind.STATE))
        self._states[new_state].on_enter()

    def _do_push(self, new_state: int) -> None:
        if new_state not in self._states:
            raise StateMachineError(f"bad state identifier: {new_state}")
        self._previous = self._current
        self._current = new_state
        self._stack.appendleft((new_state, _Kind.PUSHED))
        self._states[new_state].on_enter()

    def _do_pop(self) -> None:
        if not self._stack:
            return
        top_id, kind = self._stack[0]
        if kind is not _Kind.PUSHED:
            raise StateMachineError(
                f"attempting to pop a state that wasn't pushed! State ID: {top_id}"
            )
        self._previous = self._current
        self._states[top_id].on_exit()
        self._stack.popleft()
        self._current = self._stack[0][0] if self._stack else -1

    def update(self) -> None:
        """Carry out queued transitions, then update the top state."""
        while self._transitions:
            kind, target = self._transitions[0]
            if kind is _Transition.STATE:
                self._do_transition(target)
            elif kind is _Transition.PUSH:
                self._do_push(target)
            else:
                self._do_pop()
            self._transitions.popleft()
        if not self._stack:
            raise StateMachineError("no active state")
        self._states[self._stack[0][0]].update()

    def draw(self) -> None:
        """Draw active states from the bottom of the stack to the top."""
        for state_id, _ in reversed(self._stack):
            self._states[state_id].draw()

    def shutdown(self) -> None:
        """Exit every active state, then shut down every registered state."""
        for state_id, _ in self._stack:
            self._states[state_id].on_exit()
        for state in self._states.values():
            state.shutdown()

    def get_state(self, state_id: int) -> State:
        """Return a registered state."""
        try:
            return self._states[state_id]
        except KeyError:
            raise StateMachineError("bad state identifier in StateMachine") from None

    def current_state(self) -> int:
        """Identifier of the current state, or -1."""
        return self._current

    def previous_state(self) -> int:
        """Identifier of the previous state, or -1."""
        return self._previous