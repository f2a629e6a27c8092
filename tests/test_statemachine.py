import pytest

from britannia.statemachine import State, StateMachine, StateMachineError


class Recorder(State):
    def __init__(self, name, events):
        self.name = name
        self.events = events

    def init(self, config_file=""):
        self.events.append((self.name, "init"))

    def shutdown(self):
        self.events.append((self.name, "shutdown"))

    def update(self):
        self.events.append((self.name, "update"))

    def draw(self):
        self.events.append((self.name, "draw"))

    def on_enter(self):
        self.events.append((self.name, "enter"))

    def on_exit(self):
        self.events.append((self.name, "exit"))


@pytest.fixture
def setup():
    events = []
    machine = StateMachine()
    machine.register_state(1, Recorder("title", events), "title")
    machine.register_state(2, Recorder("main", events), "main")
    machine.register_state(3, Recorder("menu", events), "menu")
    return machine, events


def test_initial_identifiers(setup):
    machine, _ = setup
    assert machine.current_state() == -1
    assert machine.previous_state() == -1


def test_transition_is_deferred_until_update(setup):
    machine, events = setup
    machine.make_state_transition(1)
    assert events == []
    machine.update()
    assert events == [("title", "enter"), ("title", "update")]
    assert machine.current_state() == 1


def test_transition_exits_previous(setup):
    machine, events = setup
    machine.make_state_transition(1)
    machine.update()
    events.clear()
    machine.make_state_transition(2)
    machine.update()
    assert events == [("title", "exit"), ("main", "enter"), ("main", "update")]
    assert machine.current_state() == 2
    assert machine.previous_state() == 1


def test_push_and_pop(setup):
    machine, events = setup
    machine.make_state_transition(2)
    machine.push_state(3)
    machine.update()
    assert machine.current_state() == 3
    events.clear()
    machine.draw()
    assert events == [("main", "draw"), ("menu", "draw")]
    events.clear()
    machine.pop_state()
    machine.update()
    assert events == [("menu", "exit"), ("main", "update")]
    assert machine.current_state() == 2
    assert machine.previous_state() == 3


def test_transition_from_pushed_state_fails(setup):
    machine, _ = setup
    machine.make_state_transition(2)
    machine.push_state(3)
    machine.make_state_transition(1)
    with pytest.raises(StateMachineError):
        machine.update()


def test_pop_of_unpushed_state_fails(setup):
    machine, _ = setup
    machine.make_state_transition(2)
    machine.pop_state()
    with pytest.raises(StateMachineError):
        machine.update()


def test_unknown_transition_fails(setup):
    machine, _ = setup
    machine.make_state_transition(99)
    with pytest.raises(StateMachineError):
        machine.update()


def test_unknown_push_fails(setup):
    machine, _ = setup
    machine.make_state_transition(1)
    machine.push_state(42)
    with pytest.raises(StateMachineError):
        machine.update()


def test_update_without_state_fails(setup):
    machine, _ = setup
    with pytest.raises(StateMachineError):
        machine.update()


def test_duplicate_registration_fails(setup):
    machine, events = setup
    with pytest.raises(StateMachineError):
        machine.register_state(1, Recorder("again", events))


def test_get_state(setup):
    machine, _ = setup
    assert machine.get_state(2).name == "main"
    with pytest.raises(StateMachineError):
        machine.get_state(7)


def test_get_state_empty_machine():
    with pytest.raises(StateMachineError):
        StateMachine().get_state(0)


def test_shutdown_exits_stack_then_shuts_all(setup):
    machine, events = setup
    machine.make_state_transition(2)
    machine.push_state(3)
    machine.update()
    events.clear()
    machine.shutdown()
    assert events[:2] == [("menu", "exit"), ("main", "exit")]
    assert sorted(events[2:]) == [
        ("main", "shutdown"),
        ("menu", "shutdown"),
        ("title", "shutdown"),
    ]


def test_state_is_abstract():
    with pytest.raises(TypeError):
        State()