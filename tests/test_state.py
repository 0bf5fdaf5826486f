import pytest

from pixeldino.core.state import Phase, PhaseMachine


class TestPhaseMachine:
    def test_starts_ready(self):
        assert PhaseMachine().phase == Phase.READY

    @pytest.mark.parametrize("start,target", [
        (Phase.READY, Phase.RUNNING),
        (Phase.RUNNING, Phase.OVER),
        (Phase.OVER, Phase.RUNNING),
        (Phase.RUNNING, Phase.READY),
        (Phase.OVER, Phase.READY),
    ])
    def test_valid_transitions(self, start, target):
        machine = PhaseMachine(start)
        assert machine.transition(target)
        assert machine.phase == target

    @pytest.mark.parametrize("start,target", [
        (Phase.READY, Phase.OVER),
        (Phase.READY, Phase.READY),
        (Phase.OVER, Phase.OVER),
    ])
    def test_invalid_transitions_are_refused(self, start, target):
        machine = PhaseMachine(start)
        assert not machine.can_transition(target)
        assert not machine.transition(target)
        assert machine.phase == start

    def test_listeners_notified(self):
        machine = PhaseMachine()
        seen = []
        machine.add_listener(lambda old, new: seen.append((old, new)))

        machine.transition(Phase.RUNNING)
        machine.transition(Phase.OVER)

        assert seen == [(Phase.READY, Phase.RUNNING), (Phase.RUNNING, Phase.OVER)]

    def test_failing_listener_does_not_block_others(self):
        machine = PhaseMachine()
        seen = []

        def broken(old, new):
            raise RuntimeError("boom")

        machine.add_listener(broken)
        machine.add_listener(lambda old, new: seen.append(new))

        assert machine.transition(Phase.RUNNING)
        assert seen == [Phase.RUNNING]

    def test_remove_listener(self):
        machine = PhaseMachine()
        seen = []
        listener = lambda old, new: seen.append(new)
        machine.add_listener(listener)
        machine.remove_listener(listener)
        machine.remove_listener(listener)

        machine.transition(Phase.RUNNING)
        assert seen == []
