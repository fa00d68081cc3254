import threading

import pytest

from mastery_app import COMPLETE, create_session
from mastery_app.modules.stats import StatsLogic, connect_reporter, disconnect_reporter


def finish(session, correct_input):
    prompt = session.next_prompt()
    while prompt is not COMPLETE:
        session.submit_answer(correct_input(session, prompt))
        prompt = session.next_prompt()


@pytest.fixture
def reporters():
    """Connect reporters through this list; all are disconnected afterwards."""
    connected = []
    yield connected
    for receiver in connected:
        disconnect_reporter(receiver)


class TestStatsLogic:

    def test_accuracy(self):
        assert StatsLogic.accuracy(0, 0) == 0.0
        assert StatsLogic.accuracy(3, 4) == 0.75

    def test_percent_rounds_half_up(self):
        assert StatsLogic.as_percent(2 / 3) == 67
        assert StatsLogic.as_percent(0.125) == 13
        assert StatsLogic.as_percent(1.0) == 100

    def test_skip_breaks_streak(self):
        assert StatsLogic.streaks([True, True, None, True]) == (1, 2)
        assert StatsLogic.streaks([]) == (0, 0)


class TestReporter:

    def test_inline_reporter_gets_summary_once(self, raw_deck, correct_input, reporters):
        received = []
        reporters.append(connect_reporter(received.append, background=False))

        session = create_session(raw_deck, preset='write', seed=3)
        finish(session, correct_input)
        session.next_prompt()

        assert len(received) == 1
        summary = received[0]
        assert summary.preset == 'write'
        assert summary.total_items == 5
        assert summary.correct == 5
        assert summary.accuracy == 1.0
        assert summary.duration_seconds >= 0

    def test_failing_reporter_is_swallowed(self, raw_deck, correct_input, reporters):
        def broken(summary):
            raise ConnectionError('stats endpoint down')

        reporters.append(connect_reporter(broken, background=False))

        session = create_session(raw_deck, preset='write', seed=3)
        finish(session, correct_input)
        assert session.is_complete()

    def test_background_reporter_runs_on_thread(self, raw_deck, correct_input, reporters):
        done = threading.Event()
        threads = []

        def reporter(summary):
            threads.append(threading.current_thread())
            done.set()

        reporters.append(connect_reporter(reporter, background=True))

        session = create_session(raw_deck, preset='write', seed=3)
        finish(session, correct_input)

        assert done.wait(timeout=5)
        assert threads[0] is not threading.main_thread()
        assert threads[0].daemon

    def test_disconnect(self, raw_deck, correct_input):
        received = []
        receiver = connect_reporter(received.append, background=False)
        disconnect_reporter(receiver)

        session = create_session(raw_deck, preset='write', seed=3)
        finish(session, correct_input)
        assert received == []
