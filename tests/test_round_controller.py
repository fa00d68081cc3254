import random

import pytest

from mastery_app.core.errors import NoActiveCardError, SchedulerStateError
from mastery_app.modules.scheduling import (
    STAGE_PRESETS,
    EvaluatorKind,
    RoundController,
    Stage,
    resolve_plan,
)

STUDY = STAGE_PRESETS['study']


def make_controller(ids=(1, 2, 3), plan=STUDY, **kwargs):
    kwargs.setdefault('shuffle', False)
    return RoundController(list(ids), plan, **kwargs)


def assert_conserved(controller):
    assert sum(controller.counts().values()) == controller.total
    controller.check_invariants()


class TestResolvePlan:

    def test_first_stage_drops_earlier_stages(self):
        assert resolve_plan(STUDY, Stage.RECALL) == ((Stage.RECALL, EvaluatorKind.TYPED),)

    def test_accepts_plain_values(self):
        plan = resolve_plan((('recall', 'exact'),))
        assert plan == ((Stage.RECALL, EvaluatorKind.EXACT),)

    @pytest.mark.parametrize('plan', [
        (),
        ((Stage.MASTERED, EvaluatorKind.TYPED),),
        ((Stage.RECALL, EvaluatorKind.TYPED), (Stage.RECALL, EvaluatorKind.EXACT)),
    ])
    def test_invalid_plans(self, plan):
        with pytest.raises(ValueError):
            resolve_plan(plan)

    def test_first_stage_outside_plan(self):
        with pytest.raises(ValueError):
            resolve_plan(STAGE_PRESETS['write'], Stage.PRESENTATION)


class TestTransitions:

    def test_presentation_correct_moves_to_recall_tail(self):
        controller = make_controller()
        assert controller.next_card().card_id == 1
        transition = controller.apply_verdict(True)
        assert (transition.from_stage, transition.to_stage) == (Stage.PRESENTATION, Stage.RECALL)
        assert controller.queue(Stage.PRESENTATION).snapshot() == [2, 3]
        assert controller.queue(Stage.RECALL).snapshot() == [1]

    def test_presentation_incorrect_requeues_tail(self):
        controller = make_controller()
        controller.next_card()
        transition = controller.apply_verdict(False)
        assert transition.to_stage == Stage.PRESENTATION
        assert controller.queue(Stage.PRESENTATION).snapshot() == [2, 3, 1]

    def test_recall_correct_masters(self):
        controller = make_controller(first_stage=Stage.RECALL)
        controller.next_card()
        assert controller.apply_verdict(True).to_stage == Stage.MASTERED
        assert controller.mastered == [1]
        assert controller.stage_of(1) == Stage.MASTERED

    def test_recall_incorrect_requeues_tail(self):
        controller = make_controller(first_stage=Stage.RECALL)
        controller.next_card()
        controller.apply_verdict(False)
        assert controller.queue(Stage.RECALL).snapshot() == [2, 3, 1]

    def test_single_stage_plan(self):
        controller = make_controller(ids=[1], plan=STAGE_PRESETS['flashcards'])
        controller.next_card()
        assert controller.apply_verdict(True).to_stage == Stage.MASTERED
        assert controller.is_complete()
        assert controller.next_card() is None

    def test_first_stage_skips_presentation(self):
        controller = make_controller(first_stage=Stage.RECALL)
        assert controller.next_card().stage == Stage.RECALL
        assert controller.queue(Stage.PRESENTATION).is_empty()


class TestSelection:

    def test_next_card_is_idempotent(self):
        controller = make_controller()
        assert controller.next_card() is controller.next_card()

    def test_active_card_stays_in_queue(self):
        controller = make_controller()
        active = controller.next_card()
        assert active.card_id in controller.queue(Stage.PRESENTATION)
        assert_conserved(controller)

    def test_verdict_without_card_raises(self):
        controller = make_controller()
        with pytest.raises(NoActiveCardError) as exc_info:
            controller.apply_verdict(True)
        assert exc_info.value.code == 'NO_ACTIVE_CARD'

    def test_defer_moves_active_to_tail(self):
        controller = make_controller()
        controller.next_card()
        assert controller.defer_active() == 1
        assert controller.queue(Stage.PRESENTATION).snapshot() == [2, 3, 1]
        assert controller.next_card().card_id == 2

    def test_round_transition_event(self):
        controller = make_controller()
        for _ in range(3):
            controller.next_card()
            controller.apply_verdict(True)

        scheduled = controller.next_card()
        assert scheduled.stage == Stage.RECALL
        assert scheduled.round_number == 2
        event = scheduled.round_event
        assert (event.from_stage, event.to_stage, event.queue_size) == (Stage.PRESENTATION, Stage.RECALL, 3)
        assert controller.round_events == [event]

    def test_no_round_event_within_a_stage(self):
        controller = make_controller()
        controller.next_card()
        controller.apply_verdict(True)
        assert controller.next_card().round_event is None


class TestInvariants:

    def test_conservation_and_terminal_permanence(self):
        rng = random.Random(7)
        controller = RoundController(list(range(1, 9)), STUDY, rng=rng)
        mastered_seen = set()

        steps = 0
        while controller.next_card() is not None:
            assert_conserved(controller)
            controller.apply_verdict(rng.random() < 0.6)
            assert_conserved(controller)

            for card_id in mastered_seen:
                assert controller.stage_of(card_id) == Stage.MASTERED
            mastered_seen.update(controller.mastered)

            steps += 1
            assert steps < 1000

        assert controller.is_complete()
        assert controller.current_stage == Stage.MASTERED
        assert all(size == 0 for stage, size in controller.counts().items() if stage != Stage.MASTERED)

    def test_corruption_is_detected(self):
        controller = make_controller()
        controller.queue(Stage.RECALL).enqueue_tail(1)
        with pytest.raises(SchedulerStateError):
            controller.check_invariants()

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            make_controller(ids=[1, 1])
