import pytest

from mastery_app.core.errors import MalformedCardError
from mastery_app.modules.cards import Card, CardPool, Direction
from mastery_app.modules.matching import AnswerMatcher, is_acceptable


class TestCardPoolLoad:

    def test_loads_in_order(self, pool):
        assert len(pool) == 5
        assert pool.ids() == [1, 2, 3, 4, 5]
        assert [card.answer for card in pool][:2] == ['apple', 'pear']

    def test_accepts_platform_aliases(self):
        pool = CardPool.load([
            {'_id': 'a1', 'front': 'Hund', 'back': 'dog', 'imageUrl': 'dog.png'},
            {'id': 'a2', 'prompt': 'Katze', 'answer': 'cat', 'acceptedAnswers': ['kitty']},
        ])
        dog, cat = pool.get('a1'), pool.get('a2')
        assert (dog.prompt, dog.answer, dog.illustration) == ('Hund', 'dog', 'dog.png')
        assert cat.accepted_answers == ('cat', 'kitty')

    def test_missing_id_falls_back_to_position(self):
        pool = CardPool.load([
            {'term': 'eins', 'definition': 'one'},
            {'term': 'zwei', 'definition': 'two'},
        ])
        assert pool.ids() == [1, 2]

    def test_malformed_cards_are_skipped(self):
        pool = CardPool.load([
            {'id': 1, 'term': 'eins', 'definition': 'one'},
            {'id': 2, 'term': 'zwei', 'definition': '   '},
            {'id': 3, 'definition': 'three'},
        ])
        assert pool.ids() == [1]
        assert [r.index for r in pool.rejected] == [1, 2]
        assert all(r.code == 'MALFORMED_CARD' for r in pool.rejected)

    def test_duplicate_ids_keep_first(self):
        pool = CardPool.load([
            {'id': 7, 'term': 'eins', 'definition': 'one'},
            {'id': 7, 'term': 'zwei', 'definition': 'two'},
        ])
        assert len(pool) == 1
        assert pool.get(7).answer == 'one'
        assert 'duplicate' in pool.rejected[0].reason

    def test_strict_mode_raises(self):
        with pytest.raises(MalformedCardError) as exc_info:
            CardPool.load([{'id': 1, 'term': 'eins'}], strict=True)
        assert exc_info.value.code == 'MALFORMED_CARD'
        assert exc_info.value.details == {'index': 0}

    def test_direction_swaps_sides(self, raw_deck):
        pool = CardPool.load(raw_deck, direction=Direction.DEFINITION_TO_TERM)
        card = pool.get(1)
        assert card.prompt == 'apple'
        assert card.answer == 'der Apfel'
        assert card.accepted_answers[0] == 'der apfel'

    def test_direction_accepts_string(self, raw_deck):
        pool = CardPool.load(raw_deck, direction='definition_to_term')
        assert pool.get(2).answer == 'die Birne'

    def test_missing_ids_skip_declared_ids(self):
        pool = CardPool.load([
            {'id': 2, 'term': 'eins', 'definition': 'one'},
            {'term': 'zwei', 'definition': 'two'},
            {'term': 'drei', 'definition': 'three'},
        ])
        assert len(pool) == 3
        assert pool.rejected == ()
        assert pool.get(2).answer == 'one'
        assert len(set(pool.ids())) == 3

    def test_declared_id_later_in_deck_is_not_taken(self):
        pool = CardPool.load([
            {'term': 'eins', 'definition': 'one'},
            {'id': 1, 'term': 'zwei', 'definition': 'two'},
        ])
        assert len(pool) == 2
        assert pool.get(1).answer == 'two'

    def test_hand_built_card_accepts_its_own_answer(self):
        pool = CardPool.load([
            Card(id=1, prompt='Apfel', answer='Apple', accepted_answers=('pomme',)),
            Card(id=2, prompt='Birne', answer='pear'),
        ])
        card = pool.get(1)
        assert card.accepted_answers == ('apple', 'pomme')
        assert is_acceptable('apple', card)
        assert is_acceptable('pomme', card)
        assert AnswerMatcher.exact_match('apple', card).is_correct
        assert pool.get(2).accepted_answers == ('pear',)

    def test_constructor_adds_answer_variant(self):
        pool = CardPool([Card(id=1, prompt='Apfel', answer='apple', accepted_answers=('pomme',))])
        assert pool.get(1).accepted_answers[0] == 'apple'


class TestCardPoolAccess:

    def test_contains_by_card_or_id(self, pool):
        assert 3 in pool
        assert pool.get(3) in pool
        assert 99 not in pool
        assert [] not in pool

    def test_get_unknown_raises_key_error(self, pool):
        with pytest.raises(KeyError):
            pool.get(99)

    def test_subset_keeps_load_order(self, pool):
        sub = pool.subset([4, 2])
        assert sub.ids() == [2, 4]

    def test_constructor_rejects_duplicate_ids(self):
        cards = [Card(id=1, prompt='a', answer='b'), Card(id=1, prompt='c', answer='d')]
        with pytest.raises(ValueError):
            CardPool(cards)

    def test_card_equality_by_id(self):
        assert Card(id=1, prompt='a', answer='b') == Card(id=1, prompt='x', answer='y')
        assert len({Card(id=1, prompt='a', answer='b'), Card(id=1, prompt='x', answer='y')}) == 1
