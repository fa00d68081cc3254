"""
Central Signal Registry for the Mastery engine.

Uses blinker to let collaborators (telemetry, persistence, UI bridges)
observe a session without the engine knowing about them.

Usage:
    # Publisher (sender)
    from mastery_app.core.signals import card_reviewed
    card_reviewed.send(session, card_id=..., stage=..., is_correct=...)

    # Subscriber (receiver) - in a module's events.py
    @session_completed.connect
    def on_session_completed(sender, **kwargs):
        ...
"""
from blinker import Namespace

learning_signals = Namespace()

# Signal: Fired after every graded submission
# Payload includes: card_id, stage, next_stage, is_correct, attempt_number
card_reviewed = learning_signals.signal('card_reviewed')

# Signal: Fired when service moves from one stage queue to the next
# Payload includes: event (RoundEvent)
round_completed = learning_signals.signal('round_completed')

# Signal: Fired exactly once when every card reaches Mastered
# Payload includes: summary (SessionSummary)
session_completed = learning_signals.signal('session_completed')
