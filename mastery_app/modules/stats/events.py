"""
Stats Reporter
Forwards ``session_completed`` summaries to an external reporter (HTTP
client, database writer, ...).  The engine never waits on the reporter and
never sees its failures.
"""
import logging
import threading
from typing import Any, Callable, Optional

from mastery_app.core.config import Config
from mastery_app.core.signals import session_completed

logger = logging.getLogger(__name__)

Reporter = Callable[[Any], Any]


def connect_reporter(reporter: Reporter, background: Optional[bool] = None):
    """
    Subscribe *reporter* to every completed session.

    Args:
        reporter:   Called once per session with its ``SessionSummary``.
        background: Run the call on a daemon thread.  Defaults to
                    ``REPORT_IN_BACKGROUND``.

    Returns:
        The signal receiver; pass it to ``disconnect_reporter`` to unsubscribe.
    """
    if background is None:
        background = Config.get('REPORT_IN_BACKGROUND')

    def run_report(summary):
        try:
            reporter(summary)
        except Exception as e:
            logger.error(f"[StatsReporter] Error reporting session: {e}")

    def on_session_completed(sender, **kwargs):
        summary = kwargs.get('summary')
        if summary is None:
            return

        logger.info(
            f"[StatsReporter] Reporting session: {summary.preset}, "
            f"{summary.correct}/{summary.attempts} correct"
        )
        if background:
            thread = threading.Thread(
                target=run_report, args=(summary,), name='stats-reporter', daemon=True
            )
            thread.start()
        else:
            run_report(summary)

    # strong ref: nothing else holds the closure
    session_completed.connect(on_session_completed, weak=False)
    return on_session_completed


def disconnect_reporter(receiver) -> None:
    session_completed.disconnect(receiver)
