from .events import connect_reporter, disconnect_reporter
from .logics.stats_logic import StatsLogic

__all__ = ['StatsLogic', 'connect_reporter', 'disconnect_reporter']
