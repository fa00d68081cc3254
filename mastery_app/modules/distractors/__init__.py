from .engine.selector import DistractorSelector, Statement, build_statement, pick_decoy, pick_distractors

__all__ = ['DistractorSelector', 'Statement', 'build_statement', 'pick_decoy', 'pick_distractors']
