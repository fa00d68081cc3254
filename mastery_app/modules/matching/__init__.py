from .engine.matcher import AnswerMatcher, MatchResult, is_acceptable
from .logics.algorithms import levenshtein_distance, normalize, similarity

__all__ = ['AnswerMatcher', 'MatchResult', 'is_acceptable', 'levenshtein_distance', 'normalize', 'similarity']
