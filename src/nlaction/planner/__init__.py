"""Query planning: proposer, foreign key matching and ranking."""

from nlaction.planner.foreign_keys import (
    DeclaredForeignKeyMatcher,
    ForeignKeyMatcher,
    HeuristicForeignKeyMatcher,
    rank_foreign_keys,
)
from nlaction.planner.proposer import ActionProposer
from nlaction.planner.ranking import rank_candidates

__all__ = [
    "ActionProposer",
    "DeclaredForeignKeyMatcher",
    "ForeignKeyMatcher",
    "HeuristicForeignKeyMatcher",
    "rank_candidates",
    "rank_foreign_keys",
]
