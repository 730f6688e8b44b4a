"""Ranking over stored student records."""

from .ranker import RankEntry, RankingEngine, rank_key

__all__ = ["RankEntry", "RankingEngine", "rank_key"]
