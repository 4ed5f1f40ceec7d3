"""Scoring module — one confidence scorer per seal."""

from handseal.scoring.scorers import SCORERS, THRESHOLDS, SealScore, SealScorer

__all__ = ["SCORERS", "THRESHOLDS", "SealScore", "SealScorer"]
