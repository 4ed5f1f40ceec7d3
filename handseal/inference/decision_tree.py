"""Priority decision tree over the seal scorers.

Seals are grouped into buckets of visually confusable gestures. Buckets
are evaluated in a fixed order and the first bucket whose winner clears
the bucket's exit threshold decides the frame. Inside a bucket the first
scorer that matches wins; there is no re-ranking across the catalogue.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from handseal.landmarks.hand_analysis import HandAnalysis
from handseal.landmarks.relationship import HandRelationship
from handseal.scoring.scorers import SCORERS
from handseal.types import Seal, SealDetectionResult

BucketGate = Callable[[HandAnalysis, HandAnalysis, HandRelationship], bool]


@dataclass(frozen=True, slots=True)
class SealBucket:
    """An ordered group of seals evaluated together.

    Attributes:
        name: Bucket label used in logs.
        gate: Predicate deciding whether the bucket is evaluated at all.
        seals: Seals in priority order.
        exit_threshold: Confidence the winner must exceed to end the search.
    """
    name: str
    gate: BucketGate
    seals: tuple[Seal, ...]
    exit_threshold: float

    def evaluate(
        self,
        left: HandAnalysis,
        right: HandAnalysis,
        relationship: HandRelationship,
    ) -> SealDetectionResult:
        for seal in self.seals:
            score = SCORERS[seal](left, right, relationship)
            if score.matches:
                return SealDetectionResult(seal=seal, confidence=score.confidence)
        return SealDetectionResult.none()


BUCKETS: tuple[SealBucket, ...] = (
    SealBucket(
        name="triangle",
        gate=lambda left, right, rel: rel.is_triangle_formation,
        seals=(Seal.BIRD, Seal.HORSE),
        exit_threshold=0.8,
    ),
    # Harder to separate from noise, hence the lower bar
    SealBucket(
        name="special",
        gate=lambda left, right, rel: True,
        seals=(Seal.MONKEY, Seal.RAT, Seal.HARE),
        exit_threshold=0.7,
    ),
    SealBucket(
        name="vertical",
        gate=lambda left, right, rel: left.is_vertical and right.is_vertical,
        seals=(Seal.BOAR, Seal.SERPENT, Seal.RAM, Seal.DRAGON, Seal.TIGER),
        exit_threshold=0.8,
    ),
    SealBucket(
        name="mixed",
        gate=lambda left, right, rel: left.is_vertical != right.is_vertical,
        seals=(Seal.DOG, Seal.OX),
        exit_threshold=0.8,
    ),
)


def classify(
    left: HandAnalysis,
    right: HandAnalysis,
    relationship: HandRelationship,
) -> SealDetectionResult:
    """Run the buckets in priority order and return the first confident result."""
    for bucket in BUCKETS:
        if not bucket.gate(left, right, relationship):
            continue
        result = bucket.evaluate(left, right, relationship)
        if result.confidence > bucket.exit_threshold:
            return result
    return SealDetectionResult.none()
