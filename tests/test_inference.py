"""Tests for handseal.inference — decision tree and detection entry point."""

from __future__ import annotations

from dataclasses import replace

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from loguru import logger

from conftest import make_analysis, make_hand, make_relationship
from handseal.inference.decision_tree import BUCKETS, classify
from handseal.inference.detector import HandSealDetector, detect_hand_seal
from handseal.inference.memory import DetectionMemory
from handseal.scoring.scorers import OCCLUSION_RESCUE_CONFIDENCE, score_monkey, score_tiger
from handseal.types import Handedness, HandPosition, Seal, SealDetectionResult


class TestDecisionTree:
    """Tests for the bucketed priority evaluation."""

    def test_bucket_order(self) -> None:
        assert [b.name for b in BUCKETS] == ["triangle", "special", "vertical", "mixed"]
        assert BUCKETS[0].seals == (Seal.BIRD, Seal.HORSE)
        assert BUCKETS[1].seals == (Seal.MONKEY, Seal.RAT, Seal.HARE)
        assert BUCKETS[2].seals == (Seal.BOAR, Seal.SERPENT, Seal.RAM, Seal.DRAGON, Seal.TIGER)
        assert BUCKETS[3].seals == (Seal.DOG, Seal.OX)

    def test_nothing_matches(self) -> None:
        assert classify(make_analysis(), make_analysis(), make_relationship()) == SealDetectionResult.none()

    def test_bird_beats_tiger(self) -> None:
        hand = make_analysis(is_vertical=True, is_up=True, is_on_top=True, is_index_up=True)
        rel = make_relationship(
            distance=0.25,
            is_triangle_formation=True,
            are_thumbs_together=True,
            are_hands_together=True,
            are_index_fingers_together=True,
            vertical_alignment=0.05,
            horizontal_alignment=0.25,
        )
        assert score_tiger(hand, hand, rel).matches
        result = classify(hand, hand, rel)
        assert result.seal is Seal.BIRD
        assert result.confidence > 0.8

    def test_horse_in_triangle_bucket(self) -> None:
        hand = make_analysis(are_fingers_straight=True)
        rel = make_relationship(
            is_triangle_formation=True,
            are_thumbs_together=True,
            are_index_fingers_together=True,
        )
        result = classify(hand, hand, rel)
        assert result.seal is Seal.HORSE
        assert result.confidence == 0.85

    def test_horse_needs_triangle_formation(self) -> None:
        hand = make_analysis(are_fingers_straight=True)
        rel = make_relationship(are_index_fingers_together=True)
        assert classify(hand, hand, rel).seal is None

    def test_monkey(self) -> None:
        hand = make_analysis(thumb_on_pinky=True, are_all_fingers_together=True)
        result = classify(hand, hand, make_relationship(are_hands_together=True))
        assert result.seal is Seal.MONKEY

    def test_hare(self) -> None:
        left = make_analysis(is_horizontal=True, is_on_top=True)
        right = make_analysis(are_fingers_straight=True)
        result = classify(left, right, make_relationship(are_hands_together=True))
        assert result.seal is Seal.HARE

    def test_boar_in_vertical_bucket(self) -> None:
        left = make_analysis(is_vertical=True, are_all_fingers_together=True)
        right = make_analysis(is_vertical=True, is_horizontal=True, are_all_fingers_together=True)
        rel = make_relationship(
            distance=0.2,
            are_hands_together=True,
            are_thumbs_together=True,
            vertical_alignment=0.35,
            horizontal_alignment=0.2,
        )
        result = classify(left, right, rel)
        assert result.seal is Seal.BOAR
        assert result.confidence == pytest.approx(1.0)

    def test_vertical_bucket_requires_both_vertical(self) -> None:
        left = make_analysis(is_vertical=True, are_all_fingers_together=True)
        right = make_analysis(are_all_fingers_together=True)
        rel = make_relationship(are_hands_together=True, are_thumbs_together=True)
        assert classify(left, right, rel).seal is None

    def test_ox_in_mixed_bucket(self) -> None:
        result = classify(make_analysis(is_vertical=True), make_analysis(is_horizontal=True), make_relationship())
        assert result.seal is Seal.OX
        assert result.confidence == 0.9

    def test_dog_before_ox(self) -> None:
        left = make_analysis(is_horizontal=True, are_all_fingers_together=True, is_on_top=True)
        right = make_analysis(is_vertical=True, is_horizontal=True, are_fingers_curled=True)
        result = classify(left, right, make_relationship(are_hands_together=True))
        assert result.seal is Seal.DOG

    def test_gate_skips_bucket(self) -> None:
        # Joined thumbs on top without the triangle never open the triangle bucket
        hand = make_analysis(is_on_top=True)
        rel = make_relationship(are_thumbs_together=True, are_index_fingers_together=True)
        assert classify(hand, hand, rel).seal is None


class TestDetectHandSeal:
    """Tests for the public entry point."""

    @given(count=st.integers(min_value=0, max_value=5).filter(lambda n: n != 2))
    @settings(max_examples=10)
    def test_wrong_hand_count_is_null(self, count: int) -> None:
        hands = [
            make_hand(Handedness.LEFT if i % 2 == 0 else Handedness.RIGHT, wrist=(0.2 + 0.1 * i, 0.8))
            for i in range(count)
        ]
        outcome = detect_hand_seal(hands)
        assert outcome.result == SealDetectionResult.none()
        assert outcome.ok

    def test_missing_left_is_null(self) -> None:
        hands = [make_hand(Handedness.RIGHT), make_hand(Handedness.RIGHT, wrist=(0.2, 0.7))]
        assert detect_hand_seal(hands).result == SealDetectionResult.none()

    def test_empty_landmarks_is_null(self, open_left: HandPosition) -> None:
        empty = HandPosition.from_points([], Handedness.RIGHT)
        assert detect_hand_seal([open_left, empty]).result == SealDetectionResult.none()

    def test_null_input_keeps_memory(self, bird_hands: list[HandPosition]) -> None:
        memory = detect_hand_seal(bird_hands).memory
        outcome = detect_hand_seal(bird_hands[:1], memory)
        assert outcome.memory is memory

    def test_bird_scenario(self, bird_hands: list[HandPosition]) -> None:
        outcome = detect_hand_seal(bird_hands)
        assert outcome.result.seal is Seal.BIRD
        assert outcome.result.confidence > 0.8
        assert outcome.ok

    def test_far_apart_scenario(self, far_apart_hands: list[HandPosition]) -> None:
        outcome = detect_hand_seal(far_apart_hands)
        assert outcome.memory.relationship.distance == pytest.approx(0.5)
        assert not outcome.memory.relationship.are_hands_together
        assert outcome.result == SealDetectionResult.none()

    def test_memory_is_written(self, bird_hands: list[HandPosition]) -> None:
        outcome = detect_hand_seal(bird_hands, DetectionMemory.empty())
        memory = outcome.memory
        assert memory.left is not None
        assert memory.right is not None
        assert memory.relationship.last_known_distance == memory.relationship.distance

    def test_occlusion_across_frames(self, open_left: HandPosition, open_right: HandPosition) -> None:
        first = detect_hand_seal([open_left, open_right])
        assert not first.memory.relationship.possible_occlusion
        far = [
            make_hand(Handedness.LEFT, wrist=(0.1, 0.8)),
            make_hand(Handedness.RIGHT, wrist=(0.9, 0.8)),
        ]
        second = detect_hand_seal(far, first.memory)
        assert second.memory.relationship.possible_occlusion

    def test_fallback_across_frames(self, open_left: HandPosition, open_right: HandPosition) -> None:
        first = detect_hand_seal([open_left, open_right])
        corrupted = make_hand(Handedness.LEFT, wrist=(0.35, 0.8), overrides={20: None})
        second = detect_hand_seal([corrupted, open_right], first.memory)
        previous_left = first.memory.left
        assert second.memory.left == replace(previous_left, previous_state=previous_left)
        assert second.memory.right.previous_state is None

    def test_occlusion_rescue_across_frames(self) -> None:
        # Thumb tips resting on the pinky tips, as in Monkey
        first = detect_hand_seal([
            make_hand(Handedness.LEFT, wrist=(0.35, 0.8), overrides={4: (0.49, 0.66)}),
            make_hand(Handedness.RIGHT, wrist=(0.65, 0.8), overrides={4: (0.79, 0.66)}),
        ])
        assert first.memory.left.finger_positions.thumb_on_pinky
        assert first.memory.right.finger_positions.thumb_on_pinky

        occluded = [
            make_hand(Handedness.LEFT, wrist=(0.1, 0.8), overrides={4: None}),
            make_hand(Handedness.RIGHT, wrist=(0.9, 0.8), overrides={4: None}),
        ]
        second = detect_hand_seal(occluded, first.memory)
        memory = second.memory
        assert memory.left.previous_state is not None
        assert memory.right.previous_state is not None
        assert memory.relationship.possible_occlusion
        rescued = score_monkey(memory.left, memory.right, memory.relationship)
        assert rescued.confidence == pytest.approx(OCCLUSION_RESCUE_CONFIDENCE)
        assert not rescued.matches
        assert second.result == SealDetectionResult.none()
        assert second.ok

    @pytest.mark.parametrize(
        "hands",
        [
            [None, None],
            [make_hand(Handedness.LEFT), object()],
            [make_hand(Handedness.LEFT), None],
        ],
    )
    def test_malformed_entries_are_contained(self, hands: list) -> None:
        memory = DetectionMemory.empty()
        outcome = detect_hand_seal(hands, memory)
        assert outcome.result == SealDetectionResult.none()
        assert outcome.memory is memory
        assert not outcome.ok

    def test_non_sequence_input_is_contained(self) -> None:
        outcome = detect_hand_seal(None)  # type: ignore[arg-type]
        assert outcome.result == SealDetectionResult.none()
        assert not outcome.ok

    def test_unusable_hand_without_memory_is_null(self, open_right: HandPosition) -> None:
        corrupted = make_hand(Handedness.LEFT, overrides={8: None})
        outcome = detect_hand_seal([corrupted, open_right])
        assert outcome.result == SealDetectionResult.none()
        assert outcome.memory.is_empty
        assert outcome.ok

    def test_internal_fault_is_contained(self, open_left: HandPosition, open_right: HandPosition) -> None:
        first = detect_hand_seal([open_left, open_right])
        # Too few points: the analyzer falls back, the relationship analyzer fails
        stub = HandPosition.from_points([(0.3, 0.8)] * 5, Handedness.LEFT)
        outcome = detect_hand_seal([stub, open_right], first.memory)
        assert outcome.result == SealDetectionResult.none()
        assert not outcome.ok
        assert outcome.memory is first.memory

    def test_memory_not_shared_between_callers(self, bird_hands: list[HandPosition]) -> None:
        a = detect_hand_seal(bird_hands)
        b = detect_hand_seal(bird_hands)
        assert a == b


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestHandSealDetector:
    """Tests for the stateful frame-loop wrapper."""

    def test_detect_and_remember(self, bird_hands: list[HandPosition]) -> None:
        detector = HandSealDetector()
        result = detector.detect(bird_hands)
        assert result.seal is Seal.BIRD
        assert detector.memory.relationship is not None

    def test_reset(self, bird_hands: list[HandPosition]) -> None:
        detector = HandSealDetector()
        detector.detect(bird_hands)
        detector.reset()
        assert detector.memory.is_empty

    def test_last_error(self, open_left: HandPosition, open_right: HandPosition) -> None:
        detector = HandSealDetector()
        detector.detect([open_left, open_right])
        stub = HandPosition.from_points([(0.3, 0.8)] * 5, Handedness.LEFT)
        assert detector.detect([stub, open_right]) == SealDetectionResult.none()
        assert detector.last_error is not None
        detector.detect([open_left, open_right])
        assert detector.last_error is None

    def test_debug_dump_rate_limited(self, bird_hands: list[HandPosition]) -> None:
        messages: list[str] = []
        sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
        try:
            clock = FakeClock()
            detector = HandSealDetector(debug_log_interval_s=5.0, clock=clock)
            detector.detect(bird_hands)
            clock.now = 1.0
            detector.detect(bird_hands)
            clock.now = 6.0
            detector.detect(bird_hands)
        finally:
            logger.remove(sink_id)
        dumps = [m for m in messages if m.startswith("Left:")]
        assert len(dumps) == 2
        assert "Bird" in dumps[0]
