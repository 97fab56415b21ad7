"""Unit tests for the step, activity and fall detectors."""

from fitness_bridge.models import ActivityType
from fitness_bridge.motion import ActivityClassifier, FallDetector, MotionState, StepDetector


class TestStepDetector:
    """Test rising-edge step detection."""

    def test_rising_edge_counts(self):
        detector = StepDetector(threshold=12.0)
        assert detector.detect(13.0, 11.0) is True

    def test_staying_above_threshold_does_not_count(self):
        detector = StepDetector(threshold=12.0)
        assert detector.detect(14.0, 13.0) is False

    def test_equal_to_threshold_is_not_above(self):
        detector = StepDetector(threshold=12.0)
        assert detector.detect(12.0, 5.0) is False
        assert detector.detect(12.5, 12.0) is True

    def test_magnitude_sequence(self):
        detector = StepDetector(threshold=12.0)
        last = 0.0
        steps = 0
        for magnitude in [5.0, 13.0, 11.0, 14.0, 9.0]:
            if detector.detect(magnitude, last):
                steps += 1
            last = magnitude

        assert steps == 2


class TestActivityClassifier:
    """Test candidate bands and hysteresis."""

    def test_candidate_bands(self):
        classifier = ActivityClassifier(10.5, 13.5, 3)
        assert classifier.candidate(9.8) == ActivityType.STATIONARY
        assert classifier.candidate(10.5) == ActivityType.WALKING
        assert classifier.candidate(13.49) == ActivityType.WALKING
        assert classifier.candidate(13.5) == ActivityType.RUNNING

    def test_label_commits_on_fourth_agreeing_candidate(self):
        classifier = ActivityClassifier(10.5, 13.5, 3)
        state = MotionState()

        labels = [classifier.classify(15.0, state) for _ in range(4)]

        assert labels == [
            ActivityType.STATIONARY,
            ActivityType.STATIONARY,
            ActivityType.STATIONARY,
            ActivityType.RUNNING,
        ]

    def test_walking_then_running_commits_on_fourth_running(self):
        classifier = ActivityClassifier(10.5, 13.5, 3)
        state = MotionState()

        labels = [classifier.classify(avg, state) for avg in (12.0, 12.0, 15.0, 15.0, 15.0, 15.0)]

        assert labels[:5] == [ActivityType.STATIONARY] * 5
        assert labels[5] == ActivityType.RUNNING

    def test_disagreement_resets_confidence(self):
        classifier = ActivityClassifier(10.5, 13.5, 3)
        state = MotionState()

        for avg in (12.0, 12.0, 12.0, 15.0, 12.0, 12.0, 12.0):
            label = classifier.classify(avg, state)

        assert label == ActivityType.STATIONARY
        assert state.activity_confidence == 2

    def test_label_can_jump_straight_to_new_candidate(self):
        """Agreement is counted on candidates, so a committed label skips bands."""
        classifier = ActivityClassifier(10.5, 13.5, 3)
        state = MotionState()

        for _ in range(4):
            classifier.classify(15.0, state)
        assert state.last_activity_type == ActivityType.RUNNING

        for _ in range(4):
            label = classifier.classify(9.8, state)
        assert label == ActivityType.STATIONARY

    def test_stays_committed_while_agreeing(self):
        classifier = ActivityClassifier(10.5, 13.5, 3)
        state = MotionState()
        for _ in range(10):
            label = classifier.classify(12.0, state)

        assert label == ActivityType.WALKING
        assert state.activity_confidence == 9


class TestFallDetector:
    """Test fall threshold and cooldown."""

    def test_fires_above_threshold(self):
        detector = FallDetector(threshold=25.0, cooldown_ms=5000)
        state = MotionState()

        assert detector.detect(30.0, 10_000, state) is True
        assert state.last_fall_detection_time == 10_000

    def test_first_spike_fires_on_session_relative_clock(self):
        detector = FallDetector(threshold=25.0, cooldown_ms=5000)
        state = MotionState()

        assert detector.detect(30.0, 1_000, state) is True
        assert detector.detect(30.0, 4_000, state) is False
        assert detector.detect(30.0, 6_001, state) is True

    def test_first_spike_at_time_zero(self):
        detector = FallDetector(threshold=25.0, cooldown_ms=5000)
        assert detector.detect(26.0, 0, MotionState()) is True

    def test_at_threshold_does_not_fire(self):
        detector = FallDetector(threshold=25.0, cooldown_ms=5000)
        assert detector.detect(25.0, 10_000, MotionState()) is False

    def test_cooldown_suppresses_repeat(self):
        detector = FallDetector(threshold=25.0, cooldown_ms=5000)
        state = MotionState()

        assert detector.detect(30.0, 10_000, state) is True
        assert detector.detect(31.0, 12_000, state) is False
        assert detector.detect(31.0, 15_000, state) is False
        assert detector.detect(31.0, 15_001, state) is True

    def test_suppressed_spike_does_not_extend_cooldown(self):
        detector = FallDetector(threshold=25.0, cooldown_ms=5000)
        state = MotionState()

        detector.detect(30.0, 10_000, state)
        detector.detect(30.0, 14_000, state)

        assert state.last_fall_detection_time == 10_000
        assert detector.detect(30.0, 15_500, state) is True
