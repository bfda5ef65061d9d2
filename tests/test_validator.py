"""Tests for ChallengeValidator."""

import pytest

from challenge_engine.models.enums import ActivityType, ConstraintStatus


class TestLevelFour:
    def test_qualifying_run(self, validator, make_facts):
        facts = make_facts(activity_type=ActivityType.RUNNING, distance_miles=3.1, duration_minutes=39)
        verdict = validator.validate(4, facts)
        assert verdict.is_valid
        assert verdict.errors == ()
        assert verdict.level == 4

    def test_slow_run_within_distance_tolerance_reports_only_duration(self, validator, make_facts):
        facts = make_facts(activity_type=ActivityType.RUNNING, distance_miles=3.05, duration_minutes=41)
        verdict = validator.validate(4, facts)
        assert not verdict.is_valid
        assert verdict.errors == ("Must be completed in under 40 minutes",)

    @pytest.mark.parametrize("distance,valid", [(3.2, True), (3.0, True), (3.21, False), (2.99, False)])
    def test_tolerance_boundary(self, validator, make_facts, distance, valid):
        facts = make_facts(activity_type=ActivityType.RUNNING, distance_miles=distance, duration_minutes=30)
        assert validator.validate(4, facts).is_valid is valid


class TestErrorAccumulation:
    def test_all_failures_reported_in_order(self, validator, make_facts):
        verdict = validator.validate(10, make_facts())
        assert verdict.errors == (
            "Distance must be approximately 6.2 miles",
            "Must be completed in under 80 minutes",
            "Must complete at least 100 pushups",
            "Must complete at least 100 sit-ups",
            "Activity must be running",
        )

    def test_wrong_activity_for_distance_level(self, validator, make_facts):
        verdict = validator.validate(1, make_facts(activity_type=ActivityType.SWIMMING, distance_miles=2.0))
        assert verdict.errors == ("Activity must be one of: walking, running, cycling",)

    def test_level_three_needs_pushups_too(self, validator, make_facts):
        facts = make_facts(activity_type=ActivityType.WALKING, distance_miles=1.2, pushups=60)
        assert validator.validate(3, facts).errors == ("Must complete at least 100 pushups",)


class TestTraceAndDeterminism:
    def test_unknown_level_is_a_failed_verdict(self, validator, make_facts):
        verdict = validator.validate(11, make_facts(distance_miles=100.0))
        assert not verdict.is_valid
        assert verdict.errors == ("Unknown challenge level: 11",)

    def test_constraint_results_cover_every_constraint(self, validator, make_facts):
        verdict = validator.validate(6, make_facts(pushups=150))
        statuses = {r.constraint_id: r.status for r in verdict.constraint_results}
        assert statuses["min_pushups"] == ConstraintStatus.PASSED
        assert statuses["exact_distance"] == ConstraintStatus.NOT_APPLICABLE
        assert len(statuses) == 7

    def test_repeated_validation_is_identical(self, validator, make_facts):
        facts = make_facts(activity_type=ActivityType.RUNNING, distance_miles=3.3, duration_minutes=45)
        assert validator.validate(4, facts) == validator.validate(4, facts)
        assert repr(validator.validate(4, facts)) == repr(validator.validate(4, facts))


class TestVerifyEvent:
    def test_valid_event(self, validator, make_event, run_5k_tags):
        result = validator.verify_event(4, make_event(tags=run_5k_tags))
        assert result.success
        assert result.is_valid
        assert result.errors == ()

    def test_wrong_kind_is_captured(self, validator, make_event, run_5k_tags):
        result = validator.verify_event(4, make_event(kind=1, tags=run_5k_tags))
        assert not result.success
        assert not result.is_valid
        assert "Kind 1301" in result.error
