"""Tests for the auto assignment engine."""

import random
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime

import pytest

from models.participant import Participant
from models.team import Team
from models.time_slot import TimeSlot
from engine.assignment_engine import (
    AssignmentCounters,
    check_team_capacities,
    filter_by_capacity,
    keep_fewest_same_grade,
    keep_fewest_same_section,
    keep_least_loaded,
    partition_teams,
    rank_candidates,
    resolve_time_slot,
    run_auto_assignment,
    run_auto_assignment_explained,
    select_best_team,
    sort_participants,
    trace_cascade,
)
from engine.service import auto_assign

NOW = datetime(2026, 10, 1, 9, 0, 0)


def make_participant(rid="R001", section="Planning", grade=2, availability="morning", name=None):
    return Participant(rid, name or f"Person {rid}", section, grade, availability)


def make_team(tid="T01", slot="morning", max_members=None, preferred_grades=None):
    return Team(
        team_id=tid,
        team_code=tid,
        team_name=f"Team {tid}",
        time_slot=slot,
        assigned_area="A1",
        max_members=max_members,
        preferred_grades=preferred_grades or [],
    )


def make_roster(count=40, seed=7):
    rng = random.Random(seed)
    sections = ["Planning", "Design", "Logistics", "Stage"]
    participants = [
        make_participant(
            rid=f"R{i:03d}",
            section=rng.choice(sections),
            grade=rng.randint(1, 4),
            availability=rng.choice(["morning", "afternoon", "both"]),
        )
        for i in range(1, count + 1)
    ]
    teams = [
        make_team("T01", "morning", 6, [1]),
        make_team("T02", "morning", 5),
        make_team("T03", "afternoon", 6),
        make_team("T04", "afternoon", 5, [2]),
        make_team("T05", "all", 8, [3, 4]),
        make_team("T06", "pr", 5),
        make_team("T07", "other", 5),
    ]
    return participants, teams


# --- Invariants over a realistic roster ---

class TestInvariants:
    def test_capacity_never_exceeded(self):
        participants, teams = make_roster(count=60)
        assignments = run_auto_assignment(participants, teams, now=NOW)
        caps = {t.team_id: t.capacity() for t in teams}
        counts = {}
        for a in assignments:
            counts[a.team_id] = counts.get(a.team_id, 0) + 1
        for team_id, count in counts.items():
            assert count <= caps[team_id]

    def test_each_participant_assigned_at_most_once(self):
        participants, teams = make_roster()
        assignments = run_auto_assignment(participants, teams, now=NOW)
        ids = [a.response_id for a in assignments]
        assert len(ids) == len(set(ids))

    def test_duplicate_input_rows_assigned_once(self):
        p = make_participant("R001")
        assignments = run_auto_assignment([p, p], [make_team()], now=NOW)
        assert len(assignments) == 1

    def test_deterministic_for_any_input_order(self):
        participants, teams = make_roster()
        first = run_auto_assignment(participants, teams, now=NOW)

        shuffled_p = list(participants)
        shuffled_t = list(teams)
        rng = random.Random(99)
        rng.shuffle(shuffled_p)
        rng.shuffle(shuffled_t)
        second = run_auto_assignment(shuffled_p, shuffled_t, now=NOW)

        def as_rows(assignments):
            return sorted((a.to_dict() for a in assignments), key=lambda d: d["responseId"])

        assert as_rows(first) == as_rows(second)

    def test_slot_matches_team(self):
        participants, teams = make_roster()
        team_map = {t.team_id: t for t in teams}
        for a in run_auto_assignment(participants, teams, now=NOW):
            slot = team_map[a.team_id].time_slot
            assert a.time_slot in ("morning", "afternoon")
            if slot in (TimeSlot.MORNING, TimeSlot.AFTERNOON):
                assert a.time_slot == slot.value

    def test_pr_teams_never_used(self):
        participants = [make_participant(f"R{i:03d}") for i in range(5)]
        teams = [make_team("T01", "pr"), make_team("T02", "morning", 1)]
        assignments = run_auto_assignment(participants, teams, include_other_teams=True, now=NOW)
        assert [a.team_id for a in assignments] == ["T02"]

    def test_auto_assignments_are_marked_auto(self):
        participants, teams = make_roster(count=10)
        assignments = run_auto_assignment(participants, teams, now=NOW)
        assert assignments
        assert all(a.assigned_by == "auto" for a in assignments)
        assert all(a.assigned_at == NOW for a in assignments)


class TestOtherTeams:
    def test_other_team_excluded_by_default(self):
        participants = [make_participant("R001"), make_participant("R002")]
        teams = [make_team("T01", "morning", 1), make_team("T09", "other", 5)]
        assignments = run_auto_assignment(participants, teams, now=NOW)
        assert len(assignments) == 1
        assert assignments[0].team_id == "T01"

    def test_other_team_used_when_enabled(self):
        participants = [make_participant("R001"), make_participant("R002")]
        teams = [make_team("T01", "morning", 1), make_team("T09", "other", 5)]
        assignments = run_auto_assignment(participants, teams, include_other_teams=True, now=NOW)
        assert {a.team_id for a in assignments} == {"T01", "T09"}

    def test_rule_config_enables_other_teams(self):
        participants = [make_participant("R001")]
        teams = [make_team("T09", "other", 5)]
        assignments = run_auto_assignment(
            participants, teams, rule_config={"include_other_teams": True}, now=NOW,
        )
        assert len(assignments) == 1

    def test_explicit_flag_overrides_rule_config(self):
        participants = [make_participant("R001")]
        teams = [make_team("T09", "other", 5)]
        assignments = run_auto_assignment(
            participants, teams, include_other_teams=False,
            rule_config={"include_other_teams": True}, now=NOW,
        )
        assert assignments == []


# --- Scenarios ---

class TestScenarios:
    def test_simple_split(self):
        participants = [
            make_participant("R001", grade=2, availability="morning"),
            make_participant("R002", grade=2, availability="afternoon"),
        ]
        teams = [make_team("T01", "morning", 10), make_team("T02", "afternoon", 10)]
        assignments = {a.response_id: a for a in run_auto_assignment(participants, teams, now=NOW)}

        assert assignments["R001"].team_id == "T01"
        assert assignments["R001"].time_slot == "morning"
        assert assignments["R002"].team_id == "T02"
        assert assignments["R002"].time_slot == "afternoon"

    def test_capacity_overflow(self):
        participants = [make_participant(f"R00{i}") for i in range(1, 4)]
        teams = [make_team("T01", "morning", 2)]
        assignments, stats, _ = auto_assign(participants, teams, now=NOW)

        assert len(assignments) == 2
        assert stats.to_dict() == {"total": 3, "assigned": 2, "unassigned": 1, "standby": 0}

    def test_flexible_section_members_spread_across_slots(self):
        participants = [
            make_participant("R001", section="Stage", availability="both"),
            make_participant("R002", section="Stage", availability="both"),
        ]
        teams = [make_team("T01", "morning"), make_team("T02", "afternoon")]
        assignments = run_auto_assignment(participants, teams, now=NOW)

        assert sorted(a.time_slot for a in assignments) == ["afternoon", "morning"]
        assert sorted(a.team_id for a in assignments) == ["T01", "T02"]

    def test_senior_placed_first_into_lowest_team_id(self):
        participants = [
            make_participant("R001", grade=1),
            make_participant("R002", grade=3),
        ]
        teams = [make_team("T02", "morning"), make_team("T01", "morning")]
        assignments = {a.response_id: a.team_id for a in run_auto_assignment(participants, teams, now=NOW)}

        assert assignments["R002"] == "T01"
        assert assignments["R001"] == "T02"

    def test_grade_diversity_breaks_equal_load(self):
        participants = [
            make_participant("R001", section="Planning", grade=1),
            make_participant("R002", section="Design", grade=2),
            make_participant("R003", section="Stage", grade=1),
        ]
        teams = [make_team("T01", "morning"), make_team("T02", "morning")]
        assignments = {a.response_id: a.team_id for a in run_auto_assignment(participants, teams, now=NOW)}

        assert assignments == {"R001": "T01", "R002": "T02", "R003": "T02"}

    def test_preferred_grade_wins_tie(self):
        participants = [make_participant("R001", grade=2)]
        teams = [make_team("T01", "morning"), make_team("T02", "morning", preferred_grades=[2])]
        assignments = run_auto_assignment(participants, teams, now=NOW)
        assert assignments[0].team_id == "T02"

    def test_all_day_team_accepts_both_slots(self):
        participants = [
            make_participant("R001", availability="morning"),
            make_participant("R002", availability="afternoon"),
        ]
        teams = [make_team("T05", "all")]
        assignments = run_auto_assignment(participants, teams, now=NOW)
        assert {a.time_slot for a in assignments} == {"morning", "afternoon"}
        assert {a.team_id for a in assignments} == {"T05"}


# --- Edge cases ---

class TestEdgeCases:
    def test_empty_participants(self):
        assert run_auto_assignment([], [make_team()], now=NOW) == []

    def test_empty_teams(self):
        assert run_auto_assignment([make_participant()], [], now=NOW) == []

    def test_unrecognized_availability_is_skipped(self):
        participants = [make_participant("R001", availability="evening"), make_participant("R002")]
        assignments = run_auto_assignment(participants, [make_team()], now=NOW)
        assert [a.response_id for a in assignments] == ["R002"]

    def test_availability_must_be_canonical(self):
        participants = [
            make_participant("R001", availability="Morning"),
            make_participant("R002", availability=" both "),
            make_participant("R003", availability="morning"),
        ]
        assignments = run_auto_assignment(participants, [make_team()], now=NOW)
        assert [a.response_id for a in assignments] == ["R003"]

    def test_no_team_for_slot(self):
        participants = [make_participant("R001", availability="afternoon")]
        assert run_auto_assignment(participants, [make_team("T01", "morning")], now=NOW) == []

    def test_zero_capacity_means_default(self):
        participants = [make_participant(f"R{i:03d}") for i in range(12)]
        assignments = run_auto_assignment(participants, [make_team("T01", "morning", 0)], now=NOW)
        assert len(assignments) == 10

    def test_default_capacity_from_rule_config(self):
        participants = [make_participant(f"R{i:03d}") for i in range(6)]
        assignments = run_auto_assignment(
            participants, [make_team()], rule_config={"default_max_members": 3}, now=NOW,
        )
        assert len(assignments) == 3

    def test_negative_capacity_raises(self):
        with pytest.raises(ValueError):
            run_auto_assignment([make_participant()], [make_team(max_members=-1)], now=NOW)

    def test_check_team_capacities_accepts_unset(self):
        check_team_capacities([make_team(max_members=None), make_team(max_members=0)])


# --- Individual stages ---

class TestPartitionTeams:
    def test_pools(self):
        teams = [
            make_team("T01", "morning"),
            make_team("T02", "afternoon"),
            make_team("T03", "both"),
            make_team("T04", "all"),
            make_team("T05", "pr"),
            make_team("T06", "other"),
        ]
        pools = partition_teams(teams)
        assert [t.team_id for t in pools.morning] == ["T01"]
        assert [t.team_id for t in pools.afternoon] == ["T02"]
        assert [t.team_id for t in pools.all_day] == ["T03", "T04"]
        assert pools.other == []

        pools = partition_teams(teams, include_other_teams=True)
        assert [t.team_id for t in pools.other] == ["T06"]

    def test_candidates_for_slot(self):
        teams = [make_team("T01", "morning"), make_team("T02", "afternoon"), make_team("T03", "all")]
        pools = partition_teams(teams)
        assert [t.team_id for t in pools.candidates_for("morning")] == ["T01", "T03"]
        assert [t.team_id for t in pools.candidates_for("afternoon")] == ["T02", "T03"]


class TestSortParticipants:
    def test_seniors_then_fixed_slot(self):
        participants = [
            make_participant("R001", grade=1, availability="both"),
            make_participant("R002", grade=1, availability="morning"),
            make_participant("R003", grade=4, availability="both"),
            make_participant("R004", grade=3, availability="afternoon"),
        ]
        ordered = [p.response_id for p in sort_participants(participants)]
        assert ordered == ["R004", "R003", "R002", "R001"]

    def test_response_id_breaks_ties(self):
        participants = [make_participant("R003"), make_participant("R001"), make_participant("R002")]
        assert [p.response_id for p in sort_participants(participants)] == ["R001", "R002", "R003"]


class TestResolveTimeSlot:
    def test_fixed_slots(self):
        counters = AssignmentCounters()
        assert resolve_time_slot(make_participant(availability="morning"), counters) == "morning"
        assert resolve_time_slot(make_participant(availability="afternoon"), counters) == "afternoon"

    def test_flexible_tie_goes_to_morning(self):
        counters = AssignmentCounters()
        assert resolve_time_slot(make_participant(availability="both"), counters) == "morning"

    def test_flexible_follows_section_balance(self):
        counters = AssignmentCounters()
        counters.record(make_participant("R001", section="Stage"), make_team(), "morning")
        flexible = make_participant("R002", section="Stage", availability="both")
        other_section = make_participant("R003", section="Design", availability="both")
        assert resolve_time_slot(flexible, counters) == "afternoon"
        assert resolve_time_slot(other_section, counters) == "morning"

    def test_unknown_availability(self):
        assert resolve_time_slot(make_participant(availability=""), AssignmentCounters()) is None


class TestCascadeStages:
    def test_filter_by_capacity(self):
        t1, t2 = make_team("T01", max_members=1), make_team("T02", max_members=2)
        counters = AssignmentCounters()
        counters.record(make_participant("R001"), t1, "morning")
        assert filter_by_capacity([t1, t2], counters) == [t2]

    def test_keep_least_loaded(self):
        t1, t2, t3 = make_team("T01"), make_team("T02"), make_team("T03")
        counters = AssignmentCounters()
        counters.record(make_participant("R001"), t2, "morning")
        assert keep_least_loaded([t1, t2, t3], counters) == [t1, t3]

    def test_keep_fewest_same_section(self):
        t1, t2 = make_team("T01"), make_team("T02")
        counters = AssignmentCounters()
        counters.record(make_participant("R001", section="Stage"), t1, "morning")
        counters.record(make_participant("R002", section="Design"), t2, "morning")
        p = make_participant("R003", section="Stage")
        assert keep_fewest_same_section([t1, t2], p, counters) == [t2]

    def test_keep_fewest_same_grade(self):
        t1, t2 = make_team("T01"), make_team("T02")
        counters = AssignmentCounters()
        counters.record(make_participant("R001", grade=2), t1, "morning")
        counters.record(make_participant("R002", grade=1), t2, "morning")
        p = make_participant("R003", grade=2)
        assert keep_fewest_same_grade([t1, t2], p, counters) == [t2]

    def test_rank_prefers_senior_less_team_for_seniors(self):
        t1, t2 = make_team("T01"), make_team("T02")
        counters = AssignmentCounters()
        counters.record(make_participant("R001", grade=4), t1, "morning")
        senior = make_participant("R002", grade=3)
        junior = make_participant("R003", grade=1)
        assert rank_candidates([t1, t2], senior, counters) == [t2, t1]
        assert rank_candidates([t1, t2], junior, counters) == [t1, t2]

    def test_rank_senior_need_outranks_preferred_grade(self):
        t1 = make_team("T01", preferred_grades=[3])
        t2 = make_team("T02")
        counters = AssignmentCounters()
        counters.record(make_participant("R001", grade=4), t1, "morning")
        assert rank_candidates([t1, t2], make_participant("R002", grade=3), counters) == [t2, t1]

    def test_select_best_team_none_when_full(self):
        t1 = make_team("T01", max_members=1)
        counters = AssignmentCounters()
        counters.record(make_participant("R001"), t1, "morning")
        assert select_best_team([t1], make_participant("R002"), counters) is None
        assert select_best_team([], make_participant("R002"), counters) is None

    def test_trace_stage_names(self):
        trace = trace_cascade([make_team("T01"), make_team("T02")], make_participant(), AssignmentCounters())
        assert [stage for stage, _ in trace] == ["capacity", "load", "section", "grade", "ranking"]
        assert trace[-1][1][0].team_id == "T01"

    def test_trace_stops_at_capacity(self):
        t1 = make_team("T01", max_members=1)
        counters = AssignmentCounters()
        counters.record(make_participant("R001"), t1, "morning")
        trace = trace_cascade([t1], make_participant("R002"), counters)
        assert trace == [("capacity", [])]


class TestExplainedRun:
    def test_explanations_for_every_participant(self):
        participants, teams = make_roster(count=12)
        assignments, explanations = run_auto_assignment_explained(participants, teams, now=NOW)
        assert set(explanations) == {p.response_id for p in participants}
        assert all(steps[-1].startswith("Result:") or "not assignable" in steps[-1]
                   for steps in explanations.values())

    def test_same_assignments_as_plain_run(self):
        participants, teams = make_roster(count=30)
        plain = run_auto_assignment(participants, teams, now=NOW)
        explained, _ = run_auto_assignment_explained(participants, teams, now=NOW)
        assert [a.to_dict() for a in plain] == [a.to_dict() for a in explained]

    def test_result_names_chosen_team(self):
        assignments, explanations = run_auto_assignment_explained(
            [make_participant("R001")], [make_team("T01")], now=NOW,
        )
        assert explanations["R001"][-1].startswith("Result: T01")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
