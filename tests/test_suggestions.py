from availability import availability
from builders import batch, day, teacher
from suggestions import DEFAULT_LEVELS, feasibility_score, rejected_teachers, suggest

D = day(10)


def test_skill_mismatch_on_free_declared_slot_scores_70():
    t = teacher("T1", name="Anna", levels=("A1",), slots=("Evening",))

    out = suggest([t], [], D, ["B2"])

    assert len(out) == 1
    s = out[0]
    assert (s.teacher_id, s.level, s.slot, s.score) == ("T1", "B2", "Evening", 70)
    assert s.warnings == ("capability not confirmed for B2",)
    assert s.rationale == (
        "Anna is available evening",
        "B2 not in listed levels",
        "not teaching any batches",
    )


def test_matching_unloaded_teacher_is_clamped_to_100():
    out = suggest([teacher("T1", levels=("A1",), slots=("Morning",))], [], D, ["A1"])

    assert [(s.slot, s.score, s.warnings) for s in out] == [("Morning", 100, ())]
    assert "can teach A1" in out[0].rationale


def test_one_running_batch_costs_ten_points_and_warns():
    t = teacher("T1", name="Anna", levels=("A1",))
    busy = [batch("B1", day(1), day(20), slot="Morning")]

    out = suggest([t], busy, D, ["A1", "B1"])

    assert [(s.level, s.slot, s.score) for s in out] == [
        ("A1", "Evening", 100),
        ("B1", "Evening", 60),
    ]
    assert out[0].warnings == ("already has 1 batch",)
    assert out[1].warnings == ("already has 1 batch", "capability not confirmed for B1")
    assert out[0].rationale[-1] == "teaching 1 batch (has 1 slot free)"


def test_deactivated_teacher_never_suggested():
    teachers = [
        teacher("T1", levels=DEFAULT_LEVELS, active=False),
        teacher("T2", levels=("A1",), slots=("Morning",)),
    ]

    out = suggest(teachers, [], D, DEFAULT_LEVELS)

    assert out
    assert all(s.teacher_id != "T1" for s in out)


def test_full_teachers_are_dropped_and_reported():
    teachers = [
        teacher("T1"),
        teacher("T2", active=False),
        teacher("T3", max_concurrent=1),
    ]
    batches = [batch("B1", day(1), day(20), teacher_id="T3", slot=None)]

    out = suggest(teachers, batches, D)

    assert {s.teacher_id for s in out} == {"T1"}
    assert rejected_teachers(teachers, batches, D) == {
        "T2": ["teacher_inactive"],
        "T3": ["at_max_concurrent(1/1)"],
    }


def test_ranking_by_score_then_teacher_id():
    teachers = [
        teacher("T3", levels=("B1",), slots=("Morning",)),
        teacher("T2", levels=("A1",), slots=("Morning",)),
        teacher("T1", levels=("A1",), slots=("Morning", "Evening")),
    ]

    out = suggest(teachers, [], D, ["A1"])

    assert [(s.teacher_id, s.slot, s.score) for s in out] == [
        ("T1", "Morning", 100),
        ("T1", "Evening", 100),
        ("T2", "Morning", 100),
        ("T3", "Morning", 70),
    ]


def test_same_inputs_give_identical_output():
    teachers = [
        teacher("T2", levels=("A1", "B1")),
        teacher("T1", levels=("B2",), slots=("Evening",)),
        teacher("T3", levels=("A2",), slots=("Morning",)),
    ]
    batches = [
        batch("B1", day(1), day(20), teacher_id="T2", slot="Evening"),
        batch("B2", day(5), day(15), teacher_id="T3", slot=None),
    ]

    first = suggest(teachers, batches, D, DEFAULT_LEVELS)
    second = suggest(teachers, batches, D, DEFAULT_LEVELS)

    assert first == second
    assert repr(first) == repr(second)


def test_more_load_never_raises_a_score():
    t = teacher("T1", levels=("A1",), max_concurrent=3)
    untagged = [batch(f"B{i}", day(1), day(20), slot=None) for i in range(3)]

    previous = None
    for n in range(3):
        scores = {(s.level, s.slot): s.score for s in suggest([t], untagged[:n], D, ["A1", "B2"])}
        if previous is not None:
            for key, score in scores.items():
                assert score <= previous[key]
        previous = scores

    assert previous[("B2", "Morning")] == 60


def test_batches_of_unknown_teachers_do_not_block_anyone():
    t = teacher("T1", levels=("A1",), slots=("Morning",))
    orphan = batch("B1", day(1), day(20), teacher_id="T9", slot="Morning")

    out = suggest([t], [orphan], D, ["A1"])
    assert [(s.teacher_id, s.score) for s in out] == [("T1", 100)]


def test_duplicate_levels_and_teachers_are_collapsed():
    t = teacher("T1", levels=("A1",), slots=("Morning",))
    out = suggest([t, t], [], D, ["A1", "A1"])
    assert len(out) == 1


def test_empty_inputs_give_no_suggestions():
    assert suggest([], [], D) == []
    assert suggest([teacher("T1")], [], D, []) == []


def test_undeclared_slot_scores_zero():
    t = teacher("T1", levels=("A1",), slots=("Morning",))
    a = availability(t, [], D)
    assert feasibility_score(t, "A1", "Evening", a) == 0
    assert feasibility_score(t, "A1", "Morning", a) == 100
