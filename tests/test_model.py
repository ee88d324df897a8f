import pytest

from model import Course, Curriculum, Room, Specification, UnavailabilityConstraints


def test_indices_and_lookups(spec):
    c1, c2, c3, c4 = spec.courses
    assert [c.index for c in spec.courses] == [0, 1, 2, 3]
    assert [r.index for r in spec.rooms] == [0, 1, 2]
    assert [t.id for t in spec.teachers] == ["t1", "t2", "t3"]
    assert c2.teacher is c4.teacher
    assert spec.courses_of_teacher["t2"] == ["c2", "c4"]
    assert spec.curricula_of_course["c1"] == ["cur1"]
    assert spec.curriculum_indices(c3) == [1]
    assert spec.n_slots == 20


def test_curriculum_courses_set_after_construction():
    c1 = Course("c1", "t1", 1, 1, 10)
    c2 = Course("c2", "t2", 1, 1, 10)
    cur = Curriculum("cur")
    spec = Specification("s", 2, 2, 1, 2, [c1, c2], [Room("r", 10)], [cur])
    assert spec.curriculum_indices(c1) == []

    cur.set_courses([c1, c2])
    spec.refresh_curricula()
    assert cur.n_courses == 2
    assert spec.curriculum_indices(c2) == [0]


def test_duplicate_course():
    courses = [Course("c", "t", 1, 1, 1), Course("c", "t", 1, 1, 1)]
    with pytest.raises(ValueError):
        Specification("s", 1, 1, 1, 1, courses, [Room("r", 1)], [])


def test_curriculum_with_unknown_course():
    with pytest.raises(ValueError):
        Specification("s", 1, 1, 1, 1, [Course("c", "t", 1, 1, 1)], [Room("r", 1)],
                      [Curriculum("q", ["nope"])])


def test_unavailability():
    constraints = UnavailabilityConstraints(5, 4)
    constraints.add_unavailability("c1", 0, 1)
    assert not constraints.check_availability("c1", 0, 1)
    assert constraints.check_availability("c1", 1, 1)
    assert constraints.check_availability("c2", 0, 1)
    assert list(constraints) == [("c1", 0, 1)]
    with pytest.raises(ValueError):
        constraints.add_unavailability("c1", 5, 0)
