"""
Shared fixtures: a 4-course toy instance (two curricula, teacher t2 shared
between them) and the ITC-2007 "Toy" instance.
"""
import random

import pytest

from model import Course, Room, Curriculum, UnavailabilityConstraints, Specification
from room_assigner import GreedyRoomAssigner


TOY_ECTT = """Name: Toy
Courses: 4
Rooms: 3
Days: 5
Periods_per_day: 4
Curricula: 2
Min_Max_Daily_Lectures: 2 3
UnavailabilityConstraints: 8
RoomConstraints: 3

COURSES:
SceCosC Ocra 3 3 30 1
ArcTec Indaco 3 2 42 0
TecCos Rosa 5 4 40 1
Geotec Scarlatti 5 4 18 1

ROOMS:
rA 32 1
rB 50 0
rC 40 1

CURRICULA:
Cur1 3 SceCosC ArcTec TecCos
Cur2 2 TecCos Geotec

UNAVAILABILITY_CONSTRAINTS:
TecCos 2 0
TecCos 2 1
TecCos 3 2
TecCos 3 3
ArcTec 4 0
ArcTec 4 1
ArcTec 4 2
ArcTec 4 3

ROOM_CONSTRAINTS:
SceCosC rA
Geotec rB
TecCos rA

END.
"""


def make_spec(days=5, periods=4, rooms=(("r1", 40, 1), ("r2", 30, 1), ("r3", 14, 0)),
              unavailable=(), n_lectures=1):
    courses = [
        Course("c1", "t1", n_lectures, 1, 40, True),
        Course("c2", "t2", n_lectures, 1, 15, True),
        Course("c3", "t3", n_lectures, 1, 15, True),
        Course("c4", "t2", n_lectures, 1, 15, True),
    ]
    curricula = [Curriculum("cur1", ["c1", "c2"]), Curriculum("cur2", ["c3", "c4"])]
    unavailability = UnavailabilityConstraints(days, periods)
    for course_id, day, period in unavailable:
        unavailability.add_unavailability(course_id, day, period)
    return Specification("spec1", days, periods, 3, 5, courses,
                         [Room(*r) for r in rooms], curricula, unavailability)


@pytest.fixture
def spec_factory():
    return make_spec


@pytest.fixture
def spec():
    return make_spec()


@pytest.fixture
def toy_file(tmp_path):
    path = tmp_path / "toy.ectt"
    path.write_text(TOY_ECTT)
    return str(path)


@pytest.fixture
def toy_spec(toy_file):
    from model_parser import SpecificationParser
    parser = SpecificationParser()
    spec = parser.parse(toy_file)
    assert spec is not None, parser.error
    return spec


@pytest.fixture
def toy_parents(toy_spec):
    from feasible_solution_finder import FeasibleSolutionFinder
    finder = FeasibleSolutionFinder(toy_spec, GreedyRoomAssigner(toy_spec))
    rng = random.Random(42)
    parents = [finder.find(rng=rng) for _ in range(4)]
    assert all(p is not None for p in parents)
    return parents
