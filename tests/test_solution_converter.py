import numpy as np
import pytest

from solution_converter import SolutionConverter
from timetable import TimetableWithRoomsBuilder


@pytest.fixture
def timetable(spec):
    c1, c2, c3, c4 = spec.courses
    r1, r2, r3 = spec.rooms
    return (TimetableWithRoomsBuilder(spec)
            .add_meeting(c3, r2, 2, 1)
            .add_meeting(c1, r3, 0, 1)
            .add_meeting(c2, r1, 0, 2)
            .add_meeting(c4, r2, 1, 1)
            .build())


def test_to_solution_is_sorted_matrix(spec, timetable):
    solution = SolutionConverter(spec).to_solution(timetable)
    assert solution.tolist() == [
        [0, 2, 0, 1],
        [1, 0, 0, 2],
        [2, 1, 2, 1],
        [3, 1, 1, 1],
    ]


def test_round_trip(spec, timetable):
    converter = SolutionConverter(spec)
    solution = converter.to_solution(timetable)
    assert converter.from_solution(solution) == timetable
    assert np.array_equal(converter.to_solution(converter.from_solution(solution)), solution)


def test_empty_timetable(spec):
    converter = SolutionConverter(spec)
    solution = converter.to_solution(TimetableWithRoomsBuilder(spec).build())
    assert solution.shape == (0, 4)
    assert len(converter.from_solution(solution)) == 0


def test_duplicate_row_is_rejected(spec):
    with pytest.raises(ValueError):
        SolutionConverter(spec).from_solution([[0, 0, 1, 1], [0, 1, 1, 1]])


@pytest.mark.parametrize("row", [[-1, 0, 1, 1], [0, -1, 1, 1], [4, 0, 1, 1], [0, 3, 1, 1]])
def test_unknown_index_is_rejected(spec, row):
    with pytest.raises(ValueError):
        SolutionConverter(spec).from_solution([row])


def test_text_format(spec, timetable):
    converter = SolutionConverter(spec)
    text = converter.to_string(timetable)
    assert text.splitlines() == ["c1 r3 0 1", "c2 r1 0 2", "c4 r2 1 1", "c3 r2 2 1"]
    assert converter.parse(text) == timetable


def test_write_and_read(spec, timetable, tmp_path):
    converter = SolutionConverter(spec)
    path = str(tmp_path / "out.sol")
    converter.write(timetable, path)
    assert converter.read(path) == timetable


@pytest.mark.parametrize("text, message", [
    ("c1 r1 0", "Expected 4 fields"),
    ("cX r1 0 0", "Unknown course"),
    ("c1 rX 0 0", "Unknown room"),
    ("c1 r1 a 0", "must be integers"),
    ("c1 r1 9 0", "outside"),
    ("c1 r1 0 0\nc1 r2 0 0", "already scheduled"),
])
def test_parse_errors(spec, text, message):
    converter = SolutionConverter(spec)
    assert converter.parse(text) is None
    assert message in converter.get_error()


def test_read_missing_file(spec, tmp_path):
    converter = SolutionConverter(spec)
    assert converter.read(str(tmp_path / "nope.sol")) is None
    assert "not found" in converter.get_error()
