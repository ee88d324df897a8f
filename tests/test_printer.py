from printer import PrettyTextPrinter
from timetable import TimetableWithRoomsBuilder


def test_print_shows_each_curriculum(spec):
    c1, c2, c3, _ = spec.courses
    r1, r2, r3 = spec.rooms
    t = (TimetableWithRoomsBuilder(spec)
         .add_meeting(c1, r3, 0, 1)
         .add_meeting(c2, r1, 4, 3)
         .add_meeting(c3, r2, 2, 0)
         .build())

    text = PrettyTextPrinter(spec).print(t)
    lines = text.splitlines()

    assert "Curriculum: cur1" in lines
    assert "Curriculum: cur2" in lines
    assert "Day  0" in text and "Day  4" in text
    slot_1 = next(line for line in lines if line.strip().startswith("Slot  1"))
    assert slot_1.split()[-1] == "c1"
    assert "r3" in text and "t1" in text
