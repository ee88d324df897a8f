import os
import numpy as np

from timetable import MeetingWithRoom, TimetableWithRooms

# columns of the solution matrix
COURSE, ROOM, DAY, PERIOD = range(4)


class SolutionConverter:
    """
    Converts between TimetableWithRooms and the search engine's
    representation: an (n_meetings, 4) integer matrix of
    (course index, room index, day, period) rows in lexicographic order.

    Also reads and writes the ITC solution text format, one
    "<course> <room> <day> <period>" line per lecture.
    """

    def __init__(self, spec):
        self.spec = spec
        self.error = None

    def to_solution(self, timetable):
        rows = sorted((m.course.index, m.room.index, m.day, m.period) for m in timetable.get_meetings())
        return np.array(rows, dtype=int).reshape(len(rows), 4)

    def from_solution(self, solution):
        solution = np.asarray(solution, dtype=int)
        timetable = TimetableWithRooms(self.spec)
        for c, r, d, s in solution:
            if not (0 <= c < len(self.spec.courses) and 0 <= r < len(self.spec.rooms)):
                raise ValueError(f"Row ({c}, {r}, {d}, {s}) refers to an unknown course or room")
            meeting = MeetingWithRoom(self.spec.courses[c], int(d), int(s), self.spec.rooms[r])
            if not timetable.add_meeting(meeting):
                raise ValueError(f"Course {meeting.course.id} appears twice at {d}/{s}")
        return timetable

    # --- text format ---

    def to_string(self, timetable):
        output = []
        for m in timetable.get_meetings():
            output.append(f"{m.course.id} {m.room.id} {m.day} {m.period}")
        return "\n".join(output)

    def write(self, timetable, filename):
        with open(filename, "w") as f:
            f.write(self.to_string(timetable))
            f.write("\n")

    def parse(self, text):
        """Returns a TimetableWithRooms, or None with the reason in self.error."""
        self.error = None
        timetable = TimetableWithRooms(self.spec)
        for line_number, line in enumerate(text.splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith("//"):
                continue

            parts = line.split()
            if len(parts) != 4:
                self.error = f"Line {line_number}: Expected 4 fields, got {len(parts)}"
                return None

            course_id, room_id, day_str, period_str = parts

            course = self.spec.course_by_id.get(course_id)
            if not course:
                self.error = f"Line {line_number}: Unknown course '{course_id}'"
                return None

            room = self.spec.room_by_id.get(room_id)
            if not room:
                self.error = f"Line {line_number}: Unknown room '{room_id}'"
                return None

            try:
                day = int(day_str)
                period = int(period_str)
            except ValueError:
                self.error = f"Line {line_number}: Day and Period must be integers"
                return None

            try:
                added = timetable.add_meeting(MeetingWithRoom(course, day, period, room))
            except ValueError as e:
                self.error = f"Line {line_number}: {e}"
                return None
            if not added:
                self.error = f"Line {line_number}: Course '{course_id}' already scheduled at {day}/{period}"
                return None

        return timetable

    def read(self, filename):
        if not filename or not os.path.isfile(filename):
            self.error = f"File '{filename}' not found."
            return None
        with open(filename, "r") as f:
            return self.parse(f.read())

    def get_error(self):
        return self.error
