import os

from model import (Course, Room, Curriculum, UnavailabilityConstraints, RoomConstraints,
                   Specification)


class SpecificationParser:
    """
    Reads problem instances in the ITC-2007 ".ctt" format and its extended
    ".ectt" variant (double lectures, room sites, room constraints).

    parse() returns a Specification, or None with the reason in self.error.
    """

    def __init__(self):
        self.error = None

    def _init_state(self):
        self.name = None
        self.n_days = 0
        self.n_periods = 0
        self.min_lectures = 0
        self.max_lectures = 0
        self.header = {}
        self.courses = []
        self.rooms = []
        self.curricula = []
        self.unavailabilities = []
        self.room_constraints = []

    def parse(self, file_path):
        self.error = None
        if not file_path or not os.path.isfile(file_path):
            self.error = f"File '{file_path}' not found."
            return None
        with open(file_path, 'r') as f:
            return self.parse_lines(f)

    def parse_lines(self, lines):
        self._init_state()
        section = None
        for line_number, line in enumerate(lines, start=1):
            line = line.strip()
            if not line or line.startswith("//"):
                continue
            if line.upper() == "END.":
                break

            if line.endswith(":"):
                section = line[:-1].strip().upper()
                continue

            if ":" in line:
                key, value = line.split(':', 1)
                if not self._parse_header(key.strip(), value.strip()):
                    self.error = f"Line {line_number}: Invalid header '{line}'"
                    return None
                continue

            parts = line.split()
            if not self._parse_entry(section, parts):
                self.error = f"Line {line_number}: Unexpected entry in section {section}: '{line}'"
                return None

        return self._build()

    def _parse_header(self, key, value):
        try:
            if key == "Name":
                self.name = value
            elif key == "Days":
                self.n_days = int(value)
            elif key == "Periods_per_day":
                self.n_periods = int(value)
            elif key == "Min_Max_Daily_Lectures":
                self.min_lectures, self.max_lectures = (int(v) for v in value.split())
            else:
                # Courses, Rooms, Curricula, Constraints, ...: entry counts
                self.header[key] = int(value)
        except ValueError:
            return False
        return True

    def _parse_entry(self, section, parts):
        if section == "COURSES":
            if len(parts) not in (5, 6):
                return False
            try:
                self.courses.append(Course(*parts))
            except ValueError:
                return False

        elif section == "ROOMS":
            if len(parts) not in (2, 3):
                return False
            try:
                self.rooms.append(Room(*parts))
            except ValueError:
                return False

        elif section == "CURRICULA":
            if len(parts) < 2:
                return False
            self.curricula.append(Curriculum(parts[0], parts[2:]))

        elif section in ("UNAVAILABILITY_CONSTRAINTS", "CONSTRAINTS"):
            if len(parts) != 3:
                return False
            self.unavailabilities.append(parts)

        elif section == "ROOM_CONSTRAINTS":
            if len(parts) != 2:
                return False
            self.room_constraints.append(parts)

        else:
            return False
        return True

    def _build(self):
        if self.n_days <= 0 or self.n_periods <= 0:
            self.error = "Days and Periods_per_day must be positive"
            return None

        for key, items in (("Courses", self.courses), ("Rooms", self.rooms), ("Curricula", self.curricula)):
            if key in self.header and self.header[key] != len(items):
                self.error = f"Expected {self.header[key]} {key.lower()}, found {len(items)}"
                return None

        course_ids = set(c.id for c in self.courses)
        room_ids = set(r.id for r in self.rooms)
        for course_id, _, _ in self.unavailabilities:
            if course_id not in course_ids:
                self.error = f"Unavailability constraint for unknown course '{course_id}'"
                return None
        for course_id, room_id in self.room_constraints:
            if course_id not in course_ids or room_id not in room_ids:
                self.error = f"Room constraint for unknown course/room '{course_id} {room_id}'"
                return None

        unavailability = UnavailabilityConstraints(self.n_days, self.n_periods)
        room_constraints = RoomConstraints()
        try:
            for course_id, day, period in self.unavailabilities:
                unavailability.add_unavailability(course_id, day, period)
            for course_id, room_id in self.room_constraints:
                room_constraints.add_room_constraint(course_id, room_id)
            return Specification(self.name, self.n_days, self.n_periods,
                                 self.min_lectures, self.max_lectures,
                                 self.courses, self.rooms, self.curricula,
                                 unavailability, room_constraints)
        except ValueError as e:
            self.error = str(e)
            return None

    def get_error(self):
        return self.error
