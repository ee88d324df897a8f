from collections import namedtuple
import numpy as np


class TimetableInvariantError(RuntimeError):
    """The indices of a timetable disagree with its meetings."""


class Meeting(namedtuple("Meeting", ["course", "day", "period"])):
    __slots__ = ()

    def with_room(self, room):
        return MeetingWithRoom(self.course, self.day, self.period, room)

    def without_room(self):
        return self


class MeetingWithRoom(namedtuple("MeetingWithRoom", ["course", "day", "period", "room"])):
    __slots__ = ()

    def without_room(self):
        return Meeting(self.course, self.day, self.period)


class Timetable:
    """
    Mutable grid of meetings for one candidate solution.

    Besides the meetings themselves, dense occupancy counts are kept per
    course, teacher and curriculum (each indexed by day and period) so that
    conflict queries are O(1). Every add/remove updates all of them.
    """

    def __init__(self, spec):
        self.spec = spec
        self.D = spec.n_days
        self.S = spec.n_periods

        self.course_ds = np.zeros((len(spec.courses), self.D, self.S), dtype=int)
        self.teacher_ds = np.zeros((len(spec.teachers), self.D, self.S), dtype=int)
        self.curriculum_ds = np.zeros((len(spec.curricula), self.D, self.S), dtype=int)

        self.slot_meetings = [[[] for _ in range(self.S)] for _ in range(self.D)]
        self.course_meetings = [{} for _ in spec.courses]
        self.n_meetings = 0

    # --- mutation ---

    def add_meeting(self, meeting):
        """
        Returns False if the course already has a lecture in this slot or if
        every room is taken at this slot.
        """
        self._check_slot(meeting.day, meeting.period)
        if (meeting.day, meeting.period) in self.course_meetings[meeting.course.index]:
            return False
        if not self._has_free_room(meeting.day, meeting.period):
            return False
        self._insert(meeting)
        return True

    def restore_meeting(self, meeting):
        """
        Puts back a meeting that was just removed. Only a duplicate
        lecture is refused; an already crowded slot stays crowded.
        """
        self._check_slot(meeting.day, meeting.period)
        if (meeting.day, meeting.period) in self.course_meetings[meeting.course.index]:
            return False
        self._insert(meeting)
        return True

    def remove_meeting(self, meeting):
        existing = self.course_meetings[meeting.course.index].get((meeting.day, meeting.period))
        if existing is None or existing != meeting:
            return False
        self._delete(existing)
        return True

    def replace_meeting(self, day, period, meeting):
        """
        Evicts the first meeting of another course at (day, period) and puts
        `meeting` in its place. Returns the evicted meeting, or None if there
        was nothing to evict.
        """
        self._check_slot(day, period)
        if (meeting.day, meeting.period) != (day, period):
            raise ValueError(f"Meeting {meeting} does not belong to slot {day}/{period}")
        if (day, period) in self.course_meetings[meeting.course.index]:
            return None
        for other in self.slot_meetings[day][period]:
            if other.course is not meeting.course:
                self._delete(other)
                self._insert(meeting)
                return other
        return None

    def _has_free_room(self, day, period):
        return len(self.slot_meetings[day][period]) < len(self.spec.rooms)

    def _check_slot(self, day, period):
        if not (0 <= day < self.D and 0 <= period < self.S):
            raise ValueError(f"Slot {day}/{period} outside of {self.D}x{self.S} grid")

    def _insert(self, meeting):
        c = meeting.course.index
        d, s = meeting.day, meeting.period
        self.course_meetings[c][(d, s)] = meeting
        self.slot_meetings[d][s].append(meeting)
        self.course_ds[c, d, s] += 1
        self.teacher_ds[meeting.course.teacher.index, d, s] += 1
        for q in self.spec.curriculum_indices(meeting.course):
            self.curriculum_ds[q, d, s] += 1
        self.n_meetings += 1

    def _delete(self, meeting):
        c = meeting.course.index
        d, s = meeting.day, meeting.period
        if self.course_meetings[c].pop((d, s), None) is None:
            raise TimetableInvariantError(f"{meeting} is not scheduled")
        self.slot_meetings[d][s].remove(meeting)
        self.course_ds[c, d, s] -= 1
        self.teacher_ds[meeting.course.teacher.index, d, s] -= 1
        for q in self.spec.curriculum_indices(meeting.course):
            self.curriculum_ds[q, d, s] -= 1
        self.n_meetings -= 1

    # --- queries ---

    def get_meeting(self, course, day, period):
        return self.course_meetings[course.index].get((day, period))

    def get_meetings(self):
        """All meetings, slot by slot in row-major order (day outer, period inner)."""
        return [m for row in self.slot_meetings for cell in row for m in cell]

    def get_meetings_by_course(self, course):
        return [self.course_meetings[course.index][k] for k in sorted(self.course_meetings[course.index])]

    def get_meetings_at(self, day, period):
        return list(self.slot_meetings[day][period])

    def has_lecture_with_same_teacher(self, teacher, day, period):
        return self.teacher_ds[teacher.index, day, period] > 0

    def has_lecture_of_same_curriculum(self, course, day, period):
        indices = self.spec.curriculum_indices(course)
        return bool(indices) and bool(np.any(self.curriculum_ds[indices, day, period] > 0))

    def teacher_slots(self, teacher):
        return {(int(d), int(s)) for d, s in np.argwhere(self.teacher_ds[teacher.index] > 0)}

    def curriculum_slots(self, curriculum):
        return {(int(d), int(s)) for d, s in np.argwhere(self.curriculum_ds[curriculum.index] > 0)}

    def lecture_counts(self):
        return self.course_ds.sum(axis=(1, 2))

    # --- branching ---

    def new_child(self):
        """Independent plain Timetable with the same meetings (rooms dropped)."""
        child = Timetable.__new__(Timetable)
        child.spec = self.spec
        child.D = self.D
        child.S = self.S
        child.course_ds = self.course_ds.copy()
        child.teacher_ds = self.teacher_ds.copy()
        child.curriculum_ds = self.curriculum_ds.copy()
        child.slot_meetings = [[[m.without_room() for m in cell] for cell in row]
                               for row in self.slot_meetings]
        child.course_meetings = [{k: m.without_room() for k, m in by_slot.items()}
                                 for by_slot in self.course_meetings]
        child.n_meetings = self.n_meetings
        return child

    # --- dunder ---

    def __len__(self):
        return self.n_meetings

    def __iter__(self):
        return iter(self.get_meetings())

    def __contains__(self, meeting):
        return self.get_meeting(meeting.course, meeting.day, meeting.period) == meeting

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.spec is other.spec and set(self.get_meetings()) == set(other.get_meetings())

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({self.spec.name!r}, meetings={self.n_meetings})"


class CurriculumTimetable:
    """Day x period view of the meetings of one curriculum."""

    def __init__(self, curriculum, n_days, n_periods):
        self.curriculum = curriculum
        self._grid = [[None] * n_periods for _ in range(n_days)]

    def set(self, meeting):
        if self._grid[meeting.day][meeting.period] is None:
            self._grid[meeting.day][meeting.period] = meeting

    def get(self, day, period):
        return self._grid[day][period]


class TimetableWithRooms(Timetable):
    """
    Timetable whose meetings all carry a room. Produced by room assignment,
    the solution converter or TimetableWithRoomsBuilder; operators never
    modify one, they branch a plain Timetable from it with new_child().
    """

    def __init__(self, spec):
        super().__init__(spec)
        self.room_ds = np.zeros((len(spec.rooms), self.D, self.S), dtype=int)

    def _has_free_room(self, day, period):
        # rooms are explicit here; clashes are left to RoomOccupancyConstraint
        return True

    def _insert(self, meeting):
        super()._insert(meeting)
        self.room_ds[meeting.room.index, meeting.day, meeting.period] += 1

    def _delete(self, meeting):
        super()._delete(meeting)
        self.room_ds[meeting.room.index, meeting.day, meeting.period] -= 1

    def get_curriculum_timetables(self):
        result = {}
        for curriculum in self.spec.curricula:
            result[curriculum.id] = CurriculumTimetable(curriculum, self.D, self.S)
        for m in self.get_meetings():
            for q_id in self.spec.curricula_of_course.get(m.course.id, ()):
                result[q_id].set(m)
        return result


class TimetableWithRoomsBuilder:
    def __init__(self, spec):
        self.spec = spec
        self._timetable = TimetableWithRooms(spec)

    def add_meeting(self, course, room, day, period):
        if not self._timetable.add_meeting(MeetingWithRoom(course, day, period, room)):
            raise ValueError(f"Course {course.id} is already scheduled at {day}/{period}")
        return self

    def build(self):
        timetable, self._timetable = self._timetable, None
        return timetable
