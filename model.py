from collections import defaultdict


class Course:
    def __init__(self, course_id, teacher_id, n_lectures, min_working_days, n_students,
                 double_lectures=False):
        self.index = None  # Assigned by Specification
        self.id = course_id
        self.teacher_id = teacher_id
        self.n_lectures = int(n_lectures)
        self.min_working_days = int(min_working_days)
        self.n_students = int(n_students)
        self.double_lectures = bool(int(double_lectures))
        self.teacher = None  # Resolved by Specification

    def __repr__(self):
        return f"Course({self.id!r})"


class Room:
    def __init__(self, room_id, capacity, site=0):
        self.index = None  # Assigned by Specification
        self.id = room_id
        self.capacity = int(capacity)
        self.site = int(site)

    def __repr__(self):
        return f"Room({self.id!r}, {self.capacity})"


class Curriculum:
    def __init__(self, curriculum_id, course_ids=()):
        self.index = None  # Assigned by Specification
        self.id = curriculum_id
        self.course_ids = list(course_ids)

    def set_courses(self, courses):
        """Accepts Course objects or course ids."""
        self.course_ids = [getattr(c, "id", c) for c in courses]

    @property
    def n_courses(self):
        return len(self.course_ids)

    def __repr__(self):
        return f"Curriculum({self.id!r})"


class Teacher:
    def __init__(self, index, teacher_id):
        self.index = index
        self.id = teacher_id

    def __repr__(self):
        return f"Teacher({self.id!r})"


class UnavailabilityConstraints:
    """Set of (course, day, period) slots in which a course cannot be taught."""

    def __init__(self, n_days, n_periods):
        self.n_days = n_days
        self.n_periods = n_periods
        self._unavailable = set()

    def add_unavailability(self, course, day, period):
        day, period = int(day), int(period)
        if not (0 <= day < self.n_days and 0 <= period < self.n_periods):
            raise ValueError(f"Slot {day}/{period} outside of {self.n_days}x{self.n_periods} grid")
        self._unavailable.add((getattr(course, "id", course), day, period))

    def check_availability(self, course, day, period):
        return (getattr(course, "id", course), day, period) not in self._unavailable

    def __iter__(self):
        return iter(sorted(self._unavailable))

    def __len__(self):
        return len(self._unavailable)


class RoomConstraints:
    """Pairs of (course, room) where the room is unsuitable for the course."""

    def __init__(self):
        self._unsuitable = set()

    def add_room_constraint(self, course, room):
        self._unsuitable.add((getattr(course, "id", course), getattr(room, "id", room)))

    def is_suitable(self, course, room):
        return (getattr(course, "id", course), getattr(room, "id", room)) not in self._unsuitable

    def __len__(self):
        return len(self._unsuitable)


class Specification:
    """
    One problem instance. Built once, shared read-only by every timetable
    and operator of a run.
    """

    def __init__(self, name, n_days, n_periods, min_lectures, max_lectures,
                 courses, rooms, curricula,
                 unavailability_constraints=None, room_constraints=None):
        self.name = name
        self.n_days = int(n_days)
        self.n_periods = int(n_periods)
        self.min_lectures = int(min_lectures)
        self.max_lectures = int(max_lectures)

        self.courses = list(courses)
        self.rooms = list(rooms)
        self.curricula = list(curricula)
        self.teachers = []

        if unavailability_constraints is None:
            unavailability_constraints = UnavailabilityConstraints(self.n_days, self.n_periods)
        self.unavailability_constraints = unavailability_constraints
        self.room_constraints = room_constraints if room_constraints is not None else RoomConstraints()

        self.course_by_id = {}
        self.room_by_id = {}
        self.curriculum_by_id = {}
        self.teacher_by_id = {}

        self.curricula_of_course = defaultdict(list)
        self.courses_of_teacher = defaultdict(list)
        self.courses_of_curriculum = defaultdict(list)

        self.finalize()

    def finalize(self):
        for idx, course in enumerate(self.courses):
            if course.id in self.course_by_id:
                raise ValueError(f"Duplicate course '{course.id}'")
            course.index = idx
            self.course_by_id[course.id] = course

        for idx, room in enumerate(self.rooms):
            if room.id in self.room_by_id:
                raise ValueError(f"Duplicate room '{room.id}'")
            room.index = idx
            self.room_by_id[room.id] = room

        # Register teachers
        teacher_ids = sorted(set(c.teacher_id for c in self.courses))
        for idx, tid in enumerate(teacher_ids):
            teacher = Teacher(idx, tid)
            self.teachers.append(teacher)
            self.teacher_by_id[tid] = teacher

        for course in self.courses:
            course.teacher = self.teacher_by_id[course.teacher_id]
            self.courses_of_teacher[course.teacher_id].append(course.id)

        for idx, curriculum in enumerate(self.curricula):
            curriculum.index = idx
            self.curriculum_by_id[curriculum.id] = curriculum

        self.refresh_curricula()

    def refresh_curricula(self):
        """
        Rebuilds the course <-> curriculum tables. Must be called again if a
        curriculum receives its courses after the Specification was built.
        """
        self.curricula_of_course.clear()
        self.courses_of_curriculum.clear()
        self._curriculum_indices = [[] for _ in self.courses]
        for curriculum in self.curricula:
            for cid in curriculum.course_ids:
                if cid not in self.course_by_id:
                    raise ValueError(f"Curriculum '{curriculum.id}' refers to unknown course '{cid}'")
                self.curricula_of_course[cid].append(curriculum.id)
                self.courses_of_curriculum[curriculum.id].append(cid)
                self._curriculum_indices[self.course_by_id[cid].index].append(curriculum.index)

    def curriculum_indices(self, course):
        return self._curriculum_indices[course.index]

    def is_available(self, course, day, period):
        return self.unavailability_constraints.check_availability(course, day, period)

    @property
    def n_lectures(self):
        return sum(c.n_lectures for c in self.courses)

    @property
    def n_slots(self):
        return self.n_days * self.n_periods
