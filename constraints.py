from itertools import combinations
import numpy as np

import config
from timetable import TimetableWithRooms


class Constraint:
    """
    A constraint family. violations() is a pure function of the timetable
    and never modifies it, so evaluators can be shared between threads.
    """
    name = None

    def __init__(self, spec):
        self.spec = spec

    def violations(self, timetable):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}()"


class LecturesConstraint(Constraint):
    name = "Lectures"

    def violations(self, timetable):
        counts = timetable.lecture_counts()
        required = np.array([c.n_lectures for c in self.spec.courses], dtype=int)
        return int(np.abs(counts - required).sum())


class RoomOccupancyConstraint(Constraint):
    name = "RoomOccupancy"

    def violations(self, timetable):
        if not isinstance(timetable, TimetableWithRooms):
            return 0
        return int(np.maximum(timetable.room_ds - 1, 0).sum())


class ConflictsConstraint(Constraint):
    """One violation per pair of meetings in a slot sharing a teacher or a curriculum."""
    name = "Conflicts"

    def violations(self, timetable):
        curricula_of = self.spec.curriculum_indices
        count = 0
        for d in range(timetable.D):
            for s in range(timetable.S):
                meetings = timetable.slot_meetings[d][s]
                if len(meetings) < 2:
                    continue
                for a, b in combinations(meetings, 2):
                    if a.course.teacher is b.course.teacher:
                        count += 1
                    elif set(curricula_of(a.course)) & set(curricula_of(b.course)):
                        count += 1
        return count


class TeacherAvailabilityConstraint(Constraint):
    name = "TeacherAvailability"

    def violations(self, timetable):
        count = 0
        for course_id, day, period in self.spec.unavailability_constraints:
            course = self.spec.course_by_id.get(course_id)
            if course is not None and timetable.course_ds[course.index, day, period] > 0:
                count += 1
        return count


class RoomCapacityConstraint(Constraint):
    name = "RoomCapacity"

    def violations(self, timetable):
        if not isinstance(timetable, TimetableWithRooms):
            return 0
        return sum(max(0, m.course.n_students - m.room.capacity) for m in timetable.get_meetings())


class MinWorkingDaysConstraint(Constraint):
    name = "MinWorkingDays"

    def violations(self, timetable):
        working_days = (timetable.course_ds.sum(axis=2) > 0).sum(axis=1)
        required = np.array([c.min_working_days for c in self.spec.courses], dtype=int)
        return int(np.maximum(required - working_days, 0).sum())


class IsolatedLecturesConstraint(Constraint):
    """Curriculum compactness: lectures with no neighbour of the same curriculum on that day."""
    name = "IsolatedLectures"

    def violations(self, timetable):
        occupied = timetable.curriculum_ds > 0
        left = np.zeros_like(occupied)
        right = np.zeros_like(occupied)
        left[:, :, 1:] = occupied[:, :, :-1]
        right[:, :, :-1] = occupied[:, :, 1:]
        isolated = occupied & ~left & ~right
        return int((timetable.curriculum_ds * isolated).sum())


class RoomStabilityConstraint(Constraint):
    name = "RoomStability"

    def violations(self, timetable):
        if not isinstance(timetable, TimetableWithRooms):
            return 0
        rooms_of_course = [set() for _ in self.spec.courses]
        for m in timetable.get_meetings():
            rooms_of_course[m.course.index].add(m.room.index)
        return sum(max(0, len(rooms) - 1) for rooms in rooms_of_course)


class UD1Formulation:
    """
    Hard constraints plus the weighted soft constraints of the UD1
    formulation (ITC-2007 track 3).
    """

    def __init__(self, spec, weights=None):
        self.spec = spec
        self.hard_constraints = [
            LecturesConstraint(spec),
            RoomOccupancyConstraint(spec),
            ConflictsConstraint(spec),
            TeacherAvailabilityConstraint(spec),
        ]
        self.soft_constraints = [
            RoomCapacityConstraint(spec),
            MinWorkingDaysConstraint(spec),
            IsolatedLecturesConstraint(spec),
            RoomStabilityConstraint(spec),
        ]
        if weights is None:
            weights = {
                "RoomCapacity": config.ROOM_CAPACITY_COST_FACTOR,
                "MinWorkingDays": config.MIN_WORKING_DAYS_COST_FACTOR,
                "IsolatedLectures": config.CURRICULUM_COMPACTNESS_COST_FACTOR,
                "RoomStability": config.ROOM_STABILITY_COST_FACTOR,
            }
        self.weights = weights

    @property
    def constraints(self):
        return self.hard_constraints + self.soft_constraints

    @property
    def objective_names(self):
        return [c.name for c in self.constraints]

    def objectives(self, timetable):
        return [c.violations(timetable) for c in self.constraints]

    def hard_violations(self, timetable):
        return sum(c.violations(timetable) for c in self.hard_constraints)

    def penalty(self, timetable):
        return sum(self.weights.get(c.name, 1) * c.violations(timetable)
                   for c in self.soft_constraints)


class Evaluator:
    """Scores timetables for the outer search: one objective per active constraint."""

    def __init__(self, formulation, converter=None):
        self.formulation = formulation
        self.converter = converter

    def evaluate(self, timetable):
        return self.formulation.objectives(timetable)

    def evaluate_solution(self, solution):
        if self.converter is None:
            raise ValueError("Evaluator has no solution converter")
        return self.evaluate(self.converter.from_solution(solution))

    def is_feasible(self, timetable):
        return self.formulation.hard_violations(timetable) == 0
