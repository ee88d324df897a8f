import logging
import random

import config
from timetable import Meeting, Timetable
from variation import is_reduced_feasible

logger = logging.getLogger(__name__)


class FeasibleSolutionFinderConfig:
    def __init__(self, ranking_randomness=config.RANKING_RANDOMNESS,
                 max_trials=config.FINDER_MAX_TRIALS):
        self.ranking_randomness = ranking_randomness
        self.max_trials = max_trials


class FeasibleSolutionFinder:
    """
    Builds initial timetables: lectures of hard-to-place courses go first,
    each to the first slot that is reduced feasible and still has a free
    room. The ranking is perturbed with gaussian noise so that repeated
    calls give different timetables.
    """

    def __init__(self, spec, room_assigner):
        self.spec = spec
        self.room_assigner = room_assigner
        self.error = None

    def reset(self):
        self.error = None

    def get_course_difficulty(self):
        spec = self.spec
        difficulty = [0] * len(spec.courses)
        for course in spec.courses:
            n_curricula = len(spec.curriculum_indices(course))
            n_teacher_courses = len(spec.courses_of_teacher[course.teacher_id])
            n_unavailabilities = sum(
                not spec.is_available(course, d, s)
                for d in range(spec.n_days)
                for s in range(spec.n_periods)
            )

            difficulty[course.index] = (
                n_curricula +
                n_teacher_courses +
                n_unavailabilities
            ) * max(1, course.n_lectures)
        return difficulty

    def try_find(self, finder_config, rng):
        """One greedy pass. Returns a complete Timetable or None."""
        self.reset()
        spec = self.spec
        course_difficulty = self.get_course_difficulty()

        lectures = []
        for course in spec.courses:
            for _ in range(course.n_lectures):
                r_factor = rng.gauss(1, finder_config.ranking_randomness)
                lectures.append((course_difficulty[course.index] * r_factor, course.index, course))
        lectures.sort(key=lambda item: (item[0], item[1]), reverse=True)

        timetable = Timetable(spec)
        for _, _, course in lectures:
            if not self._place(timetable, course):
                self.error = f"Failed to assign a lecture of course {course.id}"
                return None
        return timetable

    def _place(self, timetable, course):
        for d in range(self.spec.n_days):
            for s in range(self.spec.n_periods):
                if not is_reduced_feasible(self.spec, timetable, course, d, s):
                    continue
                if timetable.add_meeting(Meeting(course, d, s)):
                    return True
        return False

    def find(self, finder_config=None, rng=None):
        """Returns a TimetableWithRooms, or None once max_trials is used up."""
        finder_config = finder_config or FeasibleSolutionFinderConfig()
        rng = rng or random.Random()
        for trial in range(finder_config.max_trials):
            timetable = self.try_find(finder_config, rng)
            if timetable is not None:
                logger.debug("Initial timetable found after %d trials", trial + 1)
                return self.room_assigner.assign_rooms(timetable)
        logger.warning("No initial timetable after %d trials: %s", finder_config.max_trials, self.error)
        return None
