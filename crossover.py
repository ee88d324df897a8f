import logging
import random

import config
from timetable import Meeting, TimetableInvariantError
from variation import Outcome, OperatorResult, is_reduced_feasible

logger = logging.getLogger(__name__)


class CourseBasedCrossover:
    """
    Takes one course of the donor parent and schedules it at the donor's
    periods in a copy of the receiving parent. Meetings that are pushed
    out, or that cannot go to the donor's period, are reinserted greedily.
    The second child is built the same way with the roles reversed.

    After `attempts` failed tries the child is the receiving parent itself.
    """

    name = "crossover"
    arity = 2

    def __init__(self, spec, room_assigner, converter=None, stats=None,
                 attempts=config.ATTEMPTS_AFTER_FAIL):
        self.spec = spec
        self.room_assigner = room_assigner
        self.converter = converter
        self.stats = stats
        self.attempts = attempts

    def evolve(self, solutions, rng=None):
        """Crossover on the external solution representation."""
        parent1 = self.converter.from_solution(solutions[0])
        parent2 = self.converter.from_solution(solutions[1])
        kids = self.crossover(parent1, parent2, rng)
        return [self.converter.to_solution(kids[0]), self.converter.to_solution(kids[1])]

    def crossover(self, parent1, parent2, rng=None):
        rng = rng or random.Random()
        child1 = self.make_child(parent1, parent2, rng).timetable
        child2 = self.make_child(parent2, parent1, rng).timetable
        return [child1, child2]

    def make_child(self, receiver, donor, rng):
        """Returns an OperatorResult, SUCCESS or DEGRADED."""
        for attempt in range(self.attempts):
            child = self._try_child(receiver, donor, rng)
            if child is not None:
                self._record(Outcome.SUCCESS)
                return OperatorResult(Outcome.SUCCESS, self.room_assigner.assign_rooms(child))
            logger.debug("Crossover failed (%d). Restarting..", attempt)

        logger.warning("Crossover failed after %d attempts, keeping the parent", self.attempts)
        self._record(Outcome.DEGRADED)
        return OperatorResult(Outcome.DEGRADED, receiver)

    def _try_child(self, receiver, donor, rng):
        donor_meetings = donor.get_meetings()
        if not donor_meetings:
            return None
        course = rng.choice(donor_meetings).course

        child = receiver.new_child()
        for m in child.get_meetings_by_course(course):
            child.remove_meeting(m)

        leftovers = self._schedule_at_donor_periods(child, donor.get_meetings_by_course(course))
        if not self._schedule_greedy(child, leftovers):
            return None
        return child

    def _schedule_at_donor_periods(self, t, meetings):
        leftovers = []
        for m in meetings:
            if t.get_meeting(m.course, m.day, m.period) is not None:
                raise TimetableInvariantError(f"{m.course.id} should have been unscheduled before")

            if not is_reduced_feasible(self.spec, t, m.course, m.day, m.period):
                leftovers.append(m.course)
                continue

            meeting = m.without_room()
            if not t.add_meeting(meeting):
                # no free room: push out one of the meetings already there
                evicted = t.replace_meeting(m.day, m.period, meeting)
                if evicted is None:
                    leftovers.append(m.course)
                else:
                    leftovers.append(evicted.course)
        return leftovers

    def _schedule_greedy(self, t, courses):
        """Places each course at the first feasible slot, row-major from 0/0."""
        for course in courses:
            if not self._place_first_fit(t, course):
                logger.debug("Failed to place course %s", course.id)
                return False
        return True

    def _place_first_fit(self, t, course):
        for day in range(self.spec.n_days):
            for period in range(self.spec.n_periods):
                if is_reduced_feasible(self.spec, t, course, day, period) \
                        and t.add_meeting(Meeting(course, day, period)):
                    return True
        return False

    def _record(self, outcome):
        if self.stats is not None:
            self.stats.record(self.name, outcome)
