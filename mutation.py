import logging
import random

import config
from timetable import Meeting, TimetableInvariantError
from variation import Outcome, OperatorResult, is_reduced_feasible

logger = logging.getLogger(__name__)

EXHAUSTED_POLICIES = ("drop", "parent")


class CourseBasedMutation:
    """
    Exchanges the periods of two randomly chosen meetings. A swap that
    would break reduced feasibility is undone and another pair is tried.

    When every attempt fails, `exhausted_policy` decides what the caller
    gets: "drop" yields no offspring, "parent" yields the parent unchanged.
    """

    name = "mutation"
    arity = 1

    def __init__(self, spec, room_assigner, converter=None, stats=None,
                 attempts=config.ATTEMPTS_AFTER_FAIL,
                 exhausted_policy=config.MUTATION_EXHAUSTED_POLICY):
        if exhausted_policy not in EXHAUSTED_POLICIES:
            raise ValueError(f"Unknown exhausted policy '{exhausted_policy}'")
        self.spec = spec
        self.room_assigner = room_assigner
        self.converter = converter
        self.stats = stats
        self.attempts = attempts
        self.exhausted_policy = exhausted_policy

    def evolve(self, solutions, rng=None):
        original = self.converter.from_solution(solutions[0])
        return [self.converter.to_solution(t) for t in self.mutate(original, rng)]

    def mutate(self, original, rng=None):
        """Returns a list with zero or one timetable."""
        result = self.mutation(original, rng)
        return [] if result.timetable is None else [result.timetable]

    def mutation(self, original, rng=None):
        rng = rng or random.Random()
        mutated = original.new_child()
        meetings = mutated.get_meetings()

        for _ in range(self.attempts):
            pair = self._pick_pair(meetings, rng)
            if pair is None:
                # fewer than two meetings to choose from; trying again won't help
                break
            if self._exchange(mutated, *pair):
                self._record(Outcome.SUCCESS)
                return OperatorResult(Outcome.SUCCESS, self.room_assigner.assign_rooms(mutated))

        logger.warning("Mutation failed after %d attempts", self.attempts)
        return self._exhausted(original)

    def _exhausted(self, original):
        if self.exhausted_policy == "parent":
            self._record(Outcome.DEGRADED)
            return OperatorResult(Outcome.DEGRADED, original)
        self._record(Outcome.EXHAUSTED)
        return OperatorResult(Outcome.EXHAUSTED, None)

    def _pick_pair(self, meetings, rng):
        if len(meetings) < 2:
            return None
        idx_a = rng.randrange(len(meetings))
        for _ in range(self.attempts):
            idx_b = rng.randrange(len(meetings))
            if idx_b != idx_a:
                return meetings[idx_a], meetings[idx_b]
        logger.warning("Failed to find a distinct index after %d attempts", self.attempts)
        return None

    def _exchange(self, mutated, a, b):
        mutated.remove_meeting(a)
        mutated.remove_meeting(b)

        a_new = Meeting(a.course, b.day, b.period)
        b_new = Meeting(b.course, a.day, a.period)

        if not is_reduced_feasible(self.spec, mutated, a_new.course, a_new.day, a_new.period) \
                or not is_reduced_feasible(self.spec, mutated, b_new.course, b_new.day, b_new.period):
            self._restore(mutated, a, b)
            return False

        if not mutated.add_meeting(a_new):
            self._restore(mutated, a, b)
            return False

        if not mutated.add_meeting(b_new):
            mutated.remove_meeting(a_new)
            self._restore(mutated, a, b)
            return False

        logger.debug("Moved %s from %d/%d to %d/%d and %s from %d/%d to %d/%d",
                     a.course.id, a.day, a.period, a_new.day, a_new.period,
                     b.course.id, b.day, b.period, b_new.day, b_new.period)
        return True

    def _restore(self, mutated, a, b):
        if not mutated.restore_meeting(a):
            raise TimetableInvariantError(f"should be able to re-add {a}")
        if not mutated.restore_meeting(b):
            raise TimetableInvariantError(f"should be able to re-add {b}")

    def _record(self, outcome):
        if self.stats is not None:
            self.stats.record(self.name, outcome)
