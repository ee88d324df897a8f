from collections import Counter, namedtuple
from enum import Enum
import threading


class Outcome(Enum):
    SUCCESS = "success"
    # the operator gave up and handed back the unmodified parent
    DEGRADED = "degraded"
    # the operator gave up and produced nothing
    EXHAUSTED = "exhausted"


OperatorResult = namedtuple("OperatorResult", ["outcome", "timetable"])


def is_reduced_feasible(spec, timetable, course, day, period):
    """
    Cheap placement check used while a timetable is being edited: the
    course must be available at the slot, and neither its teacher nor any
    of its curricula may already have a lecture there. Rooms are not
    looked at; room assignment deals with them afterwards.
    """
    if not spec.is_available(course, day, period):
        return False
    if timetable.has_lecture_with_same_teacher(course.teacher, day, period):
        return False
    if timetable.has_lecture_of_same_curriculum(course, day, period):
        return False
    return True


class OperatorStats:
    """Thread-safe tally of operator outcomes."""

    def __init__(self):
        self._lock = threading.Lock()
        self._counts = Counter()

    def record(self, operator, outcome):
        with self._lock:
            self._counts[(operator, outcome)] += 1

    def count(self, operator, outcome):
        with self._lock:
            return self._counts[(operator, outcome)]

    def total(self, operator):
        with self._lock:
            return sum(n for (op, _), n in self._counts.items() if op == operator)

    def degraded_rate(self, operator):
        """Share of invocations that did not produce a modified timetable."""
        with self._lock:
            total = sum(n for (op, _), n in self._counts.items() if op == operator)
            if total == 0:
                return 0.0
            failed = self._counts[(operator, Outcome.DEGRADED)] + self._counts[(operator, Outcome.EXHAUSTED)]
            return failed / total

    def reset(self):
        with self._lock:
            self._counts.clear()
