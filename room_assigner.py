import logging

from timetable import TimetableWithRooms

logger = logging.getLogger(__name__)


class RoomAssignmentError(RuntimeError):
    pass


class GreedyRoomAssigner:
    """
    Attaches a room to every meeting of a timetable, slot by slot.

    Within a slot the largest courses choose first. Each takes the smallest
    free room that is suitable and big enough; if none is big enough, the
    smallest free suitable room; if no free room is suitable at all, the
    largest free room. The result is deterministic for a given timetable.
    """

    def __init__(self, spec):
        self.spec = spec
        self.rooms_by_capacity = sorted(spec.rooms, key=lambda r: (r.capacity, r.index))

    def assign_rooms(self, timetable):
        result = TimetableWithRooms(self.spec)
        for d in range(self.spec.n_days):
            for s in range(self.spec.n_periods):
                meetings = timetable.get_meetings_at(d, s)
                if not meetings:
                    continue
                if len(meetings) > len(self.rooms_by_capacity):
                    raise RoomAssignmentError(
                        f"{len(meetings)} meetings at {d}/{s} but only {len(self.rooms_by_capacity)} rooms")

                free = list(self.rooms_by_capacity)
                meetings.sort(key=lambda m: (-m.course.n_students, m.course.index))
                for meeting in meetings:
                    room = self._pick_room(meeting.course, free)
                    free.remove(room)
                    result.add_meeting(meeting.without_room().with_room(room))
        return result

    def _pick_room(self, course, free):
        suitable = [r for r in free if self.spec.room_constraints.is_suitable(course, r)]
        if not suitable:
            logger.debug("No suitable free room for %s, using the largest one", course.id)
            return free[-1]
        for room in suitable:
            if room.capacity >= course.n_students:
                return room
        return suitable[0]
