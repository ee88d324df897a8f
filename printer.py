CELL_LEN = 10


class PrettyTextPrinter:
    """
    Prints a timetable as one text table per curriculum, with the days as
    columns. Each period takes three rows: course, room and teacher.
    """

    def __init__(self, spec):
        self.spec = spec

    def print(self, timetable):
        output = []
        for cid, ctt in timetable.get_curriculum_timetables().items():
            output.append(f"Curriculum: {cid}")
            output.append(self._print_curriculum_timetable(ctt))
            output.append("")
        return "\n".join(output)

    def _print_curriculum_timetable(self, ctt):
        days = range(self.spec.n_days)
        line_len = CELL_LEN * (self.spec.n_days + 1)

        lines = ["".ljust(CELL_LEN) + "".join(f"Day {d:2d}".rjust(CELL_LEN) for d in days)]
        for period in range(self.spec.n_periods):
            cells = [ctt.get(d, period) for d in days]
            lines.append("-" * line_len)
            lines.append(f"Slot {period:2d} | ".rjust(CELL_LEN) +
                         "".join((m.course.id if m else "").rjust(CELL_LEN) for m in cells))
            lines.append("| ".rjust(CELL_LEN) +
                         "".join((m.room.id if m else "").rjust(CELL_LEN) for m in cells))
            lines.append("| ".rjust(CELL_LEN) +
                         "".join((m.course.teacher_id if m else "").rjust(CELL_LEN) for m in cells))
        return "\n".join(lines)
