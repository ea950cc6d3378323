import click

from .config import (
    ExamType,
    SchedulingConfig,
    TimeSlotConfig,
    load_optional_config,
)
from .conflicts import RESOLUTION_HINTS, ConflictReport, detect_conflicts
from .exceptions import SchedulerError
from .logging import logger, set_log_level
from .reports import exams_of_type, instructor_loads, student_timetable
from .scheduler import ScheduleProgress, run_scheduling
from .store import DataStore
from .writers import CSVWriter, JSONWriter


def _get_writer(format: str, output_file: str | None) -> JSONWriter | CSVWriter:
    if format == "json":
        return JSONWriter(output_file)
    else:
        return CSVWriter(output_file)


def _exam_line(exam) -> str:
    return (
        f"{exam.date} {exam.time}  {exam.course_code:<10} {exam.room:<12} "
        f"{exam.seat_color or '-':<7} {exam.instructor}"
    )


def _print_report(report: ConflictReport) -> None:
    counts = report.counts()
    click.echo(
        f"Total conflicts: {report.total} "
        f"(room {counts['room']}, instructor {counts['instructor']}, student {counts['student']})"
    )
    for c in report.room_conflicts():
        click.echo(
            f"[{c.severity.value}] Room {c.room} {c.seat_color} - {c.date} at {c.time}: "
            f"{c.exam1.course_code} / {c.exam2.course_code}"
        )
    for c in report.capacity_conflicts():
        click.echo(
            f"[{c.severity.value}] {c.exam.course_code} in {c.room.name} "
            f"(capacity {c.room_capacity}): over capacity by {c.overflow} students"
        )
    for c in report.instructor:
        click.echo(
            f"[{c.severity.value}] {c.instructor} - {c.date} at {c.time}: "
            f"{c.exam1.course_code} / {c.exam2.course_code}"
        )
    for student_id, conflicts in report.by_student().items():
        click.echo(
            f"[medium] {conflicts[0].student_name} (ID: {student_id}) "
            f"has {len(conflicts)} exam conflict(s)"
        )
        for c in conflicts:
            click.echo(
                f"    {c.date} at {c.time}: {c.exam1.course_code} / {c.exam2.course_code}"
            )
    if not report.is_clean:
        click.echo("Suggested resolutions:")
        for kind, hint in RESOLUTION_HINTS.items():
            click.echo(f"  {kind}: {hint}")


@click.group()
@click.option(
    "--data-dir",
    "-d",
    type=click.Path(file_okay=False),
    default="data",
    envvar="EXAM_SCHEDULER_DATA_DIR",
    show_default=True,
    help="Directory holding the JSON collections",
)
@click.option(
    "--log-level",
    "-l",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error", "critical"]),
    help="Log level",
)
@click.pass_context
def main(ctx: click.Context, data_dir: str, log_level: str):
    """Schedule university exams and audit the schedule for conflicts."""
    set_log_level(log_level)
    ctx.obj = DataStore(data_dir)


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a scheduling configuration file",
)
@click.option(
    "--timeslot-config",
    "-t",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the exam window configuration file",
)
@click.option(
    "--exam-type",
    "-e",
    type=click.Choice([t.value for t in ExamType]),
    help="Exam type (overrides the configuration file)",
)
@click.option(
    "--semester-start",
    "-s",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="First day of the semester (overrides the configuration file)",
)
@click.pass_obj
def schedule(store: DataStore, config, timeslot_config, exam_type, semester_start):
    """Automatically schedule every active course without an exam."""
    try:
        configuration = load_optional_config(SchedulingConfig, config)
        time_slot_config = load_optional_config(TimeSlotConfig, timeslot_config)
        overrides = {}
        if exam_type:
            overrides["exam_type"] = ExamType(exam_type)
        if semester_start:
            overrides["semester_start"] = semester_start.date()
        configuration = configuration.model_copy(update=overrides)

        def progress(p: ScheduleProgress) -> None:
            logger.debug(f"{p.percent:5.1f}% {p.step}")

        result = run_scheduling(store, configuration, time_slot_config, progress)
    except SchedulerError as e:
        raise click.ClickException(str(e))

    if not result.new_exams and not result.unscheduled_courses:
        click.echo("All courses are already scheduled!")
        return
    if result.new_exams:
        click.echo(
            f"Successfully scheduled {len(result.new_exams)} {configuration.exam_type} exams:"
        )
        for exam in result.new_exams:
            click.echo(f"  {_exam_line(exam)}")
    else:
        click.echo("No exams could be scheduled. Check course and room availability.")
    if result.unscheduled_courses:
        click.echo(f"{len(result.unscheduled_courses)} courses could not be scheduled:")
        for item in result.unscheduled_courses:
            click.echo(f"  {item.course.code}: {item.reason}")


@main.command()
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "csv", "json"]),
    default="text",
    help="Output format",
)
@click.option("--output", "-o", help="Output basename (extension added automatically)")
@click.option("--strict", is_flag=True, help="Exit with status 1 when conflicts exist")
@click.pass_obj
def conflicts(store: DataStore, format: str, output: str | None, strict: bool):
    """Report room, capacity, instructor and student conflicts."""
    try:
        report = detect_conflicts(
            store.get_exams(),
            store.get_courses(),
            store.get_instructors(),
            store.get_rooms(),
            store.get_students(),
        )
        if format == "text":
            _print_report(report)
        else:
            output_file = f"{output}.{format}" if output else None
            with _get_writer(format, output_file) as writer:
                writer.add_conflicts(report)
            if output_file:
                logger.info(f"Output written to {output_file}")
    except SchedulerError as e:
        raise click.ClickException(str(e))
    if strict and not report.is_clean:
        raise click.exceptions.Exit(1)


@main.command()
@click.option(
    "--exam-type",
    "-e",
    type=click.Choice([t.value for t in ExamType]),
    help="Only list exams of this type",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "csv", "json"]),
    default="text",
    help="Output format",
)
@click.option("--output", "-o", help="Output basename (extension added automatically)")
@click.pass_obj
def exams(store: DataStore, exam_type: str | None, format: str, output: str | None):
    """List scheduled exams."""
    try:
        selected = store.get_exams()
        if exam_type:
            selected = exams_of_type(selected, ExamType(exam_type))
        if format == "text":
            for exam in sorted(selected, key=lambda e: (e.date, e.time, e.room)):
                click.echo(_exam_line(exam))
            click.echo(f"{len(selected)} exams")
            return
        output_file = f"{output}.{format}" if output else None
        with _get_writer(format, output_file) as writer:
            writer.add_exams(selected)
    except SchedulerError as e:
        raise click.ClickException(str(e))


@main.command()
@click.argument("student_id")
@click.pass_obj
def timetable(store: DataStore, student_id: str):
    """Show the exam timetable of one student."""
    try:
        student = next((s for s in store.get_students() if s.student_id == student_id), None)
        if student is None:
            raise click.ClickException(f"Unknown student {student_id}")
        for exam in student_timetable(student, store.get_exams()):
            click.echo(_exam_line(exam))
    except SchedulerError as e:
        raise click.ClickException(str(e))


@main.command()
@click.pass_obj
def loads(store: DataStore):
    """Show assigned exams per active instructor."""
    try:
        for instructor, assigned, ceiling in instructor_loads(
            store.get_instructors(), store.get_exams()
        ):
            click.echo(f"{instructor.full_name:<30} {assigned}/{ceiling}")
    except SchedulerError as e:
        raise click.ClickException(str(e))


@main.command()
@click.argument("exam_id")
@click.pass_obj
def delete(store: DataStore, exam_id: str):
    """Delete one exam."""
    try:
        removed = store.delete_exam(exam_id)
    except SchedulerError as e:
        raise click.ClickException(str(e))
    if removed is None:
        raise click.ClickException(f"Unknown exam {exam_id}")
    click.echo(f"Deleted {removed.course_code} exam {exam_id}")


@main.command()
@click.confirmation_option(prompt="Are you sure you want to clear all scheduled exams?")
@click.pass_obj
def clear(store: DataStore):
    """Delete every scheduled exam."""
    try:
        count = store.clear_exams()
    except SchedulerError as e:
        raise click.ClickException(str(e))
    click.echo(f"Cleared {count} exams")


@main.command("clear-colors")
@click.argument("room")
@click.pass_obj
def clear_colors(store: DataStore, room: str):
    """Reset the used seat colors marker of a room."""
    try:
        found = store.clear_used_seat_colors(room)
    except SchedulerError as e:
        raise click.ClickException(str(e))
    if not found:
        raise click.ClickException(f"Unknown room {room}")
    click.echo(f"Cleared used seat colors of {room}")


if __name__ == "__main__":
    main()
