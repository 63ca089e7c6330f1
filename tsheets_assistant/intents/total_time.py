"""Total time worked on a day or over a date period."""
import httpx
from loguru import logger

from ..tsheets import (
    SERVER_TROUBLE, SERVICE_ERRORS, TSheetsError, TimesheetEntry, TimesheetQuery,
    get_current_user, get_timesheets,
)

ACTION = "total_time"
DATE_ARGUMENT = "date"
DURATION_ARGUMENT = "date-period"

ASK_FOR_DATES = "Dude, I am smart but to give you a perfect answer, you need to ask me a perfect question!"
NO_TIMESHEETS = "I did not find any timesheets"


def split_period(period: str) -> tuple[str, str]:
    """Split a ``start/end`` period on its first slash.

    A period without a slash is taken as a single day.
    """
    start, sep, end = period.partition("/")
    if not sep:
        return period, period
    return start, end


def hours_worked(seconds: int) -> str:
    hours = seconds // 3600
    minutes = (seconds // 60) % 60
    if minutes == 0:
        return f"You have worked {hours} hours."
    return f"You have worked {hours} hours and {minutes} minutes."


def summarize(entries: list[TimesheetEntry]) -> str:
    if not entries:
        return NO_TIMESHEETS
    return hours_worked(sum(entry.duration for entry in entries))


async def handle(client: httpx.AsyncClient, slots: dict) -> str:
    date = slots.get(DATE_ARGUMENT) or None
    period = slots.get(DURATION_ARGUMENT) or None

    if not date and not period:
        return ASK_FOR_DATES
    if period:
        start_date, end_date = split_period(period)
        suffix = f" from {start_date} to {end_date}"
    else:
        start_date = end_date = date
        suffix = f" on {date}"

    try:
        user = await get_current_user(client)
        query = TimesheetQuery(start_date=start_date, end_date=end_date, user_id=user.user_id)
        entries = await get_timesheets(client, query)
    except SERVICE_ERRORS as e:
        logger.warning(f"total_time: failed to get timesheets: {e}")
        raise TSheetsError(SERVER_TROUBLE)

    logger.debug(f"total_time: {len(entries)} timesheets between {start_date} and {end_date}")
    summary = summarize(entries)
    if not entries:
        return summary
    return summary + suffix
