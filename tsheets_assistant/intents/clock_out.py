import httpx
from loguru import logger

from ..tsheets import (
    SERVER_TROUBLE, SERVICE_ERRORS, TSheetsError, TimesheetQuery,
    edit_timesheet, get_current_user, get_timesheets, today,
)

ACTION = "clock_out"

NOT_ON_THE_CLOCK = "You are not on the clock right now!"
MANY_OPEN = "I found more than one open timesheet for today. Please clock out in TSheets."


async def handle(client: httpx.AsyncClient, slots: dict) -> str:
    try:
        user = await get_current_user(client)
        query = TimesheetQuery(
            start_date=today(), user_id=user.user_id, on_the_clock="yes", jobcode_type="regular"
        )
        open_timesheets = await get_timesheets(client, query)
    except SERVICE_ERRORS as e:
        logger.warning(f"clock_out: failed to find the open timesheet: {e}")
        raise TSheetsError(SERVER_TROUBLE)

    if not open_timesheets:
        raise TSheetsError(NOT_ON_THE_CLOCK)
    if len(open_timesheets) > 1:
        logger.warning(f"clock_out: {len(open_timesheets)} open timesheets for user {user.user_id}")
        raise TSheetsError(MANY_OPEN)

    try:
        status = await edit_timesheet(client, open_timesheets[0].id)
    except SERVICE_ERRORS as e:
        logger.warning(f"clock_out: failed to edit timesheet: {e}")
        raise TSheetsError(SERVER_TROUBLE)
    if status != 200:
        logger.warning(f"clock_out: timesheet edit returned status {status}")
        raise TSheetsError(SERVER_TROUBLE)
    return "Alright, I clocked you out! Now, get outta here!"
