import httpx
from loguru import logger

from ..tsheets import (
    SERVER_TROUBLE, SERVICE_ERRORS, TSHEETS_DOWN, TSheetsError,
    create_timesheet, get_current_user, get_jobcode_assignments,
)

ACTION = "clock_in"
JOBCODE_ARGUMENT = "jobcode"

ASK_FOR_JOBCODE = "Which jobcode would you like to clock into?"


async def resolve_jobcode(client: httpx.AsyncClient, jobcode_name: str) -> str:
    """Find the id of an active job code assigned to the current user."""
    try:
        jobcodes = await get_jobcode_assignments(client)
    except SERVICE_ERRORS as e:
        logger.warning(f"clock_in: failed to get job code assignments: {e}")
        raise TSheetsError(TSHEETS_DOWN)
    if jobcode_name not in jobcodes:
        logger.info(f"clock_in: job code '{jobcode_name}' not found")
        raise TSheetsError(
            f"Sorry, I cannot find {jobcode_name} in your list of jobcodes assigned to you."
        )
    return jobcodes[jobcode_name]


async def handle(client: httpx.AsyncClient, slots: dict) -> str:
    jobcode_name = (slots.get(JOBCODE_ARGUMENT) or "").strip().lower()
    if not jobcode_name:
        return ASK_FOR_JOBCODE
    jobcode_id = await resolve_jobcode(client, jobcode_name)

    try:
        user = await get_current_user(client)
        status = await create_timesheet(client, user.user_id, jobcode_id)
    except SERVICE_ERRORS as e:
        logger.warning(f"clock_in: failed to create a timesheet: {e}")
        raise TSheetsError(SERVER_TROUBLE)

    if status == 406:
        logger.info(f"clock_in: {user.user_name} is already on the clock")
        raise TSheetsError(f"You are already on the clock, {user.user_name}!")
    if status != 200:
        logger.warning(f"clock_in: timesheet create returned status {status}")
        raise TSheetsError(SERVER_TROUBLE)
    return f"You are clocked into {jobcode_name}"
