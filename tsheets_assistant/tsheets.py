"""Utility functions for interacting with the TSheets API."""
from datetime import datetime

import httpx
from dateutil.tz import tzlocal
from loguru import logger
from pydantic import BaseModel

from .config import BASE_URL, TIMEOUT, auth_headers

SERVER_TROUBLE = "Sorry, I am having trouble talking to our servers. Please try again later!"
TSHEETS_DOWN = "Sorry, Shree may have deployed timecard. TSheets is down!"

# Transport or status failures, and bodies that are not the JSON we expect
SERVICE_ERRORS = (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError)


class TSheetsError(Exception):
    """A failed step; ``reply`` is what the user gets to hear."""

    def __init__(self, reply: str):
        super().__init__(reply)
        self.reply = reply


class User(BaseModel):
    user_id: str
    user_name: str


class TimesheetQuery(BaseModel):
    start_date: str
    end_date: str | None = None
    user_id: str
    on_the_clock: str = "both"
    jobcode_type: str = "regular"

    def params(self) -> dict:
        params = {
            "start_date": self.start_date,
            "user_ids": self.user_id,
            "on_the_clock": self.on_the_clock,
            "jobcode_type": self.jobcode_type,
        }
        if self.end_date:
            params["end_date"] = self.end_date
        return params


class TimesheetEntry(BaseModel):
    id: str
    duration: int = 0


def open_client(token: str | None, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Client for a single webhook call, bound to the caller's bearer token."""
    return httpx.AsyncClient(
        base_url=BASE_URL, headers=auth_headers(token), timeout=TIMEOUT, transport=transport
    )


def now_iso() -> str:
    return datetime.now(tzlocal()).isoformat(timespec="seconds")


def today() -> str:
    return datetime.now(tzlocal()).strftime("%Y-%m-%d")


def _items(collection) -> list[dict]:
    # The API sends an object keyed by id, or [] when there is nothing to send
    if isinstance(collection, dict):
        return list(collection.values())
    return list(collection or [])


def _item_status(body: dict) -> int | None:
    items = _items(body.get("results", {}).get("timesheets", {}))
    if not items:
        return None
    return items[0].get("_status_code")


async def get_current_user(client: httpx.AsyncClient) -> User:
    logger.debug("Requesting current user info")
    r = await client.get("/current_user")
    r.raise_for_status()
    users = _items(r.json().get("results", {}).get("users", {}))
    if not users:
        raise TSheetsError(SERVER_TROUBLE)
    user = users[0]
    name = f"{user.get('first_name', '')} {user.get('last_name', '')}".strip()
    return User(user_id=str(user["id"]), user_name=name)


def jobcode_dictionary(body: dict) -> dict[str, str]:
    """Map lower-cased job code names to ids, skipping inactive job codes."""
    jobcodes = body.get("supplemental_data", {}).get("jobcodes", {})
    if isinstance(jobcodes, list):
        jobcodes = {str(jc.get("id")): jc for jc in jobcodes}
    return {
        jobcode["name"].lower(): str(jobcode_id)
        for jobcode_id, jobcode in jobcodes.items()
        if jobcode.get("active") is True and jobcode.get("name")
    }


async def get_jobcode_assignments(client: httpx.AsyncClient) -> dict[str, str]:
    logger.debug("Requesting current user job code assignments")
    r = await client.get("/jobcode_assignments")
    r.raise_for_status()
    return jobcode_dictionary(r.json())


async def create_timesheet(client: httpx.AsyncClient, user_id: str, jobcode_id: str) -> int | None:
    """Open a regular timesheet starting now. Returns the per-item status code."""
    timesheet = {
        "user_id": user_id,
        "jobcode_id": jobcode_id,
        "type": "regular",
        "start": now_iso(),
        "end": "",
    }
    logger.debug(f"Creating a timesheet for user {user_id} on jobcode {jobcode_id}")
    r = await client.post("/timesheets", json={"data": [timesheet]})
    r.raise_for_status()
    return _item_status(r.json())


async def get_timesheets(client: httpx.AsyncClient, query: TimesheetQuery) -> list[TimesheetEntry]:
    """Fetch every timesheet matching ``query``.

    The API paginates results and sets ``more`` while pages remain, so we
    keep asking for the next page until it is cleared.
    """
    params = query.params()
    entries: list[TimesheetEntry] = []
    page = 1
    while True:
        params["page"] = page
        logger.debug(f"Requesting timesheets page {page}: {params}")
        r = await client.get("/timesheets", params=params)
        r.raise_for_status()
        body = r.json()
        for item in _items(body.get("results", {}).get("timesheets", {})):
            entries.append(TimesheetEntry(id=str(item["id"]), duration=item.get("duration") or 0))
        if not body.get("more"):
            break
        page += 1
    return entries


async def edit_timesheet(client: httpx.AsyncClient, timesheet_id: str) -> int | None:
    """Close a timesheet by setting its end to now. Returns the per-item status code."""
    logger.debug(f"Editing timesheet {timesheet_id}")
    r = await client.put("/timesheets", json={"data": [{"id": timesheet_id, "end": now_iso()}]})
    r.raise_for_status()
    return _item_status(r.json())
