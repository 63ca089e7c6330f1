"""Dispatch a recognized intent to its handler and turn the outcome into a reply."""
import httpx
from loguru import logger

from .intents import handlers
from .tsheets import TSheetsError, open_client

DID_NOT_GET_THAT = "Sorry, I didn't get that. You can clock in, clock out or ask how long you worked."


async def handle(
    intent_name: str,
    slots: dict | None,
    credential: str | None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Run one intent against TSheets and return the sentence to speak.

    Every call gets its own client bound to ``credential``; nothing is
    shared between requests. ``transport`` replaces the network, for tests.
    """
    handler = handlers.get(intent_name)
    if handler is None:
        logger.warning(f"No handler for intent '{intent_name}'")
        return DID_NOT_GET_THAT

    logger.info(f"Handling intent '{intent_name}' with slots {slots or {}}")
    async with open_client(credential, transport) as client:
        try:
            reply = await handler(client, slots or {})
        except TSheetsError as e:
            reply = e.reply
    logger.info(f"Reply for '{intent_name}': {reply}")
    return reply
