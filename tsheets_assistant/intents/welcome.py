import httpx
from loguru import logger

from ..tsheets import get_current_user

ACTION = "input.welcome"


async def handle(client: httpx.AsyncClient, slots: dict) -> str:
    try:
        user = await get_current_user(client)
    except Exception as e:
        # A plain welcome is still a good answer
        logger.warning(f"welcome: failed to get user data: {e}")
        return "Welcome to TSheets! What can I do for you?"
    return f"Welcome to TSheets, {user.user_name}! What can I do for you?"
