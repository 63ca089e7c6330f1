import sys

from fastapi import FastAPI
from loguru import logger
from pydantic import BaseModel, Field

from . import orchestrator
from .config import LOG_LEVEL, PORT

logger.remove()
logger.add(sys.stderr, level=LOG_LEVEL)

app = FastAPI(title="TSheets Assistant Webhook")


# --- API.AI webhook payload ---------------------------------------------------
class Result(BaseModel):
    action: str
    parameters: dict = Field(default_factory=dict)


class OriginalRequest(BaseModel):
    source: str | None = None
    data: dict = Field(default_factory=dict)

    def access_token(self) -> str | None:
        user = self.data.get("user") or {}
        return user.get("access_token") or user.get("accessToken")


class WebhookRequest(BaseModel):
    result: Result
    original_request: OriginalRequest = Field(default_factory=OriginalRequest, alias="originalRequest")


def ask(speech: str) -> dict:
    """Response envelope that speaks ``speech`` and keeps the mic open."""
    return {
        "speech": speech,
        "displayText": speech,
        "data": {
            "google": {
                "expect_user_response": True,
                "is_ssml": False,
                "no_input_prompts": [],
            }
        },
        "contextOut": [],
    }


@app.post("/")
async def webhook(payload: WebhookRequest):
    token = payload.original_request.access_token()
    if not token:
        logger.warning(f"No access token in request for '{payload.result.action}'")
    reply = await orchestrator.handle(payload.result.action, payload.result.parameters, token)
    return ask(reply)


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
