from datetime import UTC, datetime
from uuid import uuid4

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

app = FastAPI(title="Mock Messaging Gateway", version="0.1.0")

OUTBOX: list[dict] = []


class OutgoingMessage(BaseModel):
    sender: str = Field(alias="from")
    to: str
    body: str


@app.get("/ping")
def ping():
    return {"status": "ok", "service": "mock-messaging", "time": datetime.now(UTC).isoformat()}


@app.post("/messages", status_code=201)
def send_message(payload: OutgoingMessage):
    if not payload.to.startswith("whatsapp:+"):
        raise HTTPException(status_code=400, detail="Recipient must be a whatsapp:+E164 address")

    record = {
        "sid": f"SM{uuid4().hex}",
        "from": payload.sender,
        "to": payload.to,
        "body": payload.body,
        "status": "queued",
        "created_at": datetime.now(UTC).isoformat(),
    }
    OUTBOX.append(record)
    return record


@app.get("/messages")
def list_messages(limit: int = 50):
    return OUTBOX[-limit:]
