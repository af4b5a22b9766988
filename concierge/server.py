"""
FastAPI HTTP server for Concierge.

Exposes the answering pipeline, the model-augmented search, chat history
and reminders.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI, Body, HTTPException, BackgroundTasks, Query as QueryParam, Request
from fastapi.middleware.cors import CORSMiddleware

from concierge.app import Components, start_components
from concierge.core.contracts import ANONYMOUS, Query
from concierge.core.errors import MessageRequired

logger = logging.getLogger("server")


def create_app(components: Optional[Components] = None) -> FastAPI:
    """
    Create the FastAPI app.

    Args:
        components: Pre-built pipeline (tests inject fakes here). When omitted
            the pipeline is built from Config at startup.

    Returns:
        FastAPI app instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "components", None) is None:
            app.state.components = await start_components()
        yield
        app.state.components.bus.clear()

    app = FastAPI(
        title="Concierge API",
        description="Conversational question answering",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.components = components

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_components(request: Request) -> Components:
        return request.app.state.components

    async def _answer(request: Request, body: Optional[dict], background_tasks: BackgroundTasks):
        body = body or {}
        message = body.get("message")
        user_id = body.get("userId") or ANONYMOUS
        c = get_components(request)

        try:
            answer = await c.service.produce_answer(message, user_id)
        except MessageRequired as e:
            raise HTTPException(status_code=e.status_code, detail="Message is required")
        except Exception as e:
            logger.exception("Error answering message: %s", e)
            raise HTTPException(status_code=500, detail=f"Server error: {str(e)}")

        # saved after the response is sent
        background_tasks.add_task(c.service.record, user_id, message.strip(), answer)

        content = {"success": True, "response": answer.text}
        if answer.intent:
            content["intent"] = answer.intent
        return content

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        c = get_components(request)
        return {
            "status": "ok",
            "time": datetime.now(timezone.utc).isoformat(),
            "store": "connected" if c.store.is_ready() else "disconnected",
            "llm": "configured" if c.llm_configured else "not configured",
            "mode": c.service.router.mode,
        }

    @app.post("/api/chat")
    async def chat(request: Request, background_tasks: BackgroundTasks, body: Optional[dict] = Body(default=None)):
        """
        Answer a message.

        Accepts JSON with:
        {
            "message": "what is 2 + 2",
            "userId": "optional user id"
        }
        """
        return await _answer(request, body, background_tasks)

    @app.post("/api/voice")
    async def voice(request: Request, background_tasks: BackgroundTasks, body: Optional[dict] = Body(default=None)):
        """Transcribed voice input; same contract as /api/chat."""
        return await _answer(request, body, background_tasks)

    @app.post("/api/search")
    async def search(request: Request, body: Optional[dict] = Body(default=None)):
        """Search-backed answer synthesized by the language model."""
        query = (body or {}).get("query")
        if not isinstance(query, str) or not query.strip():
            raise HTTPException(status_code=400, detail="Query is required")

        c = get_components(request)
        try:
            result = await c.model_skill.resolve(Query(text=query.strip()))
        except Exception as e:
            logger.exception("Search error: %s", e)
            raise HTTPException(status_code=500, detail=f"Search failed: {str(e)}")
        return {"success": True, "results": result.text}

    @app.get("/api/chat/history")
    async def chat_history(
        request: Request,
        userId: str = QueryParam(default=ANONYMOUS),
        limit: int = QueryParam(default=50, ge=1, le=500),
    ):
        c = get_components(request)
        if not c.store.is_ready():
            raise HTTPException(status_code=503, detail="Chat history unavailable")
        try:
            chats = await asyncio.to_thread(c.store.history, userId, limit)
        except Exception as e:
            logger.exception("Error reading chat history: %s", e)
            raise HTTPException(status_code=500, detail="Server error")
        return {"success": True, "chats": [r.dict() for r in chats]}

    @app.post("/api/reminders")
    async def create_reminder(request: Request, body: Optional[dict] = Body(default=None)):
        """
        Create a reminder.

        Accepts JSON with:
        {
            "title": "call the dentist",
            "time": "2024-05-01T09:30:00Z",
            "userId": "optional user id"
        }
        """
        body = body or {}
        title = body.get("title")
        if not isinstance(title, str) or not title.strip():
            raise HTTPException(status_code=400, detail="Title is required")
        when = body.get("time")
        if when is not None:
            try:
                when = _parse_time(when)
            except ValueError:
                raise HTTPException(status_code=400, detail="Invalid reminder time")

        c = get_components(request)
        if not c.reminders.is_ready():
            raise HTTPException(status_code=503, detail="Reminders unavailable")
        try:
            reminder = await asyncio.to_thread(
                c.reminders.add_reminder, body.get("userId") or ANONYMOUS, title.strip(), when
            )
        except Exception as e:
            logger.exception("Error creating reminder: %s", e)
            raise HTTPException(status_code=500, detail="Failed to create reminder")
        return {"success": True, "reminder": reminder.dict()}

    @app.get("/api/reminders")
    async def list_reminders(request: Request, userId: str = QueryParam(default=ANONYMOUS)):
        """Reminders for the user that are not completed yet."""
        c = get_components(request)
        if not c.reminders.is_ready():
            raise HTTPException(status_code=503, detail="Reminders unavailable")
        try:
            reminders = await asyncio.to_thread(c.reminders.pending, userId)
        except Exception as e:
            logger.exception("Error reading reminders: %s", e)
            raise HTTPException(status_code=500, detail="Failed to fetch reminders")
        return {"success": True, "reminders": [r.dict() for r in reminders]}

    return app


def _parse_time(value) -> str:
    """Normalize an ISO 8601 timestamp; a trailing Z means UTC."""
    if not isinstance(value, str):
        raise ValueError("time must be a string")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).isoformat()


# Default app instance for `uvicorn concierge.server:app`
app = create_app()
