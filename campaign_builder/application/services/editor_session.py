"""Editor sessions - one in-memory WorkflowGraph per operator editing session.

Design goals (KISS):
- No global graph: every session owns exactly one `WorkflowGraph`.
- `lock` serializes compile + persist per session; a second save waits for the first.
- In-memory only: closing a session discards the uncommitted graph (no autosave).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from campaign_builder.domain.entities.workflow import WorkflowGraph
from campaign_builder.domain.exceptions import NotFoundError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WorkflowEditorSession:
    session_id: str
    graph: WorkflowGraph
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_saved_at: datetime | None = None

    @property
    def is_saving(self) -> bool:
        return self.lock.locked()


class EditorSessionRegistry:
    """In-memory session registry keyed by session_id."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._sessions: dict[str, WorkflowEditorSession] = {}

    async def open(self, graph: WorkflowGraph | None = None) -> WorkflowEditorSession:
        session = WorkflowEditorSession(
            session_id=f"sess_{uuid4().hex[:12]}",
            graph=graph if graph is not None else WorkflowGraph.create(),
        )
        async with self._lock:
            self._sessions[session.session_id] = session

        logger.info(
            "editor_session_opened",
            extra={
                "session_id": session.session_id,
                "workflow_id": session.graph.id,
                "campaign_id": session.graph.campaign_id,
            },
        )
        return session

    async def get(self, session_id: str) -> WorkflowEditorSession:
        async with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise NotFoundError("EditorSession", session_id)
        return session

    async def close(self, session_id: str) -> None:
        async with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            raise NotFoundError("EditorSession", session_id)

        logger.info(
            "editor_session_closed",
            extra={"session_id": session_id, "node_count": len(session.graph.nodes)},
        )

    async def count(self) -> int:
        async with self._lock:
            return len(self._sessions)
