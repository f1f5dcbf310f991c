from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List, Sequence, Tuple
import asyncio, logging, time, websockets
from ..eye.candidates import Candidate

logger = logging.getLogger(__name__)

class EllipseOut(BaseModel):
    center: Tuple[float, float]
    first_ax: float; second_ax: float; angle: float

class CandidateOut(BaseModel):
    ellipse: EllipseOut
    aspect_ratio: float = Field(ge=0.0, le=1.0)
    angular_spread: float = Field(ge=0.0, le=1.0)
    outline_contrast: float = Field(ge=0.0, le=1.0)
    n_points: int

    @classmethod
    def from_candidate(cls, c: Candidate) -> "CandidateOut":
        e = c.ellipse
        return cls(ellipse=EllipseOut(center=e.center, first_ax=e.first_ax, second_ax=e.second_ax, angle=e.angle),
                   aspect_ratio=c.aspect_ratio, angular_spread=c.angular_spread,
                   outline_contrast=c.outline_contrast, n_points=len(c.segment))

class FrameEvent(BaseModel):
    ts: float = Field(default_factory=lambda: time.time())
    frame: int = 0
    size: Tuple[int, int]
    n_segments: int = 0
    candidates: List[CandidateOut] = []

    @classmethod
    def build(cls, frame:int, size:Tuple[int,int], n_segments:int, candidates: Sequence[Candidate]) -> "FrameEvent":
        return cls(frame=frame, size=size, n_segments=n_segments,
                   candidates=[CandidateOut.from_candidate(c) for c in candidates])

async def ws_broadcast(queue: "asyncio.Queue[str]", host="0.0.0.0", port=8765):
    clients=set()
    async def handler(websocket):
        clients.add(websocket)
        try:
            await websocket.wait_closed()
        finally:
            clients.discard(websocket)
    async with websockets.serve(handler, host, port):
        logger.info("broadcasting frame events on ws://%s:%d", host, port)
        while True:
            msg = await queue.get()
            if clients:
                websockets.broadcast(clients, msg)
