from __future__ import annotations

import asyncio
import contextlib
import json
from typing import List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from carsim import CarController, SimulatorConfig
from carsim.logging_config import configure_from_env


class PolicySelection(BaseModel):
    name: str


class FloorSubmission(BaseModel):
    floor: int


class ConfigUpdate(BaseModel):
    total_floors: Optional[int] = None
    tick_period_ms: Optional[int] = None


class SimulationManager:
    def __init__(self, config: Optional[SimulatorConfig] = None) -> None:
        self.controller = CarController(config or SimulatorConfig())
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        while True:
            payload = await self.step()
            await self.broadcast(payload)
            # Read every cycle so a new period applies from the next tick
            await asyncio.sleep(self.controller.config.tick_period_seconds)

    async def step(self) -> dict:
        async with self._lock:
            self.controller.tick()
            return self.current_state()

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        return self.controller.snapshot().as_dict()

    def current_log(self) -> List[dict]:
        return [entry.as_dict() for entry in self.controller.log]

    async def submit_request(self, floor: int) -> dict:
        async with self._lock:
            accepted = self.controller.submit_request(floor)
            return {"accepted": accepted, "state": self.current_state()}

    async def start_car(self) -> dict:
        async with self._lock:
            self.controller.start()
            return self.current_state()

    async def pause_car(self) -> dict:
        async with self._lock:
            self.controller.pause()
            return self.current_state()

    async def reset_car(self) -> dict:
        async with self._lock:
            self.controller.reset()
            return self.current_state()

    async def restore_defaults(self) -> dict:
        async with self._lock:
            self.controller.restore_defaults()
            return self.current_state()

    async def configure(self, total_floors: Optional[int], tick_period_ms: Optional[int]) -> dict:
        async with self._lock:
            rejected = self.controller.configure(total_floors, tick_period_ms)
            state = self.current_state()
            state["rejected"] = rejected
            return state

    async def set_policy(self, name: str) -> dict:
        async with self._lock:
            self.controller.set_policy(name)
            return self.current_state()


manager = SimulationManager()
app = FastAPI(title="LiftDispatch Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup() -> None:
    configure_from_env()
    await manager.start()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await manager.stop()


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.get("/log")
async def get_log() -> List[dict]:
    return manager.current_log()


@app.post("/requests")
async def submit_request(submission: FloorSubmission) -> dict:
    return await manager.submit_request(submission.floor)


@app.post("/start")
async def start() -> dict:
    return await manager.start_car()


@app.post("/pause")
async def pause() -> dict:
    return await manager.pause_car()


@app.post("/reset")
async def reset() -> dict:
    return await manager.reset_car()


@app.post("/defaults")
async def restore_defaults() -> dict:
    return await manager.restore_defaults()


@app.post("/tick")
async def tick() -> dict:
    return await manager.step()


@app.post("/config")
async def configure(update: ConfigUpdate) -> dict:
    return await manager.configure(update.total_floors, update.tick_period_ms)


@app.post("/policy")
async def set_policy(selection: PolicySelection) -> dict:
    try:
        return await manager.set_policy(selection.name)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
