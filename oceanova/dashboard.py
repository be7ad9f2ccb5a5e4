"""State API: FastAPI backend exposing the published refresh state + location control."""

from datetime import UTC, datetime

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from oceanova.config.locations import location_names, resolve_location
from oceanova.daemon import RefreshDaemon
from oceanova.errors import LocationNotFoundError
from oceanova.pipeline.refresh_orchestrator import RefreshOrchestrator
from oceanova.reporting.formatters import state_to_dict


class LocationChange(BaseModel):
    name: str


def create_app(
    orchestrator: RefreshOrchestrator, daemon: RefreshDaemon | None = None
) -> FastAPI:
    app = FastAPI(title="Oceanova Marine Advisory", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/state")
    def get_state():
        """Last published cycle plus current status."""
        return state_to_dict(orchestrator.state)

    @app.get("/api/locations")
    def get_locations():
        return location_names(orchestrator.config)

    @app.post("/api/location", status_code=202)
    def change_location(change: LocationChange, background: BackgroundTasks):
        """Select a location; a fresh cycle starts and supersedes any in flight."""
        try:
            location = resolve_location(orchestrator.config, change.name)
        except LocationNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e

        if daemon is not None and daemon.running:
            daemon.change_location(location)
        else:
            orchestrator.select_location(location)
            background.add_task(orchestrator.refresh)
        return {"location": location.name, "status": "refreshing"}

    @app.get("/api/health")
    def get_health():
        state = orchestrator.state
        return {
            "status": state.status.value,
            "daemon_running": daemon.running if daemon is not None else False,
            "daemon_started_at": daemon.started_at if daemon is not None else None,
            "last_success": (
                state.result.completed_at.isoformat() if state.result else None
            ),
            "timestamp": datetime.now(UTC).isoformat(),
        }

    return app
