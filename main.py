import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

import database
from config import Settings
from errors import GatewayError, StoreError, ValidationError
from gateway import TeamGateway
from pinger import LivenessPinger
from schemas import CreatedResponse, MessageResponse, TeamPayload, TeamRecord

logger = logging.getLogger(__name__)

router = APIRouter()


def get_gateway(request: Request) -> TeamGateway:
    return request.app.state.gateway


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    client = None
    if app.state.gateway is None:
        # Fail fast: no requests are served without a working store.
        client = database.connect(settings)
        app.state.gateway = TeamGateway(
            database.team_collection(client, settings),
            owner_scoping=settings.owner_scoping,
        )

    pinger: Optional[LivenessPinger] = None
    if settings.self_url:
        pinger = LivenessPinger(
            settings.self_url,
            settings.ping_interval_seconds,
            timeout=settings.ping_timeout_seconds,
        )
        pinger.start()
    app.state.pinger = pinger

    try:
        yield
    finally:
        if pinger is not None:
            await pinger.stop()
        if client is not None:
            client.close()
            app.state.gateway = None


# -----------------------------
# Error mapping
# -----------------------------
async def gateway_error_handler(_: Request, exc: GatewayError) -> JSONResponse:
    body = {"message": exc.message}
    if isinstance(exc, StoreError):
        body["error"] = exc.error
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": f"Invalid request: {details}"})


# -----------------------------
# Health
# -----------------------------
@router.get("/ping", response_class=PlainTextResponse)
def ping():
    return "pong"


# -----------------------------
# Equipes
# -----------------------------
@router.post("/equipes", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_team(payload: TeamPayload, gateway: TeamGateway = Depends(get_gateway)):
    new_id = gateway.create(payload)
    return {"message": "Team registered successfully!", "insertedId": new_id}


@router.get("/equipes", response_model=List[TeamRecord])
def list_teams(gateway: TeamGateway = Depends(get_gateway)):
    if gateway.owner_scoping:
        raise ValidationError("userId is required")
    return gateway.list_all()


@router.get("/equipes/details/{team_id}", response_model=TeamRecord)
def get_team(team_id: str, gateway: TeamGateway = Depends(get_gateway)):
    return gateway.get(team_id)


@router.get("/equipes/{user_id}", response_model=List[TeamRecord])
def list_teams_for_user(user_id: str, gateway: TeamGateway = Depends(get_gateway)):
    return gateway.list_by_owner(user_id)


@router.put("/equipes/{team_id}", response_model=MessageResponse)
def update_team(team_id: str, payload: TeamPayload, gateway: TeamGateway = Depends(get_gateway)):
    gateway.update(team_id, payload)
    return {"message": "Team updated successfully!"}


@router.delete("/equipes/{team_id}", response_model=MessageResponse)
def delete_team(team_id: str, gateway: TeamGateway = Depends(get_gateway)):
    gateway.delete(team_id)
    return {"message": "Team deleted successfully!"}


def create_app(settings: Optional[Settings] = None, gateway: Optional[TeamGateway] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="Equipes API", lifespan=lifespan)
    app.state.settings = settings
    app.state.gateway = gateway
    app.state.pinger = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)
    return app


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level)
    # basicConfig leaves the root level untouched when handlers are already installed.
    logging.getLogger().setLevel(level)


settings = Settings()
configure_logging(settings.log_level)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting server on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
