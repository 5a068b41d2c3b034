"""Request dependencies backed by the instances created in ``create_app``."""

from typing import Annotated

from fastapi import Depends, Request

from screener.config import Settings
from screener.engine.gateway import EvaluationGateway
from screener.storage.repositories import RecordStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_gateway(request: Request) -> EvaluationGateway | None:
    """The gateway, or None when the provider is not configured."""
    return request.app.state.gateway


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
StoreDep = Annotated[RecordStore, Depends(get_store)]
GatewayDep = Annotated[EvaluationGateway | None, Depends(get_gateway)]
