from fastapi import Request

from ..config import Settings
from ..db import Datastore


def get_datastore(request: Request) -> Datastore:
    return request.app.state.datastore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
