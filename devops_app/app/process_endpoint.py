import json

from fastapi import APIRouter, Depends, Request

from ..config import Settings
from ..errors import ValidationError
from ..intake import process
from .deps import get_datastore, get_settings

router = APIRouter(tags=["process"])


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"invalid JSON constant {name}")


async def read_json(raw: Request):
    txt = await raw.body()
    if not txt.strip():
        return {}
    try:
        return json.loads(txt.decode("utf-8"), parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError):
        raise ValidationError("Malformed JSON body")


@router.post("/process")
async def process_endpoint(raw: Request, datastore=Depends(get_datastore), settings: Settings = Depends(get_settings)):
    body = await read_json(raw)
    intake = await process(datastore, body, settings.hostname)
    return {"success": True, "result": intake.result.body()}
