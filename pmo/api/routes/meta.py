from __future__ import annotations

import platform

from fastapi import APIRouter, Depends

from ... import __version__
from ...config import APP_TITLE
from ...service import PomodoroApp
from ..deps import get_app
from ..schemas import MetaOut

router = APIRouter(prefix="/api/v1", tags=["system"])


@router.get("/meta", response_model=MetaOut)
def meta(app: PomodoroApp = Depends(get_app)) -> MetaOut:
    return MetaOut(
        app=APP_TITLE,
        version=__version__,
        db_path=str(app.store.db_path),
        sessions=app.store.count(),
        platform=platform.platform(),
    )
