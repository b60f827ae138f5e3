from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from starlette.requests import ClientDisconnect

from pastebin.domain.errors import InvalidPath, StorageError
from pastebin.features.pastes.service import PastesService
from pastebin.infra.logging import get_logger

router = APIRouter(tags=["pastes"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

log = get_logger(__name__)


def _service(request: Request) -> PastesService:
    state = request.app.state
    return PastesService(store=state.store, generator=state.ids, id_length=state.cfg.id_length)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/")
def new_paste(request: Request) -> RedirectResponse:
    identifier = _service(request).new_identifier()
    return RedirectResponse(url=f"/{identifier}", status_code=302)


@router.get("/{paste_id}", response_class=HTMLResponse)
def show_paste(request: Request, paste_id: str) -> Response:
    try:
        paste = _service(request).load(paste_id)
    except InvalidPath as e:
        log.info("rejected identifier %r", paste_id)
        return _error(400, str(e))
    except StorageError as e:
        return _error(500, str(e))

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": paste.identifier,
            "body": paste.text,
        },
    )


@router.post("/{paste_id}")
async def save_paste(request: Request, paste_id: str) -> Response:
    try:
        body = await request.body()
    except ClientDisconnect:
        return _error(500, "Error reading request body")

    try:
        await run_in_threadpool(_service(request).save, paste_id, body)
    except InvalidPath as e:
        log.info("rejected identifier %r", paste_id)
        return _error(400, str(e))
    except StorageError as e:
        return _error(500, str(e))

    return JSONResponse(content={"status": "Success"})
