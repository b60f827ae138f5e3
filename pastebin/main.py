import argparse
import sys
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from pastebin.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from pastebin.domain.errors import ConfigError
from pastebin.domain.identifiers import IdentifierGenerator
from pastebin.features.pastes.api import router as pastes_router
from pastebin.infra.logging import get_logger, setup_logging
from pastebin.infra.storage import BlobStore

STATIC_DIR = Path(__file__).resolve().parent / "static"

log = get_logger()


def create_app(cfg: AppConfig | None = None) -> FastAPI:
    if cfg is None:
        cfg = load_config()
    setup_logging(cfg.log_level, cfg.log_format)

    app = FastAPI(title="pastebin", version="0.1.0")
    app.state.cfg = cfg
    app.state.store = BlobStore(cfg.storage_root)
    app.state.ids = IdentifierGenerator()
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    # Registered last: "/{paste_id}" would otherwise shadow other routes.
    app.include_router(pastes_router)
    log.info("storage root: %s, identifier length: %d", app.state.store.root, cfg.id_length)
    return app


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="pastebin", description="Anonymous paste store.")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config file")
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
        host, port = cfg.listen_address()
    except ConfigError as e:
        print(f"pastebin: {e}", file=sys.stderr)
        return 2

    app = create_app(cfg)
    log.info("listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
