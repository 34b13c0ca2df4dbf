"""
ledgermsg/api.py
─────────────────────────────────────────────────────────────────────────────
ledgermsg — Dual-mode API layer

TWO USAGE MODES:
  1. Importable module:
         from ledgermsg.api import BundleAPI
         api = BundleAPI(strict=False, payload_encoding="trytes")
         result = api.extract(transactions)

  2. FastAPI HTTP server:
         python -m ledgermsg.api                  # default: port 8766
         python -m ledgermsg.api --port 9000
         uvicorn ledgermsg.api:app --port 8766

ENDPOINTS:
  POST /extract   — transactions (already fetched) → rebuilt messages
  POST /encode    — escape non-ASCII text
  POST /decode    — unescape text
  GET  /config    — effective config of this server
  GET  /health    — server status

ERRORS:
  422 — a rebuilt payload is not valid JSON, or strict mode rejected an attempt
  400 — unknown payload encoding
  500 — anything else (logged with traceback)

The server binds to 127.0.0.1 by default. It holds no state between
requests; every call parses and extracts from scratch.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from ledgermsg import __version__
from ledgermsg.codec.escape import decode_non_ascii, encode_non_ascii
from ledgermsg.config import DEFAULT_CONFIG, configure_logging, ensure_config
from ledgermsg.extractors.bundle_extractor import (
    MalformedAttemptError,
    extract_logical_messages,
)
from ledgermsg.models.record import LogicalMessage
from ledgermsg.parsers.transaction_parser import PAYLOAD_ENCODINGS, parse_transactions

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# IMPORTABLE CLASS
# ═══════════════════════════════════════════════════════════════════════════

class BundleAPI:
    """
    Pure-Python wrapper around parsing + extraction.
    Usable without the HTTP server.

    Usage:
        api    = BundleAPI(payload_encoding="ascii")
        result = api.extract([{"bundle": "B", "currentIndex": 0, ...}])
        text   = api.decode(api.encode("café"))
    """

    def __init__(self, strict: bool = False, payload_encoding: str = "ascii"):
        if payload_encoding not in PAYLOAD_ENCODINGS:
            raise ValueError(f"Unknown payload encoding: {payload_encoding!r}")
        self.strict = strict
        self.payload_encoding = payload_encoding

    @staticmethod
    def _message_to_dict(message: LogicalMessage) -> Dict[str, Any]:
        return {
            "group_id":          message.group_id,
            "attempt_timestamp": message.attempt_timestamp,
            "fragment_count":    message.fragment_count,
            "value":             message.value,
        }

    def extract(
        self,
        transactions:     List[Any],
        strict:           Optional[bool] = None,
        payload_encoding: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Rebuild messages from already-fetched transaction objects.
        Per-call strict / payload_encoding override the instance defaults.

        Raises json.JSONDecodeError or MalformedAttemptError unchanged.
        """
        encoding = payload_encoding or self.payload_encoding
        if encoding not in PAYLOAD_ENCODINGS:
            raise ValueError(f"Unknown payload encoding: {encoding!r}")
        use_strict = self.strict if strict is None else strict

        records  = parse_transactions(transactions, payload_encoding=encoding)
        messages = extract_logical_messages(records, strict=use_strict, payload_encoding=encoding)
        return {
            "count":    len(messages),
            "skipped":  len(transactions) - len(records),
            "messages": [self._message_to_dict(m) for m in messages],
        }

    @staticmethod
    def encode(text: Optional[str]) -> Optional[str]:
        return encode_non_ascii(text)

    @staticmethod
    def decode(text: Optional[str]) -> Optional[str]:
        return decode_non_ascii(text)


# ═══════════════════════════════════════════════════════════════════════════
# FASTAPI HTTP APP
# ═══════════════════════════════════════════════════════════════════════════

# ── REQUEST MODELS ──────────────────────────────────────────────────────────

class ExtractRequest(BaseModel):
    transactions:     List[Dict[str, Any]] = Field(default_factory=list)
    strict:           Optional[bool] = None   # uses config if empty
    payload_encoding: Optional[str] = None    # uses config if empty


class TextRequest(BaseModel):
    text: Optional[str] = None


def _build_app(config: Optional[Dict[str, Any]] = None) -> FastAPI:
    """
    Build and return the FastAPI application instance.
    config defaults to DEFAULT_CONFIG; the server entry point passes the
    merged file + environment config.
    """
    cfg = {**DEFAULT_CONFIG, **(config or {})}
    _api = BundleAPI(
        strict           = bool(cfg["strict_validation"]),
        payload_encoding = cfg["payload_encoding"],
    )

    _app = FastAPI(
        title       = "ledgermsg API",
        description = "Rebuilds structured messages from ledger bundle fragments",
        version     = __version__,
        docs_url    = "/docs",
        redoc_url   = None,
    )

    # ── ENDPOINTS ───────────────────────────────────────────────────────

    @_app.post("/extract", summary="Rebuild messages from transactions")
    def extract(req: ExtractRequest):
        """
        One message per bundle, in the order bundles first appear.
        Reattachments are dropped; the earliest attempt wins.
        """
        try:
            return _api.extract(
                req.transactions,
                strict           = req.strict,
                payload_encoding = req.payload_encoding,
            )
        except json.JSONDecodeError as exc:
            raise HTTPException(status_code=422, detail=f"Payload is not valid JSON: {exc}")
        except MalformedAttemptError as exc:
            raise HTTPException(status_code=422, detail=str(exc))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        except Exception as exc:
            logger.error(f"Extract endpoint error: {exc}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Extract failed: {exc}")

    @_app.post("/encode", summary="Escape non-ASCII characters")
    def encode(req: TextRequest):
        """Empty or missing text returns value=null."""
        return {"value": _api.encode(req.text)}

    @_app.post("/decode", summary="Unescape \\uXXXX sequences")
    def decode(req: TextRequest):
        """Empty or missing text returns value=null."""
        return {"value": _api.decode(req.text)}

    @_app.get("/config", summary="Effective config")
    def get_config():
        return {"config": cfg}

    @_app.get("/health", summary="Health check")
    def health():
        return {
            "status":           "ok",
            "strict":           _api.strict,
            "payload_encoding": _api.payload_encoding,
            "version":          __version__,
        }

    return _app


# Module-level app instance — used by uvicorn ledgermsg.api:app
app = _build_app()


# ═══════════════════════════════════════════════════════════════════════════
# SERVER ENTRYPOINT — python -m ledgermsg.api / ledgermsg-api
# ═══════════════════════════════════════════════════════════════════════════

def main():
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(
        prog        = "ledgermsg.api",
        description = "ledgermsg API Server — bundle message extraction on localhost",
    )
    parser.add_argument("--host", type=str, default=None,
                        help="Host to bind (default: api_host from config, 127.0.0.1)")
    parser.add_argument("--port", type=int, default=None,
                        help="Port to bind (default: api_port from config, 8766)")
    parser.add_argument("--config-root", type=Path, default=None,
                        help="Directory holding ledgermsg_config.json (default: cwd)")
    args = parser.parse_args()

    config = ensure_config(args.config_root)
    configure_logging(config["log_level"])

    host = args.host or config["api_host"]
    port = args.port or int(config["api_port"])

    logger.info(f"Starting ledgermsg API v{__version__} at http://{host}:{port}")
    uvicorn.run(
        _build_app(config),
        host      = host,
        port      = port,
        log_level = str(config["log_level"]).lower(),
    )


if __name__ == "__main__":
    main()
