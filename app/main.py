# app/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, configure_logging
from .core import PriceOut, UpdateOut, UpdateRequest
from .errors import InvalidInput, RemoteError
from .locks import KeyedLock
from .sdk import PriceUpdater, quote_price_logic, update_price_logic
from .shopify import ShopifyClient

logger = logging.getLogger(__name__)

def create_app(settings: Optional[Settings] = None,
               remote: Optional[PriceUpdater] = None,
               gate: Optional[KeyedLock] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    if not settings.access_token:
        logger.warning("ADMIN_API_TOKEN is not set; Shopify updates will be rejected")

    app = FastAPI(title="protection-price")
    app.state.settings = settings
    app.state.gate = gate if gate is not None else KeyedLock()
    app.state.remote = remote if remote is not None else ShopifyClient(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------------------
    # Error mapping
    # ---------------------------
    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(request: Request, exc: InvalidInput):
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": InvalidInput().message})

    @app.exception_handler(RemoteError)
    async def remote_error_handler(request: Request, exc: RemoteError):
        logger.error("Error updating price: %s", exc.message)
        return JSONResponse(status_code=500, content={"error": exc.message})

    # ---------------------------
    # Endpoints
    # ---------------------------
    @app.get("/health")
    async def health():
        logger.info("Health check ping received")
        return {"ok": True}

    @app.get("/protection/price", response_model=PriceOut)
    async def protection_price(subtotal: Optional[str] = Query(None)):
        return await quote_price_logic(subtotal)

    @app.post("/protection/update", response_model=UpdateOut)
    async def protection_update(payload: UpdateRequest, request: Request):
        state = request.app.state
        return await update_price_logic(
            payload.subtotal, state.settings.variant_id, state.gate, state.remote
        )

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info("Protection server running on port %s", app.state.settings.port)
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
