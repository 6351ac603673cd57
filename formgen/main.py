# formgen/main.py
from fastapi import FastAPI, HTTPException, Request, Body
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import os, time, logging, sys, traceback
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

# keep httpx/httpcore quiet
for name in ("httpx", "httpcore"):
    logging.getLogger(name).setLevel(logging.WARNING)

# ===== logging setup =====
logging.basicConfig(
    level=logging.INFO,
    stream=sys.stdout,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
log = logging.getLogger("formgen")

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request as StarletteRequest
from starlette.responses import Response as StarletteResponse

class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: StarletteRequest, call_next):
        t0 = time.time()
        clen = request.headers.get("content-length", "-")
        try:
            log.info(f"[req] {request.method} {request.url.path} len={clen}")
            resp: StarletteResponse = await call_next(request)
            dt = int((time.time() - t0) * 1000)
            log.info(f"[res] {request.method} {request.url.path} -> {resp.status_code} {dt}ms")
            return resp
        except Exception:
            dt = int((time.time() - t0) * 1000)
            log.error(f"[res] {request.method} {request.url.path} -> 500 {dt}ms\n{traceback.format_exc()}")
            raise

from formgen.models.api_models import (
    CreateFieldsRequest, DetectRequest, DetectResponse, ErrorResponse, ProcessRequest, ProcessResponse,
)
from formgen.services.materializer import DocumentOpenError
from formgen.services.orchestrator import create_fields_pipeline, detect_pipeline, process_pipeline
from formgen.services.pdf_fetch import PdfFetchError

SERVICE_NAME = "PDF Form Generator"
SERVICE_VERSION = "2.0.0"

def _parse(model: type[BaseModel], p: dict) -> BaseModel:
    try:
        return model.model_validate(p)
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(x) for x in first.get("loc", ()))
        raise HTTPException(status_code=400, detail=f"invalid {where}: {first.get('msg')}")

def _require_elements(p: dict) -> None:
    if not isinstance(p.get("extract_elements"), list):
        raise HTTPException(status_code=400, detail="extract_elements array is required")

def _require_url(p: dict) -> None:
    if not p.get("pdf_url"):
        raise HTTPException(status_code=400, detail="pdf_url is required")

def create_app() -> FastAPI:
    app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)
    app.add_middleware(AccessLogMiddleware)

    # comma separated, e.g. "http://localhost:5173,https://your-frontend.com"
    allow_origins = os.getenv("CORS_ALLOW_ORIGIN", "*")
    origins = [o.strip() for o in allow_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    @app.exception_handler(PdfFetchError)
    @app.exception_handler(DocumentOpenError)
    async def _source_error(request: Request, exc: Exception) -> JSONResponse:
        log.error(f"[process] {request.url.path} failed: {type(exc).__name__}: {exc}")
        return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc)).model_dump())

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        log.error(f"[error] {request.url.path} unhandled {type(exc).__name__}: {exc}")
        return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc) or type(exc).__name__).model_dump())

    # body is not a JSON object: same 400 as the manual checks
    @app.exception_handler(RequestValidationError)
    async def _bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        where = ".".join(str(x) for x in first.get("loc", ()))
        return JSONResponse(status_code=400, content={"detail": f"invalid {where}: {first.get('msg')}"})

    @app.get("/health", tags=["meta"])
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/", tags=["meta"])
    def root() -> dict:
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "features": [
                "Multi-field per line",
                "Multiline text merging",
                "Checkbox detection",
                "Signature field detection",
            ],
            "endpoints": {
                "health": "GET /health",
                "detectUnderscores": "POST /detect-underscores",
                "createFormFields": "POST /create-form-fields",
                "fullProcess": "POST /process",
            },
        }

    # ========= detection only: elements -> regions =========
    @app.post("/detect-underscores", response_model=DetectResponse, tags=["fields"])
    def detect_underscores(p: dict = Body(...)):
        _require_elements(p)
        req = _parse(DetectRequest, p)
        log.info(f"[detect] elements={len(req.extract_elements)}")
        return detect_pipeline(req)

    # ========= regions (already detected / edited) -> widgets =========
    @app.post("/create-form-fields", response_model=ProcessResponse, tags=["fields"])
    def create_form_fields(p: dict = Body(...)):
        _require_url(p)
        if not isinstance(p.get("fillable_areas"), list):
            raise HTTPException(status_code=400, detail="fillable_areas array is required")
        req = _parse(CreateFieldsRequest, p)
        log.info(f"[create] areas={len(req.fillable_areas)} url={req.pdf_url!r}")
        return create_fields_pipeline(req)

    # ========= full process: detect + create =========
    @app.post("/process", response_model=ProcessResponse, tags=["fields"])
    def process(p: dict = Body(...)):
        _require_url(p)
        _require_elements(p)
        req = _parse(ProcessRequest, p)
        log.info(f"[process] elements={len(req.extract_elements)} url={req.pdf_url!r}")
        return process_pipeline(req)

    return app

app = create_app()
