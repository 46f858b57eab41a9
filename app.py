# app.py
# DEPENDENCIES
import sys
import time
import anyio
import uvicorn
from typing import Any
from typing import Dict
from typing import List
from fastapi import File
from fastapi import Form
from fastapi import FastAPI
from fastapi import Depends
from fastapi import Request
from typing import Optional
from datetime import datetime
from pydantic import BaseModel
from fastapi import UploadFile
from fastapi import HTTPException
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
from utils.logger import log_info
from utils.logger import log_error
from config.settings import settings
from config.risk_rules import RiskRules
from utils.validators import ContractValidator
from utils.logger import ContractAnalyzerLogger
from utils.document_reader import DocumentReader
from services.exceptions import ExtractionError
from services.exceptions import ANALYSIS_TIMEOUT_ERROR
from services.contract_analyzer import ContractRiskAnalyzer


# RESPONSE MODELS
class HealthResponse(BaseModel):
    status           : str
    version          : str
    timestamp        : str
    provider         : str
    model            : str
    model_configured : bool


class ClauseResponse(BaseModel):
    name              : str
    risk_level        : str
    summary           : str = ""
    original_text     : str = ""
    suggested_redline : str = ""


class AnalysisResponse(BaseModel):
    overall_risk : str
    clauses      : List[ClauseResponse] = []
    error        : Optional[str]        = None


class ErrorResponse(BaseModel):
    error     : str
    detail    : str
    timestamp : str


# APPLICATION SETUP
ContractAnalyzerLogger.setup(log_dir      = settings.LOG_DIR,
                             level        = settings.LOG_LEVEL,
                             max_bytes    = settings.LOG_MAX_BYTES,
                             backup_count = settings.LOG_BACKUP_COUNT,
                            )


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_info(f"{settings.APP_NAME} v{settings.APP_VERSION} starting up")

    try:
        app.state.analyzer  = ContractRiskAnalyzer.from_settings(settings)
        app.state.validator = ContractValidator.from_settings(settings)
        app.state.reader    = DocumentReader(max_file_size = settings.MAX_UPLOAD_SIZE,
                                             min_file_size = settings.MIN_UPLOAD_SIZE,
                                            )

    except Exception as e:
        log_error(e, context = {"component" : "app", "operation" : "startup"})
        raise

    log_info("Contract Risk Analyzer ready",
             host             = settings.HOST,
             port             = settings.PORT,
             model_configured = app.state.analyzer.llm_manager.is_configured(),
            )

    try:
        yield

    finally:
        log_info("Server shutdown complete")


app = FastAPI(title       = settings.APP_NAME,
              version     = settings.APP_VERSION,
              description = "Clause-level legal contract risk analysis",
              docs_url    = "/api/docs",
              redoc_url   = "/api/redoc",
              lifespan    = lifespan,
             )

app.add_middleware(CORSMiddleware,
                   allow_origins     = settings.CORS_ORIGINS,
                   allow_credentials = settings.CORS_ALLOW_CREDENTIALS,
                   allow_methods     = settings.CORS_ALLOW_METHODS,
                   allow_headers     = settings.CORS_ALLOW_HEADERS,
                  )


# DEPENDENCIES INJECTED INTO ROUTES
def get_analyzer(request: Request) -> ContractRiskAnalyzer:
    analyzer = getattr(request.app.state, "analyzer", None)

    if analyzer is None:
        raise HTTPException(status_code = 503,
                            detail      = "Service not initialized",
                           )

    return analyzer


def get_validator(request: Request) -> ContractValidator:
    return getattr(request.app.state, "validator", None) or ContractValidator.from_settings(settings)


def get_reader(request: Request) -> DocumentReader:
    return getattr(request.app.state, "reader", None) or DocumentReader(max_file_size = settings.MAX_UPLOAD_SIZE,
                                                                        min_file_size = settings.MIN_UPLOAD_SIZE,
                                                                       )


# HELPER FUNCTIONS
async def run_analysis(analyzer: ContractRiskAnalyzer, contract_text: str) -> Dict[str, Any]:
    """
    Run the blocking pipeline in a worker thread under the overall analysis timeout

    The abandoned worker sees the same deadline and stops before its next model call
    """
    deadline = time.monotonic() + settings.ANALYSIS_TIMEOUT_SECONDS

    try:
        with anyio.fail_after(settings.ANALYSIS_TIMEOUT_SECONDS):
            result = await anyio.to_thread.run_sync(analyzer.analyze_contract, contract_text, deadline, abandon_on_cancel = True)

    except TimeoutError:
        log_error("Contract analysis timed out", context = {"component"       : "app",
                                                            "timeout_seconds" : settings.ANALYSIS_TIMEOUT_SECONDS,
                                                            "text_length"     : len(contract_text),
                                                           })

        raise HTTPException(status_code = 504,
                            detail      = ANALYSIS_TIMEOUT_ERROR,
                           )

    return result.to_dict()


def check_contract_text(validator: ContractValidator, contract_text: str):
    is_valid, message = validator.validate_contract_text(contract_text)

    if not is_valid:
        raise HTTPException(status_code = 400,
                            detail      = message,
                           )


# ROUTES
@app.get(f"{settings.API_PREFIX}/health", response_model = HealthResponse)
async def health_check(analyzer: ContractRiskAnalyzer = Depends(get_analyzer)):
    provider_info = analyzer.llm_manager.get_provider_info()

    return HealthResponse(status           = "healthy",
                          version          = settings.APP_VERSION,
                          timestamp        = datetime.now().isoformat(),
                          provider         = provider_info["provider"],
                          model            = provider_info["model"],
                          model_configured = provider_info["configured"],
                         )


@app.post(f"{settings.API_PREFIX}/analyze/file", response_model = AnalysisResponse, response_model_exclude_none = True)
async def analyze_contract_file(file: UploadFile = File(...), analyzer: ContractRiskAnalyzer = Depends(get_analyzer),
                                validator: ContractValidator = Depends(get_validator), reader: DocumentReader = Depends(get_reader)):
    data              = await file.read()
    is_valid, message = validator.validate_file(file.filename, len(data))

    if not is_valid:
        raise HTTPException(status_code = 400,
                            detail      = message,
                           )

    try:
        contract_text = reader.read_bytes(data, validator.get_extension(file.filename))

    except ExtractionError as e:
        log_error(e, context = {"component" : "app", "operation" : "extract_text", "filename" : file.filename})

        raise HTTPException(status_code = 422,
                            detail      = e.user_message,
                           )

    check_contract_text(validator, contract_text)

    result = await run_analysis(analyzer, contract_text)

    log_info("File analysis completed",
             filename     = file.filename,
             overall_risk = result["overall_risk"],
             num_clauses  = len(result["clauses"]),
             has_error    = "error" in result,
            )

    return result


@app.post(f"{settings.API_PREFIX}/analyze/text", response_model = AnalysisResponse, response_model_exclude_none = True)
async def analyze_contract_text(contract_text: str = Form(..., description = "Contract text to analyze"), analyzer: ContractRiskAnalyzer = Depends(get_analyzer),
                                validator: ContractValidator = Depends(get_validator)):
    check_contract_text(validator, contract_text)

    result = await run_analysis(analyzer, contract_text)

    log_info("Text analysis completed",
             overall_risk = result["overall_risk"],
             num_clauses  = len(result["clauses"]),
             has_error    = "error" in result,
            )

    return result


@app.get(f"{settings.API_PREFIX}/clauses")
async def get_clause_vocabulary(analyzer: ContractRiskAnalyzer = Depends(get_analyzer)):
    return {"risk_levels" : list(RiskRules.RISK_PRIORITY.keys()),
            "clauses"     : analyzer.config.clause_vocabularies,
           }


# ERROR HANDLERS AND MIDDLEWARE
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(status_code = exc.status_code,
                        content     = ErrorResponse(error     = str(exc.detail),
                                                    detail    = str(exc.detail),
                                                    timestamp = datetime.now().isoformat(),
                                                   ).model_dump()
                       )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    log_error(exc, context = {"component" : "app", "path" : request.url.path})

    return JSONResponse(status_code = 500,
                        content     = ErrorResponse(error     = "Internal server error",
                                                    detail    = "An unexpected error occurred. Please try again.",
                                                    timestamp = datetime.now().isoformat(),
                                                   ).model_dump()
                       )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time   = time.perf_counter()
    response     = await call_next(request)
    process_time = time.perf_counter() - start_time

    log_info(f"API Request: {request.method} {request.url.path} - Status: {response.status_code} - Duration: {process_time:.3f}s")

    return response


# MAIN
def main():
    try:
        uvicorn.run("app:app",
                    host      = settings.HOST,
                    port      = settings.PORT,
                    reload    = settings.RELOAD,
                    workers   = settings.WORKERS,
                    log_level = settings.LOG_LEVEL.lower(),
                   )

    except KeyboardInterrupt:
        log_info("Server stopped by user")

    except Exception as e:
        log_error(e, context = {"component" : "app", "operation" : "serve"})
        sys.exit(1)


if __name__ == "__main__":
    main()
