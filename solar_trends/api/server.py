"""HTTP layer: analysis, trend-only, CSV export and status endpoints.

Run with:
    uvicorn solar_trends.api.server:app --port 3000
"""

from datetime import datetime, timezone
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from solar_trends.core.config import load_config
from solar_trends.core.errors import AnalyzerError
from solar_trends.core.logger import logger, use_output_dir
from solar_trends.pipeline.engine import MarketAnalyzer
from solar_trends.pipeline.export import CSV_FILENAME, to_csv

VERSION = "1.0.0"
ENDPOINTS = ["/api/analyze", "/api/trends", "/api/export", "/api/status"]

router = APIRouter()


def get_analyzer(request: Request) -> MarketAnalyzer:
    return request.app.state.analyzer


AnalyzerDep = Annotated[MarketAnalyzer, Depends(get_analyzer)]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/analyze")
async def analyze(
    analyzer: AnalyzerDep,
    category: str = "all",
    timeframe: str = "7d",
    region: str = "global",
    keywords: str = "",
):
    logger.info(
        f"Analysis request: category={category} timeframe={timeframe} "
        f"region={region} keywords={keywords!r}"
    )
    try:
        result = await analyzer.analyze_market(category, timeframe, region)
    except Exception as exc:
        logger.error(f"Analysis error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Analysis failed", "message": str(exc)},
        )
    return result.to_dict()


@router.get("/trends")
async def trends(analyzer: AnalyzerDep):
    try:
        report = analyzer.analyze_trends([])
    except Exception as exc:
        logger.error(f"Trend analysis error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Trend analysis failed"},
        )
    return {"success": True, "trends": report.to_dict(), "timestamp": _now()}


@router.get("/export")
async def export(
    analyzer: AnalyzerDep,
    category: str = "all",
    timeframe: str = "7d",
    region: str = "global",
):
    try:
        result = await analyzer.analyze_market(category, timeframe, region)
        csv_text = to_csv(result.data)
    except Exception as exc:
        logger.error(f"Export error: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"success": False, "error": "Export failed"})
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"},
    )


@router.get("/status")
async def status():
    return {
        "status": "online",
        "version": VERSION,
        "timestamp": _now(),
        "endpoints": ENDPOINTS,
    }


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Server error: {exc}")
    message = exc.message if isinstance(exc, AnalyzerError) else str(exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error", "message": message},
    )


def create_app(analyzer: Optional[MarketAnalyzer] = None) -> FastAPI:
    """Build the FastAPI app. Without an analyzer, one is built from config.yaml."""
    if analyzer is None:
        try:
            config = load_config()
            use_output_dir(config.get("output_dir", "output"))
        except (FileNotFoundError, ValueError) as exc:
            logger.warning(f"server: {exc}; using built-in defaults")
            config = {}
        analyzer = MarketAnalyzer(config)

    app = FastAPI(
        title="Solar Market Trend Analyzer",
        description="Aggregated solar market signals and trend indicators",
        version=VERSION,
    )
    app.state.analyzer = analyzer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, server_error_handler)
    app.include_router(router, prefix="/api", tags=["market"])
    return app


app = create_app()
