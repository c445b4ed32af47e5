"""
FastAPI Server
==============

HTTP surface for the KQL-SPL translator.

Usage:
    # Run with uvicorn
    uvicorn kql_spl_translator.api.server:app --reload --port 8000

    # Or run as module
    python -m kql_spl_translator.api.server

API Endpoints:
    GET  /api/health                   Health check
    POST /api/translate                Translate {query, from, to}
    POST /api/translate/kql-to-spl     Translate KQL to SPL
    POST /api/translate/spl-to-kql     Translate SPL to KQL
    POST /api/explain                  Explain a query in plain English
    GET  /api/table-mapping            Current KQL table -> Splunk mapping
    POST /api/table-mapping            Merge custom table mappings
    POST /api/discovery                Splunk data discovery queries
    GET  /api/refresh/status           Reference refresh status
    POST /api/refresh                  Record a reference refresh
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from kql_spl_translator import __version__
from kql_spl_translator.doc_refresher import DocRefresher
from kql_spl_translator.vocabulary import ReferenceDataError
from kql_spl_translator.translator.config import TranslatorConfig
from kql_spl_translator.translator.engine import QueryTranslator
from kql_spl_translator.api.models import (
    DiscoveryRequest,
    DiscoveryResponse,
    ExplainRequest,
    ExplainResponse,
    HealthResponse,
    QueryRequest,
    TableMappingRequest,
    TableMappingResponse,
    TranslateRequest,
    TranslationResponse,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(
    translator: Optional[QueryTranslator] = None,
    refresher: Optional[DocRefresher] = None,
    config: Optional[TranslatorConfig] = None,
) -> FastAPI:
    """Create and configure FastAPI application."""

    app = FastAPI(
        title="KQL-SPL Translator API",
        description="Bidirectional translation between Splunk SPL and Microsoft KQL",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Lazy-loaded components
    _config = config
    _translator = translator
    _refresher = refresher

    def get_config() -> TranslatorConfig:
        nonlocal _config
        if _config is None:
            _config = TranslatorConfig.from_yaml()
        return _config

    def get_translator() -> QueryTranslator:
        """Get or create translator instance."""
        nonlocal _translator
        if _translator is None:
            _translator = QueryTranslator.from_config(get_config())
        return _translator

    def get_refresher() -> DocRefresher:
        nonlocal _refresher
        if _refresher is None:
            cfg = get_config()
            _refresher = DocRefresher(cfg.refresh_state_path, cfg.refresh_interval_days)
        return _refresher

    def run_translation(func, *args) -> TranslationResponse:
        try:
            result = func(*args)
        except ReferenceDataError as e:
            logger.error(f"Reference data unavailable: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return TranslationResponse(**result.to_dict())

    # =========================================================================
    # HEALTH
    # =========================================================================

    @app.get("/api/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Check API health status."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            components={
                "api": "running",
                "translator": "available",
            }
        )

    # =========================================================================
    # TRANSLATION
    # =========================================================================

    @app.post("/api/translate", response_model=TranslationResponse, tags=["Translate"])
    async def translate(request: TranslateRequest):
        """Translate a query between SPL and KQL."""
        logger.info(f"Translating {request.from_language} -> {request.to_language}")
        return run_translation(
            get_translator().translate,
            request.query, request.from_language, request.to_language,
        )

    @app.post("/api/translate/kql-to-spl", response_model=TranslationResponse, tags=["Translate"])
    async def translate_kql_to_spl(request: QueryRequest):
        """Translate a KQL query to SPL."""
        return run_translation(get_translator().translate_kql_to_spl, request.query)

    @app.post("/api/translate/spl-to-kql", response_model=TranslationResponse, tags=["Translate"])
    async def translate_spl_to_kql(request: QueryRequest):
        """Translate an SPL query to KQL."""
        return run_translation(get_translator().translate_spl_to_kql, request.query)

    @app.post("/api/explain", response_model=ExplainResponse, tags=["Explain"])
    async def explain(request: ExplainRequest):
        """Explain what a query does."""
        try:
            explanation = get_translator().explain_query(request.query, request.language)
        except ReferenceDataError as e:
            logger.error(f"Reference data unavailable: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return ExplainResponse(explanation=explanation)

    # =========================================================================
    # TABLE MAPPING & DISCOVERY
    # =========================================================================

    @app.get("/api/table-mapping", response_model=TableMappingResponse, tags=["Mapping"])
    async def get_table_mapping():
        """Get the current KQL table to Splunk index/sourcetype mapping."""
        translator = get_translator()
        return TableMappingResponse(
            mapping=translator.get_table_mapping(),
            version=translator.table_mapping.version,
        )

    @app.post("/api/table-mapping", response_model=TableMappingResponse, tags=["Mapping"])
    async def update_table_mapping(request: TableMappingRequest):
        """Merge custom table mappings over the current ones."""
        mapping = {name: entry.model_dump() for name, entry in request.mapping.items()}
        try:
            updated = get_translator().set_table_mapping(mapping)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return TableMappingResponse(mapping=updated.to_dict(), version=updated.version)

    @app.post("/api/discovery", response_model=DiscoveryResponse, tags=["Mapping"])
    async def discovery(request: DiscoveryRequest):
        """Generate SPL queries that locate a table's data in Splunk."""
        return DiscoveryResponse(
            queries=get_translator().generate_discovery_queries(request.kql_table)
        )

    # =========================================================================
    # REFERENCE REFRESH
    # =========================================================================

    @app.get("/api/refresh/status", tags=["Refresh"])
    async def refresh_status():
        """Get reference refresh status."""
        return get_refresher().get_status()

    @app.post("/api/refresh", tags=["Refresh"])
    async def refresh():
        """Record a refresh of both references and return manual refresh instructions."""
        try:
            return get_refresher().refresh_all()
        except OSError as e:
            logger.error(f"Could not save refresh state: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    return app


# Create app instance
app = create_app()


def main(local_only: Optional[bool] = None):
    """Run the server.

    Usage:
        python -m kql_spl_translator.api.server              # Run on 0.0.0.0 (external access)
        python -m kql_spl_translator.api.server --local      # Run on 127.0.0.1 (local only)
    """
    import sys
    import uvicorn

    if local_only is None:
        local_only = "--local" in sys.argv

    config = TranslatorConfig.from_yaml()
    host = "127.0.0.1" if local_only else config.api_host
    port = config.api_port

    print("\nStarting KQL-SPL Translator API")
    print(f"   URL: http://{host}:{port}")
    print(f"   Docs: http://{host}:{port}/api/docs")
    print()

    uvicorn.run(
        "kql_spl_translator.api.server:app",
        host=host,
        port=port,
    )


if __name__ == "__main__":
    main()
