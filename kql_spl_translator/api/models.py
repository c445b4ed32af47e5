"""
API Data Models
===============

Pydantic models for API request/response validation.
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# REQUEST MODELS
# =============================================================================

class TranslateRequest(BaseModel):
    """Request model for translation between languages."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "query": "index=main sourcetype=syslog error | stats count by host",
                "from": "spl",
                "to": "kql",
            }
        },
    )

    query: str = Field(..., description="Query text to translate")
    from_language: str = Field(..., alias="from", description="Source language: spl or kql")
    to_language: str = Field(..., alias="to", description="Target language: spl or kql")


class QueryRequest(BaseModel):
    """Request model for a single-direction translation."""
    query: str = Field(..., description="Query text to translate")


class ExplainRequest(BaseModel):
    """Request model for query explanation."""
    query: str = Field(..., description="Query text to explain")
    language: str = Field(..., description="Query language: spl or kql")


class TableMappingEntryModel(BaseModel):
    """Splunk location for one KQL table."""
    index: str = Field(..., description="Splunk index")
    sourcetype: Optional[str] = Field(default=None, description="Splunk sourcetype")
    note: str = Field(default="", description="Free-text note")


class TableMappingRequest(BaseModel):
    """Request model for table mapping updates."""
    mapping: dict[str, TableMappingEntryModel] = Field(..., description="Table name to Splunk location")


class DiscoveryRequest(BaseModel):
    """Request model for Splunk data discovery queries."""
    kql_table: Optional[str] = Field(default=None, description="KQL table to locate in Splunk")


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class ValidationModel(BaseModel):
    """Validation findings for one query."""
    valid: bool
    errors: List[str] = []
    warnings: List[str] = []


class ValidationPair(BaseModel):
    input: ValidationModel
    output: ValidationModel


class TranslationResponse(BaseModel):
    """Response model for a translation."""
    original_query: str
    translated_query: str
    source_language: str
    target_language: str
    input_validation: ValidationModel
    output_validation: ValidationModel
    translation_notes: List[str] = []
    confidence: int = Field(..., ge=0, le=100, description="Confidence score 0-100")
    validation: ValidationPair


class ExplainResponse(BaseModel):
    """Response model for query explanation."""
    explanation: str


class TableMappingResponse(BaseModel):
    """Response model for the current table mapping."""
    mapping: dict[str, TableMappingEntryModel]
    version: int


class DiscoveryResponse(BaseModel):
    """Response model for discovery queries."""
    queries: dict[str, str]


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str
    version: str
    components: dict
