from pydantic import BaseModel, Field
from typing import List, Optional


class DrinkWindowSuggestion(BaseModel):
    from_year: int = Field(..., ge=1800)
    to_year: int = Field(..., ge=1800)
    drink_now: bool = False


class CriticScoresSuggestion(BaseModel):
    wine_spectator: Optional[float] = Field(None, ge=0, le=100)
    james_suckling: Optional[float] = Field(None, ge=0, le=100)


class EnrichmentResult(BaseModel):
    """Resposta do serviço externo de enriquecimento"""
    tasting_notes: Optional[str] = None
    drink_window: Optional[DrinkWindowSuggestion] = None
    critic_scores: Optional[CriticScoresSuggestion] = None
    sources: List[str] = []
    confidence: Optional[float] = Field(None, ge=0, le=1)


class EnrichmentRecordRequest(BaseModel):
    """Request para registrar o resultado (ou a falha) do enriquecimento"""
    result: Optional[EnrichmentResult] = None
    error: Optional[str] = None
    autofill: bool = False


class EnrichmentRequestPayload(BaseModel):
    """Campos mínimos enviados ao serviço de enriquecimento"""
    id: int
    producer: str
    vintage: Optional[int] = None
    wine_name: Optional[str] = None
    region: Optional[str] = None
    country_code: Optional[str] = None
