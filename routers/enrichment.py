"""
Rotas para sugestões de IA de um vinho
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from models.database import get_db
from schemas.enrichment_schemas import EnrichmentRecordRequest, EnrichmentRequestPayload
from schemas.wine_schemas import WineResponse
from services.enrichment_service import EnrichmentService
from services.wine_service import WineService

router = APIRouter(prefix="/wines/{wine_id}/enrichment", tags=["enrichment"])


@router.get("/request", response_model=EnrichmentRequestPayload)
async def get_enrichment_request(wine_id: int, db: Session = Depends(get_db)):
    """
    Payload mínimo para o serviço externo de enriquecimento
    """
    wine = WineService.get_wine(db, wine_id)
    return EnrichmentService.build_enrichment_request(wine)


@router.post("", response_model=WineResponse)
async def record_enrichment(
    wine_id: int,
    request: EnrichmentRecordRequest,
    db: Session = Depends(get_db)
):
    """
    Registra o resultado (ou a falha) do enriquecimento
    """
    return EnrichmentService.record_enrichment(
        db, wine_id, request.result, error=request.error, autofill=request.autofill
    )


@router.delete("", response_model=WineResponse)
async def dismiss_all_suggestions(wine_id: int, db: Session = Depends(get_db)):
    return EnrichmentService.dismiss_all(db, wine_id)


@router.post("/{field}/apply", response_model=WineResponse)
async def apply_suggestion(wine_id: int, field: str, db: Session = Depends(get_db)):
    return EnrichmentService.apply_suggestion(db, wine_id, field)


@router.post("/{field}/dismiss", response_model=WineResponse)
async def dismiss_suggestion(wine_id: int, field: str, db: Session = Depends(get_db)):
    return EnrichmentService.dismiss_suggestion(db, wine_id, field)
