"""
Sugestões de IA (tasting notes, drink window, critic scores):
registro do resultado, aplicação campo a campo e descarte
"""
from sqlalchemy.orm import Session
from models.wine import Wine
from schemas.enrichment_schemas import EnrichmentResult
from services.errors import NotFoundError, ValidationError
from services.wine_service import WineService
from typing import Optional
import logging

logger = logging.getLogger(__name__)

SUGGESTION_FIELDS = ("tasting_notes", "drink_window", "critic_scores")


class EnrichmentService:
    """Aplica ou descarta sugestões pendentes em wine.ai_enrichment"""

    @staticmethod
    def build_enrichment_request(wine: Wine) -> dict:
        """Campos mínimos enviados ao serviço externo"""
        return {
            "id": wine.id,
            "producer": wine.producer,
            "vintage": wine.vintage,
            "wine_name": wine.wine_name,
            "region": wine.region,
            "country_code": wine.country_code,
        }

    @staticmethod
    def _suggestion_patch(field: str, suggestion) -> dict:
        """Converte uma sugestão nos campos reais do vinho"""
        if field == "tasting_notes":
            return {"notes": suggestion}
        if field == "drink_window":
            return {
                "drink_window_from": suggestion.get("from_year"),
                "drink_window_to": suggestion.get("to_year"),
                "drink_now": suggestion.get("drink_now"),
            }
        patch = {}
        if suggestion.get("wine_spectator") is not None:
            patch["score_wine_spectator"] = suggestion["wine_spectator"]
        if suggestion.get("james_suckling") is not None:
            patch["score_james_suckling"] = suggestion["james_suckling"]
        return patch

    @staticmethod
    def _without(enrichment: Optional[dict], field: str) -> Optional[dict]:
        """Remove só a chave aplicada; None se não sobrar sugestão"""
        if not enrichment:
            return None
        rest = {k: v for k, v in enrichment.items() if k != field}
        if not any(k in SUGGESTION_FIELDS for k in rest):
            return None
        return rest

    @staticmethod
    def _check_field(field: str):
        if field not in SUGGESTION_FIELDS:
            raise ValidationError({"field": f"field deve ser um de {', '.join(SUGGESTION_FIELDS)}"})

    @staticmethod
    def record_enrichment(
        db: Session,
        wine_id: int,
        result: Optional[EnrichmentResult],
        error: Optional[str] = None,
        autofill: bool = False
    ) -> Wine:
        """
        Registra o resultado do enriquecimento.
        Sem resultado (ou sem confidence) grava ai_last_error e limpa sugestões.
        Com autofill, cada sugestão só preenche campos reais vazios.
        """
        wine = WineService.get_wine(db, wine_id)

        if error or result is None or not result.confidence:
            message = f"Enrichment failed: {error}" if error else "No enrichment data returned"
            logger.warning("Enriquecimento do vinho %s sem dados: %s", wine_id, message)
            return WineService.update_wine(db, wine_id, {
                "ai_enrichment": None,
                "ai_confidence": None,
                "ai_last_error": message
            }, record_undo=False)

        enrichment = result.model_dump(exclude_none=True)
        patch = {}

        if autofill:
            for field in SUGGESTION_FIELDS:
                if field not in enrichment:
                    continue
                candidate = EnrichmentService._suggestion_patch(field, enrichment[field])
                empty = {k: v for k, v in candidate.items() if getattr(wine, k) is None}
                if empty and len(empty) == len(candidate):
                    patch.update(empty)
                    enrichment.pop(field)

        patch["ai_enrichment"] = enrichment if any(k in SUGGESTION_FIELDS for k in enrichment) else None
        patch["ai_confidence"] = result.confidence
        patch["ai_last_error"] = None

        logger.info("Enriquecimento registrado para o vinho %s (confidence=%.2f)", wine_id, result.confidence)
        return WineService.update_wine(db, wine_id, patch, record_undo=False)

    @staticmethod
    def apply_suggestion(db: Session, wine_id: int, field: str) -> Wine:
        """Copia a sugestão para os campos reais e remove só essa chave"""
        EnrichmentService._check_field(field)
        wine = WineService.get_wine(db, wine_id)

        enrichment = wine.ai_enrichment or {}
        if field not in enrichment:
            raise NotFoundError(f"Sugestão {field} do vinho", wine_id)

        patch = EnrichmentService._suggestion_patch(field, enrichment[field])
        patch["ai_enrichment"] = EnrichmentService._without(enrichment, field)

        logger.info("Sugestão %s aplicada no vinho %s", field, wine_id)
        return WineService.update_wine(db, wine_id, patch)

    @staticmethod
    def dismiss_suggestion(db: Session, wine_id: int, field: str) -> Wine:
        """Descarta a sugestão sem tocar nos campos reais"""
        EnrichmentService._check_field(field)
        wine = WineService.get_wine(db, wine_id)

        enrichment = wine.ai_enrichment or {}
        if field not in enrichment:
            raise NotFoundError(f"Sugestão {field} do vinho", wine_id)

        logger.info("Sugestão %s descartada no vinho %s", field, wine_id)
        return WineService.update_wine(db, wine_id, {
            "ai_enrichment": EnrichmentService._without(enrichment, field)
        })

    @staticmethod
    def dismiss_all(db: Session, wine_id: int) -> Wine:
        logger.info("Todas as sugestões descartadas no vinho %s", wine_id)
        return WineService.update_wine(db, wine_id, {
            "ai_enrichment": None,
            "ai_confidence": None
        })
