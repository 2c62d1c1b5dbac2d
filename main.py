"""
Aplicação principal FastAPI para gestão da adega de vinhos
"""
from fastapi import FastAPI, Request, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import func
import os
import logging
from dotenv import load_dotenv
from models.database import get_db, init_db, HOUSEHOLD_ID
from models.wine import Wine, WineStatus
from routers import layouts_router, cellar_router, wines_router, enrichment_router
from schemas.cellar_schemas import MovementResponse
from services.errors import CellarError
from services.layout_service import LayoutService
from services.placement_service import PlacementService

load_dotenv()

# Configurar logging a partir do ambiente
logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Criar diretório storage se não existir
os.makedirs("storage", exist_ok=True)

# Criar app FastAPI
app = FastAPI(title="Adega de Vinhos", description="Gestão de garrafas, slots e adegas")

app.include_router(layouts_router)
app.include_router(cellar_router)
app.include_router(wines_router)
app.include_router(enrichment_router)


@app.exception_handler(CellarError)
async def cellar_error_handler(request: Request, exc: CellarError):
    """Converte erros de domínio em JSON {"error": {...}}"""
    if exc.status_code >= 500:
        logger.error("%s %s -> %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.on_event("startup")
async def startup_event():
    """Inicializar banco de dados na startup"""
    init_db()
    logger.info("Banco inicializado (household=%s)", HOUSEHOLD_ID)


@app.get("/")
async def dashboard(db: Session = Depends(get_db)):
    """Resumo: adegas, garrafas na adega, sem slot e últimos movimentos"""
    layouts = LayoutService.list_all(db)

    wines_cellared = db.query(func.count(Wine.id)).filter(
        Wine.household_id == HOUSEHOLD_ID,
        Wine.status == WineStatus.CELLARED
    ).scalar() or 0

    unassigned = PlacementService.list_unassigned_wines(db)
    recent_movements = PlacementService.list_recent_movements(db, 10)

    return {
        "layouts": [{"id": l.id, "name": l.name, "shelves": l.shelves, "columns": l.columns} for l in layouts],
        "wines_cellared": wines_cellared,
        "wines_unassigned": len(unassigned),
        "recent_movements": [MovementResponse.model_validate(m).model_dump(mode="json") for m in recent_movements]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
