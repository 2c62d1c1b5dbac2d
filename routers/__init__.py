from .layouts import router as layouts_router
from .cellar import router as cellar_router
from .wines import router as wines_router
from .enrichment import router as enrichment_router

__all__ = ["layouts_router", "cellar_router", "wines_router", "enrichment_router"]
