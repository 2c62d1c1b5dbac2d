from .layout_schemas import LayoutCreate, LayoutUpdate, LayoutResponse, ActiveLayoutRequest
from .cellar_schemas import (
    WineSummary, CellarSlotResponse, PlacedWine, OccupancySlot, FridgeOccupancy,
    AssignRequest, MoveRequest, RemoveResponse, MovementResponse
)
from .wine_schemas import WineCreate, WineUpdate, WineResponse, MarkDrunkRequest, UndoChangeResponse, UndoResult
from .enrichment_schemas import EnrichmentResult, EnrichmentRecordRequest, EnrichmentRequestPayload
