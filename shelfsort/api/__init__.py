from shelfsort.api.collection import router as collection_router
from shelfsort.api.filters import router as filters_router
from shelfsort.api.health import router as health_router

__all__ = [
    "collection_router",
    "filters_router",
    "health_router",
]
