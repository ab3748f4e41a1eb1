from whofunds.api.routes.donors import router as donors_router
from whofunds.api.routes.politicians import router as politicians_router

__all__ = ["donors_router", "politicians_router"]
