from .leads import router as leads_router

__all__ = ["leads_router"]
