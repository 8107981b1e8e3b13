from review_registry.api.routes import registry_router

__all__ = ["registry_router"]
