from studio_passes.services.passes import PassIssuanceError, PassService

__all__ = ["PassIssuanceError", "PassService"]
