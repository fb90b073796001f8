"""Backend API clients."""

from .pipeline import PipelineClient

__all__ = ["PipelineClient"]
