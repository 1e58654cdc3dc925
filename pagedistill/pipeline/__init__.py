"""Pipeline architecture for per-file conversion."""

from .base import ConvertPipeline, EventEmitter, PageContext, PipelineStep

__all__ = ["ConvertPipeline", "EventEmitter", "PageContext", "PipelineStep"]
