"""Sequential pipeline execution."""

from __future__ import annotations

from seqflow.pipeline.context import PipelineRun
from seqflow.pipeline.executor import PipelineExecutor
from seqflow.pipeline.factory import create_executor, create_pipeline

__all__ = ["PipelineExecutor", "PipelineRun", "create_executor", "create_pipeline"]
