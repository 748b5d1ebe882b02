"""Batch result aggregation."""
from .merger import merge_batch_results

__all__ = ['merge_batch_results']
