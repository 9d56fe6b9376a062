"""
Trace Module.

Per-request trace context for search stages.
"""

from hava_search.core.trace.trace_context import TraceContext

__all__ = ["TraceContext"]
