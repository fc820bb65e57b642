"""Metric extraction exports."""

from .flow_node_metrics import FLOW_NODE_COLLECTIONS, FlowNodeMetrics, extract_flow_metrics
from .metadata_document import MetadataDocument

__all__ = [
    "FLOW_NODE_COLLECTIONS",
    "FlowNodeMetrics",
    "MetadataDocument",
    "extract_flow_metrics",
]
