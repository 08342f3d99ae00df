"""
ladderlens - Codec ladder pipeline viewer.

Step through records, watch ladders fall out stage by stage, share one view.
"""

from ladderlens.ladder import classify
from ladderlens.metrics import compute_metrics
from ladderlens.normalize import normalize_items
from ladderlens.pipeline import build_stages
from ladderlens.share import decode_token, encode_record
from ladderlens.stages import compute_removed

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "build_stages",
    "classify",
    "compute_metrics",
    "compute_removed",
    "decode_token",
    "encode_record",
    "normalize_items",
]
