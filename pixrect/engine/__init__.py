"""pixrect partition engine.

Importing this package registers every stage with the global registry.
"""

from pixrect.engine.registry import stage, Phase, get_registry
from pixrect.engine.context import PartitionContext, Rectangle
from pixrect.engine.pipeline import Pipeline

import pixrect.engine.corners  # noqa: F401  (S0.01)
import pixrect.engine.diagonals  # noqa: F401  (S1.01)
import pixrect.engine.matching  # noqa: F401  (S2.01)
import pixrect.engine.cuts  # noqa: F401  (S3.01, S3.02)
import pixrect.engine.tracer  # noqa: F401  (S4.01)

__all__ = [
    "stage",
    "Phase",
    "get_registry",
    "PartitionContext",
    "Rectangle",
    "Pipeline",
]
