"""Community detection and cluster splitting.

Detects communities inside each connected component with divisive
edge-betweenness clustering, cuts the edges between them and keeps the
resulting clusters that are large enough to interpret.
"""

from .divisive import CommunityPartition, divisive_communities
from .splitter import SplitResult, split_communities

__all__ = ["CommunityPartition", "divisive_communities", "split_communities", "SplitResult"]
