"""
Snapshot recording and squashing.

:class:`SnapshotRecorder` creates the auto-commits and
:class:`HistoryCollapser` folds them back into one commit.
"""

from .collapser import HistoryCollapser  # noqa: F401
from .recorder import SnapshotRecorder  # noqa: F401
