from __future__ import annotations

import logging

from .store import AssessmentStore

logger = logging.getLogger(__name__)


def purge_synthetic_batch(store: AssessmentStore, prefix: str = "demo_") -> int:
	# Live quiz rows use a different session prefix and are left alone
	removed = store.delete_by_prefix(prefix)
	logger.info("Removed %d synthetic rows (prefix %r)", removed, prefix)
	return removed
