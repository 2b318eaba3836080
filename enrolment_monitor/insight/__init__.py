# ==============================================
# TOPIC 3: INSIGHT
# ==============================================
#
# Narrative explanation of one flagged risk day, fetched from an
# external text service with a fixed fallback.
#
# Modules:
# --------
# - client.py → InsightData, InsightClient, fallback_insight()
#
# ==============================================

from .client import InsightClient, InsightData, fallback_insight

__all__ = ["InsightClient", "InsightData", "fallback_insight"]
