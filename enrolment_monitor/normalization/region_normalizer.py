# ==============================================
# RegionNormalizer
# ==============================================
#
# PURPOSE:
#   Map free-text state names onto one canonical vocabulary
#   so that the same state is aggregated under one name.
#
# WHY THIS CLASS EXISTS:
#   Uploads spell the same state differently across rows:
#     - "Orissa", "ODISHA", "odisha"
#     - "Jammu & Kashmir", "Jammu and Kashmir", "J&K"
#   Without a lookup the engine builds separate summaries for each
#   spelling and the per-state percentile is computed on partial data.
#
# CLASS: RegionNormalizer
# -----------------------
#   Takes the vocabulary as constructor arguments so callers can
#   substitute their own canonical names and aliases.
#
#   Methods:
#   --------
#   - normalize(name: str) -> str
#       Canonical name, or the input unchanged when unknown.
#
#   - is_canonical(name: str) -> bool
#
#   - get_mappings() / reset_mappings()
#       Raw names seen in the current upload and what they resolved to.
#
#   - lookup_key(name: str) -> str  (staticmethod)
#       Case-folded, "&" → "and", punctuation dropped, spaces collapsed.
#
# RULES:
# ------
#   1. Canonical names match themselves     (PUNJAB → Punjab)
#   2. Aliases map to their canonical name  (Orissa → Odisha)
#   3. Unknown names pass through untouched ("  Atlantis " → "  Atlantis ")
#   4. Missing name → ""
#
# ==============================================

import re
from typing import Dict, Iterable, Mapping, Optional

from .regions import ALL_STATES, STATE_ALIASES


class RegionNormalizer:
    """
    Resolves raw state names against a canonical vocabulary.
    Maintains a mapping of raw names seen to their resolved form.
    """

    def __init__(
        self,
        canonical_names: Optional[Iterable[str]] = None,
        aliases: Optional[Mapping[str, str]] = None
    ):
        """
        Build the lookup table.

        Args:
            canonical_names: Canonical region names (default: Indian states and UTs)
            aliases: Alternative spelling -> canonical name (default: common misspellings)
        """
        if canonical_names is None:
            canonical_names = ALL_STATES
        if aliases is None:
            aliases = STATE_ALIASES

        self._canonical = set(canonical_names)
        self._lookup: Dict[str, str] = {}
        for name in self._canonical:
            self._lookup[self.lookup_key(name)] = name
        for alias, canonical in aliases.items():
            self._lookup[self.lookup_key(alias)] = canonical

        # Raw name -> resolved name for the current upload; cleared by reset_mappings()
        self._mappings: Dict[str, str] = {}

    def normalize(self, name: Optional[str]) -> str:
        """
        Resolve a raw state name.

        Args:
            name: Raw state name from an upload row

        Returns:
            The canonical name, or ``name`` unchanged when the table has no entry
        """
        if not name:
            return ""

        if name in self._mappings:
            return self._mappings[name]

        resolved = self._lookup.get(self.lookup_key(name), name)
        self._mappings[name] = resolved
        return resolved

    def is_canonical(self, name: str) -> bool:
        return name in self._canonical

    def get_mappings(self) -> Dict[str, str]:
        """
        Get every raw name seen since the last reset and what it resolved to.

        Returns:
            Dictionary mapping raw names to resolved names
        """
        return self._mappings.copy()

    def reset_mappings(self) -> None:
        """Forget the names seen so far (called at the start of each upload)."""
        self._mappings = {}

    @staticmethod
    def lookup_key(name: str) -> str:
        key = name.casefold().replace("&", " and ")
        key = re.sub(r"[^a-z0-9 ]+", " ", key)
        key = re.sub(r"\s+", " ", key)
        return key.strip()
