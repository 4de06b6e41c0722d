"""
Persistent storage of named gesture patterns.
"""

import json
import logging
import os
from typing import Dict, List, Optional, Tuple

from ..config.settings import GestureConfig
from ..gestures.pattern import Pattern

logger = logging.getLogger(__name__)


class PatternStore:
    """
    JSON file backed store of patterns keyed by name.

    The file holds ``{name: [segment records]}`` in insertion order and is
    rewritten after every change.
    """

    def __init__(self, data_file: str = GestureConfig.PATTERN_STORE_FILE):
        self.data_file = data_file
        self.patterns: Dict[str, Pattern] = {}
        self._load_patterns()

    def _load_patterns(self):
        """Load stored patterns from file if it exists, skipping unreadable entries."""
        if not os.path.exists(self.data_file):
            return

        try:
            with open(self.data_file, 'r') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read pattern store %s: %s", self.data_file, e)
            return

        if not isinstance(data, dict):
            logger.warning("Pattern store %s does not hold a name mapping", self.data_file)
            return

        for name, records in data.items():
            try:
                self.patterns[name] = Pattern.from_records(records)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping stored pattern '%s': %r", name, e)

        logger.info("Loaded %d patterns from %s", len(self.patterns), self.data_file)

    def _save_patterns(self):
        """Save all patterns to file."""
        data = {name: pattern.to_records() for name, pattern in self.patterns.items()}
        directory = os.path.dirname(self.data_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.data_file, 'w') as f:
            json.dump(data, f, indent=2)

    def save_pattern(self, name: str, pattern: Pattern) -> bool:
        """Store a new pattern. Returns False if the name is already taken."""
        if name in self.patterns:
            return False
        self.patterns[name] = pattern
        self._save_patterns()
        return True

    def get_pattern(self, name: str) -> Optional[Pattern]:
        return self.patterns.get(name)

    def get_all_patterns(self) -> List[Tuple[str, Pattern]]:
        return list(self.patterns.items())

    def update_pattern(self, name: str, pattern: Pattern) -> bool:
        if name not in self.patterns:
            return False
        self.patterns[name] = pattern
        self._save_patterns()
        return True

    def delete_pattern(self, name: str) -> bool:
        if name not in self.patterns:
            return False
        del self.patterns[name]
        self._save_patterns()
        return True

    def names(self) -> List[str]:
        return list(self.patterns)

    def __len__(self):
        return len(self.patterns)

    def __contains__(self, name):
        return name in self.patterns
