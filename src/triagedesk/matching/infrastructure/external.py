"""
Matching Rules File Integration
===============================

Loads MatchingRules overrides from YAML and hot-reloads them with watchdog.
"""

import threading
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from triagedesk.core import ConfigurationException
from triagedesk.matching.application import IMatchingRulesProvider
from triagedesk.matching.domain import MatchingRules
from triagedesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class RulesFileHandler(FileSystemEventHandler):
    """Watchdog event handler for matching rules file changes."""

    def __init__(self, rules_manager: "MatchingRulesManager", rules_path: Path):
        self.rules_manager = rules_manager
        self.rules_path = rules_path
        super().__init__()

    def on_modified(self, event):
        if event.is_directory:
            return
        if Path(event.src_path).resolve() == self.rules_path.resolve():
            logger.info(f"Matching rules file changed: {event.src_path}")
            self.rules_manager.reload()


class MatchingRulesManager(IMatchingRulesProvider):
    """
    Thread-safe matching rules manager with hot-reload support.

    A missing file means default rules. A broken file on reload keeps the
    previous rules.
    """

    def __init__(self):
        self._rules: Optional[MatchingRules] = None
        self._lock = threading.Lock()
        self._path: Optional[Path] = None
        self._observer = None

    def load(self, path: Path) -> MatchingRules:
        """
        Initial rules load.

        Raises:
            ConfigurationException: file exists but is invalid
        """
        self._path = path
        rules = self._load_from_file(path)
        with self._lock:
            self._rules = rules
        return rules

    @staticmethod
    def _load_from_file(path: Path) -> MatchingRules:
        if not path.exists():
            logger.info(f"Matching rules file not found: {path}, using defaults")
            return MatchingRules()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return MatchingRules(**data)
        except (yaml.YAMLError, ValidationError, TypeError) as e:
            raise ConfigurationException(
                f"Invalid matching rules file {path}: {e}",
                {"path": str(path)}
            ) from e

    def reload(self) -> bool:
        """Reload rules from file."""
        if self._path is None:
            return False

        try:
            new_rules = self._load_from_file(self._path)
        except ConfigurationException as e:
            logger.error(f"Failed to reload matching rules: {e.message}")
            return False

        with self._lock:
            self._rules = new_rules
        logger.info("Matching rules reloaded successfully")
        return True

    def start_watching(self) -> None:
        """
        Start watching the rules file for changes.

        Skipped when the file doesn't exist.
        """
        if self._path is None:
            raise RuntimeError("Rules not loaded. Call load() first.")

        if not self._path.exists():
            logger.info(f"Matching rules file doesn't exist, skipping file watch: {self._path}")
            return

        try:
            self._observer = Observer()
            handler = RulesFileHandler(self, self._path)
            self._observer.schedule(handler, str(self._path.resolve().parent), recursive=False)
            self._observer.start()
            logger.info(f"Started watching matching rules file: {self._path}")
        except OSError as e:
            logger.warning(f"File watching not available, using static rules: {e}")
            self._observer = None

    def stop_watching(self) -> None:
        """Stop watching the rules file (safe to call even if not watching)."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None

    def get_rules(self) -> MatchingRules:
        with self._lock:
            if self._rules is None:
                raise RuntimeError("Matching rules not loaded")
            return self._rules

    @property
    def is_watching(self) -> bool:
        return self._observer is not None
