"""Config file locator for the configuration cascade."""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence


logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ("json", "json5")
SUBSTITUTION_FILE_STEM = "custom-environment-variables"


@dataclass(frozen=True)
class ConfigCandidate:
    """A config file that may or may not exist."""
    path: Path
    format_name: str

    @property
    def file_name(self) -> str:
        return self.path.name


class ConfigLocator:
    """Lists candidate configuration files in cascade order.

    Cascade order for environment ``production`` with default extensions:
    1. config/default.json, config/default.json5
    2. config/production.json, config/production.json5
    3. config/local.json, config/local.json5
    4. config/local-production.json, config/local-production.json5

    Later candidates override earlier ones when merged.
    """

    def __init__(
        self,
        config_dir: Optional[str] = None,
        extensions: Optional[Sequence[str]] = None,
        substitution_file_stem: str = SUBSTITUTION_FILE_STEM,
    ):
        """Initialize config locator.

        Args:
            config_dir: Path to config directory (default: ./config)
            extensions: File extensions to try for each base name, in order
            substitution_file_stem: Base name of the substitution map file
        """
        self.config_dir = Path(config_dir or "config")
        self.extensions = list(extensions or DEFAULT_EXTENSIONS)
        self.substitution_file_stem = substitution_file_stem

        logger.debug(
            "ConfigLocator initialized",
            extra={"config_dir": str(self.config_dir), "extensions": self.extensions},
        )

    def base_names(self, environment: str) -> List[str]:
        """Return base file names for ``environment`` in override order."""
        return ["default", environment, "local", f"local-{environment}"]

    def _candidates(self, base_names: Sequence[str]) -> List[ConfigCandidate]:
        return [
            ConfigCandidate(path=self.config_dir / f"{base_name}.{ext}", format_name=ext)
            for base_name in base_names
            for ext in self.extensions
        ]

    def cascade_candidates(self, environment: str) -> List[ConfigCandidate]:
        """Return every base/environment/local file to try, in merge order.

        Args:
            environment: Active environment name (e.g. "production")

        Returns:
            Candidates as the cross product of base names and extensions
        """
        candidates = self._candidates(self.base_names(environment))

        logger.debug(
            f"Cascade candidates for environment {environment}",
            extra={"environment": environment, "candidates": [c.file_name for c in candidates]},
        )

        return candidates

    def substitution_candidates(self) -> List[ConfigCandidate]:
        """Return the substitution map files to try, one per extension."""
        return self._candidates([self.substitution_file_stem])
