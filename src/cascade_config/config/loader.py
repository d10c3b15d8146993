"""Config loader orchestrator - discovers, merges, and substitutes configs."""
import asyncio
import logging
import os
from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, List, Optional

from src.cascade_config.config.environment import (
    READ_CONFIG,
    Capabilities,
    resolve_environment_name,
    resolve_variables,
)
from src.cascade_config.config.locator import ConfigCandidate, ConfigLocator
from src.cascade_config.config.merger import ConfigMerger
from src.cascade_config.config.parsers import ConfigFileParser
from src.cascade_config.config.settings import LoaderSettings
from src.cascade_config.config.substitutor import EnvSubstitutor
from src.cascade_config.exceptions.config import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigPermissionError,
)
from src.cascade_config.utils.logging import log_context


logger = logging.getLogger(__name__)


class LoadState(Enum):
    """Stages of a configuration load, in order."""
    INIT = "init"
    PERMISSION_CHECK = "permission_check"
    ENV_RESOLUTION = "env_resolution"
    BASE_FILE_MERGE = "base_file_merge"
    SUBSTITUTION_FILE_MERGE = "substitution_file_merge"
    READY = "ready"


class ConfigLoader:
    """Orchestrates the configuration cascade.

    Pipeline:
    1. Check permission to read the config directory
    2. Resolve the active environment name
    3. Merge default, <env>, local and local-<env> files in order
    4. Resolve custom-environment-variables files against the environment
       and merge the result on top
    5. Ready

    Missing files and unparsable base files are skipped. Errors in a
    substitution map (bad descriptor values, illegal leaves) abort the load.

    Example:
        loader = ConfigLoader(env={"NODE_ENV": "production"})
        tree = await loader.load()
    """

    def __init__(
        self,
        env: Optional[Mapping] = None,
        capabilities: Optional[Capabilities] = None,
        settings: Optional[LoaderSettings] = None,
        environ: Optional[Mapping] = None,
    ):
        """Initialize config loader.

        Args:
            env: Override mapping, wins over the process environment
            capabilities: Permissions granted by the embedding application
            settings: Loader settings (default: from CASCADE_CONFIG_* variables)
            environ: Process environment (default: os.environ)
        """
        self.overrides = dict(env) if env is not None else None
        self.capabilities = capabilities or Capabilities()
        self.settings = settings or LoaderSettings()
        self.environ = os.environ if environ is None else environ

        self.locator = ConfigLocator(
            config_dir=self.settings.config_dir,
            extensions=self.settings.extensions,
            substitution_file_stem=self.settings.substitution_file_stem,
        )
        self.parser = ConfigFileParser()
        self.merger = ConfigMerger()
        self.substitutor = EnvSubstitutor(parser=self.parser)

        self.state = LoadState.INIT
        self.environment: Optional[str] = None
        self.loaded_files: List[str] = []
        self._tree: Dict[str, Any] = {}

        logger.debug(
            "ConfigLoader initialized",
            extra={
                "config_dir": self.settings.config_dir,
                "extensions": self.settings.extensions,
                "has_overrides": self.overrides is not None,
            },
        )

    def _transition(self, state: LoadState) -> None:
        logger.debug(
            f"Config load state: {self.state.value} -> {state.value}",
            extra={"from_state": self.state.value, "to_state": state.value},
        )
        self.state = state

    async def load(self) -> Dict[str, Any]:
        """Run the full load pipeline.

        Returns:
            The merged configuration tree

        Raises:
            SubstitutionParseError: A typed substitution variable failed to parse
            IllegalSubstitutionLeafError: A substitution map has an illegal leaf
        """
        async with log_context(operation_name="config_load", config_dir=self.settings.config_dir):
            self._transition(LoadState.PERMISSION_CHECK)
            if not await self._check_permission():
                self._transition(LoadState.READY)
                return self._tree

            self._transition(LoadState.ENV_RESOLUTION)
            self.environment = resolve_environment_name(
                overrides=self.overrides,
                capabilities=self.capabilities,
                env_name_variables=self.settings.env_name_variables,
                default=self.settings.default_environment,
                environ=self.environ,
            )

            self._transition(LoadState.BASE_FILE_MERGE)
            for candidate in self.locator.cascade_candidates(self.environment):
                content = await self._read_candidate(candidate)
                if content is not None:
                    self.merger.extend_deep(self._tree, content)
                    self.loaded_files.append(str(candidate.path))

            self._transition(LoadState.SUBSTITUTION_FILE_MERGE)
            await self._merge_substitutions()

            self._transition(LoadState.READY)

            logger.info(
                "Configuration loaded",
                extra={
                    "environment": self.environment,
                    "loaded_files": self.loaded_files,
                    "final_keys": len(self._tree),
                },
            )

        return self._tree

    async def _check_permission(self) -> bool:
        if self.capabilities.can_read_config:
            return True

        granted = False
        if self.capabilities.request is not None:
            granted = bool(await self.capabilities.request(READ_CONFIG))

        if not granted:
            error = ConfigPermissionError(config_dir=self.settings.config_dir)
            logger.warning(
                "Skipping configuration files: read permission denied",
                extra={"error_code": error.error_code, **error.details},
            )

        return granted

    async def _read_candidate(self, candidate: ConfigCandidate) -> Optional[Mapping]:
        """Read and parse one candidate, returning None when it must be skipped."""
        loop = asyncio.get_running_loop()

        try:
            content = await loop.run_in_executor(
                None, self.parser.load, candidate.path, candidate.format_name
            )
        except ConfigNotFoundError:
            logger.debug(
                f"Config file not available: {candidate.path}",
                extra={"path": str(candidate.path)},
            )
            return None
        except ConfigParseError as e:
            logger.warning(
                f"Skipping unparsable config file: {candidate.path}",
                extra={"path": str(candidate.path), "error": e.message, **e.details},
            )
            return None

        if content is None:
            return None

        if not isinstance(content, Mapping):
            logger.warning(
                f"Skipping config file without a top-level mapping: {candidate.path}",
                extra={"path": str(candidate.path), "type": type(content).__name__},
            )
            return None

        logger.info(
            f"Config file loaded: {candidate.path}",
            extra={"path": str(candidate.path), "keys": len(content)},
        )

        return content

    async def _merge_substitutions(self) -> None:
        variables = resolve_variables(
            overrides=self.overrides,
            capabilities=self.capabilities,
            environ=self.environ,
        )

        if variables is None:
            logger.debug("No variable source available, skipping substitution files")
            return

        for candidate in self.locator.substitution_candidates():
            substitution_map = await self._read_candidate(candidate)
            if substitution_map is None:
                continue

            substitutions = self.substitutor.substitute_deep(
                substitution_map,
                variables,
                source=str(candidate.path),
            )
            self.merger.extend_deep(self._tree, substitutions)
            self.loaded_files.append(str(candidate.path))


async def load_tree(
    env: Optional[Mapping] = None,
    capabilities: Optional[Capabilities] = None,
    settings: Optional[LoaderSettings] = None,
) -> Dict[str, Any]:
    """Convenience function returning the merged tree of a fresh loader."""
    loader = ConfigLoader(env=env, capabilities=capabilities, settings=settings)
    return await loader.load()
