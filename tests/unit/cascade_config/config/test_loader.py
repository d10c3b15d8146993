"""Unit tests for ConfigLoader."""
import pytest

from src.cascade_config.config.environment import Capabilities
from src.cascade_config.config.loader import ConfigLoader, LoadState
from src.cascade_config.config.settings import LoaderSettings
from src.cascade_config.exceptions.config import (
    IllegalSubstitutionLeafError,
    SubstitutionParseError,
)


@pytest.mark.asyncio
async def test_load_without_files_is_empty(settings):
    """Should reach READY with an empty tree when no files exist."""
    loader = ConfigLoader(settings=settings, environ={})

    tree = await loader.load()

    assert tree == {}
    assert loader.state is LoadState.READY
    assert loader.environment == "development"
    assert loader.loaded_files == []


@pytest.mark.asyncio
async def test_load_environment_file_overrides_default(settings, write_config):
    """Should let <env>.json override default.json."""
    write_config("default.json", {"port": 3000, "db": {"host": "localhost", "pool": 5}})
    write_config("production.json", {"port": 8080, "db": {"host": "prod-db"}})

    tree = await ConfigLoader(settings=settings, environ={"NODE_ENV": "production"}).load()

    assert tree == {"port": 8080, "db": {"host": "prod-db", "pool": 5}}


@pytest.mark.asyncio
async def test_load_full_cascade_order(settings, write_config):
    """Should merge default, env, local and local-env in that order, json before json5."""
    write_config("default.json", {"layer": "default.json", "a": 1})
    write_config("default.json5", "{layer: 'default.json5', b: 2}")
    write_config("staging.json", {"layer": "staging.json", "c": 3})
    write_config("local.json5", "{layer: 'local.json5', d: 4}")
    write_config("local-staging.json", {"layer": "local-staging.json"})
    write_config("local-production.json", {"layer": "wrong environment"})

    loader = ConfigLoader(env={"NODE_CONFIG_ENV": "staging"}, settings=settings, environ={})
    tree = await loader.load()

    assert tree == {"layer": "local-staging.json", "a": 1, "b": 2, "c": 3, "d": 4}
    assert [path.rsplit("/", 1)[-1] for path in loader.loaded_files] == [
        "default.json",
        "default.json5",
        "staging.json",
        "local.json5",
        "local-staging.json",
    ]


@pytest.mark.asyncio
async def test_load_skips_unparsable_base_file(settings, write_config):
    """Should silently skip malformed base files and keep going."""
    write_config("default.json", {"port": 3000})
    write_config("development.json", "{ this is not json")
    write_config("local.json", {"debug": True})

    tree = await ConfigLoader(settings=settings, environ={}).load()

    assert tree == {"port": 3000, "debug": True}


@pytest.mark.asyncio
async def test_load_skips_base_file_with_invalid_utf8(settings, config_dir, write_config):
    """Should skip a base file that is not valid UTF-8 and keep the other layers."""
    write_config("default.json", {"port": 3000})
    (config_dir / "development.json").write_bytes(b'{"port": "\xff\xfe"}')
    write_config("local.json", {"debug": True})

    loader = ConfigLoader(settings=settings, environ={})
    tree = await loader.load()

    assert tree == {"port": 3000, "debug": True}
    assert loader.state is LoadState.READY


@pytest.mark.asyncio
async def test_load_skips_non_mapping_documents(settings, write_config):
    """Should ignore files whose top level is not a mapping."""
    write_config("default.json", [1, 2, 3])
    write_config("local.json", {"ok": True})

    tree = await ConfigLoader(settings=settings, environ={}).load()

    assert tree == {"ok": True}


@pytest.mark.asyncio
async def test_load_applies_substitutions_last(settings, write_config):
    """Should overlay substituted variables on top of every file."""
    write_config("default.json", {"db": {"host": "localhost", "user": "app"}})
    write_config("local.json", {"db": {"host": "local-db"}})
    write_config("custom-environment-variables.json", {"db": {"host": "DB_HOST", "pass": "DB_PASS"}})

    tree = await ConfigLoader(
        settings=settings,
        environ={"DB_HOST": "env-db", "DB_PASS": "secret"},
    ).load()

    assert tree == {"db": {"host": "env-db", "user": "app", "pass": "secret"}}


@pytest.mark.asyncio
async def test_load_override_mapping_wins_for_substitution(settings, write_config):
    """Should prefer the override mapping over the process environment."""
    write_config("custom-environment-variables.json5", "{db: {pass: 'DB_PASS'}}")

    tree = await ConfigLoader(
        env={"DB_PASS": "from-override"},
        settings=settings,
        environ={"DB_PASS": "from-environ"},
    ).load()

    assert tree == {"db": {"pass": "from-override"}}


@pytest.mark.asyncio
async def test_load_typed_substitution(settings, write_config):
    """Should parse descriptor variables and merge the structure."""
    write_config("default.json", {"features": {"alpha": False, "beta": False}})
    write_config(
        "custom-environment-variables.json",
        {"features": {"__name": "FEATURES", "__format": "json5"}},
    )

    tree = await ConfigLoader(settings=settings, environ={"FEATURES": "{beta: true}"}).load()

    assert tree == {"features": {"alpha": False, "beta": True}}


@pytest.mark.asyncio
async def test_load_substitution_parse_error_is_fatal(settings, write_config):
    """Should propagate descriptor parse failures, unlike base file failures."""
    write_config(
        "custom-environment-variables.json",
        {"opts": {"__name": "OPTS", "__format": "json"}},
    )

    loader = ConfigLoader(settings=settings, environ={"OPTS": "{broken"})

    with pytest.raises(SubstitutionParseError, match="OPTS"):
        await loader.load()

    assert loader.state is LoadState.SUBSTITUTION_FILE_MERGE


@pytest.mark.asyncio
async def test_load_illegal_substitution_leaf_is_fatal(settings, write_config):
    """Should propagate illegal leaf types in a substitution map."""
    write_config("custom-environment-variables.json", {"server": {"port": 8080}})

    with pytest.raises(IllegalSubstitutionLeafError, match="server.port"):
        await ConfigLoader(settings=settings, environ={}).load()


@pytest.mark.asyncio
async def test_load_unparsable_substitution_file_is_skipped(settings, write_config):
    """Should skip a substitution file that is not valid text."""
    write_config("default.json", {"a": 1})
    write_config("custom-environment-variables.json", "{ nope")

    tree = await ConfigLoader(settings=settings, environ={}).load()

    assert tree == {"a": 1}


@pytest.mark.asyncio
async def test_load_permission_denied_skips_files(settings, write_config):
    """Should reach READY with an empty tree when config reads are denied."""
    write_config("default.json", {"port": 3000})

    loader = ConfigLoader(
        env={"NODE_ENV": "production"},
        capabilities=Capabilities(can_read_config=False),
        settings=settings,
        environ={},
    )
    tree = await loader.load()

    assert tree == {}
    assert loader.state is LoadState.READY
    assert loader.environment is None


@pytest.mark.asyncio
async def test_load_permission_requested_once(settings, write_config):
    """Should ask the request callback before giving up."""
    write_config("default.json", {"port": 3000})
    requests = []

    async def grant(capability):
        requests.append(capability)
        return True

    tree = await ConfigLoader(
        capabilities=Capabilities(can_read_config=False, request=grant),
        settings=settings,
        environ={},
    ).load()

    assert tree == {"port": 3000}
    assert requests == ["read:config"]


@pytest.mark.asyncio
async def test_load_permission_request_refused(settings, write_config):
    """Should skip files when the request callback refuses."""
    write_config("default.json", {"port": 3000})

    async def refuse(capability):
        return False

    tree = await ConfigLoader(
        capabilities=Capabilities(can_read_config=False, request=refuse),
        settings=settings,
        environ={},
    ).load()

    assert tree == {}


@pytest.mark.asyncio
async def test_load_without_any_variable_source_skips_substitution(settings, write_config):
    """Should not touch the substitution file when no variables are available."""
    write_config("default.json", {"a": 1})
    write_config("custom-environment-variables.json", {"b": 2})

    tree = await ConfigLoader(
        capabilities=Capabilities(can_read_env=False),
        settings=settings,
        environ={"NODE_ENV": "production"},
    ).load()

    assert tree == {"a": 1}


@pytest.mark.asyncio
async def test_load_yaml_extension_when_configured(config_dir, write_config):
    """Should pick up yaml files when the extension is enabled."""
    write_config("default.json", {"a": 1, "b": 1})
    write_config("default.yaml", "b: 2\nc: 3\n")

    settings = LoaderSettings(config_dir=str(config_dir), extensions=["json", "yaml"])
    tree = await ConfigLoader(settings=settings, environ={}).load()

    assert tree == {"a": 1, "b": 2, "c": 3}
