"""Tests for package spec validation (fail-fast validator, rules, schema)."""

import copy

import pytest

from mcpspec.errors import (
    FieldTypeError,
    MissingEnvVarsError,
    MissingFieldError,
    MissingMethodFieldError,
    NodeModuleWithoutDockerError,
    NoInstallationMethodError,
    SchemaValidationError,
)
from mcpspec.spec.models import PackageSpec
from mcpspec.spec.rules import ApiEnvVarsRule
from mcpspec.spec.schema import get_schema
from mcpspec.spec.schema_validator import validate_schema
from mcpspec.spec.validator import validate_package_spec


def _make_valid_spec(**overrides) -> dict:
    """Build a minimal valid package spec dict."""
    data = {
        "id": "acme/files-server",
        "url": "https://github.com/acme/files-server",
        "name": "files-server",
        "description": "Serves local files",
        "installationMethods": {
            "nodeModule": {"npmPackage": "@acme/files-server"},
            "docker": {"image": "modelcontextprotocol/files-server"},
        },
    }
    data.update(overrides)
    return data


# --- Fail-fast validator ---


def test_valid_spec_returns_model():
    spec = validate_package_spec(_make_valid_spec())
    assert isinstance(spec, PackageSpec)
    assert spec.id == "acme/files-server"
    assert spec.installation_methods.node_module.npm_package == "@acme/files-server"
    assert spec.installation_methods.docker.image == "modelcontextprotocol/files-server"
    assert spec.installation_methods.python_module is None


@pytest.mark.parametrize("field_name", ["id", "url", "name", "installationMethods"])
def test_missing_required_field(field_name):
    data = _make_valid_spec()
    del data[field_name]
    with pytest.raises(MissingFieldError) as exc:
        validate_package_spec(data)
    assert exc.value.field_name == field_name
    assert field_name in str(exc.value)


def test_empty_required_field_counts_as_missing():
    with pytest.raises(MissingFieldError) as exc:
        validate_package_spec(_make_valid_spec(name=""))
    assert exc.value.field_name == "name"


def test_required_fields_checked_in_order():
    # Everything is wrong; id is reported first.
    with pytest.raises(MissingFieldError) as exc:
        validate_package_spec({"installationMethods": {"nodeModule": {}}})
    assert exc.value.field_name == "id"


def test_non_object_rejected():
    with pytest.raises(SchemaValidationError):
        validate_package_spec(["not", "a", "spec"])


def test_no_known_installation_method():
    data = _make_valid_spec(installationMethods={"snap": {"name": "x"}})
    with pytest.raises(NoInstallationMethodError):
        validate_package_spec(data)


@pytest.mark.parametrize(
    "overrides, where",
    [
        ({"name": 42}, ".name"),
        ({"aliases": "files"}, ".aliases"),
        ({"aliases": ["files", 7]}, ".aliases[1]"),
        ({"description": ["Serves", "files"]}, ".description"),
        ({"installationMethods": ["docker"]}, ".installationMethods"),
        ({"installationMethods": {"docker": "files-server"}}, ".installationMethods.docker"),
        (
            {"installationMethods": {"docker": {"image": "x", "envVars": ["ROOT"]}}},
            ".installationMethods.docker.envVars",
        ),
        (
            {"installationMethods": {"docker": {"image": "x", "envVars": {"ROOT": 1}}}},
            ".installationMethods.docker.envVars.ROOT",
        ),
    ],
)
def test_wrong_field_types_rejected(overrides, where):
    with pytest.raises(FieldTypeError) as exc:
        validate_package_spec(_make_valid_spec(**overrides))
    assert any(issue.startswith(where + ":") for issue in exc.value.issues)
    assert where in str(exc.value)


def test_type_check_runs_before_installation_rules():
    data = _make_valid_spec(name=42, installationMethods={"nodeModule": {"npmPackage": "x"}})
    with pytest.raises(FieldTypeError):
        validate_package_spec(data)


def test_null_optionals_treated_as_absent():
    data = _make_valid_spec(aliases=None, description=None)
    data["installationMethods"]["pythonModule"] = None
    data["installationMethods"]["docker"]["envVars"] = None
    spec = validate_package_spec(data)
    assert spec.aliases == []
    assert spec.installation_methods.python_module is None
    assert spec.installation_methods.docker.env_vars == {}


def test_node_module_requires_docker():
    data = _make_valid_spec(installationMethods={"nodeModule": {"npmPackage": "x"}})
    with pytest.raises(NodeModuleWithoutDockerError):
        validate_package_spec(data)


def test_node_module_without_docker_beats_missing_subfield():
    # npmPackage is also missing, but the pairing rule runs first.
    data = _make_valid_spec(installationMethods={"nodeModule": {"envVars": {"ROOT": "dir"}}})
    with pytest.raises(NodeModuleWithoutDockerError):
        validate_package_spec(data)


def test_python_only_spec_is_valid():
    data = _make_valid_spec(installationMethods={"pythonModule": {"pipPackage": "files-server"}})
    spec = validate_package_spec(data)
    assert spec.installation_methods.python_module.pip_package == "files-server"


@pytest.mark.parametrize(
    "methods, method, field_name",
    [
        ({"pythonModule": {"envVars": {}}}, "pythonModule", "pipPackage"),
        ({"docker": {"image": ""}}, "docker", "image"),
        ({"nodeModule": {"npmPackage": ""}, "docker": {"image": "x"}}, "nodeModule", "npmPackage"),
    ],
)
def test_missing_method_subfield(methods, method, field_name):
    data = _make_valid_spec(installationMethods=methods)
    with pytest.raises(MissingMethodFieldError) as exc:
        validate_package_spec(data)
    assert exc.value.method == method
    assert exc.value.field_name == field_name


def test_weather_name_requires_docker_env_vars():
    data = _make_valid_spec(
        name="Weather Server",
        description="",
        installationMethods={"docker": {"image": "acme/weather", "envVars": {}}},
    )
    with pytest.raises(MissingEnvVarsError) as exc:
        validate_package_spec(data)
    assert exc.value.method == "docker"


def test_api_term_in_description_requires_node_env_vars_first():
    data = _make_valid_spec(description="Wraps the Brave Search API")
    with pytest.raises(MissingEnvVarsError) as exc:
        validate_package_spec(data)
    assert exc.value.method == "nodeModule"


def test_api_like_spec_with_env_vars_passes():
    env = {"API_KEY": "Your API key"}
    data = _make_valid_spec(
        name="weather-tool",
        installationMethods={
            "nodeModule": {"npmPackage": "weather-tool", "envVars": env},
            "docker": {"image": "modelcontextprotocol/weather-tool", "envVars": env},
        },
    )
    spec = validate_package_spec(data)
    assert spec.installation_methods.docker.env_vars == env


def test_api_rule_ignores_python_module():
    data = _make_valid_spec(
        name="chat-bridge",
        installationMethods={"pythonModule": {"pipPackage": "chat-bridge"}},
    )
    assert validate_package_spec(data).name == "chat-bridge"


def test_rules_can_be_disabled():
    data = _make_valid_spec(name="weather", description="")
    with pytest.raises(MissingEnvVarsError):
        validate_package_spec(data)
    spec = validate_package_spec(data, rules=[ApiEnvVarsRule(enabled=False)])
    assert spec.name == "weather"


# --- ApiEnvVarsRule ---


def test_rule_matches_case_insensitively():
    rule = ApiEnvVarsRule()
    assert rule.applies_to({"name": "Google MAPS"})
    assert rule.applies_to({"name": "x", "description": "OAuth helper"})
    assert not rule.applies_to({"name": "filesystem", "description": "Local files"})


def test_rule_custom_terms():
    rule = ApiEnvVarsRule(terms=frozenset({"stripe"}))
    assert rule.applies_to({"name": "stripe-payments"})
    assert not rule.applies_to({"name": "weather"})


# --- Models ---


def test_to_dict_drops_empty_optionals():
    spec = validate_package_spec(_make_valid_spec(description=""))
    data = spec.to_dict()
    assert "aliases" not in data
    assert "description" not in data
    assert "envVars" not in data["installationMethods"]["docker"]
    assert list(data) == ["id", "url", "name", "installationMethods"]


def test_to_dict_preserves_wire_names():
    original = _make_valid_spec(aliases=["files"])
    original["installationMethods"]["docker"]["envVars"] = {"ROOT": "Served directory"}
    data = PackageSpec.from_dict(copy.deepcopy(original)).to_dict()
    assert data == original


# --- Schema ---


def test_schema_exists():
    schema = get_schema()
    assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"
    assert set(schema["required"]) == {"id", "url", "name", "installationMethods"}


def test_schema_valid_spec():
    issues = validate_schema(_make_valid_spec())
    assert issues == [], f"Valid spec should have no issues: {issues}"


def test_schema_collects_all_issues():
    data = _make_valid_spec(aliases="files")
    del data["url"]
    data["installationMethods"]["docker"]["envVars"] = {"TOKEN": 42}
    issues = validate_schema(data)
    assert any("'url'" in i for i in issues)
    assert any(".aliases" in i for i in issues)
    assert any(".envVars.TOKEN" in i for i in issues)


def test_schema_rejects_empty_image():
    data = _make_valid_spec()
    data["installationMethods"]["docker"]["image"] = ""
    issues = validate_schema(data)
    assert any("too short" in i for i in issues)


def test_schema_types_only_skips_presence_checks():
    data = _make_valid_spec(name="", aliases="files")
    del data["url"]
    data["installationMethods"]["docker"] = {}
    issues = validate_schema(data, types_only=True)
    assert issues == [".aliases: expected type 'array', got str"]


def test_from_dict_keeps_string_alias_whole():
    spec = PackageSpec.from_dict(_make_valid_spec(aliases="files"))
    assert spec.aliases == ["files"]
