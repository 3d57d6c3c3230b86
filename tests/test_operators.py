import kopf
import pytest

import src.api_key.operator as api_key_operator
import src.ksqldb_cluster.operator as ksqldb_operator
import src.schema_registry.operator as schema_registry_operator
import src.schema_registry_lookup.operator as lookup_operator
from src.confluent.handlers import declared_changes

REGISTRY_SPEC = {
    "environment_id": "env-18vqv",
    "kafka_cluster_id": "lkc-415jz",
    "service_provider": "aws",
    "location": "us-east-2",
}

REGISTRY = {"id": "lsrc-o338zj", "name": "account schema-registry"}


@pytest.fixture(autouse=True)
def wired(monkeypatch, injector):
    for module in (api_key_operator, ksqldb_operator, schema_registry_operator, lookup_operator):
        monkeypatch.setattr(module, "injector", injector)


def test_api_key_create_patches_identity_and_secret(transport, custom_resource):
    transport.reply(200, {"api_key": {"key": "KEY1", "secret": "SECRET1"}, "error": None})
    spec = {"environment_id": "env-1", "owner_id": "sa-1", "resource_id": "lkc-1"}

    result = api_key_operator.create_fn(spec=spec, name="orders", namespace="kafka")

    assert result == {"status": "created", "id": "KEY1"}
    assert custom_resource.lookups == [("ConfluentApiKey.ccloud.ops.io", "orders", "kafka")]
    assert custom_resource.patches == [{"spec": {"id": "KEY1", "key": "KEY1", "secret": "SECRET1"}}]


def test_api_key_create_skips_existing_identity(transport, custom_resource):
    spec = {"environment_id": "env-1", "owner_id": "sa-1", "resource_id": "lkc-1", "id": "KEY1"}

    result = api_key_operator.create_fn(spec=spec, name="orders", namespace="kafka")

    assert result["status"] == "exists"
    assert transport.calls == []
    assert custom_resource.patches == []


def test_ksqldb_create_transport_failure_leaves_resource_untouched(transport, custom_resource):
    transport.reply(500, text="internal error")
    spec = {
        "name": "orders-ksql",
        "kafka_id": "lkc-1",
        "kafka_api_key": "K",
        "kafka_api_secret": "S",
        "environment_id": "env-1",
    }

    with pytest.raises(kopf.TemporaryError):
        ksqldb_operator.create_cluster(spec=spec, name="orders", namespace="kafka")

    assert custom_resource.patches == []


def test_schema_registry_logical_error_is_permanent(transport, custom_resource):
    transport.reply(200, {"cluster": REGISTRY, "error": "quota exceeded"})

    with pytest.raises(kopf.PermanentError):
        schema_registry_operator.create_registry(spec=REGISTRY_SPEC, name="registry", namespace="kafka")

    assert custom_resource.patches == []


def test_schema_registry_create(transport, custom_resource):
    transport.reply(200, {"cluster": REGISTRY, "error": None})

    result = schema_registry_operator.create_registry(spec=REGISTRY_SPEC, name="registry", namespace="kafka")

    assert result == {"status": "created", "id": "lsrc-o338zj"}
    assert custom_resource.patches == [{"spec": {"id": "lsrc-o338zj", "name": "account schema-registry"}}]


def test_schema_registry_import_reads_name(transport, custom_resource):
    transport.reply(200, {"cluster": {"id": "lsrc-123", "name": "account schema-registry"}, "error": ""})
    spec = dict(REGISTRY_SPEC, import_id="env-abc/lsrc-123")

    result = schema_registry_operator.create_registry(spec=spec, name="registry", namespace="kafka")

    assert result == {"status": "imported", "id": "lsrc-123"}
    assert transport.calls[0]["method"] == "GET"
    assert transport.calls[0]["url"] == "https://api.confluent.cloud/schema_registries/lsrc-123"
    assert transport.calls[0]["params"] == {"account_id": "env-abc"}
    assert custom_resource.patches == [
        {"spec": {"id": "lsrc-123", "environment_id": "env-abc", "name": "account schema-registry"}}
    ]


def test_schema_registry_import_of_missing_registry_is_permanent(transport, custom_resource):
    transport.reply(404, text="not found")
    spec = dict(REGISTRY_SPEC, import_id="env-abc/lsrc-gone")

    with pytest.raises(kopf.PermanentError):
        schema_registry_operator.create_registry(spec=spec, name="registry", namespace="kafka")

    assert custom_resource.patches == []


def test_schema_registry_bad_import_id_is_permanent(transport, custom_resource):
    spec = dict(REGISTRY_SPEC, import_id="lsrc-123")

    with pytest.raises(kopf.PermanentError, match="expected"):
        schema_registry_operator.create_registry(spec=spec, name="registry", namespace="kafka")

    assert custom_resource.patches == []


def test_schema_registry_refresh_patches_changed_name(transport, custom_resource):
    transport.reply(200, {"cluster": dict(REGISTRY, name="renamed"), "error": ""})
    spec = dict(REGISTRY_SPEC, **REGISTRY)

    schema_registry_operator.refresh_registry(spec=spec, name="registry", namespace="kafka")

    assert custom_resource.patches == [{"spec": {"name": "renamed"}}]


def test_schema_registry_refresh_unchanged_does_not_patch(transport, custom_resource):
    transport.reply(200, {"cluster": REGISTRY, "error": ""})
    spec = dict(REGISTRY_SPEC, **REGISTRY)

    schema_registry_operator.refresh_registry(spec=spec, name="registry", namespace="kafka")

    assert custom_resource.patches == []


def test_schema_registry_refresh_without_identity_is_skipped(transport, custom_resource):
    schema_registry_operator.refresh_registry(spec=REGISTRY_SPEC, name="registry", namespace="kafka")

    assert transport.calls == []


def test_schema_registry_refresh_clears_identity_when_gone(transport, custom_resource):
    transport.reply(404, text="not found")
    spec = dict(REGISTRY_SPEC, **REGISTRY)

    schema_registry_operator.refresh_registry(spec=spec, name="registry", namespace="kafka")

    assert custom_resource.patches == [{"spec": {"id": "", "drift_message": "Schema registry lsrc-o338zj not found in env-18vqv"}}]


def test_schema_registry_refresh_after_drift_does_not_reach_the_api(transport, custom_resource):
    spec = dict(REGISTRY_SPEC, id="", drift_message="Schema registry lsrc-o338zj not found in env-18vqv")

    schema_registry_operator.refresh_registry(spec=spec, name="registry", namespace="kafka")

    assert transport.calls == []
    assert custom_resource.patches == []


def test_delete_handlers_never_call_the_api(transport, custom_resource):
    api_key_operator.delete_fn(spec={"id": "KEY1"}, name="orders", namespace="kafka")
    ksqldb_operator.delete_cluster(spec={"id": "lksqlc-1"}, name="orders", namespace="kafka")
    schema_registry_operator.delete_registry(spec=dict(REGISTRY_SPEC, **REGISTRY), name="registry", namespace="kafka")

    assert transport.calls == []


def test_lookup_resolves_registry(transport, custom_resource):
    transport.reply(200, {"clusters": [REGISTRY], "error": ""})

    result = lookup_operator.resolve_fn(spec={"environment_id": "env-18vqv"}, name="sr", namespace="kafka")

    assert result == {"id": "lsrc-o338zj"}
    assert custom_resource.patches == [{"spec": {"id": "lsrc-o338zj", "name": "account schema-registry"}}]


def test_lookup_empty_environment_is_retried_later(transport, custom_resource):
    transport.reply(200, {"clusters": [], "error": ""})

    with pytest.raises(kopf.TemporaryError):
        lookup_operator.resolve_fn(spec={"environment_id": "env-empty"}, name="sr", namespace="kafka")

    assert custom_resource.patches == []


def test_lookup_update_ignores_operator_written_fields(transport, custom_resource):
    diff = [("change", ("spec", "name"), "", "account schema-registry")]

    assert lookup_operator.update_fn(spec={"environment_id": "env-1"}, name="sr", namespace="kafka", diff=diff) is None
    assert transport.calls == []


def test_declared_changes():
    diff = [
        ("change", ("spec", "location"), "us-east-1", "us-east-2"),
        ("add", ("spec", "id"), None, "lsrc-1"),
        ("change", ("metadata", "labels"), {}, {"a": "b"}),
    ]

    assert declared_changes(diff, ("id", "name")) == ["location"]
    assert declared_changes(None, ("id",)) == []
    assert declared_changes([("add", ("spec",), None, {})], ("id",)) == ["spec"]
