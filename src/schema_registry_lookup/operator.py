from injector import Injector
from kubernetes.client import ApiClient
from loguru import logger
import kopf
import os

from src.confluent.errors import ConfluentError, NotFoundError
from src.confluent.handlers import RETRY_DELAY, as_kopf_error, declared_changes, patch_spec
from src.schema_registry_lookup.crd import SchemaRegistryLookup
from src.schema_registry_lookup.manager import SchemaRegistryLookupManagement

injector: Injector = None
api: ApiClient = None

COMPUTED_FIELDS = ("id", "name")


def register_handlers(inj: Injector):
    global injector, api
    injector = inj
    api = inj.get(ApiClient)
    logger.info("Registering SchemaRegistryLookup handlers...")
    SchemaRegistryLookup.install(api, exist_ok=True)


def _lookup(spec, name, namespace):
    registry_lookup = injector.get(SchemaRegistryLookupManagement)

    try:
        state = registry_lookup.lookup(spec["environment_id"])
    except NotFoundError as e:
        # The registry may not be provisioned yet, look again later.
        logger.warning(f"SchemaRegistryLookup {namespace}/{name}: {e}")
        raise kopf.TemporaryError(str(e), delay=RETRY_DELAY) from e
    except ConfluentError as e:
        logger.error(f"Failed to look up schema registry for {namespace}/{name}: {e}")
        raise as_kopf_error(e, "look up schema registry") from e

    if spec.get("id") != state.identity or spec.get("name") != state.attributes.get("name"):
        patch_spec("SchemaRegistryLookup.ccloud.ops.io", name, namespace, state.as_patch())
        logger.info(f"SchemaRegistryLookup {namespace}/{name} resolved to {state.identity}")

    return {"id": state.identity}


@kopf.on.create("ccloud.ops.io", "v1", "SchemaRegistryLookup")
@kopf.on.resume("ccloud.ops.io", "v1", "SchemaRegistryLookup")
def resolve_fn(spec, name, namespace, **kwargs):
    return _lookup(spec, name, namespace)


@kopf.on.update("ccloud.ops.io", "v1", "SchemaRegistryLookup")
def update_fn(spec, name, namespace, diff=None, **kwargs):
    if not declared_changes(diff, COMPUTED_FIELDS):
        return
    return _lookup(spec, name, namespace)


@kopf.on.timer("ccloud.ops.io", "v1", "SchemaRegistryLookup",
               interval=float(os.getenv("CONFLUENT_OPERATOR_RECONCILE_INTERVAL", "600")))
def timer_fn(spec, name, namespace, **kwargs):
    _lookup(spec, name, namespace)
