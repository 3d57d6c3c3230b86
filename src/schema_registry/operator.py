from injector import Injector
from kubernetes.client import ApiClient
from loguru import logger
import kopf
import os

from src.confluent.errors import ConfluentError, NotFoundError
from src.confluent.handlers import as_kopf_error, declared_changes, patch_spec
from src.confluent.lifecycle import ResourceState
from src.schema_registry.crd import SchemaRegistry
from src.schema_registry.manager import SchemaRegistryManagement

injector: Injector = None
api: ApiClient = None

RESOURCE = "SchemaRegistry.ccloud.ops.io"
COMPUTED_FIELDS = ("id", "name", "endpoint", "import_id", "drift_message")


def register_handlers(inj: Injector):
    global injector, api
    injector = inj
    api = inj.get(ApiClient)
    logger.info("Registering SchemaRegistry handlers...")
    SchemaRegistry.install(api, exist_ok=True)


@kopf.on.create("ccloud.ops.io", "v1", "SchemaRegistry")
def create_registry(spec, name, namespace, **kwargs):
    registry_management = injector.get(SchemaRegistryManagement)

    if spec.get("id"):
        logger.info(f"SchemaRegistry {namespace}/{name} already has id {spec['id']}. Skipping creation.")
        return {"status": "exists", "id": spec["id"]}

    try:
        if spec.get("import_id"):
            logger.info(f"Importing SchemaRegistry resource {namespace}/{name} from {spec['import_id']}")
            imported = registry_management.import_(spec["import_id"])
            refreshed = registry_management.read(imported.identity, {**spec, **imported.attributes})
            state = ResourceState(imported.identity, {**imported.attributes, **refreshed.attributes})
            status = "imported"
        else:
            logger.info(f"Creating SchemaRegistry resource: {namespace}/{name}")
            state = registry_management.create(spec)
            status = "created"
    except ConfluentError as e:
        logger.error(f"Failed to create schema registry for {namespace}/{name}: {e}")
        raise as_kopf_error(e, "create schema registry") from e

    patch_spec(RESOURCE, name, namespace, state.as_patch())
    logger.info(f"SchemaRegistry {namespace}/{name} {status} with id {state.identity}")
    return {"status": status, "id": state.identity}


@kopf.on.resume("ccloud.ops.io", "v1", "SchemaRegistry")
@kopf.on.timer("ccloud.ops.io", "v1", "SchemaRegistry",
               interval=float(os.getenv("CONFLUENT_OPERATOR_RECONCILE_INTERVAL", "600")))
def refresh_registry(spec, name, namespace, **kwargs):
    """Refresh the computed fields of a SchemaRegistry from Confluent Cloud"""
    registry_management = injector.get(SchemaRegistryManagement)

    identity = spec.get("id")
    if not identity:
        if spec.get("drift_message"):
            logger.warning(
                f"SchemaRegistry {namespace}/{name} is no longer managed: {spec['drift_message']}. "
                f"Delete and re-apply the resource to recreate it."
            )
        else:
            logger.debug(f"SchemaRegistry {namespace}/{name} has no id yet, skipping refresh")
        return

    try:
        state = registry_management.read(identity, spec)
    except NotFoundError as e:
        logger.warning(f"SchemaRegistry {namespace}/{name} drifted: {e}. Clearing its id.")
        patch_spec(RESOURCE, name, namespace, {"id": "", "drift_message": str(e)})
        return
    except ConfluentError as e:
        logger.error(f"Failed to refresh schema registry {identity} for {namespace}/{name}: {e}")
        raise as_kopf_error(e, "refresh schema registry") from e

    if state.attributes.get("name") != spec.get("name"):
        patch_spec(RESOURCE, name, namespace, state.attributes)
        logger.info(f"SchemaRegistry {namespace}/{name} refreshed: name={state.attributes.get('name')}")
    else:
        logger.debug(f"SchemaRegistry {namespace}/{name} is up to date")


@kopf.on.update("ccloud.ops.io", "v1", "SchemaRegistry")
def update_registry(spec, name, namespace, diff=None, **kwargs):
    registry_management = injector.get(SchemaRegistryManagement)

    changed = declared_changes(diff, COMPUTED_FIELDS)
    if not changed:
        return

    logger.info(f"Updating SchemaRegistry resource: {namespace}/{name}, changed fields: {changed}")
    registry_management.update(spec.get("id", ""), spec)


@kopf.on.delete("ccloud.ops.io", "v1", "SchemaRegistry")
def delete_registry(spec, name, namespace, **kwargs):
    registry_management = injector.get(SchemaRegistryManagement)

    logger.info(f"Deleting SchemaRegistry resource: {namespace}/{name}")
    registry_management.delete(spec.get("id", ""))
