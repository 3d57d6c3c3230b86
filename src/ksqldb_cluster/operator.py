from injector import Injector
from kubernetes.client import ApiClient
from loguru import logger
import kopf

from src.confluent.errors import ConfluentError
from src.confluent.handlers import as_kopf_error, declared_changes, patch_spec
from src.ksqldb_cluster.crd import KsqlDbCluster
from src.ksqldb_cluster.manager import KsqlDbClusterManagement

injector: Injector = None
api: ApiClient = None

COMPUTED_FIELDS = ("id", "topic_prefix", "endpoint")


def register_handlers(inj: Injector):
    global injector, api
    injector = inj
    api = inj.get(ApiClient)
    logger.info("Registering KsqlDbCluster handlers...")
    KsqlDbCluster.install(api, exist_ok=True)


@kopf.on.create("ccloud.ops.io", "v1", "KsqlDbCluster")
def create_cluster(spec, name, namespace, **kwargs):
    cluster_management = injector.get(KsqlDbClusterManagement)

    if spec.get("id"):
        logger.info(f"KsqlDbCluster {namespace}/{name} already provisioned as {spec['id']}. Skipping creation.")
        return {"status": "exists", "id": spec["id"]}

    logger.info(f"Creating KsqlDbCluster resource: {namespace}/{name}")
    try:
        state = cluster_management.create(spec)
    except ConfluentError as e:
        logger.error(f"Failed to create ksqlDB cluster for {namespace}/{name}: {e}")
        raise as_kopf_error(e, "create ksqlDB cluster") from e

    patch_spec("KsqlDbCluster.ccloud.ops.io", name, namespace, state.as_patch())
    logger.info(f"KsqlDbCluster {namespace}/{name} created with id {state.identity}")
    return {"status": "created", "id": state.identity}


@kopf.on.update("ccloud.ops.io", "v1", "KsqlDbCluster")
def update_cluster(spec, name, namespace, diff=None, **kwargs):
    cluster_management = injector.get(KsqlDbClusterManagement)

    changed = declared_changes(diff, COMPUTED_FIELDS)
    if not changed:
        return

    logger.info(f"Updating KsqlDbCluster resource: {namespace}/{name}, changed fields: {changed}")
    cluster_management.update(spec.get("id", ""), spec)


@kopf.on.delete("ccloud.ops.io", "v1", "KsqlDbCluster")
def delete_cluster(spec, name, namespace, **kwargs):
    cluster_management = injector.get(KsqlDbClusterManagement)

    logger.info(f"Deleting KsqlDbCluster resource: {namespace}/{name}")
    cluster_management.delete(spec.get("id", ""))
