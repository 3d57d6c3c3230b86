from typing import Any, Dict

from loguru import logger
import kopf
import kr8s

from src.confluent.errors import ConfluentError, DecodeError, TransportError

RETRY_DELAY = 30


def as_kopf_error(e: ConfluentError, action: str) -> Exception:
    """Transient failures are retried by kopf later, everything else is permanent."""
    if isinstance(e, (TransportError, DecodeError)):
        return kopf.TemporaryError(f"Failed to {action}: {e}", delay=RETRY_DELAY)
    return kopf.PermanentError(f"Failed to {action}: {e}")


def patch_spec(resource: str, name: str, namespace: str, values: Dict[str, Any]):
    cr = list(kr8s.get(resource, name, namespace=namespace))[0]
    cr.patch({"spec": values})
    logger.debug(f"Patched {resource} {namespace}/{name} with fields {sorted(values)}")


def declared_changes(diff, computed) -> list:
    """Names of the spec fields changed by the user, ignoring the ones the operator writes back."""
    changed = set()
    for _op, path, _old, _new in diff or ():
        if not path or path[0] != "spec":
            continue
        if len(path) == 1:
            changed.add("spec")
        elif path[1] not in computed:
            changed.add(path[1])
    return sorted(changed)
