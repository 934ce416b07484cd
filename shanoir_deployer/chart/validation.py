import logging
from typing import Any, Iterable, Mapping

from ..errors import ConfigurationError
from .models import *

logger = logging.getLogger(__name__)

def check_resource_map(desc: str, resources: Mapping[str, Any] | None, expect: Iterable[str]) -> dict[str, Any] | None:
    """ensure that `resources` contains all keys listed in `expect`

    - raise a ConfigurationError if a key is missing
    - log a warning if an extra key is present, and leave it out of the returned map

    Nothing is checked when `resources` is None.
    """
    if resources is None:
        return None
    if not isinstance(resources, Mapping):
        raise ConfigurationError(f"{desc} must be a mapping, got {type(resources).__name__}")

    expected = list(expect)
    unknown = [k for k in resources if k not in expected]
    if unknown:
        logger.warning("unknown %s: %s", desc, ", ".join(map(str, unknown)))

    missing = [k for k in expected if k not in resources]
    if missing:
        raise ConfigurationError(f"missing {desc}: {', '.join(missing)}")

    return {k: v for k, v in resources.items() if k in expected}

def expected_mysql_databases(toggles: BackendToggles) -> list[str]:
    # an external keycloak server comes with its own database
    if toggles.internal_keycloak:
        return list(SHANOIR_MYSQL_DATABASES)
    return [db for db in SHANOIR_MYSQL_DATABASES if db != 'keycloak']

def check_resource_maps(props: dict[str, Any], toggles: BackendToggles) -> dict[str, Any]:
    """check the resource maps of `props`, returning a copy without their unknown entries"""
    checked = dict(props)
    for key, desc, expect in [
        ('volume_claims', "volume claim", SHANOIR_VOLUMES),
        ('mysql_databases', "mysql database", expected_mysql_databases(toggles)),
        ('postgresql_databases', "postgresql database", SHANOIR_POSTGRESQL_DATABASES),
    ]:
        resources = check_resource_map(desc, props.get(key), expect)
        if resources is not None:
            checked[key] = resources
    return checked
