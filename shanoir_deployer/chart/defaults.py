import logging
from typing import Any, Mapping

from ..errors import ConfigurationError
from .models import *

logger = logging.getLogger(__name__)

SMTP_DEFAULTS: dict[str, Any] = {
    'port': 25,
    'auth': None,
    'starttls': 'disabled',
}

VIP_DEFAULTS: dict[str, Any] = {
    'url': 'https://vip.creatis.insa-lyon.fr',
    'client_secret': 'SECRET',
    'service_email': '',
}

PVC_DEFAULTS: dict[str, Any] = {
    'storage_class': None,
    'size': '1Gi',
}

def default_mysql_databases() -> dict[str, dict[str, Any]]:
    return {
        db: {
            'host': 'database',
            'db': db,
            'username': db,
            'password': db,
        }
        for db in SHANOIR_MYSQL_DATABASES
    }

def default_postgresql_databases() -> dict[str, dict[str, Any]]:
    return {
        'dcm4chee': {
            'host': 'dcm4chee-database',
            'db': 'pacsdb',
            'username': 'pacs',
            'password': 'pacs',
        },
    }

def shanoir_defaults() -> dict[str, Any]:
    return {
        'version': 'NG_v2.9.2',
        'instance_name': '',
        'instance_color': '',
        'docker_repository': 'ghcr.io/fli-iam/shanoir-ng',
        'allowed_admin_ips': [],
        'create_namespace': True,
        'mysql_databases': default_mysql_databases(),
        'postgresql_databases': default_postgresql_databases(),
        'labels': {},
        'annotations': {},
    }

def _without_nulls(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}

def _layer_mapping(key: str, defaults: dict[str, Any], props: dict[str, Any]) -> dict[str, Any]:
    supplied = props.get(key, {})
    if not isinstance(supplied, Mapping):
        raise ConfigurationError(f"{key} must be a mapping, got {type(supplied).__name__}")
    return {**defaults, **_without_nulls(dict(supplied))}

def _layer_volume_claim(volume: str, claim: Any, pvc_defaults: dict[str, Any]) -> Any:
    if claim is None:
        claim = {}
    if not isinstance(claim, dict):
        # left to the model validation
        return claim
    layered = _without_nulls(pvc_defaults) | _without_nulls(claim)
    if not layered.get('size'):
        raise ConfigurationError(f"Missing storage size for volume claim {volume}")
    return layered

def apply_defaults(props: dict[str, Any], name: str = DEFAULT_CHART_NAME) -> dict[str, Any]:
    """layer the built-in defaults under the caller-supplied props

    Top-level keys are merged shallowly, `smtp`, `vip` and `pvc_defaults` one level deep.
    Database maps supplied by the caller replace the defaults wholesale. The input is
    not modified.
    """
    # unset and null are equivalent
    props = _without_nulls(props)
    name = props.get('name', name)

    compiled: dict[str, Any] = {
        'name': name,
        'namespace': name,
        **shanoir_defaults(),
        **props,
        'smtp': _layer_mapping('smtp', SMTP_DEFAULTS, props),
        'vip': _layer_mapping('vip', VIP_DEFAULTS, props),
        'pvc_defaults': _layer_mapping('pvc_defaults', PVC_DEFAULTS, props),
    }

    volume_claims = props.get('volume_claims')
    if volume_claims is None:
        volume_claims = {volume: {} for volume in SHANOIR_VOLUMES}
    compiled['volume_claims'] = {
        volume: _layer_volume_claim(volume, claim, compiled['pvc_defaults'])
        for volume, claim in volume_claims.items()
    }

    logger.debug("compiled props: %s", sorted(compiled))
    return compiled
