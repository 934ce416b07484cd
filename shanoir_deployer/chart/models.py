from dataclasses import dataclass, field
from typing import Any
from kubernetes import client
from ..models import *

PART_OF_LABEL = 'app.kubernetes.io/part-of'
NAME_LABEL = 'app.kubernetes.io/name'
MANAGED_BY_LABEL = 'app.kubernetes.io/managed-by'
MANAGED_BY = 'shanoir-deployer'

DEFAULT_CHART_NAME = 'shanoir-ng'

EnvValue = str | client.V1EnvVarSource

@dataclass
class BackendToggles:
    """which backends are deployed by the chart rather than supplied by the caller"""
    internal_keycloak: bool
    internal_mysql: bool
    internal_postgresql: bool

    @classmethod
    def from_props(cls, props: dict[str, Any]) -> 'BackendToggles':
        # decided on the raw props, before the defaults fill these keys in
        return cls(
            internal_keycloak=props.get('keycloak_url') is None,
            internal_mysql=props.get('mysql_databases') is None,
            internal_postgresql=props.get('postgresql_databases') is None,
        )

@dataclass
class VolumeMount:
    path: str
    volume: str
    sub_path: str | None = None

@dataclass
class ContainerSpec:
    image: str
    args: list[str] | None = None
    env: dict[str, EnvValue] = field(default_factory=dict)
    # import every key of the shared config map
    env_from_common: bool = False
    volume_mounts: list[VolumeMount] = field(default_factory=list)

@dataclass
class ManifestArguments:
    config: ShanoirConfig
    toggles: BackendToggles
    chart_labels: dict[str, str]
    chart_annotations: dict[str, str]
    common_config_map_name: str
    secret_name: str
    volume_claim_names: dict[str, str]

    def metadata(self, name: str, labels: dict[str, str] | None = None) -> client.V1ObjectMeta:
        return client.V1ObjectMeta(
            name=name,
            namespace=self.config.namespace,
            labels=labels or self.chart_labels,
            annotations=self.chart_annotations or None,
        )
