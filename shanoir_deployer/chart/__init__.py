import logging
from typing import Any

from .models import *
from .defaults import apply_defaults
from .validation import check_resource_maps
from .namespace import create_namespace_manifests
from .volume import create_volume_claim_manifests, get_volume_claim_names
from .environment import create_common_config_map_manifest, create_secret_manifest
from .topology import create_topology_manifests
from ..utils import coerce_dns_name

logger = logging.getLogger(__name__)

def get_chart_labels(config: ShanoirConfig) -> dict[str, str]:
    chart_labels = dict(config.labels)
    chart_labels.setdefault(PART_OF_LABEL, config.name)
    chart_labels.setdefault(MANAGED_BY_LABEL, MANAGED_BY)
    return chart_labels

def compile_config(props: dict[str, Any], name: str = DEFAULT_CHART_NAME) -> tuple[ShanoirConfig, BackendToggles]:
    """validate the resource maps of `props` and layer the defaults under them

    Raises before anything is built when the props are inconsistent.
    """
    toggles = BackendToggles.from_props(props)
    props = check_resource_maps(props, toggles)
    config = ShanoirConfig.model_validate(apply_defaults(props, name))
    logger.debug("compiled config: %r", config)
    return config, toggles

def create_manifest_arguments(config: ShanoirConfig, toggles: BackendToggles) -> ManifestArguments:
    return ManifestArguments(
        config=config,
        toggles=toggles,
        chart_labels=get_chart_labels(config),
        chart_annotations=config.annotations,
        common_config_map_name=coerce_dns_name(f"{config.name}-common"),
        secret_name=coerce_dns_name(f"{config.name}-secrets"),
        volume_claim_names=get_volume_claim_names(config),
    )

def create_manifests(props: dict[str, Any], name: str = DEFAULT_CHART_NAME) -> list[dict[str, Any]]:
    config, toggles = compile_config(props, name)
    args = create_manifest_arguments(config, toggles)

    manifests = []
    manifests += create_namespace_manifests(args)
    manifests += create_volume_claim_manifests(args)
    manifests.append(create_common_config_map_manifest(args))
    manifests.append(create_secret_manifest(args))
    manifests += create_topology_manifests(args)

    logger.info("generated %d manifests for %s in namespace %s", len(manifests), config.name, config.namespace)
    return manifests
