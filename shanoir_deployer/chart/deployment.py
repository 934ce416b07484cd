from typing import Any
from kubernetes import client
from .models import *
from .volume import create_pod_volumes
from ..utils import coerce_dns_name

def get_component_labels(args: ManifestArguments, component_name: str) -> dict[str, str]:
    component_labels = dict(args.chart_labels)
    component_labels[NAME_LABEL] = component_name
    return component_labels

def get_component_selector(args: ManifestArguments, component_name: str) -> dict[str, str]:
    component_labels = get_component_labels(args, component_name)
    return {
        PART_OF_LABEL: component_labels[PART_OF_LABEL],
        NAME_LABEL: component_labels[NAME_LABEL],
    }

def create_env_vars(env: dict[str, EnvValue]) -> list[client.V1EnvVar]:
    env_vars = []
    for name, value in env.items():
        if isinstance(value, str):
            env_vars.append(client.V1EnvVar(name=name, value=value))
        else:
            env_vars.append(client.V1EnvVar(name=name, value_from=value))
    return env_vars

def create_deployment_manifest(args: ManifestArguments, component_name: str, ports: list[int] | None, spec: ContainerSpec) -> dict[str, Any]:
    component_labels = get_component_labels(args, component_name)

    container = client.V1Container(
        name=component_name,
        image=spec.image,
    )

    if spec.args:
        container.args = spec.args

    # add env vars
    if spec.env_from_common:
        container.env_from = [client.V1EnvFromSource(
            config_map_ref=client.V1ConfigMapEnvSource(
                name=args.common_config_map_name
            )
        )]
    if spec.env:
        container.env = create_env_vars(spec.env)

    # add ports
    if ports:
        container.ports = [client.V1ContainerPort(
            container_port=port,
            protocol='TCP'
        ) for port in ports]

    # Create pod template spec
    pod_template = client.V1PodTemplateSpec(
        metadata=client.V1ObjectMeta(labels=component_labels, annotations=args.chart_annotations or None),
        spec=client.V1PodSpec(containers=[container]),
    )
    assert pod_template.spec is not None

    # add volumes
    if spec.volume_mounts:
        pod_volumes, volume_mounts = create_pod_volumes(args, spec.volume_mounts)
        pod_template.spec.volumes = pod_volumes
        container.volume_mounts = volume_mounts

    # volumes are ReadWriteOnce, so the old pod must go before the new one starts
    deployment_spec = client.V1DeploymentSpec(
        replicas=1,
        selector=client.V1LabelSelector(match_labels=get_component_selector(args, component_name)),
        template=pod_template,
        strategy=client.V1DeploymentStrategy(
            type='Recreate'
        )
    )

    deployment = client.V1Deployment(
        api_version='apps/v1',
        kind='Deployment',
        metadata=args.metadata(coerce_dns_name(f"{args.config.name}-{component_name}"), component_labels),
        spec=deployment_spec
    )

    return client.ApiClient().sanitize_for_serialization(deployment)
