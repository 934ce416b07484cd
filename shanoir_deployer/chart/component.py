from typing import Any
from .models import *
from .deployment import create_deployment_manifest
from .environment import create_microservice_database_env_variables
from .service import create_service_manifest

def shanoir_image(config: ShanoirConfig, service: str) -> str:
    """OCI image name of a given shanoir service"""
    return f"{config.docker_repository}/{service}:{config.version}"

def create_component_manifests(args: ManifestArguments, name: str, ports: list[int] | None, spec: ContainerSpec) -> list[dict[str, Any]]:
    """deployment + service for one component

    No service is created when `ports` is None.
    """
    manifests = [create_deployment_manifest(args, name, ports, spec)]
    if ports is not None:
        manifests.append(create_service_manifest(args, name, ports))
    return manifests

def create_shanoir_microservice_manifests(
        args: ManifestArguments,
        name: str,
        ports: list[int] | None,
        env: dict[str, EnvValue] | None = None,
        extra_volume_mounts: list[VolumeMount] | None = None) -> list[dict[str, Any]]:
    """same as create_component_manifests, plus the settings common to all shanoir microservices

    - the shanoir image
    - the shared config map
    - the `logs` volume
    - the connection to the microservice database
    """
    spec = ContainerSpec(
        image=shanoir_image(args.config, name),
        env_from_common=True,
        env={
            **create_microservice_database_env_variables(args, name),
            **(env or {}),
        },
        volume_mounts=[
            VolumeMount("/var/log/shanoir-ng-logs", "logs"),
            *(extra_volume_mounts or []),
        ],
    )
    return create_component_manifests(args, name, ports, spec)
