from typing import Any
from kubernetes import client
from .models import *
from .deployment import get_component_labels, get_component_selector

def create_service_manifest(args: ManifestArguments, component_name: str, ports: list[int]) -> dict[str, Any]:
    if not ports:
        raise ValueError(f"Service {component_name} needs at least one port")

    service = client.V1Service(
        api_version= "v1",
        kind="Service",
        metadata=args.metadata(
            # not prefixed: these names are hardcoded in the shanoir images for service discovery
            component_name,
            get_component_labels(args, component_name),
        ),
        spec=client.V1ServiceSpec(
            selector=get_component_selector(args, component_name),
            ports=[client.V1ServicePort(
                protocol='TCP',
                port=port,
                target_port=port,
                name=f"tcp-{port}"
            ) for port in ports]
        )
    )

    return client.ApiClient().sanitize_for_serialization(service)
