from typing import Any
from kubernetes import client
from .models import *
from ..utils import coerce_dns_name

def get_volume_claim_names(config: ShanoirConfig) -> dict[str, str]:
    return {
        volume: coerce_dns_name(f"{config.name}-{volume}")
        for volume in config.volume_claims
    }

def create_pvc_manifest(args: ManifestArguments, volume: str, claim: VolumeClaimConfig) -> client.V1PersistentVolumeClaim:
    return client.V1PersistentVolumeClaim(
        api_version="v1",
        kind="PersistentVolumeClaim",
        metadata=args.metadata(args.volume_claim_names[volume]),
        spec=client.V1PersistentVolumeClaimSpec(
            access_modes=claim.access_modes,
            storage_class_name=claim.storage_class,
            volume_name=claim.volume_name,
            resources=client.V1VolumeResourceRequirements(
                requests={ "storage": claim.size }
            )
        )
    )

def create_volume_claim_manifests(args: ManifestArguments) -> list[dict[str, Any]]:
    manifests = []
    for volume, claim in args.config.volume_claims.items():
        pvc = create_pvc_manifest(args, volume, claim)
        manifests.append(client.ApiClient().sanitize_for_serialization(pvc))
    return manifests

def create_pod_volumes(args: ManifestArguments, volume_mounts: list[VolumeMount]) -> tuple[list[client.V1Volume], list[client.V1VolumeMount]]:
    """ returns a tuple of pod volumes and container volume mounts"""
    volumes: list[client.V1Volume] = []
    container_mounts: list[client.V1VolumeMount] = []

    for mount in volume_mounts:
        if mount.volume not in args.volume_claim_names:
            raise ValueError(f"Unknown volume {mount.volume} mounted at {mount.path}")

        if mount.volume not in [v.name for v in volumes]:
            volumes.append(client.V1Volume(
                name=mount.volume,
                persistent_volume_claim=client.V1PersistentVolumeClaimVolumeSource(
                    claim_name=args.volume_claim_names[mount.volume]
                )
            ))
        container_mounts.append(client.V1VolumeMount(
            name=mount.volume,
            mount_path=mount.path,
            sub_path=mount.sub_path,
        ))

    return volumes, container_mounts
