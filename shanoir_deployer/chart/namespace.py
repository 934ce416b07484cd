from typing import Any
from kubernetes import client
from .models import *

def create_namespace_manifests(args: ManifestArguments) -> list[dict[str, Any]]:
    if not args.config.create_namespace:
        return []

    ns = client.V1Namespace(
        api_version="v1",
        kind="Namespace",
        metadata=client.V1ObjectMeta(
            name=args.config.namespace,
            labels=args.chart_labels,
            annotations=args.chart_annotations or None,
        ),
    )
    return [client.ApiClient().sanitize_for_serialization(ns)] # type: ignore[no-any-return]
