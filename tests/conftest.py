import pytest


@pytest.fixture
def props():
    return {
        "url": "https://x.test/",
        "viewer_url": "https://y.test/",
        "admin_name": "Shanoir Admin",
        "admin_email": "admin@x.test",
        "smtp": {
            "host": "smtp.x.test",
            "from_address": "shanoir@x.test",
        },
        "keycloak_credentials": {
            "username": "admin",
            "password": "kc-secret",
        },
        "pvc_defaults": {
            "size": "1Gi",
        },
    }


def find_manifests(manifests, kind, name=None):
    return [
        m for m in manifests
        if m["kind"] == kind and (name is None or m["metadata"]["name"] == name)
    ]


def find_manifest(manifests, kind, name):
    found = find_manifests(manifests, kind, name)
    assert len(found) == 1, f"expected one {kind} named {name}, found {len(found)}"
    return found[0]


def container_env(deployment):
    container = deployment["spec"]["template"]["spec"]["containers"][0]
    return {env["name"]: env for env in container.get("env", [])}
