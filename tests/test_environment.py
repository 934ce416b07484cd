from shanoir_deployer.chart import compile_config, create_manifest_arguments, create_manifests
from shanoir_deployer.chart.environment import (
    create_common_config_map_data,
    create_secret_data,
    create_smtp_env_variables,
    create_vip_env_variables,
)
from shanoir_deployer.models import SHANOIR_MYSQL_DATABASES

from conftest import find_manifest


def build_args(props):
    return create_manifest_arguments(*compile_config(props))


def test_common_config_map_splits_urls(props):
    config, _ = compile_config(props)

    data = create_common_config_map_data(config)

    assert data["SHANOIR_URL_SCHEME"] == "https"
    assert data["SHANOIR_URL_HOST"] == "x.test"
    assert data["SHANOIR_VIEWER_OHIF_URL_SCHEME"] == "https"
    assert data["SHANOIR_VIEWER_OHIF_URL_HOST"] == "y.test"
    assert data["SHANOIR_PREFIX"] == ""
    assert data["SHANOIR_MIGRATION"] == "never"
    assert data["SHANOIR_ADMIN_EMAIL"] == "admin@x.test"
    assert data["SHANOIR_INSTANCE_NAME"] == ""


def test_common_config_map_keycloak_url(props):
    config, _ = compile_config(props)
    assert create_common_config_map_data(config)["SHANOIR_KEYCLOAK_URL"] == "https://x.test/auth"

    props["keycloak_url"] = "https://auth.x.test/auth/"
    config, _ = compile_config(props)
    assert create_common_config_map_data(config)["SHANOIR_KEYCLOAK_URL"] == "https://auth.x.test/auth"


def test_secret_holds_every_password(props):
    props["vip"] = {"client_secret": "vip-secret"}
    config, _ = compile_config(props)

    data = create_secret_data(config)

    for db in SHANOIR_MYSQL_DATABASES:
        assert data[db] == db
    assert data["dcm4chee"] == "pacs"
    assert data["keycloak-admin"] == "kc-secret"
    assert data["vip-client-secret"] == "vip-secret"
    assert data["smtp"] == ""


def test_smtp_env_without_auth(props):
    env = create_smtp_env_variables(build_args(props))

    assert env["SHANOIR_SMTP_HOST"] == "smtp.x.test"
    assert env["SHANOIR_SMTP_PORT"] == "25"
    assert env["SHANOIR_STMP_AUTH"] == "false"
    assert env["SHANOIR_SMTP_USERNAME"] == ""
    assert env["SHANOIR_SMTP_STARTTLS_ENABLE"] == "false"
    assert env["SHANOIR_SMTP_STARTTLS_REQUIRED"] == "false"
    assert env["SHANOIR_SMTP_FROM"] == "shanoir@x.test"
    assert env["SHANOIR_SMTP_PASSWORD"].secret_key_ref.key == "smtp"


def test_smtp_env_with_auth_and_starttls(props):
    props["smtp"]["auth"] = {"username": "u", "password": "p"}
    props["smtp"]["starttls"] = "optional"
    args = build_args(props)

    env = create_smtp_env_variables(args)

    assert env["SHANOIR_STMP_AUTH"] == "true"
    assert env["SHANOIR_SMTP_USERNAME"] == "u"
    assert env["SHANOIR_SMTP_STARTTLS_ENABLE"] == "true"
    assert env["SHANOIR_SMTP_STARTTLS_REQUIRED"] == "false"
    assert create_secret_data(args.config)["smtp"] == "p"


def test_vip_env(props):
    props["vip"] = {"url": "http://vip.x.test/"}

    env = create_vip_env_variables(build_args(props))

    assert env == {"VIP_URL_SCHEME": "http", "VIP_URL_HOST": "vip.x.test"}


def test_shared_resources_are_emitted(props):
    manifests = create_manifests(props)

    config_map = find_manifest(manifests, "ConfigMap", "shanoir-ng-common")
    secret = find_manifest(manifests, "Secret", "shanoir-ng-secrets")

    assert config_map["metadata"]["namespace"] == "shanoir-ng"
    assert config_map["data"]["SHANOIR_URL_HOST"] == "x.test"
    assert secret["type"] == "Opaque"
    assert secret["stringData"]["keycloak-admin"] == "kc-secret"


def test_default_port_and_host_case_are_normalised(props):
    props["url"] = "https://X.Test:443/"
    props["viewer_url"] = "http://Y.test:80"
    config, _ = compile_config(props)

    data = create_common_config_map_data(config)

    assert data["SHANOIR_URL_HOST"] == "x.test"
    assert data["SHANOIR_VIEWER_OHIF_URL_SCHEME"] == "http"
    assert data["SHANOIR_VIEWER_OHIF_URL_HOST"] == "y.test"
