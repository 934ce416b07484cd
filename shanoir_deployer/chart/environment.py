from typing import Any
from kubernetes import client
from .models import *
from ..utils import format_bool, split_base_url

# secret keys besides the database passwords
KEYCLOAK_ADMIN_SECRET_KEY = 'keycloak-admin'
VIP_CLIENT_SECRET_KEY = 'vip-client-secret'
SMTP_SECRET_KEY = 'smtp'

# microservice -> mysql database it owns
MICROSERVICE_DATABASES = {
    'users': 'users',
    'studies': 'studies',
    'import': 'import',
    'datasets': 'datasets',
    'preclinical': 'preclinical',
}

def from_secret(args: ManifestArguments, key: str) -> client.V1EnvVarSource:
    return client.V1EnvVarSource(
        secret_key_ref=client.V1SecretKeySelector(name=args.secret_name, key=key)
    )

def from_common_config_map(args: ManifestArguments, key: str) -> client.V1EnvVarSource:
    return client.V1EnvVarSource(
        config_map_key_ref=client.V1ConfigMapKeySelector(name=args.common_config_map_name, key=key)
    )

def create_common_config_map_data(config: ShanoirConfig) -> dict[str, str]:
    url_scheme, url_host = split_base_url(config.url)
    viewer_scheme, viewer_host = split_base_url(config.viewer_url)
    keycloak_url = config.keycloak_url or f"{url_scheme}://{url_host}/auth"

    return {
        'SHANOIR_PREFIX': '',
        'SHANOIR_URL_SCHEME': url_scheme,
        'SHANOIR_URL_HOST': url_host,
        'SHANOIR_VIEWER_OHIF_URL_SCHEME': viewer_scheme,
        'SHANOIR_VIEWER_OHIF_URL_HOST': viewer_host,

        'SHANOIR_ADMIN_EMAIL': config.admin_email,
        'SHANOIR_ADMIN_NAME': config.admin_name,
        'SHANOIR_INSTANCE_COLOR': config.instance_color,
        'SHANOIR_INSTANCE_NAME': config.instance_name,

        'SHANOIR_KEYCLOAK_URL': keycloak_url,
        'SHANOIR_KEYCLOAK_ADAPTER_MODE': 'check-sso',

        # the instance is expected to sit behind an ingress setting the X-Forwarded-* headers
        'SHANOIR_X_FORWARDED': 'trust',

        # certificates are provided by the ingress
        'SHANOIR_CERTIFICATE': 'manual',
        'SHANOIR_CERTIFICATE_PEM_CRT': 'none',
        'SHANOIR_CERTIFICATE_PEM_KEY': 'none',

        # migrations are never applied by the regular containers
        'SHANOIR_MIGRATION': 'never',
    }

def create_common_config_map_manifest(args: ManifestArguments) -> dict[str, Any]:
    config_map = client.V1ConfigMap(
        api_version="v1",
        kind="ConfigMap",
        metadata=args.metadata(args.common_config_map_name),
        data=create_common_config_map_data(args.config),
    )
    return client.ApiClient().sanitize_for_serialization(config_map)

def create_secret_data(config: ShanoirConfig) -> dict[str, str]:
    # one entry for each database account ("users", "datasets", ...)
    data = {
        name: db.password.get_secret_value()
        for databases in (config.mysql_databases, config.postgresql_databases)
        for name, db in databases.items()
    }
    data[KEYCLOAK_ADMIN_SECRET_KEY] = config.keycloak_credentials.password.get_secret_value()
    data[VIP_CLIENT_SECRET_KEY] = config.vip.client_secret.get_secret_value()
    data[SMTP_SECRET_KEY] = config.smtp.auth.password.get_secret_value() if config.smtp.auth else ''
    return data

def create_secret_manifest(args: ManifestArguments) -> dict[str, Any]:
    secret = client.V1Secret(
        api_version="v1",
        kind="Secret",
        type="Opaque",
        metadata=args.metadata(args.secret_name),
        string_data=create_secret_data(args.config),
    )
    return client.ApiClient().sanitize_for_serialization(secret)

def create_smtp_env_variables(args: ManifestArguments) -> dict[str, EnvValue]:
    smtp = args.config.smtp
    return {
        'SHANOIR_SMTP_HOST': smtp.host,
        'SHANOIR_SMTP_PORT': str(smtp.port),
        # variable name as read by the shanoir images
        'SHANOIR_STMP_AUTH': format_bool(smtp.auth is not None),
        'SHANOIR_SMTP_USERNAME': smtp.auth.username if smtp.auth else '',
        'SHANOIR_SMTP_STARTTLS_ENABLE': format_bool(smtp.starttls != 'disabled'),
        'SHANOIR_SMTP_STARTTLS_REQUIRED': format_bool(smtp.starttls == 'required'),
        'SHANOIR_SMTP_FROM': smtp.from_address,
        'SHANOIR_SMTP_PASSWORD': from_secret(args, SMTP_SECRET_KEY),
    }

def create_vip_env_variables(args: ManifestArguments) -> dict[str, EnvValue]:
    scheme, host = split_base_url(args.config.vip.url)
    return {
        'VIP_URL_SCHEME': scheme,
        'VIP_URL_HOST': host,
    }

def create_keycloak_credentials_env_variables(args: ManifestArguments) -> dict[str, EnvValue]:
    return {
        'SHANOIR_KEYCLOAK_USER': args.config.keycloak_credentials.username,
        'SHANOIR_KEYCLOAK_PASSWORD': from_secret(args, KEYCLOAK_ADMIN_SECRET_KEY),
    }

def create_keycloak_database_env_variables(args: ManifestArguments) -> dict[str, EnvValue]:
    db = args.config.mysql_databases['keycloak']
    host, port = db.address(MYSQL_DEFAULT_PORT)
    return {
        'KC_DB_URL_HOST': host,
        'KC_DB_URL_PORT': str(port),
        'KC_DB_URL_DATABASE': db.db,
        'KC_DB_USERNAME': db.username,
        'KC_DB_PASSWORD': from_secret(args, 'keycloak'),
    }

def create_microservice_database_env_variables(args: ManifestArguments, microservice: str) -> dict[str, EnvValue]:
    if microservice not in MICROSERVICE_DATABASES:
        return {}
    key = MICROSERVICE_DATABASES[microservice]
    db = args.config.mysql_databases[key]
    host, port = db.address(MYSQL_DEFAULT_PORT)
    return {
        'SPRING_DATASOURCE_URL': f"jdbc:mysql://{host}:{port}/{db.db}",
        'SPRING_DATASOURCE_USERNAME': db.username,
        'SPRING_DATASOURCE_PASSWORD': from_secret(args, key),
    }

def create_dcm4chee_database_env_variables(args: ManifestArguments) -> dict[str, EnvValue]:
    db = args.config.postgresql_databases['dcm4chee']
    return {
        'POSTGRES_DB': db.db,
        'POSTGRES_USER': db.username,
        'POSTGRES_PASSWORD': from_secret(args, 'dcm4chee'),
    }
