import logging
from typing import Any
from .models import *
from .component import create_component_manifests, create_shanoir_microservice_manifests, shanoir_image
from .environment import *

logger = logging.getLogger(__name__)

def create_backend_manifests(args: ManifestArguments) -> list[dict[str, Any]]:
    config = args.config
    manifests = []

    if args.toggles.internal_mysql:
        manifests += create_component_manifests(args, "database", [3306], ContainerSpec(
            image=shanoir_image(config, "database"),
            args=[
                "--max_allowed_packet",
                "20000000",
                # old mysql refuses to start on a volume root holding lost+found
                "--ignore-db-dir=lost+found",
            ],
            env={
                "MYSQL_ROOT_PASSWORD": "password",
                "SHANOIR_MIGRATION": from_common_config_map(args, "SHANOIR_MIGRATION"),
            },
            volume_mounts=[VolumeMount("/var/lib/mysql", "database-data")],
        ))
    else:
        logger.info("using external mysql databases, skipping the database service")

    manifests += create_component_manifests(args, "rabbitmq", [5672], ContainerSpec(
        image="rabbitmq:3.10.7",
        volume_mounts=[VolumeMount("/var/lib/rabbitmq/mnesia/rabbitmq", "rabbitmq-data")],
    ))

    manifests += create_component_manifests(args, "solr", [8983], ContainerSpec(
        image=shanoir_image(config, "solr"),
        env={"SOLR_LOG_LEVEL": "SEVERE"},
        volume_mounts=[VolumeMount("/var/solr", "solr-data")],
    ))

    if args.toggles.internal_keycloak:
        manifests += create_component_manifests(args, "keycloak", [8080], ContainerSpec(
            image=shanoir_image(config, "keycloak"),
            env_from_common=True,
            env={
                **create_keycloak_credentials_env_variables(args),
                **create_keycloak_database_env_variables(args),
                **create_smtp_env_variables(args),
                "SHANOIR_ALLOWED_ADMIN_IPS": ",".join(config.allowed_admin_ips),
            },
            volume_mounts=[VolumeMount("/opt/keycloak/data/log", "keycloak-logs")],
        ))
    else:
        logger.info("using external keycloak at %s, skipping the keycloak service", config.keycloak_url)

    return manifests

def create_dcm4chee_manifests(args: ManifestArguments) -> list[dict[str, Any]]:
    db = args.config.postgresql_databases["dcm4chee"]
    db_host, db_port = db.address(POSTGRESQL_DEFAULT_PORT)
    db_env = create_dcm4chee_database_env_variables(args)
    manifests = []

    manifests += create_component_manifests(args, "dcm4chee-ldap", [389], ContainerSpec(
        image="dcm4che/slapd-dcm4chee:2.6.2-27.0",
        env={"STORAGE_DIR": "/storage/fs1"},
        volume_mounts=[
            VolumeMount("/var/lib/openldap/openldap-data", "dcm4chee-ldap-data"),
            VolumeMount("/etc/openldap/slapd.d", "dcm4chee-sldap-data"),
        ],
    ))

    if args.toggles.internal_postgresql:
        manifests += create_component_manifests(args, "dcm4chee-database", [5432], ContainerSpec(
            image="dcm4che/postgres-dcm4chee:14.4-27",
            env=db_env,
            volume_mounts=[VolumeMount("/var/lib/postgresql/data", "dcm4chee-database-data")],
        ))
    else:
        logger.info("using external postgresql database at %s, skipping the dcm4chee-database service", db_host)

    manifests += create_component_manifests(args, "dcm4chee-arc", [8080], ContainerSpec(
        image="dcm4che/dcm4chee-arc-psql:5.27.0",
        env={
            **db_env,
            "LDAP_URL": "ldap://dcm4chee-ldap:389",
            "POSTGRES_HOST": db_host,
            "POSTGRES_PORT": str(db_port),
            "WILDFLY_CHOWN": "/storage",
            "WILDFLY_WAIT_FOR": f"dcm4chee-ldap:389 {db_host}:{db_port}",
        },
        volume_mounts=[
            VolumeMount("/opt/wildfly/standalone", "dcm4chee-arc-wildfly-data"),
            VolumeMount("/storage", "dcm4chee-arc-storage-data"),
        ],
    ))

    return manifests

def create_microservice_manifests(args: ManifestArguments) -> list[dict[str, Any]]:
    manifests = []

    manifests += create_shanoir_microservice_manifests(args, "users", [9901], env={
        **create_keycloak_credentials_env_variables(args),
        **create_smtp_env_variables(args),
        "VIP_SERVICE_EMAIL": args.config.vip.service_email,
    })

    manifests += create_shanoir_microservice_manifests(args, "studies", [9902], extra_volume_mounts=[
        VolumeMount("/tmp", "tmp"),
        VolumeMount("/var/studies-data", "studies-data"),
        # participants.tsv
        VolumeMount("/var/datasets-data", "datasets-data"),
    ])

    manifests += create_shanoir_microservice_manifests(args, "import", [9903], extra_volume_mounts=[
        VolumeMount("/tmp", "tmp"),
    ])

    manifests += create_shanoir_microservice_manifests(args, "datasets", [9904], env={
        **create_vip_env_variables(args),
        "VIP_CLIENT_SECRET": from_secret(args, VIP_CLIENT_SECRET_KEY),
    }, extra_volume_mounts=[
        VolumeMount("/tmp", "tmp"),
        VolumeMount("/var/datasets-data", "datasets-data"),
    ])

    manifests += create_shanoir_microservice_manifests(args, "preclinical", [9905], extra_volume_mounts=[
        VolumeMount("/tmp", "tmp"),
        VolumeMount("/var/extra-data", "extra-data"),
    ])

    manifests += create_shanoir_microservice_manifests(args, "nifti-conversion", None, extra_volume_mounts=[
        VolumeMount("/tmp", "tmp"),
        VolumeMount("/var/datasets-data", "datasets-data"),
    ])

    return manifests

def create_front_manifests(args: ManifestArguments) -> list[dict[str, Any]]:
    return create_component_manifests(args, "nginx", [80, 443], ContainerSpec(
        image=shanoir_image(args.config, "nginx"),
        env_from_common=True,
        env=create_vip_env_variables(args),
        volume_mounts=[VolumeMount("/var/log/nginx", "logs", sub_path="nginx")],
    ))

def create_topology_manifests(args: ManifestArguments) -> list[dict[str, Any]]:
    manifests = []
    manifests += create_backend_manifests(args)
    manifests += create_dcm4chee_manifests(args)
    manifests += create_microservice_manifests(args)
    manifests += create_front_manifests(args)
    return manifests
