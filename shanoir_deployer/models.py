from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from typing import Literal
from urllib.parse import urlsplit
import ipaddress

from .utils import split_base_url

MYSQL_DEFAULT_PORT = 3306
POSTGRESQL_DEFAULT_PORT = 5432

SHANOIR_VOLUMES = [
    # medical data
    "datasets-data",
    "dcm4chee-arc-storage-data",
    "extra-data",
    "studies-data",

    # databases
    "database-data",
    "dcm4chee-database-data",
    "keycloak-database-data",

    # logs
    "logs",
    "keycloak-logs",

    # disposable data (temporary data, indexes, generated configs, ...)
    "dcm4chee-arc-wildfly-data",
    "dcm4chee-ldap-data",
    "dcm4chee-sldap-data",
    "rabbitmq-data",
    "solr-data",
    "tmp",
]

SHANOIR_MYSQL_DATABASES = [
    "datasets",
    "import",
    "keycloak",
    "migrations",
    "mysql",
    "preclinical",
    "studies",
    "sys",
    "users",
]

SHANOIR_POSTGRESQL_DATABASES = [
    "dcm4chee",
]

class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

class Credentials(StrictModel):
    username: str
    password: SecretStr

class DatabaseConfig(Credentials):
    """parameters for accessing a mysql/mariadb/postgresql database"""
    db: str
    host: str
    port: int | None = None

    def address(self, default_port: int) -> tuple[str, int]:
        return self.host, self.port or default_port

class SmtpConfig(StrictModel):
    """relay used for outgoing mails"""
    host: str
    port: int
    # no authentication when unset
    auth: Credentials | None = None
    starttls: Literal["disabled", "optional", "required"]
    from_address: str

class VipConfig(StrictModel):
    """VIP (Virtual Imaging Platform) client, queried for pipelines by the front"""
    url: str
    client_secret: SecretStr
    service_email: str

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        split_base_url(value)
        return value

class VolumeClaimConfig(StrictModel):
    size: str | None = None
    storage_class: str | None = None
    access_modes: list[str] = Field(default_factory=lambda: ["ReadWriteOnce"])
    # bind to an existing persistent volume
    volume_name: str | None = None

class PvcDefaults(StrictModel):
    storage_class: str | None = None
    size: str | None = None

class ShanoirConfig(StrictModel):
    name: str
    namespace: str
    # tag of the shanoir OCI images
    version: str
    url: str
    viewer_url: str
    instance_name: str
    instance_color: str
    # used for signing outgoing e-mails
    admin_name: str
    admin_email: str
    docker_repository: str
    mysql_databases: dict[str, DatabaseConfig]
    postgresql_databases: dict[str, DatabaseConfig]
    smtp: SmtpConfig
    # client addresses or networks from which admin accounts may log in
    allowed_admin_ips: list[str]
    # external keycloak server, the chart runs its own when unset
    keycloak_url: str | None = None
    # master realm account used for managing users
    keycloak_credentials: Credentials
    vip: VipConfig
    volume_claims: dict[str, VolumeClaimConfig]
    pvc_defaults: PvcDefaults
    create_namespace: bool
    labels: dict[str, str]
    annotations: dict[str, str]

    @field_validator("url", "viewer_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        split_base_url(value)
        return value

    @field_validator("keycloak_url")
    @classmethod
    def validate_keycloak_url(cls, value: str | None) -> str | None:
        if value is None:
            return value
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ValueError(f"Invalid keycloak url: {value!r}")
        return value.rstrip("/")

    @field_validator("allowed_admin_ips")
    @classmethod
    def validate_allowed_admin_ips(cls, value: list[str]) -> list[str]:
        for ip in value:
            ipaddress.ip_network(ip, strict=False)
        return value
