import pytest
from pydantic import ValidationError

from shanoir_deployer.chart import compile_config
from shanoir_deployer.models import DatabaseConfig


def test_smtp_auth_requires_a_password(props):
    props["smtp"]["auth"] = {"username": "u"}

    with pytest.raises(ValidationError, match="password"):
        compile_config(props)


def test_smtp_auth_may_be_omitted(props):
    config, _ = compile_config(props)

    assert config.smtp.auth is None


def test_starttls_mode_is_checked(props):
    props["smtp"]["starttls"] = "always"

    with pytest.raises(ValidationError):
        compile_config(props)


def test_missing_required_field(props):
    del props["admin_email"]

    with pytest.raises(ValidationError, match="admin_email"):
        compile_config(props)


@pytest.mark.parametrize("url", [
    "https://x.test:8443/",
    "http://x.test:443/",
    "https://admin@x.test/",
    "https://x.test/shanoir/",
    "x.test",
])
def test_url_must_be_a_bare_origin(props, url):
    props["url"] = url

    with pytest.raises(ValidationError):
        compile_config(props)


def test_url_without_trailing_slash_is_accepted(props):
    props["viewer_url"] = "https://y.test"

    config, _ = compile_config(props)

    assert config.viewer_url == "https://y.test"


def test_vip_url_must_be_a_bare_origin(props):
    props["vip"] = {"url": "https://vip.x.test/rest/"}

    with pytest.raises(ValidationError):
        compile_config(props)


def test_allowed_admin_ips_accept_addresses_and_networks(props):
    props["allowed_admin_ips"] = ["192.0.2.1", "2001:db8:1::/64"]

    config, _ = compile_config(props)

    assert config.allowed_admin_ips == ["192.0.2.1", "2001:db8:1::/64"]


def test_allowed_admin_ips_reject_garbage(props):
    props["allowed_admin_ips"] = ["not-an-ip"]

    with pytest.raises(ValidationError):
        compile_config(props)


def test_unknown_top_level_key_is_rejected(props):
    props["smpt"] = {"host": "typo"}

    with pytest.raises(ValidationError):
        compile_config(props)


def test_keycloak_url_trailing_slash_is_dropped(props):
    props["keycloak_url"] = "https://auth.x.test/auth/"

    config, _ = compile_config(props)

    assert config.keycloak_url == "https://auth.x.test/auth"


def test_passwords_are_masked_in_repr(props):
    config, _ = compile_config(props)

    assert "kc-secret" not in repr(config)


def test_database_address_default_port():
    db = DatabaseConfig(host="db.x.test", db="users", username="u", password="p")

    assert db.address(3306) == ("db.x.test", 3306)
    assert db.model_copy(update={"port": 3307}).address(3306) == ("db.x.test", 3307)
