import os, re
from urllib.parse import urlsplit

def parse_bool_env_var(var_name, default=False):
    value = os.getenv(var_name)
    if value is not None:
        value_str = str(value).lower()
        return value_str in ('true', '1') or \
               (value_str.isdigit() and int(value_str) != 0)
    return default

def coerce_dns_name(s: str) -> str:
    s = s.lower()
    s = re.sub(r'[^a-z0-9-]', '-', s)
    s = re.sub(r'-+', '-', s)
    s = s.strip('-')
    s = s[:253]
    s = s.strip('-')
    return s

def format_bool(value: bool) -> str:
    return str(value).lower()

DEFAULT_PORTS = {'http': 80, 'https': 443}

def split_base_url(url: str) -> tuple[str, str]:
    """split a base url into (scheme, host)

    The url must not carry credentials, a port other than the default one of its
    scheme, nor a path other than "/". The host is returned lowercased.
    """
    parts = urlsplit(url)
    if not parts.scheme or not parts.hostname:
        raise ValueError(f"Invalid url: {url!r}")
    if parts.username is not None or parts.password is not None:
        raise ValueError(f"Url must not have credentials: {url!r}")
    if parts.port is not None and parts.port != DEFAULT_PORTS.get(parts.scheme):
        raise ValueError(f"Url must not have an explicit port: {url!r}")
    if parts.path not in ('', '/') or parts.query or parts.fragment:
        raise ValueError(f"Url must not have a path: {url!r}")
    return parts.scheme, parts.hostname
