import yaml
from typing import Any
from ..errors import ConfigurationError

class NoAliasDumper(yaml.SafeDumper):
    def ignore_aliases(self, data):
        return True

def _represent_str(dumper, data):
    """
        render multiline strings as block scalars

        Trailing newlines are not stripped, so such strings fall back to the default style.
        The content of the string is never altered.
    """
    if data.count('\n') > 0:
        return dumper.represent_scalar('tag:yaml.org,2002:str', data, style='|')
    return dumper.represent_scalar('tag:yaml.org,2002:str', data)

NoAliasDumper.add_representer(str, _represent_str)

def load_string(data: str, source: str = '<string>') -> dict[str, Any]:
    try:
        loaded = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid yaml in {source}: {e}") from e
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"{source} must contain a mapping at the root")
    return loaded

# deep merge two dictionaries created from yaml
# mappings are merged key by key, anything else (lists included) is taken from d2
def deep_merge(d1: dict[str, Any], d2: dict[str, Any]) -> dict[str, Any]:
    result = d1.copy()
    for k, v in d2.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result

def dump_manifests(manifests: list[dict[str, Any]]) -> str:
    manifests_string = ''
    for manifest in manifests:
        manifests_string += '---\n'
        manifests_string += yaml.dump(manifest, default_flow_style=False, sort_keys=False, Dumper=NoAliasDumper)
    return manifests_string
