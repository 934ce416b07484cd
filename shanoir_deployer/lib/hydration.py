import re
from .environment import Environment
from ..errors import ConfigurationError

_PLACEHOLDER = re.compile(r"{{\s*([^{}\s]+)\s*}}")

# replace {{ KEY }} with VALUE from env
def hydrate_string(s: str, env: Environment) -> str:
    def rpl(match):
        k = match.group(1).strip()
        try:
            return env.get_value(k)
        except KeyError as e:
            raise ConfigurationError(f"Undefined variable in configuration: {k}") from e
    return re.sub(_PLACEHOLDER, rpl, s)
