import argparse, logging, sys
from typing import Any

from .chart import create_manifests
from .chart.models import DEFAULT_CHART_NAME
from .lib.environment import Environment
from .lib.hydration import hydrate_string
from .lib.yaml_tools import deep_merge, dump_manifests, load_string
from .errors import ConfigurationError
from .utils import parse_bool_env_var

DEBUG = parse_bool_env_var('DEBUG')

logger = logging.getLogger(__name__)

def load_props(config_files: list[str], env: Environment) -> dict[str, Any]:
    """hydrate and load each config file, later files override earlier ones"""
    props: dict[str, Any] = {}
    for fn in config_files:
        try:
            with open(fn, 'r') as f:
                data = f.read()
        except OSError as e:
            raise ConfigurationError(f"Could not read config file {fn}: {e}") from e
        loaded = load_string(hydrate_string(data, env), fn)
        logger.debug("loaded %s", fn)
        props = deep_merge(props, loaded)
    return props

def build(config_files: list[str], name: str = DEFAULT_CHART_NAME, env_file: str | None = None) -> str:
    env = Environment.from_os_environ()
    if env_file is not None:
        env.load_env_file(env_file, overwrite=True)

    props = load_props(config_files, env)
    manifests = create_manifests(props, name)
    return dump_manifests(manifests)

def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(prog='shanoir-deployer', description='generate the kubernetes manifests of a shanoir-ng instance')
    parser.add_argument('config', nargs='+', help='yaml config files, merged in order')
    parser.add_argument('-n', '--name', default=DEFAULT_CHART_NAME, help='chart name, also the default namespace')
    parser.add_argument('-o', '--output', help='write the manifests to this file instead of stdout')
    parser.add_argument('--env-file', help='dotenv file providing {{ VAR }} values')
    args = parser.parse_args(argv)

    manifests_string = build(args.config, args.name, args.env_file)

    if args.output:
        with open(args.output, 'w') as f:
            f.write(manifests_string)
        logger.info("manifests written to %s", args.output)
    else:
        sys.stdout.write(manifests_string)

def run():
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if DEBUG else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )
    if DEBUG:
        main()
    else:
        try:
            main()
        # discard stack trace
        except Exception as e:
            print(f"{type(e).__name__}:", e, file=sys.stderr)
            sys.exit(1)

if __name__ == '__main__':
    run()
