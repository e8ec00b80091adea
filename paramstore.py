"""Production entrypoint for the parameter store server.

    python3 paramstore.py [--config data/config/server_config.yml] [--port 5500]
    python3 paramstore.py --print-config
"""
import sys

from paramstore_lib.config.config import ConfigurationError, describe_config, load_store_config, parse_args
from paramstore_lib.main import create_app, Config


def main(argv=None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        store_config = load_store_config(config_path=args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.print_config:
        sys.stdout.write(describe_config(store_config))
        return 0

    import uvicorn
    app = create_app(Config(config_path=args.config))
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
