"""
Allow running the package with: python -m dupecheck

By default, runs the CLI. Use 'server' to start the web API.

Examples:
    python -m dupecheck logo.png             # CLI check
    python -m dupecheck cli logo.png         # CLI check (explicit)
    python -m dupecheck server               # Start web API
    python -m dupecheck config --init        # Create example config file
"""

import sys


def main():
    if len(sys.argv) > 1 and sys.argv[1] == 'server':
        # Remove 'server' from argv so argparse in app.py doesn't see it
        sys.argv.pop(1)
        from .app import main as server_main
        server_main()
    elif len(sys.argv) > 1 and sys.argv[1] == 'config':
        sys.argv.pop(1)
        from .user_config import get_user_config

        config = get_user_config()

        if '--init' in sys.argv or '-i' in sys.argv:
            if config.create_example_config():
                print("Created example configuration file at:")
                print(f"  {config.config_file_path}")
                print("\nEdit this file to customize dupecheck settings.")
            else:
                print("Failed to create configuration file.")
                sys.exit(1)
        else:
            print(f"Configuration file: {config.config_file_path}")
            if config.config_file_path.exists():
                print("Status: found")
            else:
                print("Status: not found (using defaults)")
                print("\nRun 'python -m dupecheck config --init' to create one.")

            print("\nCurrent settings:")
            for key, value in config.settings().items():
                if isinstance(value, list):
                    value = ', '.join(value) or '(none)'
                print(f"  {key}: {value}")
    else:
        if len(sys.argv) > 1 and sys.argv[1] == 'cli':
            sys.argv.pop(1)
        from .cli import main as cli_main
        sys.exit(cli_main())


if __name__ == '__main__':
    main()
