import sys

from pathtracer.cli import main

# Worker processes re-import this module; only the parent runs the CLI.
if __name__ == "__main__":
    sys.exit(main())
